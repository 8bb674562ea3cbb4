"""pytest plugin exposing API response assertions.

Registered through the `pytest11` entry point, so installing the package is
enough for the `assert_api_response` fixture to be available.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import pytest

from api_response_matchers.reporting.result_rendering import COLOR_MODES, resolve_color
from api_response_matchers.response_matching.api_response_matcher import assert_api_response

ApiResponseAsserter = Callable[[Any, Any], None]


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("api-response-matchers")
    group.addoption(
        "--api-matchers-color",
        action="store",
        default="never",
        choices=COLOR_MODES,
        help="Highlight failures in API response diagnostics (default: never).",
    )


def build_asserter(color: bool, width: int = 80) -> ApiResponseAsserter:
    """Return an asserter bound to the given rendering preferences."""

    def _assert(actual: Any, expected: Any) -> None:
        __tracebackhide__ = True  # pylint: disable=unused-variable
        assert_api_response(actual, expected, color=color, width=width)

    return _assert


@pytest.fixture(name="assert_api_response", scope="session")
def assert_api_response_fixture(request: pytest.FixtureRequest) -> ApiResponseAsserter:
    """Callable `(actual, expected)` raising `AssertionError` on mismatch."""
    mode = request.config.getoption("--api-matchers-color")
    if mode == "auto":
        color = request.config.get_terminal_writer().hasmarkup
    else:
        color = resolve_color(mode)
    return build_asserter(color=color)
