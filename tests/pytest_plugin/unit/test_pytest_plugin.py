"""pytest plugin tests."""

from __future__ import annotations

import pytest
from api_response_matchers.predicates import absent, kind_of
from api_response_matchers.pytest_plugin import build_asserter


def test_asserter_passes_matching_documents() -> None:
    asserter = build_asserter(color=False)

    asserter({"id": 1}, {"id": kind_of(int), "deleted_at": absent()})


def test_asserter_raises_with_field_level_message() -> None:
    asserter = build_asserter(color=False)

    with pytest.raises(AssertionError) as excinfo:
        asserter({"id": "1"}, {"id": kind_of(int)})

    assert str(excinfo.value) == (
        "Expected API response to match specification:\n"
        "{'id': (FAILURE: was '1', should have been a kind of int)}"
    )


def test_colored_asserter_highlights_failures() -> None:
    asserter = build_asserter(color=True)

    with pytest.raises(AssertionError, match="\x1b\\[31m"):
        asserter({"id": "1"}, {"id": kind_of(int)})
