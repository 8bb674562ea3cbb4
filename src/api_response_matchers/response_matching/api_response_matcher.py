"""Test-framework facing matcher for API responses."""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from api_response_matchers.fuzzy_matching.engine import match_values, normalize_keys
from api_response_matchers.predicates.predicate_contract import StructuredPredicate, describe
from api_response_matchers.reporting.result_rendering import render_results

if TYPE_CHECKING:
    from api_response_matchers.schema_definitions.definition_models import SchemaDefinition


class ApiResponseMatcher(StructuredPredicate):
    """Validates all or part of an API response against an expectation tree.

    When a `schema` is given, its fields supply defaults that `expected`
    overrides key by key. Nested inside another expectation, the matcher
    contributes its own per-field diagnostic instead of an opaque failure.
    """

    def __init__(
        self,
        expected: Any,
        *,
        schema: SchemaDefinition | None = None,
        context: Any = None,
    ) -> None:
        self.expected = expected
        self.schema = schema
        self.context = context
        self._did_match: bool | None = None
        self._results_with_errors: Any = None

    def combined_expectation(self) -> Any:
        """Return the schema defaults merged with the caller's expected values."""
        if self.schema is None:
            return self.expected
        combined = self.schema.to_mapping(self.context)
        if isinstance(self.expected, Mapping):
            combined.update(normalize_keys(self.expected))
        return combined

    def explain(self, actual: Any) -> tuple[bool, Any]:
        return match_values(self.combined_expectation(), actual)

    def matches(self, actual: Any) -> bool:
        """Match `actual` and remember the outcome for failure messages."""
        self._did_match, self._results_with_errors = self.explain(actual)
        return self._did_match

    @property
    def did_match(self) -> bool | None:
        return self._did_match

    @property
    def results_with_errors(self) -> Any:
        return self._results_with_errors

    def failure_message(self, *, color: bool = False, width: int = 80) -> str:
        return (
            "Expected API response to match specification:\n"
            f"{self.pretty_results(color=color, width=width)}"
        )

    def failure_message_when_negated(self, *, color: bool = False, width: int = 80) -> str:
        return (
            "Expected API response not to match specification, but it did:\n"
            f"{self.pretty_results(color=color, width=width)}"
        )

    def pretty_results(self, *, color: bool = False, width: int = 80) -> str:
        if self._did_match is None:
            raise RuntimeError("matches() must be called before rendering results.")
        return render_results(self._results_with_errors, color=color, width=width)

    def describe(self) -> str:
        description = describe(self.expected)
        if self.schema is not None:
            suffix = f" matching {description}" if self.expected else ""
            return f"a serialized {self.schema.name}{suffix}"
        return f"an api response matching {description}"

    def __repr__(self) -> str:
        if self.schema is not None:
            return f"<ApiResponseMatcher for {self.schema.name}>"
        return "<ApiResponseMatcher>"


def match_api_response(expected: Any) -> ApiResponseMatcher:
    """Build a matcher for a whole response described by `expected`."""
    return ApiResponseMatcher(expected)


def assert_api_response(
    actual: Any,
    expected: Any,
    *,
    color: bool = False,
    width: int = 80,
) -> None:
    """Raise `AssertionError` with a field-level diagnostic unless `actual` matches."""
    matcher = expected if isinstance(expected, ApiResponseMatcher) else ApiResponseMatcher(expected)
    if not matcher.matches(actual):
        raise AssertionError(matcher.failure_message(color=color, width=width))
