"""Failure markers and diagnostic extraction for failed leaf matches."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from api_response_matchers.predicates.predicate_contract import (
    AllElements,
    AnyOf,
    StructuredPredicate,
    describe,
    evaluate,
    is_element_iterable,
)


@dataclass(frozen=True)
class FailureDescription:
    """Failure marker placed in the diagnostic tree where a match failed."""

    message: str

    def __repr__(self) -> str:
        return f"(FAILURE: {self.message})"


def failed_match_message(expected: Any, actual_repr: str) -> FailureDescription:
    """Describe a value that did not satisfy `expected`."""
    return FailureDescription(f"was {actual_repr}, should have been {describe(expected)}")


def extra_key_message(actual_repr: str) -> FailureDescription:
    """Describe a value that should not have been present."""
    return FailureDescription(f"was {actual_repr}, should have been absent")


def extract_results_with_errors(expected: Any, actual: Any) -> Any:
    """Return the most specific diagnostic for a failed leaf match.

    Structured predicates supply their own tree; OR- and ALL-combinators are
    searched for one; anything else gets a generic failure marker.
    """
    if isinstance(expected, StructuredPredicate):
        _, results = expected.explain(actual)
        return results
    if isinstance(expected, AnyOf):
        return _extract_results_from_any_of(expected, actual)
    if isinstance(expected, AllElements):
        return _extract_results_from_all_elements(expected, actual)
    return failed_match_message(expected, repr(actual))


def _extract_results_from_any_of(expected: AnyOf, actual: Any) -> Any:
    # The first branch yielding a structured result wins, even when a later
    # branch would be more informative.
    for branch in (expected.first, expected.second):
        result = extract_results_with_errors(branch, actual)
        if not isinstance(result, FailureDescription):
            return result
    return failed_match_message(expected, repr(actual))


def _extract_results_from_all_elements(expected: AllElements, actual: Any) -> Any:
    if not is_element_iterable(actual):
        return failed_match_message(expected, repr(actual))
    results = []
    for item in actual:
        if evaluate(expected.predicate, item).matched:
            results.append(item)
        else:
            results.append(extract_results_with_errors(expected.predicate, item))
    return results
