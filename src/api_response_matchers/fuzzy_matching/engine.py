"""Recursive fuzzy matching of expected trees against actual structures.

Leaves are compared by equality first and by predicate invocation second.
Unlike a plain equality check, every function here returns both a success
flag and a mirror of the actual structure with `FailureDescription` markers
in the positions that failed, so one pass pinpoints every divergent field.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Sequence
from enum import Enum
from typing import Any

from api_response_matchers.predicates.absence_marker import is_absence_marker
from api_response_matchers.predicates.predicate_contract import (
    AllElements,
    AnyOf,
    StructuredPredicate,
    describe,
    evaluate,
    is_element_iterable,
)

from .diagnostics import extra_key_message, extract_results_with_errors, failed_match_message


def match_values(expected: Any, actual: Any) -> tuple[bool, Any]:
    """Match `actual` against `expected`.

    Args:
      expected: Literal values, predicates, or lists/tuples/mappings of them.
      actual: Data to validate, typically a decoded JSON body.

    Returns:
      A `(matched, results)` tuple. `results` mirrors `actual` where the match
      succeeded and holds failure markers where it did not.
    """
    if isinstance(expected, list | tuple) and is_element_iterable(actual):
        return match_sequences(expected, list(actual))
    if isinstance(expected, Mapping) and isinstance(actual, Mapping):
        return match_mappings(expected, actual)

    if isinstance(expected, AnyOf | AllElements):
        expected = _lift_containers(expected)
        if isinstance(actual, Iterator):
            # Testing and diagnosing both consume the elements.
            actual = list(actual)

    if evaluate(expected, actual).matched:
        return True, actual
    return False, extract_results_with_errors(expected, actual)


class NestedExpectation(StructuredPredicate):
    """Mapping or sequence expectation used as a combinator operand."""

    def __init__(self, expected: Mapping[Any, Any] | Sequence[Any]) -> None:
        self.expected = expected

    def explain(self, actual: Any) -> tuple[bool, Any]:
        return match_values(self.expected, actual)

    def describe(self) -> str:
        return describe(self.expected)


def _lift_containers(expected: Any) -> Any:
    if isinstance(expected, Mapping | list | tuple):
        return NestedExpectation(expected)
    if isinstance(expected, AnyOf):
        return AnyOf(_lift_containers(expected.first), _lift_containers(expected.second))
    if isinstance(expected, AllElements):
        return AllElements(_lift_containers(expected.predicate))
    return expected


def match_sequences(expected_list: Sequence[Any], actual_list: Sequence[Any]) -> tuple[bool, list]:
    """Match two sequences position by position."""
    all_matched = True
    results: list[Any] = []

    for expected, actual in zip(expected_list, actual_list):
        value_matched, value = match_values(expected, actual)
        all_matched = all_matched and value_matched
        results.append(value)

    for expected in expected_list[len(actual_list) :]:
        all_matched = False
        results.append(failed_match_message(expected, "absent"))

    for actual in actual_list[len(expected_list) :]:
        all_matched = False
        results.append(extra_key_message(repr(actual)))

    return all_matched, results


def match_mappings(
    expected_map: Mapping[Any, Any], actual_map: Mapping[Any, Any]
) -> tuple[bool, dict]:
    """Match two mappings key by key, reporting missing and unexpected keys.

    Missing and extra keys are detected here rather than during value
    recursion because a missing key and a present `None` look the same there.
    """
    all_matched = True
    results: dict[Any, Any] = {}
    expected_normalized = normalize_keys(expected_map)

    for key, expected in expected_normalized.items():
        if key in actual_map:
            value_matched, value = match_values(expected, actual_map[key])
            all_matched = all_matched and value_matched
            results[key] = value
        elif is_absence_marker(expected):
            continue
        else:
            all_matched = False
            results[key] = failed_match_message(expected, "absent")

    for key, actual in actual_map.items():
        if key in expected_normalized:
            continue
        all_matched = False
        results[key] = extra_key_message(repr(actual))

    return all_matched, results


def normalize_key(key: Any) -> str:
    """Return the canonical string form used by decoded payload keys."""
    if isinstance(key, Enum):
        return normalize_key(key.value)
    if isinstance(key, str):
        return str.__str__(key)
    if isinstance(key, bytes):
        return key.decode("utf-8")
    return str(key)


def normalize_keys(expected_map: Mapping[Any, Any]) -> dict[str, Any]:
    """Return a copy of `expected_map` keyed by normalized keys; later keys win."""
    return {normalize_key(key): value for key, value in expected_map.items()}
