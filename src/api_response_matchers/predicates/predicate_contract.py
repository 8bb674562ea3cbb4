"""Predicate contract shared by the matching engine and predicate libraries."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

_LOGGER = logging.getLogger(__name__)


@runtime_checkable
class SupportsTest(Protocol):
    """Anything offering a single-argument boolean match test."""

    def test(self, value: Any) -> bool:  # pragma: no cover - protocol
        ...


@runtime_checkable
class SupportsDescribe(Protocol):
    """Anything offering a human-readable description for diagnostics."""

    def describe(self) -> str:  # pragma: no cover - protocol
        ...


class Predicate:
    """Base class for library predicates.

    Subclasses implement `test` and `describe`. Predicates compose with `|`
    (or `or_`) into an OR-combinator, also when the left operand is a literal.
    """

    def test(self, value: Any) -> bool:
        raise NotImplementedError

    def describe(self) -> str:
        return type(self).__name__

    def or_(self, other: object) -> AnyOf:
        return AnyOf(self, other)

    def __or__(self, other: object) -> AnyOf:
        return AnyOf(self, other)

    def __ror__(self, other: object) -> AnyOf:
        return AnyOf(other, self)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} {self.describe()}>"


class StructuredPredicate(Predicate):
    """Predicate that produces its own per-field diagnostic tree."""

    def explain(self, actual: Any) -> tuple[bool, Any]:
        """Return the match flag and the diagnostic tree for `actual`."""
        raise NotImplementedError

    def test(self, value: Any) -> bool:
        matched, _ = self.explain(value)
        return matched


@dataclass(frozen=True)
class PredicateOutcome:
    """Result of evaluating one expected leaf against one actual value."""

    matched: bool
    fault: Exception | None = None


def evaluate(expected: Any, actual: Any) -> PredicateOutcome:
    """Compare a leaf expectation with an actual value.

    Literal equality is tried first, then `expected` is invoked as a predicate.
    Exceptions raised along the way are folded into a non-match.
    """
    equality_fault: Exception | None = None
    try:
        if _literal_equal(expected, actual):
            return PredicateOutcome(matched=True)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        _LOGGER.debug(
            "Equality against %r raised %s; invoking it as a predicate",
            expected,
            type(exc).__name__,
        )
        equality_fault = exc

    try:
        matched = _invoke_predicate(expected, actual)
    except Exception as exc:  # pylint: disable=broad-exception-caught
        _LOGGER.debug(
            "Predicate %r raised %s for %r; treating as no match",
            expected,
            type(exc).__name__,
            actual,
        )
        return PredicateOutcome(matched=False, fault=exc)
    return PredicateOutcome(matched=matched, fault=None if matched else equality_fault)


def _literal_equal(expected: Any, actual: Any) -> bool:
    if isinstance(expected, bool) != isinstance(actual, bool):
        return False
    return bool(actual == expected)


def _invoke_predicate(expected: Any, actual: Any) -> bool:
    if isinstance(expected, SupportsTest) and not isinstance(expected, type):
        return bool(expected.test(actual))
    if isinstance(expected, type):
        return isinstance(actual, expected)
    if isinstance(expected, re.Pattern):
        return isinstance(actual, str) and expected.search(actual) is not None
    if isinstance(expected, range):
        return actual in expected
    if callable(expected):
        return bool(expected(actual))
    return False


def is_element_iterable(value: Any) -> bool:
    """Return True for iterables whose elements are matched by position."""
    return isinstance(value, Iterable) and not isinstance(value, str | bytes | Mapping)


class AnyOf(Predicate):
    """OR-combinator over two expectations."""

    def __init__(self, first: Any, second: Any) -> None:
        self.first = first
        self.second = second

    def test(self, value: Any) -> bool:
        return evaluate(self.first, value).matched or evaluate(self.second, value).matched

    def describe(self) -> str:
        return f"{describe(self.first)} or {describe(self.second)}"


class AllElements(Predicate):
    """ALL-combinator: every element of an iterable satisfies `predicate`."""

    def __init__(self, predicate: Any) -> None:
        self.predicate = predicate

    def test(self, value: Any) -> bool:
        if not is_element_iterable(value):
            return False
        return all(evaluate(self.predicate, item).matched for item in value)

    def describe(self) -> str:
        return f"all {describe(self.predicate)}"


def describe(expected: Any) -> str:
    """Return the human-readable description of an expectation tree."""
    if isinstance(expected, SupportsDescribe) and not isinstance(expected, type):
        return expected.describe()
    if isinstance(expected, type):
        return expected.__name__
    if isinstance(expected, Mapping):
        members = ", ".join(f"{key!r}: {describe(value)}" for key, value in expected.items())
        return f"{{{members}}}"
    if isinstance(expected, list):
        return f"[{', '.join(describe(item) for item in expected)}]"
    if isinstance(expected, tuple):
        trailing = "," if len(expected) == 1 else ""
        return f"({', '.join(describe(item) for item in expected)}{trailing})"
    return repr(expected)
