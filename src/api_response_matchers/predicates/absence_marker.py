"""Absence marker: an expectation that a key must not be present."""

from __future__ import annotations

from typing import Any

from .predicate_contract import Predicate, evaluate

_ABSENCE_SENTINEL = object()


class Absent(Predicate):
    """Predicate that only accepts the private absence sentinel.

    Real payload data can never be the sentinel, so `Absent` fails against
    every present value. Keyed-map matching consults `is_absence_marker` to
    accept a missing key instead of reporting it.
    """

    def test(self, value: Any) -> bool:
        return value is _ABSENCE_SENTINEL

    def describe(self) -> str:
        return "absent"

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Absent)

    def __hash__(self) -> int:
        return hash(Absent)


def absent() -> Absent:
    """Return an expectation stating that a key should not be present."""
    return Absent()


def is_absence_marker(expected: Any) -> bool:
    """Return True when `expected` accepts a missing key.

    Holds for `Absent` itself and for compound predicates containing it, such
    as `absent() | kind_of(int)`. Predicates that accept everything are not
    absence markers.
    """
    if isinstance(expected, Absent):
        return True
    accepts_sentinel = evaluate(expected, _ABSENCE_SENTINEL).matched
    return accepts_sentinel and not evaluate(expected, object()).matched
