"""Small library of ready-made predicates."""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

from .predicate_contract import AllElements, AnyOf, Predicate, describe


class Anything(Predicate):
    """Matches every value."""

    def test(self, value: Any) -> bool:
        return True

    def describe(self) -> str:
        return "anything"


class NoneValue(Predicate):
    def test(self, value: Any) -> bool:
        return value is None

    def describe(self) -> str:
        return "a None value"


class EqualTo(Predicate):
    def __init__(self, expected: Any) -> None:
        self.expected = expected

    def test(self, value: Any) -> bool:
        if isinstance(self.expected, bool) != isinstance(value, bool):
            return False
        return bool(value == self.expected)

    def describe(self) -> str:
        return f"equal to {describe(self.expected)}"


class InstanceOf(Predicate):
    """Matches values whose exact type is `cls`."""

    def __init__(self, cls: type) -> None:
        self.cls = cls

    def test(self, value: Any) -> bool:
        return type(value) is self.cls

    def describe(self) -> str:
        return f"an instance of {self.cls.__name__}"


class KindOf(Predicate):
    """Matches instances of `cls` or its subclasses."""

    def __init__(self, cls: type | tuple[type, ...]) -> None:
        self.cls = cls

    def test(self, value: Any) -> bool:
        if isinstance(value, bool) and not _admits_bool(self.cls):
            return False
        return isinstance(value, self.cls)

    def describe(self) -> str:
        if isinstance(self.cls, tuple):
            names = " or ".join(cls.__name__ for cls in self.cls)
            return f"a kind of {names}"
        return f"a kind of {self.cls.__name__}"


class Matching(Predicate):
    def __init__(self, pattern: str | re.Pattern[str]) -> None:
        self.pattern = re.compile(pattern) if isinstance(pattern, str) else pattern

    def test(self, value: Any) -> bool:
        return isinstance(value, str) and self.pattern.search(value) is not None

    def describe(self) -> str:
        return f"a string matching {self.pattern.pattern!r}"


class Satisfies(Predicate):
    def __init__(self, condition: Callable[[Any], Any], description: str | None = None) -> None:
        self.condition = condition
        self.description = description

    def test(self, value: Any) -> bool:
        return bool(self.condition(value))

    def describe(self) -> str:
        if self.description:
            return self.description
        name = getattr(self.condition, "__name__", "condition")
        return f"a value satisfying {name}"


class OneOf(Predicate):
    def __init__(self, values: tuple[Any, ...]) -> None:
        self.values = values

    def test(self, value: Any) -> bool:
        return any(EqualTo(candidate).test(value) for candidate in self.values)

    def describe(self) -> str:
        return f"one of {', '.join(describe(candidate) for candidate in self.values)}"


def _admits_bool(cls: type | tuple[type, ...]) -> bool:
    classes = cls if isinstance(cls, tuple) else (cls,)
    return any(issubclass(bool, candidate) and candidate is not int for candidate in classes)


def anything() -> Anything:
    return Anything()


def none_value() -> NoneValue:
    return NoneValue()


def equal_to(expected: Any) -> EqualTo:
    return EqualTo(expected)


def instance_of(cls: type) -> InstanceOf:
    return InstanceOf(cls)


def kind_of(cls: type | tuple[type, ...]) -> KindOf:
    """Match instances of `cls`; `bool` values only match when `bool` is admitted."""
    return KindOf(cls)


def matching(pattern: str | re.Pattern[str]) -> Matching:
    return Matching(pattern)


def satisfies(condition: Callable[[Any], Any], description: str | None = None) -> Satisfies:
    return Satisfies(condition, description)


def one_of(*values: Any) -> OneOf:
    return OneOf(values)


def all_elements(predicate: Any) -> AllElements:
    """Match iterables whose every element satisfies `predicate`."""
    return AllElements(predicate)


def any_of(first: Any, second: Any, *more: Any) -> AnyOf:
    """Fold two or more expectations into nested OR-combinators."""
    combined = AnyOf(first, second)
    for alternative in more:
        combined = AnyOf(combined, alternative)
    return combined
