"""Predicate contract tests."""

from __future__ import annotations

import re

from api_response_matchers.predicates import (
    AllElements,
    AnyOf,
    Predicate,
    describe,
    evaluate,
    instance_of,
    kind_of,
    none_value,
)


def test_literal_equality_matches_without_predicate_invocation() -> None:
    outcome = evaluate({"a": [1, 2]}, {"a": [1, 2]})

    assert outcome.matched is True
    assert outcome.fault is None


def test_bool_never_equals_integer() -> None:
    assert evaluate(1, True).matched is False
    assert evaluate(True, 1).matched is False
    assert evaluate(1, 1.0).matched is True


def test_classes_patterns_ranges_and_callables_act_as_predicates() -> None:
    assert evaluate(str, "x").matched is True
    assert evaluate(str, 5).matched is False
    assert evaluate(re.compile(r"^\d+$"), "123").matched is True
    assert evaluate(re.compile(r"^\d+$"), 123).matched is False
    assert evaluate(range(1, 5), 3).matched is True
    assert evaluate(range(1, 5), 7).matched is False
    assert evaluate(lambda value: value > 2, 3).matched is True


def test_raising_predicate_is_a_non_match_with_recorded_fault() -> None:
    def explode(value: object) -> bool:
        raise KeyError("boom")

    outcome = evaluate(explode, {"a": 1})

    assert outcome.matched is False
    assert isinstance(outcome.fault, KeyError)


def test_arity_incompatible_callable_is_a_non_match() -> None:
    outcome = evaluate(lambda: True, "value")

    assert outcome.matched is False
    assert isinstance(outcome.fault, TypeError)


def test_plain_values_are_not_predicates() -> None:
    assert evaluate("expected", "actual").matched is False
    assert evaluate(None, 0).matched is False


def test_or_operator_builds_any_of_including_literal_left_operand() -> None:
    combined = none_value() | instance_of(str)
    reflected = None | instance_of(str)

    assert isinstance(combined, AnyOf)
    assert isinstance(reflected, AnyOf)
    assert reflected.first is None
    assert combined.test(None) is True
    assert combined.test("x") is True
    assert combined.test(5) is False
    assert instance_of(str).or_(5).test(5) is True


def test_all_elements_requires_every_element_and_an_iterable() -> None:
    predicate = AllElements(kind_of(int))

    assert predicate.test([1, 2, 3]) is True
    assert predicate.test((1, 2)) is True
    assert predicate.test([]) is True
    assert predicate.test([1, "2"]) is False
    assert predicate.test("123") is False
    assert predicate.test({"a": 1}) is False


def test_describe_renders_predicates_inside_containers() -> None:
    assert describe(instance_of(str)) == "an instance of str"
    assert describe(none_value() | instance_of(str)) == "a None value or an instance of str"
    assert describe(AllElements(kind_of(int))) == "all a kind of int"
    assert describe({"id": kind_of(int), "tags": [str]}) == "{'id': a kind of int, 'tags': [str]}"
    assert describe((1,)) == "(1,)"
    assert describe("text") == "'text'"


class _UncomparablePayload:
    def __eq__(self, other: object) -> bool:
        raise ValueError("payload refuses comparison")

    __hash__ = object.__hash__


def test_raising_equality_still_invokes_the_predicate() -> None:
    outcome = evaluate(kind_of(_UncomparablePayload), _UncomparablePayload())

    assert outcome.matched is True
    assert outcome.fault is None


def test_raising_equality_without_predicate_records_the_equality_fault() -> None:
    outcome = evaluate(5, _UncomparablePayload())

    assert outcome.matched is False
    assert isinstance(outcome.fault, ValueError)


class _BrokenPredicate(Predicate):
    def test(self, value: object) -> bool:
        raise RuntimeError("test failed")

    def describe(self) -> str:
        raise RuntimeError("describe failed")


def test_predicate_with_raising_describe_is_still_a_non_match() -> None:
    outcome = evaluate(_BrokenPredicate(), 1)

    assert outcome.matched is False
    assert isinstance(outcome.fault, RuntimeError)
    assert str(outcome.fault) == "test failed"
