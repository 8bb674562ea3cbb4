"""Predicate contract, combinators, and built-in predicates."""

from .absence_marker import Absent, absent, is_absence_marker
from .builtin_predicates import (
    all_elements,
    any_of,
    anything,
    equal_to,
    instance_of,
    kind_of,
    matching,
    none_value,
    one_of,
    satisfies,
)
from .predicate_contract import (
    AllElements,
    AnyOf,
    Predicate,
    PredicateOutcome,
    StructuredPredicate,
    SupportsDescribe,
    SupportsTest,
    describe,
    evaluate,
)

__all__ = [
    "Absent",
    "AllElements",
    "AnyOf",
    "Predicate",
    "PredicateOutcome",
    "StructuredPredicate",
    "SupportsDescribe",
    "SupportsTest",
    "absent",
    "all_elements",
    "any_of",
    "anything",
    "describe",
    "equal_to",
    "evaluate",
    "instance_of",
    "is_absence_marker",
    "kind_of",
    "matching",
    "none_value",
    "one_of",
    "satisfies",
]
