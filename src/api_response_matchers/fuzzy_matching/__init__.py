"""Fuzzy matching engine exports."""

from .diagnostics import (
    FailureDescription,
    extra_key_message,
    extract_results_with_errors,
    failed_match_message,
)
from .engine import (
    NestedExpectation,
    match_mappings,
    match_sequences,
    match_values,
    normalize_key,
    normalize_keys,
)

__all__ = [
    "FailureDescription",
    "NestedExpectation",
    "extra_key_message",
    "extract_results_with_errors",
    "failed_match_message",
    "match_mappings",
    "match_sequences",
    "match_values",
    "normalize_key",
    "normalize_keys",
]
