"""Structural matching of nested data against declarative expectations."""

import logging

from .fuzzy_matching import FailureDescription, match_values
from .predicates import (
    absent,
    all_elements,
    any_of,
    anything,
    describe,
    equal_to,
    instance_of,
    is_absence_marker,
    kind_of,
    matching,
    none_value,
    one_of,
    satisfies,
)
from .response_matching import ApiResponseMatcher, assert_api_response, match_api_response
from .schema_definitions import (
    SchemaDefinitionError,
    SchemaRegistry,
    a_serialized,
    define_api_matcher,
    match_paginated_api_response,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

match = match_values

__all__ = [
    "ApiResponseMatcher",
    "FailureDescription",
    "SchemaDefinitionError",
    "SchemaRegistry",
    "a_serialized",
    "absent",
    "all_elements",
    "any_of",
    "anything",
    "assert_api_response",
    "define_api_matcher",
    "describe",
    "equal_to",
    "instance_of",
    "is_absence_marker",
    "kind_of",
    "match",
    "match_api_response",
    "match_paginated_api_response",
    "match_values",
    "matching",
    "none_value",
    "one_of",
    "satisfies",
]
