"""Named schema declaration exports."""

from .definition_models import FieldFactory, SchemaDefinition, SchemaDefinitionError
from .schema_registry import (
    PAGINATION_SCHEMA_NAME,
    SchemaReference,
    SchemaRegistry,
    a_serialized,
    default_registry,
    define_api_matcher,
    match_paginated_api_response,
)

__all__ = [
    "FieldFactory",
    "SchemaDefinition",
    "SchemaDefinitionError",
    "SchemaReference",
    "SchemaRegistry",
    "a_serialized",
    "PAGINATION_SCHEMA_NAME",
    "default_registry",
    "define_api_matcher",
    "match_paginated_api_response",
]
