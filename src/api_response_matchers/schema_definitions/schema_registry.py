"""Registry of named, reusable expectation schemas."""

from __future__ import annotations

import inspect
import logging
import threading
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from api_response_matchers.fuzzy_matching.engine import normalize_key, normalize_keys
from api_response_matchers.predicates.predicate_contract import StructuredPredicate, describe
from api_response_matchers.response_matching.api_response_matcher import ApiResponseMatcher

from .definition_models import FieldFactory, SchemaDefinition, SchemaDefinitionError

_LOGGER = logging.getLogger(__name__)


class SchemaRegistry:
    """Thread-safe mapping of schema names to `SchemaDefinition`s."""

    def __init__(self) -> None:
        self._definitions: dict[str, SchemaDefinition] = {}
        self._lock = threading.Lock()

    def define(self, name: str, fields: Mapping[Any, FieldFactory]) -> SchemaDefinition:
        """Declare a schema.

        Args:
          name: Schema name, unique within this registry.
          fields: Field name to one-argument factory returning the expectation.

        Returns:
          The registered definition.

        Raises:
          SchemaDefinitionError: If the name or any field declaration is invalid.
        """
        schema_name = _require_name(name, "Schema name")
        if not isinstance(fields, Mapping):
            raise SchemaDefinitionError(f"Schema '{schema_name}' fields must be a mapping.")
        definition = SchemaDefinition(
            name=schema_name,
            fields=MappingProxyType(_validate_fields(schema_name, fields)),
        )
        with self._lock:
            if schema_name in self._definitions:
                raise SchemaDefinitionError(f"Schema '{schema_name}' is already defined.")
            self._definitions[schema_name] = definition
        _LOGGER.debug("Defined schema %s with fields %s", schema_name, definition.field_names)
        return definition

    def get(self, name: str) -> SchemaDefinition:
        with self._lock:
            definition = self._definitions.get(name)
        if definition is None:
            raise SchemaDefinitionError(f"Unknown schema '{name}'.")
        return definition

    def names(self) -> tuple[str, ...]:
        with self._lock:
            return tuple(self._definitions)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._definitions

    def matcher(
        self,
        name: str,
        expected: Mapping[Any, Any] | None = None,
        *,
        context: Any = None,
    ) -> ApiResponseMatcher:
        """Build a matcher for a serialized `name`, customized by `expected`."""
        return ApiResponseMatcher(expected or {}, schema=self.get(name), context=context)

    def reference(
        self,
        name: str,
        expected: Mapping[Any, Any] | None = None,
        *,
        context: Any = None,
    ) -> SchemaReference:
        """Build a matcher that resolves `name` only when it is evaluated."""
        return SchemaReference(self, name, expected or {}, context=context)


class SchemaReference(StructuredPredicate):
    """Lazily resolved schema matcher, for recursive or later-declared schemas."""

    def __init__(
        self,
        registry: SchemaRegistry,
        name: str,
        expected: Mapping[Any, Any],
        *,
        context: Any = None,
    ) -> None:
        self.registry = registry
        self.name = name
        self.expected = expected
        self.context = context

    def explain(self, actual: Any) -> tuple[bool, Any]:
        return self.resolve().explain(actual)

    def resolve(self) -> ApiResponseMatcher:
        return self.registry.matcher(self.name, self.expected, context=self.context)

    def describe(self) -> str:
        if self.expected:
            return f"a serialized {self.name} matching {describe(self.expected)}"
        return f"a serialized {self.name}"

    def __repr__(self) -> str:
        return f"<SchemaReference for {self.name}>"


def _validate_fields(
    schema_name: str, fields: Mapping[Any, FieldFactory]
) -> dict[str, FieldFactory]:
    validated: dict[str, FieldFactory] = {}
    for raw_name, factory in fields.items():
        field_name = _require_name(raw_name, f"Schema '{schema_name}' field name")
        normalized = normalize_key(field_name)
        if normalized in validated:
            raise SchemaDefinitionError(
                f"Schema '{schema_name}' declares field '{normalized}' more than once."
            )
        _require_single_argument_factory(schema_name, normalized, factory)
        validated[normalized] = factory
    return validated


def _require_name(value: Any, label: str) -> str:
    if not isinstance(value, str):
        raise SchemaDefinitionError(f"{label} must be a string, got {value!r}.")
    stripped = value.strip()
    if not stripped:
        raise SchemaDefinitionError(f"{label} must not be empty.")
    return stripped


def _require_single_argument_factory(schema_name: str, field_name: str, factory: Any) -> None:
    if not callable(factory):
        raise SchemaDefinitionError(
            f"Schema '{schema_name}' field '{field_name}' must be a callable taking the "
            f"matcher context, got {factory!r}."
        )
    try:
        inspect.signature(factory).bind(None)
    except TypeError as exc:
        raise SchemaDefinitionError(
            f"Schema '{schema_name}' field '{field_name}' factory must accept one "
            f"positional argument (the matcher context): {exc}"
        ) from exc
    except ValueError:
        # Builtins without an introspectable signature are accepted as-is.
        return


default_registry = SchemaRegistry()


def define_api_matcher(name: str, fields: Mapping[Any, FieldFactory]) -> SchemaDefinition:
    """Declare a schema in the default registry."""
    return default_registry.define(name, fields)


def a_serialized(
    name: str,
    expected: Mapping[Any, Any] | None = None,
    *,
    context: Any = None,
) -> ApiResponseMatcher:
    """Build a matcher for a schema declared in the default registry."""
    return default_registry.matcher(name, expected, context=context)


PAGINATION_SCHEMA_NAME = "pagination_metadata"


def match_paginated_api_response(
    expected: Mapping[Any, Any],
    *,
    meta: Any = None,
    registry: SchemaRegistry | None = None,
) -> ApiResponseMatcher:
    """Build a matcher that also requires paginated `meta` in the response.

    Unless `meta` is given, the response's `meta` key must match the
    `pagination_metadata` schema of `registry` (the default registry if unset).
    """
    if meta is None:
        meta = (registry or default_registry).reference(PAGINATION_SCHEMA_NAME)
    return ApiResponseMatcher({**normalize_keys(expected), "meta": meta})
