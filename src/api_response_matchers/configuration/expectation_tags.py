"""YAML tags that turn expectation documents into predicate trees."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import yaml

from api_response_matchers.predicates.absence_marker import absent
from api_response_matchers.predicates.builtin_predicates import (
    all_elements,
    any_of,
    anything,
    instance_of,
    kind_of,
    matching,
    none_value,
)
from api_response_matchers.schema_definitions.schema_registry import SchemaRegistry

TYPE_NAMES: Mapping[str, type | tuple[type, ...]] = {
    "string": str,
    "integer": int,
    "number": (int, float),
    "boolean": bool,
    "array": list,
    "object": dict,
    "null": type(None),
    "str": str,
    "int": int,
    "float": float,
    "bool": bool,
    "list": list,
    "dict": dict,
}


class ExpectationTagError(yaml.YAMLError):
    """Raised when a tagged expectation node cannot be constructed."""


def build_expectation_loader(
    registry: SchemaRegistry, schema_references: list[str]
) -> type[yaml.SafeLoader]:
    """Return a `SafeLoader` subclass bound to `registry`.

    Schema names used by `!schema` tags are appended to `schema_references`
    so the caller can verify them once every schema is declared.
    """

    class ExpectationLoader(yaml.SafeLoader):  # pylint: disable=too-many-ancestors
        """Safe YAML loader with expectation tags."""

    def construct_schema(loader: yaml.SafeLoader, node: yaml.Node) -> Any:
        if isinstance(node, yaml.ScalarNode):
            name = loader.construct_scalar(node)
            overrides: Mapping[str, Any] = {}
        elif isinstance(node, yaml.MappingNode):
            spec = loader.construct_mapping(node, deep=True)
            name = spec.get("name")
            overrides = spec.get("with") or {}
            if not isinstance(overrides, Mapping):
                raise ExpectationTagError(f"!schema 'with' must be a mapping: {node.start_mark}")
        else:
            raise ExpectationTagError(f"!schema expects a name or mapping: {node.start_mark}")
        if not isinstance(name, str) or not name.strip():
            raise ExpectationTagError(f"!schema requires a schema name: {node.start_mark}")
        schema_references.append(name.strip())
        return registry.reference(name.strip(), overrides)

    ExpectationLoader.add_constructor("!absent", lambda _loader, _node: absent())
    ExpectationLoader.add_constructor("!anything", lambda _loader, _node: anything())
    ExpectationLoader.add_constructor("!none", lambda _loader, _node: none_value())
    ExpectationLoader.add_constructor("!kind_of", _construct_kind_of)
    ExpectationLoader.add_constructor("!instance_of", _construct_instance_of)
    ExpectationLoader.add_constructor("!matching", _construct_matching)
    ExpectationLoader.add_constructor("!any_of", _construct_any_of)
    ExpectationLoader.add_constructor("!all_elements", _construct_all_elements)
    ExpectationLoader.add_constructor("!schema", construct_schema)
    return ExpectationLoader


def _construct_kind_of(loader: yaml.SafeLoader, node: yaml.Node) -> Any:
    return kind_of(_resolve_type(loader, node))


def _construct_instance_of(loader: yaml.SafeLoader, node: yaml.Node) -> Any:
    resolved = _resolve_type(loader, node)
    if isinstance(resolved, tuple):
        raise ExpectationTagError(
            f"!instance_of requires a single type, use !kind_of instead: {node.start_mark}"
        )
    return instance_of(resolved)


def _construct_matching(loader: yaml.SafeLoader, node: yaml.Node) -> Any:
    pattern = _require_scalar(loader, node, "!matching")
    return matching(pattern)


def _construct_any_of(loader: yaml.SafeLoader, node: yaml.Node) -> Any:
    if not isinstance(node, yaml.SequenceNode):
        raise ExpectationTagError(f"!any_of expects a sequence: {node.start_mark}")
    alternatives = loader.construct_sequence(node, deep=True)
    if len(alternatives) < 2:
        raise ExpectationTagError(f"!any_of needs at least two alternatives: {node.start_mark}")
    return any_of(*alternatives)


def _construct_all_elements(loader: yaml.SafeLoader, node: yaml.Node) -> Any:
    if not isinstance(node, yaml.SequenceNode) or len(node.value) != 1:
        raise ExpectationTagError(
            f"!all_elements expects a one-item sequence holding the element expectation: "
            f"{node.start_mark}"
        )
    (element,) = loader.construct_sequence(node, deep=True)
    return all_elements(element)


def _resolve_type(loader: yaml.SafeLoader, node: yaml.Node) -> type | tuple[type, ...]:
    type_name = _require_scalar(loader, node, node.tag)
    resolved = TYPE_NAMES.get(type_name)
    if resolved is None:
        known = ", ".join(sorted(TYPE_NAMES))
        raise ExpectationTagError(
            f"{node.tag} got unknown type name '{type_name}' (known: {known}): {node.start_mark}"
        )
    return resolved


def _require_scalar(loader: yaml.SafeLoader, node: yaml.Node, tag: str) -> str:
    if not isinstance(node, yaml.ScalarNode):
        raise ExpectationTagError(f"{tag} expects a scalar value: {node.start_mark}")
    value = loader.construct_scalar(node)
    if not isinstance(value, str) or not value.strip():
        raise ExpectationTagError(f"{tag} must not be empty: {node.start_mark}")
    return value.strip()
