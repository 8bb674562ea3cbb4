"""Expectation document loader service."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from api_response_matchers.reporting.result_rendering import COLOR_MODES
from api_response_matchers.schema_definitions.definition_models import (
    FieldFactory,
    SchemaDefinitionError,
)
from api_response_matchers.schema_definitions.schema_registry import SchemaRegistry

from .expectation_tags import build_expectation_loader
from .runtime_settings import ExpectationDocument, OutputSettings


class ConfigurationError(Exception):
    """Raised when an expectation or actual document is invalid."""


def load_expectation_document(document_path: Path | str) -> ExpectationDocument:
    """Load and validate a YAML expectation document.

    Args:
      document_path: Path to a YAML file with `expect`, and optionally
        `schemas` and `output`, sections.

    Returns:
      The parsed document with its schemas registered in a fresh registry.

    Raises:
      ConfigurationError: If the file is missing or any section is invalid.
    """
    path = Path(document_path)
    if not path.exists():
        raise ConfigurationError(f"Expectation file not found: {path}")

    registry = SchemaRegistry()
    schema_references: list[str] = []
    text = path.read_text(encoding="utf-8")
    try:
        parsed = yaml.load(text, Loader=build_expectation_loader(registry, schema_references))
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Failed to parse expectation file: {exc}") from exc

    if parsed is None:
        parsed = {}
    if not isinstance(parsed, Mapping):
        raise ConfigurationError("Expectation document root must be a mapping.")
    if "expect" not in parsed:
        raise ConfigurationError("Expectation section 'expect' is required.")

    _register_schemas(parsed.get("schemas"), registry)
    for name in schema_references:
        if name not in registry:
            raise ConfigurationError(f"!schema references unknown schema '{name}'.")

    return ExpectationDocument(
        path=path,
        registry=registry,
        expected=parsed["expect"],
        output=_parse_output_section(parsed.get("output")),
    )


def load_actual_document(document_path: Path | str) -> Any:
    """Load the JSON document to be validated."""
    path = Path(document_path)
    if not path.exists():
        raise ConfigurationError(f"Actual document not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Invalid JSON in actual document {path}: {exc}") from exc


def _register_schemas(value: Any, registry: SchemaRegistry) -> None:
    if value is None:
        return
    section = _require_mapping(value, "schemas")
    for name, fields in section.items():
        field_mapping = _require_mapping(fields, f"schemas.{name}")
        try:
            registry.define(
                name,
                {field: _constant_factory(node) for field, node in field_mapping.items()},
            )
        except SchemaDefinitionError as exc:
            raise ConfigurationError(str(exc)) from exc


def _constant_factory(node: Any) -> FieldFactory:
    def factory(_context: Any) -> Any:
        return node

    return factory


def _parse_output_section(value: Any) -> OutputSettings:
    if value is None:
        return OutputSettings()
    section = _require_mapping(value, "output")
    color = section.get("color", "auto")
    if color not in COLOR_MODES:
        raise ConfigurationError(f"output.color must be one of {', '.join(COLOR_MODES)}.")
    width = _require_positive_int(section.get("width", 80), "output.width")
    return OutputSettings(color=color, width=width)


def _require_mapping(value: Any, section_name: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Configuration section '{section_name}' must be a mapping.")
    return value


def _require_positive_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigurationError(f"{field_name} must be an integer.")
    if value <= 0:
        raise ConfigurationError(f"{field_name} must be greater than zero.")
    return value
