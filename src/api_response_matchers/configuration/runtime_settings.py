"""Configuration domain entities."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from api_response_matchers.schema_definitions.schema_registry import SchemaRegistry


@dataclass(frozen=True)
class OutputSettings:
    """Diagnostic rendering preferences."""

    color: str = "auto"
    width: int = 80


@dataclass(frozen=True)
class ExpectationDocument:
    """Top-level expectation document aggregate."""

    path: Path
    registry: SchemaRegistry
    expected: Any
    output: OutputSettings
