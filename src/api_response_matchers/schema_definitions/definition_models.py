"""Named schema definition entities."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

FieldFactory = Callable[[Any], Any]


class SchemaDefinitionError(Exception):
    """Raised when a schema declaration or lookup is invalid."""


@dataclass(frozen=True)
class SchemaDefinition:
    """Field-name to expectation-factory pairs declared under one name.

    Factories are evaluated lazily with a caller-supplied context, so one
    declaration can serve many tests with different fixture values.
    """

    name: str
    fields: Mapping[str, FieldFactory] = field(default_factory=dict)

    def to_mapping(self, context: Any = None) -> dict[str, Any]:
        """Evaluate every field factory in declaration order."""
        return {name: factory(context) for name, factory in self.fields.items()}

    @property
    def field_names(self) -> tuple[str, ...]:
        return tuple(self.fields)
