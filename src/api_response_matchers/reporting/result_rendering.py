"""Text rendering of diagnostic trees."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TextIO

import click

from api_response_matchers.fuzzy_matching.diagnostics import FailureDescription

COLOR_MODES = ("auto", "always", "never")
_INDENT = "  "


def render_results(results: Any, *, color: bool = False, width: int = 80) -> str:
    """Render a diagnostic tree in a pprint-like layout.

    Containers stay on one line while they fit in `width` and are otherwise
    broken into one entry per line. Failure markers are highlighted in red
    when `color` is enabled.
    """
    return _render(results, indent=0, width=width, color=color)


def resolve_color(mode: str, stream: TextIO | None = None) -> bool:
    """Map a color mode to a concrete on/off decision for `stream`."""
    if mode not in COLOR_MODES:
        raise ValueError(f"Unsupported color mode: {mode}")
    if mode == "always":
        return True
    if mode == "never":
        return False
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def _render(value: Any, *, indent: int, width: int, color: bool) -> str:
    flat = _render_flat(value, color=False)
    if len(_INDENT * indent) + len(flat) <= width or not _is_container(value):
        return _render_flat(value, color=color)

    inner_prefix = _INDENT * (indent + 1)
    if isinstance(value, Mapping):
        opening, closing = "{", "}"
        entries = [
            f"{inner_prefix}{key!r}: {_render(item, indent=indent + 1, width=width, color=color)}"
            for key, item in value.items()
        ]
    else:
        opening, closing = ("[", "]") if isinstance(value, list) else ("(", ")")
        entries = [
            f"{inner_prefix}{_render(item, indent=indent + 1, width=width, color=color)}"
            for item in value
        ]
    body = ",\n".join(entries)
    return f"{opening}\n{body}\n{_INDENT * indent}{closing}"


def _render_flat(value: Any, *, color: bool) -> str:
    if isinstance(value, FailureDescription):
        text = repr(value)
        return click.style(text, fg="red") if color else text
    if isinstance(value, Mapping):
        members = ", ".join(
            f"{key!r}: {_render_flat(item, color=color)}" for key, item in value.items()
        )
        return f"{{{members}}}"
    if isinstance(value, list):
        return f"[{', '.join(_render_flat(item, color=color) for item in value)}]"
    if isinstance(value, tuple):
        trailing = "," if len(value) == 1 else ""
        return f"({', '.join(_render_flat(item, color=color) for item in value)}{trailing})"
    return repr(value)


def _is_container(value: Any) -> bool:
    return isinstance(value, Mapping | list | tuple) and len(value) > 0
