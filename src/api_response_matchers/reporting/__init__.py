"""Diagnostic rendering exports."""

from .result_rendering import COLOR_MODES, render_results, resolve_color

__all__ = ["COLOR_MODES", "render_results", "resolve_color"]
