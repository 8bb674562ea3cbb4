"""Diagnostic rendering tests."""

from __future__ import annotations

import io

import click
import pytest
from api_response_matchers.fuzzy_matching import FailureDescription
from api_response_matchers.reporting import render_results, resolve_color


def test_short_trees_render_on_one_line() -> None:
    results = {"a": 1, "b": [None, "x"], "c": FailureDescription("was 2, should have been 1")}

    assert render_results(results) == (
        "{'a': 1, 'b': [None, 'x'], 'c': (FAILURE: was 2, should have been 1)}"
    )


def test_wide_trees_break_one_entry_per_line() -> None:
    results = {"a": [1, 2], "b": FailureDescription("x")}

    assert render_results(results, width=10) == "{\n  'a': [1, 2],\n  'b': (FAILURE: x)\n}"


def test_nested_containers_are_indented() -> None:
    results = {"outer": {"inner": ["long value", "another long value"]}}

    assert render_results(results, width=20) == (
        "{\n"
        "  'outer': {\n"
        "    'inner': [\n"
        "      'long value',\n"
        "      'another long value'\n"
        "    ]\n"
        "  }\n"
        "}"
    )


def test_failures_are_red_when_colored() -> None:
    rendered = render_results([1, FailureDescription("x")], color=True)

    assert rendered == f"[1, {click.style('(FAILURE: x)', fg='red')}]"
    assert "\x1b[31m" in rendered
    assert click.unstyle(rendered) == "[1, (FAILURE: x)]"


def test_empty_containers_and_tuples() -> None:
    assert render_results({}) == "{}"
    assert render_results([]) == "[]"
    assert render_results((1,)) == "(1,)"


def test_resolve_color_modes() -> None:
    assert resolve_color("always") is True
    assert resolve_color("never") is False
    assert resolve_color("auto", io.StringIO()) is False
    assert resolve_color("auto") is False


def test_resolve_color_rejects_unknown_mode() -> None:
    with pytest.raises(ValueError, match="Unsupported color mode"):
        resolve_color("sometimes")
