"""CLI check/describe integration tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from click.testing import CliRunner
from api_response_matchers.cli import cli, main

_EXPECTATIONS = """
schemas:
  profile:
    id: !kind_of integer
    name: !instance_of string
    email: !absent
expect:
  data: !all_elements
    - !schema profile
  total: !kind_of integer
"""


def _write_inputs(tmp_path: Path, actual: object) -> tuple[Path, Path]:
    expectations_path = tmp_path / "expect.yaml"
    expectations_path.write_text(_EXPECTATIONS, encoding="utf-8")
    actual_path = tmp_path / "actual.json"
    actual_path.write_text(json.dumps(actual), encoding="utf-8")
    return expectations_path, actual_path


def test_check_prints_ok_for_matching_document(tmp_path: Path) -> None:
    expectations_path, actual_path = _write_inputs(
        tmp_path, {"data": [{"id": 1, "name": "Jane"}], "total": 1}
    )
    runner = CliRunner()

    result = runner.invoke(
        cli, ["check", "--expectations", str(expectations_path), "--actual", str(actual_path)]
    )

    assert result.exit_code == 0
    assert result.output == "OK\n"


def test_check_prints_field_level_diagnostic_on_mismatch(tmp_path: Path) -> None:
    expectations_path, actual_path = _write_inputs(
        tmp_path, {"data": [{"id": 1, "name": "Jane", "email": "j@example.com"}], "total": "1"}
    )
    runner = CliRunner()

    result = runner.invoke(
        cli, ["check", "--expectations", str(expectations_path), "--actual", str(actual_path)]
    )

    assert result.exit_code == 1
    assert "Expected API response to match specification:" in result.output
    assert "(FAILURE: was 'j@example.com', should have been absent)" in result.output
    assert "(FAILURE: was '1', should have been a kind of int)" in result.output
    assert "\x1b[" not in result.output


def test_check_colors_failures_on_request(tmp_path: Path) -> None:
    expectations_path, actual_path = _write_inputs(tmp_path, {"data": [], "total": None})
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "check",
            "--expectations",
            str(expectations_path),
            "--actual",
            str(actual_path),
            "--color",
            "always",
        ],
        color=True,
    )

    assert result.exit_code == 1
    assert "\x1b[31m(FAILURE: was None, should have been a kind of int)" in result.output


def test_main_returns_one_on_mismatch(tmp_path: Path, capsys) -> None:
    expectations_path, actual_path = _write_inputs(tmp_path, {"data": [], "total": 1, "x": 1})

    exit_code = main(
        ["check", "--expectations", str(expectations_path), "--actual", str(actual_path)]
    )
    captured = capsys.readouterr()

    assert exit_code == 1
    assert "(FAILURE: was 1, should have been absent)" in captured.out


def test_describe_prints_expectation_and_schemas(tmp_path: Path) -> None:
    expectations_path, _ = _write_inputs(tmp_path, {})
    runner = CliRunner()

    result = runner.invoke(cli, ["describe", "--expectations", str(expectations_path)])

    assert result.exit_code == 0
    assert result.output.splitlines() == [
        "{'data': all a serialized profile, 'total': a kind of int}",
        "schema profile: id, name, email",
    ]


def test_verbose_flag_enables_debug_logging(tmp_path: Path, monkeypatch) -> None:
    calls: list[dict[str, object]] = []
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.append(kwargs))
    expectations_path, actual_path = _write_inputs(tmp_path, {"data": [], "total": 0})
    runner = CliRunner()

    result = runner.invoke(
        cli,
        [
            "--verbose",
            "check",
            "--expectations",
            str(expectations_path),
            "--actual",
            str(actual_path),
        ],
    )

    assert result.exit_code == 0
    assert "OK" in result.output
    assert calls[0]["level"] == logging.DEBUG
