"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from api_response_matchers.configuration import (
    ConfigurationError,
    load_actual_document,
    load_expectation_document,
)
from api_response_matchers.predicates.predicate_contract import describe
from api_response_matchers.reporting import COLOR_MODES, resolve_color
from api_response_matchers.response_matching import ApiResponseMatcher
from api_response_matchers.schema_definitions import SchemaDefinitionError


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="api-response-matchers")
@click.option("--verbose", is_flag=True, default=False, help="Log matching details to stderr.")
def cli(verbose: bool) -> None:
    """Structural matcher for JSON documents and API responses."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


@cli.command(name="check")
@click.option(
    "--expectations",
    "expectations_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML expectation document",
)
@click.option(
    "--actual",
    "actual_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the JSON document to validate",
)
@click.option(
    "--color",
    "color_mode",
    required=False,
    default=None,
    type=click.Choice(COLOR_MODES),
    help="Highlight failures in the diagnostic (overrides output.color).",
)
def check(expectations_path: str, actual_path: str, color_mode: str | None) -> None:
    """Validate a JSON document against an expectation document."""
    try:
        document = load_expectation_document(expectations_path)
        actual = load_actual_document(actual_path)
        matcher = ApiResponseMatcher(document.expected)
        matched = matcher.matches(actual)
    except (ConfigurationError, SchemaDefinitionError, OSError) as exc:
        raise CliError(str(exc)) from exc

    if matched:
        click.echo("OK")
        return
    color = resolve_color(color_mode or document.output.color, sys.stdout)
    click.echo(matcher.failure_message(color=color, width=document.output.width), color=color)
    raise click.exceptions.Exit(1)


@cli.command(name="describe")
@click.option(
    "--expectations",
    "expectations_path",
    required=True,
    type=click.Path(path_type=str),
    help="Path to the YAML expectation document",
)
def describe_expectations(expectations_path: str) -> None:
    """Print the description of an expectation document."""
    try:
        document = load_expectation_document(expectations_path)
    except (ConfigurationError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(describe(document.expected))
    for name in document.registry.names():
        definition = document.registry.get(name)
        click.echo(f"schema {name}: {', '.join(definition.field_names)}")


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        result = cli.main(args=list(argv), standalone_mode=False)
    except CliError as exc:
        click.echo(str(exc), err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return result if isinstance(result, int) else 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
