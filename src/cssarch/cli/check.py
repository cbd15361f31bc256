"""CLI command: cssarch check -- analyze stylesheets and report violations."""

from __future__ import annotations

import sys

import click

from cssarch.engine import analyze
from cssarch.model.enums import Severity
from cssarch.parser import ParseError, load_stylesheet
from cssarch.reporting import FORMATTERS, Report
from cssarch.cli.options import EXIT_USAGE, config_option, resolve_config


@click.command()
@click.argument("files", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@config_option
@click.option(
    "--format",
    "output_format",
    type=click.Choice(sorted(FORMATTERS)),
    default="text",
    help="Output format.",
)
@click.option(
    "--fail-on",
    type=click.Choice(["warning", "error"]),
    default="error",
    help="Lowest severity that makes the command exit with status 1.",
)
def check(files: tuple[str, ...], config_path: str | None, output_format: str, fail_on: str) -> None:
    """Check CSS files against the layer and custom-property API conventions.

    Exits with code 0 when no violation reaches --fail-on, 1 when one does,
    and 2 on configuration or parse errors.
    """
    config = resolve_config(config_path)

    reports: list[Report] = []
    for path in files:
        try:
            model = load_stylesheet(path)
        except ParseError as exc:
            where = f":{exc.location}" if exc.location else ""
            click.echo(f"Parse error in {path}{where}: {exc}", err=True)
            sys.exit(EXIT_USAGE)
        reports.append(Report(source=path, violations=analyze(model, config)))

    click.echo(FORMATTERS[output_format](reports))

    threshold = Severity(fail_on)
    sys.exit(max((r.exit_code(threshold) for r in reports), default=0))
