"""Helpers shared by the CLI commands."""

from __future__ import annotations

import sys

import click

from cssarch.config import ConfigError, LintConfig, discover_config, load_config

# Exit status for configuration and parse failures, distinct from lint failures.
EXIT_USAGE = 2

config_option = click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="TOML configuration file (default: cssarch.toml or [tool.cssarch] in pyproject.toml).",
)


def resolve_config(config_path: str | None) -> LintConfig:
    """Load the given or discovered configuration; exits on ConfigError."""
    path = config_path or discover_config()
    if path is None:
        return LintConfig()
    try:
        return load_config(path)
    except ConfigError as exc:
        click.echo(f"Configuration error: {exc}", err=True)
        sys.exit(EXIT_USAGE)
