"""CLI command: cssarch rules -- list the architectural rules and their settings."""

from __future__ import annotations

import click

from cssarch.rules import RULES
from cssarch.cli.options import config_option, resolve_config


@click.command()
@config_option
def rules(config_path: str | None) -> None:
    """List every rule with its category and effective setting."""
    config = resolve_config(config_path)
    for rule in RULES:
        setting = config.setting_for(rule.kind)
        click.echo(f"{rule.kind.value:<24} {rule.category:<9} {setting.value:<8} {rule.summary}")
