"""CLI command: cssarch inspect -- show layer tags and API bindings."""

from __future__ import annotations

import sys

import click

from cssarch.classifier import classify
from cssarch.parser import ParseError, load_stylesheet
from cssarch.tracker import track
from cssarch.cli.options import EXIT_USAGE, config_option, resolve_config


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
@config_option
def inspect(cssfile: str, config_path: str | None) -> None:
    """Parse a CSS file and display how each rule is classified.

    Shows every rule with its layer, then the custom-property API each
    block and layout class exposes and consumes.
    """
    config = resolve_config(config_path)
    try:
        model = load_stylesheet(cssfile)
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(EXIT_USAGE)

    tags = classify(model.rules, config)
    click.echo(f"Stylesheet: {cssfile}")
    click.echo(f"Rules: {len(model.rules)}")
    click.echo()

    click.echo("Rules:")
    for rule in model.rules:
        parts = [f"  {rule.location}", f"{tags[rule].value:<12}", rule.selector]
        if rule.layer:
            parts.append(f"@layer={rule.layer}")
        click.echo("  ".join(parts))
    click.echo()

    bindings = track(model.rules, tags, config).bindings
    click.echo("APIs:")
    if not bindings:
        click.echo("  (none)")
    for selector, binding in bindings.items():
        click.echo(f"  {selector} [{binding.layer.value}]")
        if binding.exposes:
            click.echo(f"    exposes:  {', '.join(d.name for d in binding.exposes)}")
        if binding.sub_apis:
            click.echo(f"    sub-apis: {', '.join(d.name for d in binding.sub_apis)}")
        if binding.consumes:
            click.echo(f"    consumes: {', '.join(sorted(binding.consumes))}")
