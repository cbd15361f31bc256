"""cssarch CLI entry point: Click group with subcommands."""

import logging

import click

from cssarch import __version__


@click.group()
@click.version_option(version=__version__, prog_name="cssarch")
@click.option("-v", "--verbose", is_flag=True, help="Log analysis details to stderr.")
def cli(verbose: bool) -> None:
    """cssarch - architecture linter for layered, custom-property driven CSS."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Import and register subcommands
from cssarch.cli.check import check  # noqa: E402
from cssarch.cli.inspect import inspect  # noqa: E402
from cssarch.cli.rules import rules  # noqa: E402

cli.add_command(check)
cli.add_command(inspect)
cli.add_command(rules)
