# ABOUTME: CLI package for Libris, built on Click.
# ABOUTME: Defines the root command group, logging setup, and registers subcommands.

import logging

import click
from rich.console import Console
from rich.logging import RichHandler

from libris.cli.commands import (
    author_cmd,
    category_cmd,
    check_cmd,
    doc_cmd,
    init_cmd,
    label_cmd,
    scan_cmd,
    series_cmd,
)


def _configure_logging(verbose: bool) -> None:
    root = logging.getLogger()
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
    if any(isinstance(handler, RichHandler) for handler in root.handlers):
        return
    handler = RichHandler(
        console=Console(stderr=True),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)


@click.group()
@click.version_option(package_name="libris")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Show debug logging.")
def cli(verbose: bool) -> None:
    """Libris - a catalog of personal documents kept in sync with disk."""
    _configure_logging(verbose)


cli.add_command(init_cmd.init)
cli.add_command(category_cmd.category)
cli.add_command(author_cmd.author)
cli.add_command(series_cmd.series)
cli.add_command(label_cmd.tag)
cli.add_command(label_cmd.genre)
cli.add_command(doc_cmd.add)
cli.add_command(doc_cmd.ls)
cli.add_command(doc_cmd.info)
cli.add_command(doc_cmd.rm)
cli.add_command(scan_cmd.scan)
cli.add_command(check_cmd.check)
