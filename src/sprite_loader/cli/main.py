"""sprite-loader CLI entry point: Click group with subcommands."""

import click

from sprite_loader import __version__


@click.group()
@click.version_option(version=__version__, prog_name="sprite-loader")
def cli() -> None:
    """sprite-loader - pack CSS background images into sprite sheets."""


# Import and register subcommands
from sprite_loader.cli.build import build  # noqa: E402
from sprite_loader.cli.inspect import inspect  # noqa: E402

cli.add_command(build)
cli.add_command(inspect)
