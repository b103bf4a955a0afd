"""CLI command: sprite-loader inspect -- show the sprite groups of a stylesheet."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from sprite_loader.css import ParseError, parse_css
from sprite_loader.engine import is_enabled
from sprite_loader.packing import algorithm_for
from sprite_loader.sprites import group_references


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
def inspect(stylesheet: str) -> None:
    """Parse STYLESHEET and list the sprite groups it would produce.

    Nothing is packed or written.
    """
    css_path = Path(stylesheet)

    try:
        sheet = parse_css(css_path.read_text(encoding="utf-8"))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    enabled = is_enabled(sheet)
    groups = group_references(sheet)

    click.echo(f"Stylesheet: {css_path.name}")
    click.echo(f"Enabled:    {'yes' if enabled else 'no'}")
    click.echo(f"Rules:      {len(sheet.rules())}")
    click.echo(f"Groups:     {len(groups)}")

    for group in groups:
        click.echo()
        click.echo(
            f"Group {group.ratio.value}x {group.repeat.value} "
            f"({algorithm_for(group.repeat)}, {len(group.members)} image(s)):"
        )
        for ref in group.members:
            click.echo(f"  {', '.join(ref.selectors)}  ->  {ref.url}")
