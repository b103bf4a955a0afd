"""CLI command: sprite-loader build -- sprite a stylesheet."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from sprite_loader.config import LoaderConfig
from sprite_loader.css import ParseError
from sprite_loader.emission import DirectorySink
from sprite_loader.engine import transform_stylesheet
from sprite_loader.errors import SpriteLoaderError
from sprite_loader.events import EventBus, LoaderSkipped, SpriteEmitted
from sprite_loader.packing import DEFAULT_PADDING


@click.command()
@click.argument("stylesheet", type=click.Path(exists=True, dir_okay=False))
@click.option("-o", "--output", default=None, help="Write the CSS here instead of stdout")
@click.option(
    "--output-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Directory composites are written to (default: the stylesheet's directory)",
)
@click.option("--output-path", default="", help="Path prefix for composites inside the output dir")
@click.option("--css-image-path", default="", help="URL prefix used for composites in the CSS")
@click.option("--public-path", default="", help="Fallback URL prefix when --css-image-path is empty")
@click.option("--padding", type=int, default=DEFAULT_PADDING, show_default=True, help="Gap between images in pixels")
@click.option("--compress", is_flag=True, help="Write compressed CSS")
@click.option("--debug", is_flag=True, help="Log each processed stylesheet and sprite")
def build(
    stylesheet: str,
    output: str | None,
    output_dir: str | None,
    output_path: str,
    css_image_path: str,
    public_path: str,
    padding: int,
    compress: bool,
    debug: bool,
) -> None:
    """Replace the background images of STYLESHEET with sprite sheets.

    Only stylesheets containing a /* sprite-loader-enable */ comment are
    changed; others are written out as they are.
    """
    css_path = Path(stylesheet)
    if debug:
        logging.basicConfig(level=logging.DEBUG)

    config = LoaderConfig(
        output_path=output_path,
        css_image_path=css_image_path,
        public_path=public_path,
        debug=debug,
        padding=padding,
        compress=compress,
    )
    sink = DirectorySink(output_dir or css_path.parent)

    event_bus = EventBus()
    event_bus.subscribe(
        lambda e: click.echo(f"Emitted {e.url} ({e.size_bytes} bytes)", err=True), SpriteEmitted
    )
    event_bus.subscribe(
        lambda e: click.echo(f"Skipped {e.resource}: no sprite-loader-enable marker", err=True),
        LoaderSkipped,
    )

    try:
        source = css_path.read_text(encoding="utf-8")
        result = transform_stylesheet(
            source,
            css_path.parent,
            sink,
            config,
            resource=str(css_path),
            event_bus=event_bus,
        )
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)
    except SpriteLoaderError as exc:
        click.echo(f"Build failed: {exc}", err=True)
        sys.exit(1)

    if output:
        Path(output).write_text(result, encoding="utf-8")
    else:
        click.echo(result)
