"""Compose a group's images into one PNG sprite sheet with Pillow."""

from __future__ import annotations

import asyncio
import io
import logging
from typing import Iterable

from PIL import Image

from sprite_loader.errors import PackingError
from sprite_loader.model.background import RepeatMode
from sprite_loader.model.packing import PackResult, Placement
from sprite_loader.packing.layout import DEFAULT_ALGORITHM, LayoutItem, algorithm_for, layout

__all__ = ["DEFAULT_PADDING", "pack_images", "SpritePacker"]

logger = logging.getLogger(__name__)

# Transparent gap between neighbours so scaled or sub-pixel rendering of one
# image never bleeds into the next.
DEFAULT_PADDING = 20


def _load(path: str) -> Image.Image:
    try:
        with Image.open(path) as im:
            return im.convert("RGBA")
    except OSError as exc:
        raise PackingError(f"Cannot load image {path}: {exc}", path=path) from exc


def pack_images(
    paths: list[str],
    algorithm: str = DEFAULT_ALGORITHM,
    padding: int = DEFAULT_PADDING,
) -> PackResult:
    """Lay out and compose the images at *paths*.

    Duplicate paths are packed once.  Padding is added to the right and
    bottom of every image, and trimmed from the composite's outer edge.
    """
    unique = list(dict.fromkeys(paths))
    if not unique:
        raise PackingError("No images to pack")
    images = {p: _load(p) for p in unique}

    items = [
        LayoutItem(key=p, width=im.width + padding, height=im.height + padding)
        for p, im in images.items()
    ]
    try:
        width, height = layout(items, algorithm)
    except ValueError as exc:
        raise PackingError(str(exc)) from exc
    width = max(width - padding, 0)
    height = max(height - padding, 0)

    canvas = Image.new("RGBA", (width, height), (0, 0, 0, 0))
    placements: dict[str, Placement] = {}
    for item in items:
        im = images[item.key]
        canvas.paste(im, (item.x, item.y))
        placements[item.key] = Placement(x=item.x, y=item.y, width=im.width, height=im.height)

    buf = io.BytesIO()
    try:
        canvas.save(buf, format="PNG", optimize=True)
    except (OSError, ValueError, SystemError) as exc:
        raise PackingError(f"Cannot encode {width}x{height} sprite sheet: {exc}") from exc

    logger.debug("packed %d image(s) into %dx%d (%s)", len(items), width, height, algorithm)
    return PackResult(image=buf.getvalue(), width=width, height=height, placements=placements)


class SpritePacker:
    """Packs one group at a time off the event loop."""

    def __init__(self, padding: int = DEFAULT_PADDING) -> None:
        self.padding = padding

    async def pack(self, paths: Iterable[str], repeat: RepeatMode) -> PackResult:
        """Pack *paths* with the layout suited to *repeat*.

        Suspends until the worker thread finishes; ``PackingError`` from the
        worker propagates to the caller.
        """
        return await asyncio.to_thread(
            pack_images, list(paths), algorithm_for(repeat), self.padding
        )
