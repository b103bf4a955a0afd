"""Packing engine: layout algorithms and Pillow composition."""

from sprite_loader.packing.layout import ALGORITHMS, algorithm_for, layout
from sprite_loader.packing.packer import DEFAULT_PADDING, SpritePacker, pack_images

__all__ = [
    "ALGORITHMS",
    "algorithm_for",
    "layout",
    "DEFAULT_PADDING",
    "pack_images",
    "SpritePacker",
]
