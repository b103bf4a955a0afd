"""Build engine: the stylesheet transform pipeline."""

from sprite_loader.engine.loader import (
    ENABLE_MARKER,
    SpriteLoader,
    is_enabled,
    transform_stylesheet,
)

__all__ = [
    "ENABLE_MARKER",
    "SpriteLoader",
    "is_enabled",
    "transform_stylesheet",
]
