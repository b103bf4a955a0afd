"""Emission of composite images into the build output."""

from sprite_loader.emission.emitter import (
    DirectorySink,
    FileSink,
    MemorySink,
    SpriteEmitter,
    interpolate_name,
)

__all__ = [
    "interpolate_name",
    "FileSink",
    "DirectorySink",
    "MemorySink",
    "SpriteEmitter",
]
