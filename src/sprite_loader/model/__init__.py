"""sprite-loader model layer -- public type re-exports."""

from sprite_loader.model.background import (
    BackgroundImageRef,
    Group,
    GroupKey,
    PixelRatio,
    RepeatMode,
)
from sprite_loader.model.packing import PackResult, Placement

__all__ = [
    # background
    "PixelRatio",
    "RepeatMode",
    "BackgroundImageRef",
    "GroupKey",
    "Group",
    # packing
    "Placement",
    "PackResult",
]
