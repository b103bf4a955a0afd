"""Sprite detection, grouping and stylesheet rewriting."""

from sprite_loader.sprites.eligibility import is_eligible, pixel_ratio
from sprite_loader.sprites.grouping import group_references
from sprite_loader.sprites.rewrite import rewrite_group
from sprite_loader.sprites.scanner import detect_repeat_mode, find_background_image

__all__ = [
    "find_background_image",
    "detect_repeat_mode",
    "is_eligible",
    "pixel_ratio",
    "group_references",
    "rewrite_group",
]
