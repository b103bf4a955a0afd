"""Decide which detected background images may be sprited."""

from __future__ import annotations

from sprite_loader.css.model import StyleRule
from sprite_loader.model.background import BackgroundImageRef, PixelRatio

__all__ = ["is_remote", "is_manually_positioned", "is_eligible", "pixel_ratio"]

# "http" also covers https; "//" is a protocol-relative URL.
_REMOTE_PREFIXES = ("http", "//")

# Retina images are recognised by file name only; the image itself is never
# inspected, so a 2x asset named differently is packed as 1x.
RETINA_SUFFIX = "2x.png"


def is_remote(url: str) -> bool:
    return url.startswith(_REMOTE_PREFIXES)


def is_manually_positioned(rule: StyleRule) -> bool:
    """A rule that already sets background-position is left alone."""
    return rule.has_property("background-position")


def is_eligible(rule: StyleRule, ref: BackgroundImageRef) -> bool:
    return not is_remote(ref.url) and not is_manually_positioned(rule)


def pixel_ratio(url: str) -> PixelRatio:
    return PixelRatio.X2 if url.endswith(RETINA_SUFFIX) else PixelRatio.X1
