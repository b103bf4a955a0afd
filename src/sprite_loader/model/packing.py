"""Packing results: where each image landed in a composite."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Placement:
    """Position and size of one source image inside the composite, in pixels."""

    x: int
    y: int
    width: int
    height: int


@dataclass
class PackResult:
    """A composed sprite sheet.

    ``placements`` is keyed by the resolved absolute path of each source
    image.  ``width``/``height`` are the composite's dimensions.
    """

    image: bytes
    width: int
    height: int
    placements: dict[str, Placement] = field(default_factory=dict)
