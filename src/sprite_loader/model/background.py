"""Background image references and the groups they are packed in."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class PixelRatio(Enum):
    """Density variant of an image, taken from its file name."""

    X1 = 1
    X2 = 2


class RepeatMode(str, Enum):
    """How a background tiles; images are only packed with like repeats."""

    REPEAT_X = "repeat-x"
    REPEAT_Y = "repeat-y"
    NO_REPEAT = "no-repeat"


@dataclass(frozen=True)
class BackgroundImageRef:
    """A local image URL found in one rule's background declaration.

    The rule and declaration are referenced by id so the rewrite step can
    look them up again in the stylesheet.
    """

    url: str
    rule_id: int
    declaration_id: int
    selectors: tuple[str, ...] = ()


@dataclass(frozen=True)
class GroupKey:
    ratio: PixelRatio
    repeat: RepeatMode


@dataclass
class Group:
    """All references that will share one composite image."""

    key: GroupKey
    members: list[BackgroundImageRef] = field(default_factory=list)

    @property
    def ratio(self) -> PixelRatio:
        return self.key.ratio

    @property
    def repeat(self) -> RepeatMode:
        return self.key.repeat
