"""Layout algorithms: assign an (x, y) origin to every item of a sprite sheet.

Item sizes already include padding; the algorithms only stack boxes.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass

from sprite_loader.model.background import RepeatMode

__all__ = [
    "LayoutItem",
    "ALGORITHMS",
    "DEFAULT_ALGORITHM",
    "algorithm_for",
    "layout",
]


@dataclass
class LayoutItem:
    key: str
    width: int
    height: int
    x: int = 0
    y: int = 0


class TopDownAlgorithm:
    """One column, shortest item first.  Keeps every row free for repeat-x."""

    def sort(self, items: list[LayoutItem]) -> list[LayoutItem]:
        return sorted(items, key=lambda i: i.height)

    def process(self, items: list[LayoutItem]) -> None:
        y = 0
        for item in items:
            item.x = 0
            item.y = y
            y += item.height


class LeftRightAlgorithm:
    """One row, narrowest item first.  Keeps every column free for repeat-y."""

    def sort(self, items: list[LayoutItem]) -> list[LayoutItem]:
        return sorted(items, key=lambda i: i.width)

    def process(self, items: list[LayoutItem]) -> None:
        x = 0
        for item in items:
            item.y = 0
            item.x = x
            x += item.width


@dataclass(eq=False)
class BinaryTreeNode:
    """A free or used rectangle of the canvas.

    A used node holds one item in its top-left corner; the space left over
    is split into a ``right`` and a ``down`` child.
    """

    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    used: bool = False
    right: BinaryTreeNode | None = None
    down: BinaryTreeNode | None = None

    def find(self, width: int, height: int) -> BinaryTreeNode | None:
        """Return a free node that fits (width, height), or None."""
        if self.used:
            return (self.right and self.right.find(width, height)) or (
                self.down and self.down.find(width, height)
            )
        if self.width >= width and self.height >= height:
            return self
        return None

    def split(self, width: int, height: int) -> BinaryTreeNode:
        """Occupy the top-left (width, height) of this node."""
        self.used = True
        self.down = BinaryTreeNode(
            x=self.x, y=self.y + height, width=self.width, height=self.height - height
        )
        self.right = BinaryTreeNode(
            x=self.x + width, y=self.y, width=self.width - width, height=height
        )
        return self

    def grow(self, width: int, height: int) -> BinaryTreeNode | None:
        """Grow the canvas towards whichever side keeps it closest to square."""
        can_grow_down = width <= self.width
        can_grow_right = height <= self.height

        if can_grow_right and self.height >= self.width + width:
            return self._grow_right(width, height)
        if can_grow_down and self.width >= self.height + height:
            return self._grow_down(width, height)
        if can_grow_right:
            return self._grow_right(width, height)
        if can_grow_down:
            return self._grow_down(width, height)
        return None

    def _grow_right(self, width: int, height: int) -> BinaryTreeNode | None:
        old = copy.copy(self)
        self.used = True
        self.x = self.y = 0
        self.width += width
        self.down = old
        self.right = BinaryTreeNode(x=old.width, y=0, width=width, height=self.height)
        node = self.find(width, height)
        return node.split(width, height) if node else None

    def _grow_down(self, width: int, height: int) -> BinaryTreeNode | None:
        old = copy.copy(self)
        self.used = True
        self.x = self.y = 0
        self.height += height
        self.right = old
        self.down = BinaryTreeNode(x=0, y=old.height, width=self.width, height=height)
        node = self.find(width, height)
        return node.split(width, height) if node else None


class BinaryTreePackingAlgorithm:
    """Growing binary-tree packer for images that do not repeat."""

    def sort(self, items: list[LayoutItem]) -> list[LayoutItem]:
        return sorted(
            items,
            key=lambda i: (max(i.width, i.height), min(i.width, i.height), i.height),
            reverse=True,
        )

    def process(self, items: list[LayoutItem]) -> None:
        if not items:
            return
        root = BinaryTreeNode(width=items[0].width, height=items[0].height)
        for item in items:
            node = root.find(item.width, item.height)
            if node:
                node = node.split(item.width, item.height)
            else:
                node = root.grow(item.width, item.height)
            if node is None:
                raise ValueError(f"Cannot place {item.key} ({item.width}x{item.height})")
            item.x = node.x
            item.y = node.y


ALGORITHMS = {
    "top-down": TopDownAlgorithm,
    "left-right": LeftRightAlgorithm,
    "binary-tree": BinaryTreePackingAlgorithm,
}

DEFAULT_ALGORITHM = "binary-tree"

_REPEAT_ALGORITHMS = {
    RepeatMode.REPEAT_X: "top-down",
    RepeatMode.REPEAT_Y: "left-right",
}


def algorithm_for(repeat: RepeatMode) -> str:
    """Pick the layout that keeps a repeating axis clear of neighbours."""
    return _REPEAT_ALGORITHMS.get(repeat, DEFAULT_ALGORITHM)


def layout(items: list[LayoutItem], algorithm: str = DEFAULT_ALGORITHM) -> tuple[int, int]:
    """Place *items* in place and return the (width, height) they span."""
    try:
        algo = ALGORITHMS[algorithm]()
    except KeyError:
        raise ValueError(f"Unknown layout algorithm: {algorithm!r}") from None
    algo.process(algo.sort(items))
    width = max((i.x + i.width for i in items), default=0)
    height = max((i.y + i.height for i in items), default=0)
    return width, height
