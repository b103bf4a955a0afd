"""Stylesheet model: Stylesheet, StyleRule, Declaration, Comment and AtRule.

Every rule, comment and declaration carries an integer ``id`` that is unique
within its stylesheet.  Ids are assigned when the stylesheet is built, so code
that finds a declaration during one pass can locate it again later by id even
if the surrounding node lists have been reordered.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union


@dataclass
class Declaration:
    """A single ``property: value`` pair inside a rule."""

    property: str
    value: str
    id: int = 0


@dataclass
class Comment:
    """A ``/* ... */`` comment; ``text`` is everything between the delimiters."""

    text: str
    id: int = 0


@dataclass
class StyleRule:
    """A selector list with its ordered declarations (and inline comments)."""

    selectors: list[str]
    declarations: list[Union[Declaration, Comment]] = field(default_factory=list)
    id: int = 0

    def iter_declarations(self) -> Iterator[Declaration]:
        """Yield declarations in source order, skipping comments."""
        for item in self.declarations:
            if isinstance(item, Declaration):
                yield item

    def has_property(self, name: str) -> bool:
        """Return True if any declaration sets *name* (case-insensitive)."""
        name = name.lower()
        return any(d.property.lower() == name for d in self.iter_declarations())

    def find_declaration(self, declaration_id: int) -> Declaration | None:
        for decl in self.iter_declarations():
            if decl.id == declaration_id:
                return decl
        return None

    def replace_declaration(self, declaration_id: int, declaration: Declaration) -> None:
        """Swap the declaration with *declaration_id* for *declaration* in place.

        The replacement keeps the original position in the list.  Raises
        ``KeyError`` if no declaration has that id.
        """
        for index, item in enumerate(self.declarations):
            if isinstance(item, Declaration) and item.id == declaration_id:
                self.declarations[index] = declaration
                return
        raise KeyError(f"No declaration with id {declaration_id} in rule {self.id}")


@dataclass
class AtRule:
    """An ``@``-rule kept verbatim.

    ``block`` holds the raw text between the outer braces, or ``None`` for
    statement at-rules such as ``@import url(a.css);``.
    """

    name: str
    prelude: str = ""
    block: str | None = None
    id: int = 0


Node = Union[StyleRule, Comment, AtRule]


@dataclass
class Stylesheet:
    """The top-level sequence of rules, comments and at-rules."""

    nodes: list[Node] = field(default_factory=list)
    _last_id: int = field(default=0, repr=False, compare=False)

    def __post_init__(self) -> None:
        self._assign_ids(self.nodes)

    def new_id(self) -> int:
        """Allocate a fresh id, unique within this stylesheet."""
        self._last_id += 1
        return self._last_id

    def rules(self) -> list[StyleRule]:
        return [n for n in self.nodes if isinstance(n, StyleRule)]

    def comments(self) -> list[Comment]:
        return [n for n in self.nodes if isinstance(n, Comment)]

    def find_rule(self, rule_id: int) -> StyleRule | None:
        for rule in self.rules():
            if rule.id == rule_id:
                return rule
        return None

    def prepend(self, nodes: list[Node]) -> None:
        """Insert *nodes* before the existing nodes, keeping their order."""
        self._assign_ids(nodes)
        self.nodes = list(nodes) + self.nodes

    def _assign_ids(self, nodes: list[Node]) -> None:
        items: list[Union[Node, Declaration]] = []
        for node in nodes:
            items.append(node)
            if isinstance(node, StyleRule):
                items.extend(node.declarations)
        # Explicit ids win; fresh ones are allocated above the highest seen.
        self._last_id = max([self._last_id] + [item.id for item in items])
        for item in items:
            if not item.id:
                item.id = self.new_id()
