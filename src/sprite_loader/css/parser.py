"""Lark Transformer that converts a CSS parse tree into a Stylesheet model."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError, UnexpectedCharacters, UnexpectedToken

from sprite_loader.css.errors import ParseError
from sprite_loader.css.model import AtRule, Comment, Declaration, StyleRule, Stylesheet

__all__ = ["parse_css", "split_selectors"]

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"


def split_selectors(raw: str) -> list[str]:
    """Split a selector list on top-level commas.

    Commas inside quotes, brackets or parentheses (``:not(a, b)``) do not
    split.  Empty entries are dropped.
    """
    selectors: list[str] = []
    depth = 0
    quote = ""
    current: list[str] = []
    for ch in raw:
        if quote:
            if ch == quote:
                quote = ""
        elif ch in "\"'":
            quote = ch
        elif ch in "([":
            depth += 1
        elif ch in ")]":
            depth = max(depth - 1, 0)
        elif ch == "," and depth == 0:
            selectors.append("".join(current).strip())
            current = []
            continue
        current.append(ch)
    selectors.append("".join(current).strip())
    return [s for s in selectors if s]


class _Block:
    """Source span of a balanced ``{ ... }`` block inside an at-rule."""

    def __init__(self, start: int, end: int):
        self.start = start
        self.end = end


class CssTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into Stylesheet nodes.

    The original source is needed to copy at-rule blocks verbatim.
    """

    def __init__(self, source: str):
        super().__init__()
        self._source = source

    def comment(self, items: list[Token]) -> Comment:
        return Comment(text=str(items[0])[2:-2])

    body_comment = comment

    def declaration(self, items: list[Token]) -> Declaration:
        prop = str(items[0]).strip()
        value = str(items[1]).strip() if len(items) > 1 else ""
        return Declaration(property=prop, value=value)

    def rule(self, items: list[object]) -> StyleRule:
        selectors = split_selectors(str(items[0]))
        body = [i for i in items[1:] if isinstance(i, (Declaration, Comment))]
        return StyleRule(selectors=selectors, declarations=body)

    def block(self, items: list[object]) -> _Block:
        # First and last children are the LBRACE / RBRACE tokens.
        return _Block(items[0].start_pos, items[-1].end_pos)  # type: ignore[attr-defined]

    def at_rule(self, items: list[object]) -> AtRule:
        name = str(items[0])[1:]
        prelude = ""
        block: str | None = None
        for item in items[1:]:
            if isinstance(item, Token) and item.type == "PRELUDE":
                prelude = str(item).strip()
            elif isinstance(item, _Block):
                block = self._source[item.start + 1 : item.end - 1]
        return AtRule(name=name, prelude=prelude, block=block)

    def start(self, items: list[object]) -> Stylesheet:
        return Stylesheet(nodes=list(items))  # type: ignore[arg-type]


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        start="start",
    )


def parse_css(source: str) -> Stylesheet:
    """Parse CSS source text into a Stylesheet.

    Raises ``ParseError`` (with line/column when known) for malformed input.
    """
    try:
        tree = _parser().parse(source)
    except UnexpectedCharacters as e:
        raise ParseError(f"Unexpected character {e.char!r}", line=e.line, column=e.column) from e
    except UnexpectedToken as e:
        if e.token.type == "$END":
            raise ParseError("Unexpected end of stylesheet") from e
        raise ParseError(f"Unexpected {str(e.token)!r}", line=e.line, column=e.column) from e
    except LarkError as e:
        raise ParseError(str(e)) from e
    return CssTransformer(source).transform(tree)
