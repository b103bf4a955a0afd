"""Render a Stylesheet model back to CSS text."""

from __future__ import annotations

from sprite_loader.css.model import AtRule, Comment, Declaration, Node, Stylesheet

__all__ = ["stringify"]


def _pretty_node(node: Node, indent: str) -> str:
    if isinstance(node, Comment):
        return f"/*{node.text}*/"
    if isinstance(node, AtRule):
        head = f"@{node.name} {node.prelude}" if node.prelude else f"@{node.name}"
        if node.block is None:
            return f"{head};"
        return f"{head} {{{node.block}}}"
    lines = [",\n".join(node.selectors) + " {"]
    for item in node.declarations:
        if isinstance(item, Declaration):
            lines.append(f"{indent}{item.property}: {item.value};")
        else:
            lines.append(f"{indent}/*{item.text}*/")
    lines.append("}")
    return "\n".join(lines)


def _compressed_node(node: Node) -> str:
    if isinstance(node, Comment):
        return ""
    if isinstance(node, AtRule):
        head = f"@{node.name} {node.prelude}" if node.prelude else f"@{node.name}"
        if node.block is None:
            return f"{head};"
        return f"{head}{{{node.block.strip()}}}"
    body = ";".join(f"{d.property}:{d.value}" for d in node.iter_declarations())
    return ",".join(node.selectors) + "{" + body + "}"


def stringify(stylesheet: Stylesheet, *, compress: bool = False, indent: str = "  ") -> str:
    """Serialize *stylesheet* to CSS text.

    The default output puts one selector and one declaration per line with
    a blank line between top-level nodes.  ``compress=True`` drops comments
    and insignificant whitespace.  At-rule blocks are emitted verbatim.
    """
    if compress:
        return "".join(_compressed_node(n) for n in stylesheet.nodes)
    return "\n\n".join(_pretty_node(n, indent) for n in stylesheet.nodes)

