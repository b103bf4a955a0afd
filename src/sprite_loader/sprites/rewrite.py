"""Project a packed sprite sheet back onto the rules that use it."""

from __future__ import annotations

import logging
from typing import Callable

from sprite_loader.css.model import Declaration, StyleRule, Stylesheet
from sprite_loader.model.background import Group
from sprite_loader.model.packing import PackResult

__all__ = ["SIZE_UNIT", "HIDDEN_POSITION", "to_unit", "rewrite_group"]

logger = logging.getLogger(__name__)

# Relative unit used for offsets and sizes; consumers scale it themselves.
SIZE_UNIT = "pr"

# The shared composite rule parks the image off-screen; each rewritten rule
# later in the sheet supplies the real position.
HIDDEN_POSITION = "-9999px -9999px"


def to_unit(num: int) -> str:
    return f"{num}{SIZE_UNIT}" if num else "0"


def rewrite_group(
    stylesheet: Stylesheet,
    group: Group,
    result: PackResult,
    url: str,
    resolve: Callable[[str], str],
) -> StyleRule | None:
    """Point every placed member of *group* at the composite at *url*.

    Each originating rule gains a ``background-size`` declaration and its
    image declaration becomes a ``background-position`` offset.  Members
    without a placement are skipped.  Returns the rule that sets the
    composite as background for all rewritten selectors, or ``None`` when
    nothing was rewritten.  The caller decides where that rule goes; it must
    precede the rewritten rules for their positions to take effect.
    """
    size = f"{to_unit(result.width)} {to_unit(result.height)}"
    selectors: list[str] = []
    for ref in group.members:
        placement = result.placements.get(resolve(ref.url))
        if placement is None:
            logger.warning("no placement for %s, rule %d left as is", ref.url, ref.rule_id)
            continue
        rule = stylesheet.find_rule(ref.rule_id)
        if rule is None:
            raise KeyError(f"No rule with id {ref.rule_id} in stylesheet")

        selectors.extend(rule.selectors)
        rule.declarations.append(
            Declaration(property="background-size", value=size, id=stylesheet.new_id())
        )
        rule.replace_declaration(
            ref.declaration_id,
            Declaration(
                property="background-position",
                value=f"{to_unit(-placement.x)} {to_unit(-placement.y)}",
                id=ref.declaration_id,
            ),
        )

    if not selectors:
        return None
    return StyleRule(
        selectors=selectors,
        declarations=[
            Declaration(property="background", value=f"url({url}) no-repeat {HIDDEN_POSITION}")
        ],
    )
