"""Find the background image a rule uses and how it repeats.

Both scans walk declarations from last to first, because a later
declaration of the same property wins in the cascade.
"""

from __future__ import annotations

import re

from sprite_loader.css.model import Declaration, StyleRule
from sprite_loader.model.background import BackgroundImageRef, RepeatMode

__all__ = ["IGNORE_MARKER", "find_background_image", "detect_repeat_mode"]

IGNORE_MARKER = "#spriteignore"

_IMAGE_PROPERTIES = ("background", "background-image")
_REPEAT_PROPERTIES = ("background", "background-repeat")

# url(<path>.png|jpg|jpeg|gif<tail>) -- optionally quoted; the tail holds any
# query string or fragment, which is where the ignore marker usually sits.
_URL_RE = re.compile(
    r"""
    url\(\s*
    (?P<quote>['"]?)
    (?P<path>[^'"()]+?\.(?:png|jpe?g|gif))
    \s*(?P=quote)
    (?P<tail>[^)]*)
    \)
    """,
    re.IGNORECASE | re.VERBOSE,
)
_IGNORE_RE = re.compile(re.escape(IGNORE_MARKER), re.IGNORECASE)
_REPEAT_RE = re.compile(r"repeat-(x|y)")


def _reversed_declarations(rule: StyleRule, properties: tuple[str, ...]) -> list[Declaration]:
    return [d for d in reversed(list(rule.iter_declarations())) if d.property.lower() in properties]


def find_background_image(rule: StyleRule) -> BackgroundImageRef | None:
    """Return the image reference the rule's background resolves to, if any.

    The last ``background``/``background-image`` declaration holding a
    ``url(...)`` to a png/jpg/jpeg/gif wins.  When that declaration carries
    the ignore marker after the path, or layers more than one image, the
    rule is left alone and ``None`` is returned without looking at earlier
    declarations.
    """
    for decl in _reversed_declarations(rule, _IMAGE_PROPERTIES):
        urls = decl.value.lower().count("url(")
        if urls > 1:
            return None
        if urls == 0:
            continue
        match = _URL_RE.search(decl.value)
        if match is None:
            continue
        trailing = match.group("tail") + decl.value[match.end():]
        if _IGNORE_RE.search(trailing):
            return None
        return BackgroundImageRef(
            url=match.group("path").strip(),
            rule_id=rule.id,
            declaration_id=decl.id,
            selectors=tuple(rule.selectors),
        )
    return None


def detect_repeat_mode(rule: StyleRule) -> RepeatMode:
    """Return the rule's repeat axis; ``no-repeat`` unless one is set."""
    for decl in _reversed_declarations(rule, _REPEAT_PROPERTIES):
        match = _REPEAT_RE.search(decl.value)
        if match:
            return RepeatMode(f"repeat-{match.group(1)}")
    return RepeatMode.NO_REPEAT
