"""Partition eligible background images into independent sprite groups."""

from __future__ import annotations

from sprite_loader.css.model import Stylesheet
from sprite_loader.model.background import Group, GroupKey
from sprite_loader.sprites.eligibility import is_eligible, pixel_ratio
from sprite_loader.sprites.scanner import detect_repeat_mode, find_background_image

__all__ = ["group_references"]


def group_references(stylesheet: Stylesheet) -> list[Group]:
    """Group every eligible top-level rule by (pixel ratio, repeat mode).

    Groups are returned in the order their first member appears; members
    keep source order.  Images that tile along an axis only share a
    composite with images tiling the same way.
    """
    groups: dict[GroupKey, Group] = {}
    for rule in stylesheet.rules():
        ref = find_background_image(rule)
        if ref is None or not is_eligible(rule, ref):
            continue
        key = GroupKey(ratio=pixel_ratio(ref.url), repeat=detect_repeat_mode(rule))
        groups.setdefault(key, Group(key=key)).members.append(ref)
    return [g for g in groups.values() if g.members]
