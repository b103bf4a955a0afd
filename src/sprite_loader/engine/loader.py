"""Build pipeline: parse, gate, group, then pack/emit/rewrite each group."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from sprite_loader.config import LoaderConfig
from sprite_loader.css.model import StyleRule, Stylesheet
from sprite_loader.css.parser import parse_css
from sprite_loader.css.serializer import stringify
from sprite_loader.emission.emitter import FileSink, SpriteEmitter
from sprite_loader.events import types as events
from sprite_loader.events.bus import EventBus
from sprite_loader.packing.packer import SpritePacker
from sprite_loader.sprites.grouping import group_references
from sprite_loader.sprites.rewrite import rewrite_group

__all__ = ["ENABLE_MARKER", "is_enabled", "SpriteLoader", "transform_stylesheet"]

logger = logging.getLogger(__name__)

ENABLE_MARKER = "sprite-loader-enable"
_MARKER_PREFIX = "sprite-loader"


def is_enabled(stylesheet: Stylesheet) -> bool:
    """Return True if the stylesheet opts in with ``/* sprite-loader-enable */``.

    Only the first top-level comment mentioning ``sprite-loader`` counts.
    """
    for comment in stylesheet.comments():
        if _MARKER_PREFIX in comment.text:
            return comment.text.strip() == ENABLE_MARKER
    return False


class SpriteLoader:
    """Transforms one stylesheet at a time.

    Groups are processed one after another; each group's composite is packed,
    written through *sink* and projected onto its rules before the next
    group starts.  Any failure aborts the transform and no CSS is returned.
    """

    def __init__(
        self,
        sink: FileSink,
        config: LoaderConfig | None = None,
        *,
        packer: SpritePacker | None = None,
        event_bus: EventBus | None = None,
    ) -> None:
        self.config = config or LoaderConfig()
        self.packer = packer or SpritePacker(padding=self.config.padding)
        self.emitter = SpriteEmitter.from_config(self.config, sink)
        self.event_bus = event_bus or EventBus()

    async def process(
        self, source: str, context: Path | str, resource: str = "<stylesheet>"
    ) -> str:
        """Return *source* with its eligible background images sprited.

        *context* is the directory relative image URLs are resolved against.
        Stylesheets without the enable marker come back unchanged.
        """
        self.event_bus.emit(events.LoaderStarted(resource=resource))
        try:
            return await self._process(source, Path(context), resource)
        except Exception as exc:
            self.event_bus.emit(events.LoaderFailed(resource=resource, error=str(exc)))
            raise

    async def _process(self, source: str, context: Path, resource: str) -> str:
        stylesheet = parse_css(source)
        if not is_enabled(stylesheet):
            self.event_bus.emit(events.LoaderSkipped(resource=resource))
            return source

        groups = group_references(stylesheet)
        self.event_bus.emit(events.GroupsFormed(resource=resource, count=len(groups)))
        if self.config.debug and groups:
            logger.info("sprite-loader: %s", resource)

        base = os.path.abspath(context)

        def resolve(url: str) -> str:
            return os.path.normpath(os.path.join(base, url))

        composite_rules: list[StyleRule] = []
        # Last-formed group first; prepending keeps that order, so composite
        # rules end up in reverse formation order.
        while groups:
            group = groups.pop()
            result = await self.packer.pack(
                [resolve(ref.url) for ref in group.members], group.repeat
            )
            self.event_bus.emit(
                events.GroupPacked(
                    ratio=group.ratio.value,
                    repeat=group.repeat.value,
                    images=len(result.placements),
                    width=result.width,
                    height=result.height,
                )
            )

            url = await self.emitter.emit(result.image)
            self.event_bus.emit(events.SpriteEmitted(url=url, size_bytes=len(result.image)))

            rule = rewrite_group(stylesheet, group, result, url, resolve)
            if rule is not None:
                composite_rules.append(rule)
                self.event_bus.emit(
                    events.GroupRewritten(url=url, selectors=tuple(rule.selectors))
                )

        stylesheet.prepend(composite_rules)
        self.event_bus.emit(
            events.LoaderCompleted(resource=resource, sprites=len(composite_rules))
        )
        return stringify(stylesheet, compress=self.config.compress)


def transform_stylesheet(
    source: str,
    context: Path | str,
    sink: FileSink,
    config: LoaderConfig | None = None,
    *,
    resource: str = "<stylesheet>",
    event_bus: EventBus | None = None,
) -> str:
    """Synchronous wrapper around ``SpriteLoader.process``."""
    loader = SpriteLoader(sink, config, event_bus=event_bus)
    return asyncio.run(loader.process(source, context, resource))
