"""Event system: bus and event types for the build lifecycle."""

from sprite_loader.events.bus import EventBus
from sprite_loader.events.types import (
    GroupPacked,
    GroupRewritten,
    GroupsFormed,
    LoaderCompleted,
    LoaderFailed,
    LoaderSkipped,
    LoaderStarted,
    SpriteEmitted,
)

__all__ = [
    "EventBus",
    "GroupPacked",
    "GroupRewritten",
    "GroupsFormed",
    "LoaderCompleted",
    "LoaderFailed",
    "LoaderSkipped",
    "LoaderStarted",
    "SpriteEmitted",
]
