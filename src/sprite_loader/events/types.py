"""Event types emitted while a stylesheet is transformed."""

from dataclasses import dataclass


@dataclass(frozen=True)
class LoaderStarted:
    resource: str


@dataclass(frozen=True)
class LoaderSkipped:
    """The stylesheet has no enable marker and passes through unchanged."""

    resource: str


@dataclass(frozen=True)
class GroupsFormed:
    resource: str
    count: int


@dataclass(frozen=True)
class GroupPacked:
    ratio: int
    repeat: str
    images: int
    width: int
    height: int


@dataclass(frozen=True)
class SpriteEmitted:
    url: str
    size_bytes: int


@dataclass(frozen=True)
class GroupRewritten:
    url: str
    selectors: tuple[str, ...]


@dataclass(frozen=True)
class LoaderCompleted:
    resource: str
    sprites: int


@dataclass(frozen=True)
class LoaderFailed:
    resource: str
    error: str
