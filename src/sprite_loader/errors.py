"""Build failure types.  Any of these aborts the whole stylesheet transform."""

from __future__ import annotations


class SpriteLoaderError(Exception):
    """Base class for failures while building sprites."""


class PackingError(SpriteLoaderError):
    """Raised when source images cannot be loaded or composed."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)


class EmissionError(SpriteLoaderError):
    """Raised when a composite image cannot be persisted."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(message)
