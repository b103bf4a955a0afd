"""Persist composite images under content-hashed names."""

from __future__ import annotations

import asyncio
import hashlib
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from sprite_loader.config import DEFAULT_FILENAME_TEMPLATE, LoaderConfig
from sprite_loader.errors import EmissionError

__all__ = [
    "interpolate_name",
    "FileSink",
    "DirectorySink",
    "MemorySink",
    "SpriteEmitter",
]

_HASH_RE = re.compile(r"\[hash(?::(\d+))?\]")


def interpolate_name(template: str, content: bytes, hash_type: str = "md5") -> str:
    """Replace ``[hash]`` / ``[hash:N]`` in *template* with the content digest."""
    try:
        digest = hashlib.new(hash_type, content).hexdigest()
    except ValueError:
        raise ValueError(f"Unsupported hash type: {hash_type!r}") from None
    return _HASH_RE.sub(lambda m: digest[: int(m.group(1))] if m.group(1) else digest, template)


class FileSink(Protocol):
    """Destination for emitted files; *path* is relative to the build output."""

    def write(self, path: str, content: bytes) -> None: ...


class DirectorySink:
    """Writes emitted files below a root directory."""

    def __init__(self, root: Path | str) -> None:
        self.root = Path(root)

    def write(self, path: str, content: bytes) -> None:
        target = self.root / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)


@dataclass
class MemorySink:
    """Keeps emitted files in a dict -- for tests and dry runs."""

    files: dict[str, bytes] = field(default_factory=dict)

    def write(self, path: str, content: bytes) -> None:
        self.files[path] = content


class SpriteEmitter:
    """Names, persists and returns the public URL of a composite image."""

    def __init__(
        self,
        sink: FileSink,
        *,
        output_path: str = "",
        url_prefix: str = "",
        filename_template: str = DEFAULT_FILENAME_TEMPLATE,
        hash_type: str = "md5",
    ) -> None:
        self.sink = sink
        self.output_path = output_path
        self.url_prefix = url_prefix
        self.filename_template = filename_template
        self.hash_type = hash_type

    @classmethod
    def from_config(cls, config: LoaderConfig, sink: FileSink) -> SpriteEmitter:
        return cls(
            sink,
            output_path=config.output_path,
            url_prefix=config.image_url_prefix,
            filename_template=config.filename_template,
            hash_type=config.hash_type,
        )

    async def emit(self, content: bytes) -> str:
        """Write *content* and return the URL the stylesheet should use.

        The URL is only returned once the write has completed.
        """
        filename = interpolate_name(self.filename_template, content, self.hash_type)
        target = self.output_path + filename
        try:
            await asyncio.to_thread(self.sink.write, target, content)
        except OSError as exc:
            raise EmissionError(f"Cannot write sprite {target}: {exc}", path=target) from exc
        return self.url_prefix + filename
