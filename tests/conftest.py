"""Shared fixtures: small PNG files written with Pillow."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest
from PIL import Image


@pytest.fixture
def make_png(tmp_path: Path) -> Callable[..., Path]:
    """Return a factory that writes a solid-colour PNG below ``tmp_path``."""

    def _make(
        name: str,
        size: tuple[int, int] = (10, 10),
        color: tuple[int, int, int, int] = (255, 0, 0, 255),
    ) -> Path:
        path = tmp_path / name
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGBA", size, color).save(path, format="PNG")
        return path

    return _make
