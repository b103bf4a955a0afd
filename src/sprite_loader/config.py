from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from sprite_loader.packing.packer import DEFAULT_PADDING

DEFAULT_FILENAME_TEMPLATE = "sprite.[hash:7].png"

# Loader option spellings accepted by LoaderConfig.from_options.
_OPTION_NAMES = {
    "outputPath": "output_path",
    "cssImagePath": "css_image_path",
    "publicPath": "public_path",
    "name": "name",
    "debug": "debug",
    "padding": "padding",
    "compress": "compress",
    "filenameTemplate": "filename_template",
    "hashType": "hash_type",
}


@dataclass(frozen=True)
class LoaderConfig:
    output_path: str = ""  # prefix for emitted composites, e.g. "img/"
    css_image_path: str = ""  # public URL prefix written into the CSS
    public_path: str = ""  # used when css_image_path is empty
    name: str | None = None  # reserved; not used in composite names
    debug: bool = False
    padding: int = DEFAULT_PADDING
    filename_template: str = DEFAULT_FILENAME_TEMPLATE
    hash_type: str = "md5"
    compress: bool = False

    @property
    def image_url_prefix(self) -> str:
        return self.css_image_path or self.public_path

    @classmethod
    def from_options(cls, options: Mapping[str, Any]) -> LoaderConfig:
        """Build a config from loader-style options (``outputPath`` etc.).

        Snake-case field names are accepted too.  Unknown keys raise
        ``ValueError``.
        """
        kwargs: dict[str, Any] = {}
        fields = set(_OPTION_NAMES.values())
        for key, value in options.items():
            field_name = _OPTION_NAMES.get(key, key)
            if field_name not in fields:
                raise ValueError(f"Unknown sprite-loader option: {key!r}")
            kwargs[field_name] = value
        if "padding" in kwargs:
            kwargs["padding"] = int(kwargs["padding"])
        if "debug" in kwargs:
            kwargs["debug"] = bool(kwargs["debug"])
        if "compress" in kwargs:
            kwargs["compress"] = bool(kwargs["compress"])
        return cls(**kwargs)
