"""sprite-loader: pack CSS background images into sprite sheets at build time."""

__version__ = "0.1.0"
