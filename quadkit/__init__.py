"""Immediate-mode UI building blocks (layout, text editing, meshes, styles) and a Tiled JSON map loader."""

__version__ = "0.1.0"