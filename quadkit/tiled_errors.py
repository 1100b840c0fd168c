"""Errors raised while loading Tiled maps."""

from __future__ import annotations


class TiledError(Exception):
    """Base class for all map loading errors."""


class JsonError(TiledError):
    """The map or tileset JSON could not be parsed."""

    def __init__(self, msg: str, line: int, col: int) -> None:
        self.msg = msg
        self.line = line
        self.col = col
        super().__init__(f'DeJsonErr {{ msg: "{msg}", line: {line}, col: {col} }}')


class NonUniqueLayerName(TiledError):
    """Two layers share a name."""

    def __init__(self, layer: str) -> None:
        self.layer = layer
        super().__init__(
            "Layer name should be unique to load tiled level, "
            f"non-unique layer name: {layer}"
        )


class TextureNotFound(TiledError):
    """A tileset or image layer refers to a texture that was not supplied."""

    def __init__(self, texture: str) -> None:
        self.texture = texture
        super().__init__(f'TextureNotFound {{ texture: "{texture}" }}')


class LayerTypeNotFound(TiledError):
    """A layer has a type that is not supported."""

    def __init__(self, layer_type: str) -> None:
        self.layer_type = layer_type
        super().__init__(f"{layer_type} type layer not found.")