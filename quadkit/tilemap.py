"""Tiled maps resolved into named layers, tiles and tilesets ready for drawing."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any, Optional, Union

from quadkit.primitives import Rect
from quadkit.tiled_errors import LayerTypeNotFound, NonUniqueLayerName, TextureNotFound
from quadkit.tiled_format import RawLayer, RawMap, Tileset, parse_map, parse_tileset

_U32_MAX = 2**32 - 1

Pairs = Union[Mapping[str, Any], Iterable[tuple[str, Any]]]


def _to_u32(value: float) -> int:
    """Convert a float to an unsigned 32-bit integer, truncating and saturating."""
    if math.isnan(value):
        return 0
    if value <= 0:
        return 0
    if value >= _U32_MAX:
        return _U32_MAX
    return int(value)


def _div_to_u32(numerator: float, denominator: float) -> int:
    if denominator == 0:
        if numerator == 0:
            return 0
        return _U32_MAX if numerator > 0 else 0
    return _to_u32(numerator / denominator)


def _find(pairs: Pairs, name: str) -> Optional[Any]:
    """Return the value of the first pair whose name matches, or None."""
    items = pairs.items() if isinstance(pairs, Mapping) else pairs
    for key, value in items:
        if key == name:
            return value
    return None


@dataclass
class MapObject:
    """An object placed on an object layer, in world and tile coordinates."""

    gid: Optional[int]
    world_x: float
    world_y: float
    world_w: float
    world_h: float
    tile_x: int
    tile_y: int
    tile_w: int
    tile_h: int
    name: str
    properties: dict[str, str] = field(default_factory=dict)


@dataclass
class Tile:
    """A tile placed on a layer.

    ``id`` is the index inside ``tileset``; ``attrs`` is the tile's type
    from Tiled, or an empty string.
    """

    id: int
    tileset: str
    attrs: str


@dataclass
class Layer:
    """A resolved layer: tiles and objects, or an image with its offset."""

    objects: list[MapObject] = field(default_factory=list)
    width: int = 0
    height: int = 0
    data: list[Optional[Tile]] = field(default_factory=list)
    opacity: float = 0.0
    image: Any = None
    offsetx: Optional[float] = None
    offsety: Optional[float] = None


@dataclass
class TileSet:
    """Texture and grid geometry of one tileset."""

    texture: Any
    tilewidth: int
    tileheight: int
    columns: int
    spacing: int
    margin: int

    def sprite_rect(self, ix: int) -> Rect:
        """Texture rectangle of tile ``ix``, shrunk slightly to avoid bleeding."""
        sw = float(self.tilewidth)
        sh = float(self.tileheight)
        sx = (ix % self.columns) * (sw + self.spacing) + self.margin
        sy = (ix // self.columns) * (sh + self.spacing) + self.margin
        return Rect(sx + 1.1, sy + 1.1, sw - 2.2, sh - 2.2)


def _iter_tiles(layer: Layer, rect: Rect) -> Iterator[tuple[int, int, Optional[Tile]]]:
    x_start = _to_u32(rect.x)
    y_start = _to_u32(rect.y)
    x_end = x_start + _to_u32(rect.w)
    y_end = y_start + _to_u32(rect.h)

    x, y = x_start, y_start
    while True:
        if x + 1 >= x_end:
            next_x, next_y = x_start, y + 1
        else:
            next_x, next_y = x + 1, y
        if next_y >= y_end:
            return
        yield x, y, layer.data[y * layer.width + x]
        x, y = next_x, next_y


@dataclass
class Map:
    """A loaded map: layers and tilesets by name, plus the parsed JSON as is."""

    layers: dict[str, Layer]
    tilesets: dict[str, TileSet]
    raw_tiled_map: RawMap

    def _layer(self, layer: str) -> Layer:
        try:
            return self.layers[layer]
        except KeyError:
            raise KeyError(f"No such layer: {layer}") from None

    def contains_layer(self, layer: str) -> bool:
        return layer in self.layers

    def tiles(
        self, layer: str, rect: Optional[Rect] = None
    ) -> Iterator[tuple[int, int, Optional[Tile]]]:
        """Iterate ``(x, y, tile)`` over ``rect`` (the whole map by default), row by row."""
        target = self._layer(layer)
        if rect is None:
            rect = Rect(
                0.0,
                0.0,
                float(self.raw_tiled_map.width),
                float(self.raw_tiled_map.height),
            )
        return _iter_tiles(target, rect)

    def get_tile(self, layer: str, x: int, y: int) -> Optional[Tile]:
        """Tile at ``(x, y)``, or None when empty or outside the layer."""
        target = self._layer(layer)
        if x >= target.width or y >= target.height:
            return None
        return target.data[y * target.width + x]


def _resolve_tileset(tileset: Tileset, external_tilesets: Pairs) -> Tileset:
    if not tileset.source:
        return tileset
    tileset_data = _find(external_tilesets, tileset.source)
    if tileset_data is None:
        raise KeyError(f"external tileset not found: {tileset.source}")
    resolved = parse_tileset(tileset_data)
    resolved.firstgid = tileset.firstgid
    return resolved


def _convert_objects(raw: RawLayer, tile_width: float, tile_height: float) -> list[MapObject]:
    return [
        MapObject(
            gid=obj.gid,
            world_x=obj.x,
            world_y=obj.y,
            world_w=obj.width,
            world_h=obj.height,
            tile_x=_div_to_u32(obj.x, tile_width),
            tile_y=_div_to_u32(obj.y, tile_height),
            tile_w=_div_to_u32(obj.width, tile_width),
            tile_h=_div_to_u32(obj.height, tile_height),
            name=obj.name,
            properties={prop.name: prop.value for prop in obj.properties},
        )
        for obj in raw.objects
    ]


def _resolve_tile(gid: int, tilesets: list[Tileset]) -> Optional[Tile]:
    for tileset in tilesets:
        if tileset.firstgid <= gid < tileset.firstgid + tileset.tilecount:
            local_id = gid - tileset.firstgid
            attrs = next(
                (tile.ty for tile in tileset.tiles if tile.id == local_id), None
            )
            return Tile(id=local_id, tileset=tileset.name, attrs=attrs or "")
    return None


def load_map(data: str, textures: Pairs, external_tilesets: Pairs = ()) -> Map:
    """Load a Tiled JSON map.

    ``textures`` maps image names used in the JSON to texture objects;
    ``external_tilesets`` maps tileset source names to their JSON text.
    Both may be mappings or sequences of ``(name, value)`` pairs.
    """
    raw_map = parse_map(data)

    tilesets: dict[str, TileSet] = {}
    map_tilesets: list[Tileset] = []

    for entry in raw_map.tilesets:
        tileset = _resolve_tileset(entry, external_tilesets)
        texture = _find(textures, tileset.image)
        if texture is None:
            raise TextureNotFound(tileset.image)
        tilesets[tileset.name] = TileSet(
            texture=texture,
            columns=tileset.columns,
            margin=tileset.margin,
            spacing=tileset.spacing,
            tilewidth=tileset.tilewidth,
            tileheight=tileset.tileheight,
        )
        map_tilesets.append(tileset)

    layers: dict[str, Layer] = {}
    tile_width = float(raw_map.tilewidth)
    tile_height = float(raw_map.tileheight)

    for raw in raw_map.layers:
        if raw.name in layers:
            raise NonUniqueLayerName(raw.name)

        if raw.ty in ("tilelayer", "objectgroup"):
            layers[raw.name] = Layer(
                objects=_convert_objects(raw, tile_width, tile_height),
                width=raw.width,
                height=raw.height,
                data=[_resolve_tile(gid, map_tilesets) for gid in raw.data],
                opacity=raw.opacity,
            )
        elif raw.ty == "imagelayer":
            if raw.image is None:
                raise ValueError(f"image layer {raw.name!r} has no image")
            if raw.image == "":
                continue
            texture = _find(textures, raw.image)
            if texture is None:
                raise TextureNotFound(raw.image)
            layers[raw.name] = Layer(
                image=texture,
                opacity=raw.opacity,
                offsetx=float(raw.offsetx) if raw.offsetx is not None else 0.0,
                offsety=float(raw.offsety) if raw.offsety is not None else 0.0,
            )
        else:
            raise LayerTypeNotFound(raw.ty)

    return Map(layers=layers, tilesets=tilesets, raw_tiled_map=raw_map)