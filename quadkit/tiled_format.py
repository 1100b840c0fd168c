"""Data model of the Tiled JSON map and tileset formats, with strict parsing."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, TypeVar

from quadkit.tiled_errors import JsonError

T = TypeVar("T")
_Converter = Callable[[Any, str], T]


def _error(message: str) -> JsonError:
    return JsonError(message, 0, 0)


def _int(value: Any, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise _error(f"expected an integer for '{name}'")
    return value


def _uint(value: Any, name: str) -> int:
    value = _int(value, name)
    if value < 0:
        raise _error(f"expected a non-negative integer for '{name}'")
    return value


def _float(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise _error(f"expected a number for '{name}'")
    return float(value)


def _str(value: Any, name: str) -> str:
    if not isinstance(value, str):
        raise _error(f"expected a string for '{name}'")
    return value


def _bool(value: Any, name: str) -> bool:
    if not isinstance(value, bool):
        raise _error(f"expected a boolean for '{name}'")
    return value


def _dict(value: Any, name: str) -> dict:
    if not isinstance(value, dict):
        raise _error(f"expected an object for '{name}'")
    return value


def _str_map(value: Any, name: str) -> dict[str, str]:
    return {key: _str(item, key) for key, item in _dict(value, name).items()}


def _list_of(convert: _Converter) -> _Converter:
    def convert_list(value: Any, name: str) -> list:
        if not isinstance(value, list):
            raise _error(f"expected an array for '{name}'")
        return [convert(item, name) for item in value]

    return convert_list


def _required(data: dict, key: str, convert: _Converter) -> Any:
    if key not in data:
        raise _error(f"Key not found {key}")
    return convert(data[key], key)


def _default(data: dict, key: str, convert: _Converter, factory: Callable[[], Any]) -> Any:
    if key not in data:
        return factory()
    return convert(data[key], key)


def _optional(data: dict, key: str, convert: _Converter) -> Any:
    value = data.get(key)
    return None if value is None else convert(value, key)


@dataclass
class Grid:
    width: int = 0
    height: int = 0


@dataclass
class Property:
    name: str = ""
    value: str = ""
    ty: str = ""


@dataclass
class Frame:
    duration: int = 0
    tileid: int = 0


@dataclass
class TileDef:
    """Per-tile data inside a tileset."""

    animation: list[Frame] = field(default_factory=list)
    id: int = 0
    image: Optional[str] = None
    imagewidth: int = 0
    imageheight: int = 0
    objectgroup: Optional[dict] = None
    properties: list[Property] = field(default_factory=list)
    terrain: list[int] = field(default_factory=list)
    ty: Optional[str] = None


@dataclass
class Tileoffset:
    x: int = 0
    y: int = 0


@dataclass
class Terrain:
    name: str = ""
    tile: int = 0


def _grid(value: Any, name: str) -> Grid:
    data = _dict(value, name)
    return Grid(width=_required(data, "width", _int), height=_required(data, "height", _int))


def _property(value: Any, name: str) -> Property:
    data = _dict(value, name)
    return Property(
        name=_required(data, "name", _str),
        value=_required(data, "value", _str),
        ty=_required(data, "type", _str),
    )


def _lenient_property(value: Any, name: str) -> Property:
    data = _dict(value, name)
    return Property(
        name=_default(data, "name", _str, str),
        value=_default(data, "value", _str, str),
        ty=_default(data, "type", _str, str),
    )


def _frame(value: Any, name: str) -> Frame:
    data = _dict(value, name)
    return Frame(
        duration=_required(data, "duration", _int),
        tileid=_required(data, "tileid", _int),
    )


def _tileoffset(value: Any, name: str) -> Tileoffset:
    data = _dict(value, name)
    return Tileoffset(x=_required(data, "x", _int), y=_required(data, "y", _int))


def _terrain(value: Any, name: str) -> Terrain:
    data = _dict(value, name)
    return Terrain(name=_required(data, "name", _str), tile=_required(data, "tile", _int))


def _tile_def(value: Any, name: str) -> TileDef:
    data = _dict(value, name)
    return TileDef(
        animation=_default(data, "animation", _list_of(_frame), list),
        id=_default(data, "id", _uint, int),
        image=_optional(data, "image", _str),
        imagewidth=_default(data, "imagewidth", _int, int),
        imageheight=_default(data, "imageheight", _int, int),
        objectgroup=_optional(data, "objectgroup", _dict),
        properties=_default(data, "properties", _list_of(_property), list),
        terrain=_default(data, "terrain", _list_of(_int), list),
        ty=_optional(data, "type", _str),
    )


@dataclass
class Tileset:
    """A tileset, embedded in a map or loaded from an external file."""

    columns: int = 0
    firstgid: int = 0
    grid: Optional[Grid] = None
    image: str = ""
    imagewidth: int = 0
    imageheight: int = 0
    margin: int = 0
    name: str = ""
    properties: list[Property] = field(default_factory=list)
    spacing: int = 0
    terrains: Optional[list[Terrain]] = None
    tilecount: int = 0
    tileheight: int = 0
    tileoffset: Optional[Tileoffset] = None
    tiles: list[TileDef] = field(default_factory=list)
    tilewidth: int = 0
    transparentcolor: Optional[str] = None
    source: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "Tileset":
        data = _dict(data, "tileset")
        return cls(
            columns=_default(data, "columns", _int, int),
            firstgid=_default(data, "firstgid", _uint, int),
            grid=_optional(data, "grid", _grid),
            image=_default(data, "image", _str, str),
            imagewidth=_default(data, "imagewidth", _int, int),
            imageheight=_default(data, "imageheight", _int, int),
            margin=_default(data, "margin", _int, int),
            name=_default(data, "name", _str, str),
            properties=_default(data, "properties", _list_of(_property), list),
            spacing=_default(data, "spacing", _int, int),
            terrains=_optional(data, "terrains", _list_of(_terrain)),
            tilecount=_default(data, "tilecount", _uint, int),
            tileheight=_default(data, "tileheight", _int, int),
            tileoffset=_optional(data, "tileoffset", _tileoffset),
            tiles=_default(data, "tiles", _list_of(_tile_def), list),
            tilewidth=_default(data, "tilewidth", _int, int),
            transparentcolor=_optional(data, "transparentcolor", _str),
            source=_default(data, "source", _str, str),
        )


@dataclass
class Chunk:
    """A piece of an infinite tile layer."""

    data: list[int] = field(default_factory=list)
    height: int = 0
    width: int = 0
    x: int = 0
    y: int = 0


@dataclass
class PolyPoint:
    x: float = 0.0
    y: float = 0.0


@dataclass
class RawObject:
    """An object from an object group, as stored in the JSON."""

    id: int = 0
    name: str = ""
    ty: str = ""
    gid: Optional[int] = None
    ellipse: Optional[bool] = None
    polygon: Optional[list[PolyPoint]] = None
    properties: list[Property] = field(default_factory=list)
    rotation: float = 0.0
    visible: bool = False
    height: float = 0.0
    width: float = 0.0
    x: float = 0.0
    y: float = 0.0


def _chunk(value: Any, name: str) -> Chunk:
    data = _dict(value, name)
    return Chunk(
        data=_default(data, "data", _list_of(_uint), list),
        height=_default(data, "height", _uint, int),
        width=_default(data, "width", _uint, int),
        x=_default(data, "x", _int, int),
        y=_default(data, "y", _int, int),
    )


def _poly_point(value: Any, name: str) -> PolyPoint:
    data = _dict(value, name)
    return PolyPoint(x=_required(data, "x", _float), y=_required(data, "y", _float))


def _raw_object(value: Any, name: str) -> RawObject:
    data = _dict(value, name)
    return RawObject(
        id=_default(data, "id", _uint, int),
        name=_default(data, "name", _str, str),
        ty=_default(data, "type", _str, str),
        gid=_optional(data, "gid", _uint),
        ellipse=_optional(data, "ellipse", _bool),
        polygon=_optional(data, "polygon", _list_of(_poly_point)),
        properties=_default(data, "properties", _list_of(_lenient_property), list),
        rotation=_default(data, "rotation", _float, float),
        visible=_default(data, "visible", _bool, bool),
        height=_default(data, "height", _float, float),
        width=_default(data, "width", _float, float),
        x=_default(data, "x", _float, float),
        y=_default(data, "y", _float, float),
    )


@dataclass
class RawLayer:
    """A map layer as stored in the JSON: tile, object or image layer."""

    chunks: Optional[list[Chunk]] = None
    name: str = ""
    opacity: float = 0.0
    properties: Optional[dict[str, str]] = None
    visible: bool = False
    width: int = 0
    height: int = 0
    ty: str = ""
    data: list[int] = field(default_factory=list)
    draworder: Optional[str] = None
    objects: list[RawObject] = field(default_factory=list)
    offsetx: Optional[int] = None
    offsety: Optional[int] = None
    x: Optional[float] = None
    y: Optional[float] = None
    image: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> "RawLayer":
        data = _dict(data, "layer")
        return cls(
            chunks=_optional(data, "chunks", _list_of(_chunk)),
            name=_default(data, "name", _str, str),
            opacity=_default(data, "opacity", _float, float),
            properties=_optional(data, "properties", _str_map),
            visible=_default(data, "visible", _bool, bool),
            width=_default(data, "width", _uint, int),
            height=_default(data, "height", _uint, int),
            ty=_default(data, "type", _str, str),
            data=_default(data, "data", _list_of(_uint), list),
            draworder=_optional(data, "draworder", _str),
            objects=_default(data, "objects", _list_of(_raw_object), list),
            offsetx=_optional(data, "offsetx", _int),
            offsety=_optional(data, "offsety", _int),
            x=_optional(data, "x", _float),
            y=_optional(data, "y", _float),
            image=_optional(data, "image", _str),
        )


def _raw_layer(value: Any, name: str) -> RawLayer:
    return RawLayer.from_dict(value)


def _tileset(value: Any, name: str) -> Tileset:
    return Tileset.from_dict(value)


@dataclass
class RawMap:
    """A whole Tiled map as stored in the JSON."""

    backgroundcolor: str = ""
    height: int = 0
    properties: list[Property] = field(default_factory=list)
    orientation: str = ""
    renderorder: str = ""
    tileheight: int = 0
    tilewidth: int = 0
    layers: list[RawLayer] = field(default_factory=list)
    tilesets: list[Tileset] = field(default_factory=list)
    version: str = ""
    width: int = 0
    ty: str = ""

    @classmethod
    def from_dict(cls, data: Any) -> "RawMap":
        data = _dict(data, "map")
        return cls(
            backgroundcolor=_default(data, "backgroundcolor", _str, str),
            height=_default(data, "height", _uint, int),
            properties=_default(data, "properties", _list_of(_property), list),
            orientation=_default(data, "orientation", _str, str),
            renderorder=_default(data, "renderorder", _str, str),
            tileheight=_default(data, "tileheight", _uint, int),
            tilewidth=_default(data, "tilewidth", _uint, int),
            layers=_default(data, "layers", _list_of(_raw_layer), list),
            tilesets=_default(data, "tilesets", _list_of(_tileset), list),
            version=_default(data, "version", _str, str),
            width=_default(data, "width", _uint, int),
            ty=_default(data, "type", _str, str),
        )


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as exc:
        raise JsonError(exc.msg, exc.lineno, exc.colno) from exc


def parse_map(text: str) -> RawMap:
    """Parse a Tiled JSON map; raises JsonError on bad syntax or field types."""
    return RawMap.from_dict(_load_json(text))


def parse_tileset(text: str) -> Tileset:
    """Parse an external Tiled JSON tileset; raises JsonError on failure."""
    return Tileset.from_dict(_load_json(text))