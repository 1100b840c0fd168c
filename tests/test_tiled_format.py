import json

import pytest

from quadkit.tiled_errors import JsonError, TiledError
from quadkit.tiled_format import (
    Grid,
    PolyPoint,
    Property,
    RawLayer,
    RawMap,
    Tileset,
    parse_map,
    parse_tileset,
)

MAP = {
    "width": 4,
    "height": 3,
    "tilewidth": 16,
    "tileheight": 16,
    "orientation": "orthogonal",
    "renderorder": "right-down",
    "version": "1.2",
    "type": "map",
    "layers": [
        {
            "name": "ground",
            "type": "tilelayer",
            "width": 4,
            "height": 3,
            "opacity": 1,
            "visible": True,
            "data": [1, 2, 0, 3, 0, 0, 0, 0, 1, 1, 1, 1],
        },
        {
            "name": "things",
            "type": "objectgroup",
            "draworder": "topdown",
            "objects": [
                {
                    "id": 7,
                    "name": "spawn",
                    "type": "point",
                    "x": 32,
                    "y": 16.5,
                    "properties": [{"name": "team", "value": "blue"}],
                    "polygon": [{"x": 0, "y": 0}, {"x": 4, "y": 2}],
                }
            ],
        },
    ],
    "tilesets": [
        {
            "firstgid": 1,
            "name": "terrain",
            "image": "terrain.png",
            "columns": 8,
            "tilecount": 64,
            "tilewidth": 16,
            "tileheight": 16,
            "tiles": [{"id": 3, "type": "wall"}],
        },
        {"firstgid": 65, "source": "items.json"},
    ],
}


def test_parse_full_map():
    raw = parse_map(json.dumps(MAP))
    assert (raw.width, raw.height, raw.tilewidth, raw.tileheight) == (4, 3, 16, 16)
    assert raw.ty == "map"
    assert raw.version == "1.2"
    assert [layer.name for layer in raw.layers] == ["ground", "things"]
    assert raw.layers[0].data == MAP["layers"][0]["data"]
    assert raw.layers[0].opacity == 1.0
    assert raw.layers[0].visible is True


def test_objects_and_lenient_properties():
    raw = parse_map(json.dumps(MAP))
    obj = raw.layers[1].objects[0]
    assert obj.name == "spawn"
    assert obj.ty == "point"
    assert (obj.x, obj.y) == (32.0, 16.5)
    assert obj.gid is None
    assert obj.properties == [Property(name="team", value="blue", ty="")]
    assert obj.polygon == [PolyPoint(0.0, 0.0), PolyPoint(4.0, 2.0)]


def test_tilesets_and_tile_types():
    raw = parse_map(json.dumps(MAP))
    embedded, external = raw.tilesets
    assert embedded.name == "terrain"
    assert embedded.tiles[0].id == 3
    assert embedded.tiles[0].ty == "wall"
    assert external.source == "items.json"
    assert external.firstgid == 65
    assert external.image == ""


def test_missing_fields_take_defaults():
    raw = parse_map("{}")
    assert raw == RawMap()
    layer = RawLayer.from_dict({})
    assert layer.opacity == 0.0
    assert layer.visible is False
    assert layer.offsetx is None
    assert layer.objects == []


def test_layer_offsets_and_properties_map():
    layer = RawLayer.from_dict(
        {"type": "imagelayer", "image": "sky.png", "offsetx": -5, "properties": {"k": "v"}}
    )
    assert layer.image == "sky.png"
    assert layer.offsetx == -5
    assert layer.offsety is None
    assert layer.properties == {"k": "v"}


def test_parse_tileset_with_grid():
    tileset = parse_tileset(json.dumps({"name": "items", "grid": {"width": 8, "height": 9}}))
    assert tileset.grid == Grid(8, 9)
    assert tileset == Tileset.from_dict({"name": "items", "grid": {"width": 8, "height": 9}})


def test_invalid_json_reports_position():
    with pytest.raises(JsonError) as info:
        parse_map('{\n  "width": }')
    assert info.value.line == 2
    assert isinstance(info.value, TiledError)


def test_top_level_must_be_object():
    with pytest.raises(JsonError):
        parse_map("[1, 2]")


def test_wrong_field_type_rejected():
    with pytest.raises(JsonError):
        parse_map(json.dumps({"width": "wide"}))
    with pytest.raises(JsonError):
        parse_map(json.dumps({"version": 1.2}))


def test_negative_unsigned_rejected():
    with pytest.raises(JsonError):
        parse_map(json.dumps({"height": -1}))
    with pytest.raises(JsonError):
        RawLayer.from_dict({"data": [1, -2]})


def test_grid_requires_all_fields():
    with pytest.raises(JsonError) as info:
        parse_tileset(json.dumps({"grid": {"width": 8}}))
    assert "height" in info.value.msg


def test_tileset_properties_are_strict():
    with pytest.raises(JsonError):
        Tileset.from_dict({"properties": [{"name": "a", "value": "b"}]})
    tileset = Tileset.from_dict(
        {"properties": [{"name": "a", "value": "b", "type": "string"}]}
    )
    assert tileset.properties == [Property("a", "b", "string")]


def test_null_optional_fields_become_none():
    layer = RawLayer.from_dict({"image": None, "chunks": None})
    assert layer.image is None
    assert layer.chunks is None


def test_chunks_parsed():
    layer = RawLayer.from_dict(
        {"chunks": [{"data": [1, 2], "width": 2, "height": 1, "x": -16, "y": 0}]}
    )
    chunk = layer.chunks[0]
    assert chunk.data == [1, 2]
    assert (chunk.x, chunk.width) == (-16, 2)