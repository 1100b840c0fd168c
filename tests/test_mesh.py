import math

import pytest

from quadkit.mesh import MAX_INDICES, MAX_VERTICES, DrawList, Vertex, render_command
from quadkit.primitives import (
    Clip,
    Color,
    DrawCharacter,
    DrawLine,
    DrawRawTexture,
    DrawRect,
    DrawSprite,
    DrawTriangle,
    Rect,
    RectOffset,
    Vec2,
)

RED = Color(1.0, 0.0, 0.0, 1.0)
SRC = Rect(0.0, 0.0, 1.0, 1.0)


def test_vertex_new_and_as_tuple():
    vertex = Vertex.new(1.0, 2.0, 0.25, 0.5, RED)
    assert vertex.as_tuple() == ((1.0, 2.0, 0.0), (0.25, 0.5), (1.0, 0.0, 0.0, 1.0))


def test_draw_rectangle_corners_and_indices():
    dl = DrawList()
    dl.draw_rectangle(Rect(0.0, 0.0, 10.0, 20.0), SRC, RED)
    assert [v.pos for v in dl.vertices] == [
        (0.0, 0.0, 0.0),
        (10.0, 0.0, 0.0),
        (10.0, 20.0, 0.0),
        (0.0, 20.0, 0.0),
    ]
    assert dl.indices == [0, 1, 2, 0, 2, 3]


def test_second_rectangle_indices_are_offset():
    dl = DrawList()
    dl.draw_rectangle(Rect(0.0, 0.0, 1.0, 1.0), SRC, RED)
    first = list(dl.indices)
    dl.draw_rectangle(Rect(5.0, 5.0, 1.0, 1.0), SRC, RED)
    assert dl.indices[len(first):] == [i + len(first) * 0 + 4 for i in first]


def test_draw_sprite_makes_nine_patch():
    dl = DrawList()
    offsets = RectOffset(left=2.0, right=3.0, top=4.0, bottom=4.0)
    dl.draw_sprite(Rect(10.0, 20.0, 100.0, 50.0), SRC, offsets, RectOffset(), RED)
    assert len(dl.vertices) == 16
    assert len(dl.indices) == 54
    assert set(dl.indices) == set(range(16))
    xs = {v.pos[0] for v in dl.vertices}
    assert xs == {10.0, 12.0, 107.0, 110.0}
    assert all(v.color == (1.0, 0.0, 0.0, 1.0) for v in dl.vertices)


def test_draw_rectangle_lines_is_four_rects():
    dl = DrawList()
    dl.draw_rectangle_lines(Rect(0.0, 0.0, 10.0, 10.0), SRC, RED)
    assert len(dl.vertices) == 16
    assert len(dl.indices) == 24
    assert max(dl.indices) == 15


def test_draw_line_has_requested_thickness():
    dl = DrawList()
    dl.draw_line(0.0, 0.0, 10.0, 0.0, 2.0, SRC, RED)
    assert dl.indices == [0, 1, 2, 2, 1, 3]
    a, b = dl.vertices[0].pos, dl.vertices[1].pos
    assert math.isclose(math.dist(a[:2], b[:2]), 2.0)
    assert dl.vertices[2].pos[0] == 10.0


def test_zero_length_line_draws_nothing():
    dl = DrawList()
    dl.draw_line(3.0, 3.0, 3.0, 3.0, 1.0, SRC, RED)
    assert dl.vertices == []
    assert dl.indices == []


def test_draw_triangle():
    dl = DrawList()
    dl.draw_triangle(Vec2(0, 0), Vec2(1, 0), Vec2(0, 1), SRC, RED)
    assert dl.indices == [0, 1, 2]
    assert [v.pos[:2] for v in dl.vertices] == [(0, 0), (1, 0), (0, 1)]


def test_clear_resets_everything_but_texture():
    dl = DrawList(clipping_zone=Rect(0, 0, 5, 5), texture="tex")
    dl.draw_rectangle(Rect(0, 0, 1, 1), SRC, RED)
    dl.clear()
    assert dl.vertices == [] and dl.indices == []
    assert dl.clipping_zone is None
    assert dl.texture == "tex"


def test_render_into_empty_creates_list():
    lists = []
    render_command(lists, DrawRect(Rect(0, 0, 1, 1), SRC, fill=RED))
    assert len(lists) == 1
    assert len(lists[0].vertices) == 4


def test_rect_with_fill_and_stroke():
    lists = []
    render_command(lists, DrawRect(Rect(0, 0, 10, 10), SRC, fill=RED, stroke=RED))
    assert len(lists[0].vertices) == 20


def test_clip_starts_new_list_only_when_changed():
    lists = [DrawList()]
    zone = Rect(0, 0, 50, 50)
    render_command(lists, Clip(zone))
    assert len(lists) == 2
    assert lists[-1].clipping_zone == zone
    render_command(lists, Clip(zone))
    assert len(lists) == 2


def test_raw_texture_gets_own_list_and_keeps_clip():
    zone = Rect(0, 0, 50, 50)
    lists = [DrawList(clipping_zone=zone)]
    render_command(lists, DrawRawTexture(Rect(0, 0, 8, 8), texture="atlas"))
    assert len(lists) == 2
    assert lists[-1].texture == "atlas"
    assert lists[-1].clipping_zone == zone
    assert [v.uv for v in lists[-1].vertices][2] == (1.0, 1.0)
    render_command(lists, DrawRawTexture(Rect(8, 8, 8, 8), texture="atlas"))
    assert len(lists) == 2
    assert len(lists[-1].vertices) == 8


def test_untextured_command_after_texture_starts_new_list():
    lists = []
    render_command(lists, DrawRawTexture(Rect(0, 0, 8, 8), texture="atlas"))
    render_command(lists, DrawCharacter(Rect(0, 0, 4, 4), SRC, RED))
    assert lists[-1].texture is None
    assert len(lists[-1].vertices) == 4


def test_vertex_budget_overflow_starts_new_list():
    filler = Vertex.new(0, 0, 0, 0, RED)
    lists = [DrawList(vertices=[filler] * (MAX_VERTICES - 11))]
    render_command(lists, DrawLine(Vec2(0, 0), Vec2(5, 0), SRC, RED))
    assert len(lists) == 1
    lists = [DrawList(vertices=[filler] * (MAX_VERTICES - 10))]
    render_command(lists, DrawLine(Vec2(0, 0), Vec2(5, 0), SRC, RED))
    assert len(lists) == 2


def test_index_budget_overflow_starts_new_list():
    lists = [DrawList(indices=[0] * (MAX_INDICES - 10))]
    render_command(lists, DrawTriangle(Vec2(0, 0), Vec2(1, 0), Vec2(0, 1), SRC, RED))
    assert len(lists) == 2
    assert lists[-1].indices == [0, 1, 2]


def test_sprite_defaults_offsets():
    lists = []
    render_command(lists, DrawSprite(Rect(0, 0, 10, 10), SRC, RED))
    assert len(lists[0].vertices) == 16


def test_unknown_command_rejected():
    with pytest.raises(TypeError):
        render_command([], "not a command")