"""Turns draw commands into batched triangle meshes ready for the GPU."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Optional, Union

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

MAX_VERTICES = 8000
MAX_INDICES = 4000

_F32_EPSILON = 1.1920929e-07
_U16_MASK = 0xFFFF
_WHITE = Color(1.0, 1.0, 1.0, 1.0)

DrawCommand = Union[
    DrawCharacter, DrawRect, DrawSprite, DrawTriangle, DrawLine, DrawRawTexture, Clip
]
_COMMAND_TYPES = (
    DrawCharacter,
    DrawRect,
    DrawSprite,
    DrawTriangle,
    DrawLine,
    DrawRawTexture,
    Clip,
)


@dataclass(frozen=True)
class Vertex:
    """One mesh vertex: position, texture coordinates and colour."""

    pos: tuple[float, float, float]
    uv: tuple[float, float]
    color: tuple[float, float, float, float]

    @classmethod
    def new(cls, x: float, y: float, u: float, v: float, color: Color) -> "Vertex":
        return cls((x, y, 0.0), (u, v), tuple(color.as_list()))

    def as_tuple(
        self,
    ) -> tuple[tuple[float, float, float], tuple[float, float], tuple[float, float, float, float]]:
        return (self.pos, self.uv, self.color)


@dataclass
class DrawList:
    """A batch of triangles sharing one clipping zone and texture."""

    vertices: list[Vertex] = field(default_factory=list)
    indices: list[int] = field(default_factory=list)
    clipping_zone: Optional[Rect] = None
    texture: Any = None

    def clear(self) -> None:
        self.vertices.clear()
        self.indices.clear()
        self.clipping_zone = None

    def _extend(self, vertices: list[Vertex], indices: list[int]) -> None:
        base = len(self.vertices) & _U16_MASK
        self.vertices.extend(vertices)
        self.indices.extend((index + base) & _U16_MASK for index in indices)

    def draw_rectangle_lines(self, rect: Rect, source: Rect, color: Color) -> None:
        """Draw a one pixel wide outline of ``rect``."""
        x, y, w, h = rect.x, rect.y, rect.w, rect.h
        self.draw_rectangle(Rect(x, y, w, 1.0), source, color)
        self.draw_rectangle(Rect(x + w - 1.0, y + 1.0, 1.0, h - 2.0), source, color)
        self.draw_rectangle(Rect(x, y + h - 1.0, w, 1.0), source, color)
        self.draw_rectangle(Rect(x, y + 1.0, 1.0, h - 2.0), source, color)

    def draw_sprite(
        self,
        rect: Rect,
        src: Rect,
        offsets: RectOffset,
        uv_offsets: RectOffset,
        color: Color,
    ) -> None:
        """Draw a nine-patch sprite: borders keep their size, the centre stretches."""
        x, y, w, h = rect.x, rect.y, rect.w, rect.h
        xs = (x, x + offsets.left, x + w - offsets.right, x + w)
        ys = (y, y + offsets.top, y + h - offsets.top, y + h)
        us = (src.x, src.x + uv_offsets.left, src.x + src.w - uv_offsets.right, src.x + src.w)
        vs = (src.y, src.y + uv_offsets.top, src.y + src.h - uv_offsets.bottom, src.y + src.h)

        rgba = tuple(color.as_list())
        vertices = [
            Vertex((vx, vy, 0.0), (u, v), rgba)
            for vx, u in zip(xs, us)
            for vy, v in zip(ys, vs)
        ]

        indices: list[int] = []
        for row in range(3):
            for column in range(3):
                corner = row * 4 + column
                indices += [corner, corner + 1, corner + 4]
                indices += [corner + 1, corner + 4, corner + 5]

        self._extend(vertices, indices)

    def draw_rectangle(self, rect: Rect, src: Rect, color: Color) -> None:
        x, y, w, h = rect.x, rect.y, rect.w, rect.h
        vertices = [
            Vertex.new(x, y, src.x, src.y, color),
            Vertex.new(x + w, y, src.x + src.w, src.y, color),
            Vertex.new(x + w, y + h, src.x + src.w, src.y + src.h, color),
            Vertex.new(x, y + h, src.x, src.y + src.h, color),
        ]
        self._extend(vertices, [0, 1, 2, 0, 2, 3])

    def draw_triangle(
        self, p0: Vec2, p1: Vec2, p2: Vec2, source: Rect, color: Color
    ) -> None:
        vertices = [
            Vertex.new(p.x, p.y, source.x, source.y, color) for p in (p0, p1, p2)
        ]
        self._extend(vertices, [0, 1, 2])

    def draw_line(
        self,
        x1: float,
        y1: float,
        x2: float,
        y2: float,
        thickness: float,
        source: Rect,
        color: Color,
    ) -> None:
        """Draw a line as a quad of the given thickness; degenerate lines draw nothing."""
        nx = -(y2 - y1)
        ny = x2 - x1
        length = math.hypot(nx, ny)
        half = thickness * 0.5

        if half == 0.0:
            if length == 0.0:
                return
            tx = ty = 0.0
        else:
            tlen = length / half
            if tlen < _F32_EPSILON:
                return
            tx = nx / tlen
            ty = ny / tlen

        vertices = [
            Vertex.new(x1 + tx, y1 + ty, source.x, source.y, color),
            Vertex.new(x1 - tx, y1 - ty, source.x, source.y, color),
            Vertex.new(x2 + tx, y2 + ty, source.x, source.y, color),
            Vertex.new(x2 - tx, y2 - ty, source.x, source.y, color),
        ]
        self._extend(vertices, [0, 1, 2, 2, 1, 3])


def _active_draw_list(draw_lists: list[DrawList], command: DrawCommand) -> DrawList:
    if not draw_lists:
        draw_lists.append(DrawList())

    last = draw_lists[-1]
    if isinstance(command, Clip):
        if last.clipping_zone != command.rect:
            draw_lists.append(DrawList())
    elif isinstance(command, DrawRawTexture):
        if last.texture is None or last.texture != command.texture:
            draw_lists.append(
                DrawList(clipping_zone=last.clipping_zone, texture=command.texture)
            )
    else:
        vertices, indices = command.estimate_triangles_budget()
        if (
            last.texture is not None
            or len(last.vertices) + vertices >= MAX_VERTICES
            or len(last.indices) + indices >= MAX_INDICES
        ):
            draw_lists.append(DrawList(clipping_zone=last.clipping_zone))
    return draw_lists[-1]


def render_command(draw_lists: list[DrawList], command: DrawCommand) -> None:
    """Rasterize ``command`` into the right draw list, starting new lists as needed."""
    if not isinstance(command, _COMMAND_TYPES):
        raise TypeError(f"unsupported draw command: {command!r}")

    target = _active_draw_list(draw_lists, command)

    match command:
        case Clip(rect=rect):
            target.clipping_zone = rect
        case DrawRect(rect=rect, source=source, fill=fill, stroke=stroke):
            if fill is not None:
                target.draw_rectangle(rect, source, fill)
            if stroke is not None:
                target.draw_rectangle_lines(rect, source, stroke)
        case DrawSprite(
            rect=rect, source=source, color=color, offsets=offsets, offsets_uv=offsets_uv
        ):
            target.draw_sprite(
                rect,
                source,
                offsets if offsets is not None else RectOffset(),
                offsets_uv if offsets_uv is not None else RectOffset(),
                color,
            )
        case DrawLine(start=start, end=end, source=source, color=color):
            target.draw_line(start.x, start.y, end.x, end.y, 1.0, source, color)
        case DrawCharacter(dest=dest, source=source, color=color):
            target.draw_rectangle(dest, source, color)
        case DrawRawTexture(rect=rect):
            target.draw_rectangle(rect, Rect(0.0, 0.0, 1.0, 1.0), _WHITE)
        case DrawTriangle(p0=p0, p1=p1, p2=p2, source=source, color=color):
            target.draw_triangle(p0, p1, p2, source, color)