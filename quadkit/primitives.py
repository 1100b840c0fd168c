"""Geometry, colour and draw-command primitives used by the UI painter."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Optional


@dataclass(frozen=True)
class Vec2:
    """A 2D vector or point."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Vec2") -> "Vec2":
        return Vec2(self.x - other.x, self.y - other.y)

    def distance(self, other: "Vec2") -> float:
        return math.hypot(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its top-left corner and size."""

    x: float
    y: float
    w: float
    h: float

    @property
    def left(self) -> float:
        return self.x

    @property
    def right(self) -> float:
        return self.x + self.w

    @property
    def top(self) -> float:
        return self.y

    @property
    def bottom(self) -> float:
        return self.y + self.h

    def offset(self, offset: Vec2) -> "Rect":
        return Rect(self.x + offset.x, self.y + offset.y, self.w, self.h)

    def contains(self, point: Vec2) -> bool:
        return self.left <= point.x < self.right and self.top <= point.y < self.bottom

    def overlaps(self, other: "Rect") -> bool:
        return (
            self.left <= other.right
            and self.right >= other.left
            and self.top <= other.bottom
            and self.bottom >= other.top
        )

    def combine_with(self, other: "Rect") -> "Rect":
        x = min(self.x, other.x)
        y = min(self.y, other.y)
        w = max(self.right, other.right) - x
        h = max(self.bottom, other.bottom) - y
        return Rect(x, y, w, h)

    def intersect(self, other: "Rect") -> Optional["Rect"]:
        left = max(self.left, other.left)
        top = max(self.top, other.top)
        right = min(self.right, other.right)
        bottom = min(self.bottom, other.bottom)
        if right < left or bottom < top:
            return None
        return Rect(left, top, right - left, bottom - top)

    def point(self) -> Vec2:
        return Vec2(self.x, self.y)

    def size(self) -> Vec2:
        return Vec2(self.w, self.h)


@dataclass(frozen=True)
class RectOffset:
    """Per-side margins of a rectangle."""

    left: float = 0.0
    right: float = 0.0
    top: float = 0.0
    bottom: float = 0.0


@dataclass(frozen=True)
class Color:
    """RGBA colour with float channels in 0..1."""

    r: float
    g: float
    b: float
    a: float

    @classmethod
    def from_rgba(cls, r: int, g: int, b: int, a: int) -> "Color":
        return cls(r / 255.0, g / 255.0, b / 255.0, a / 255.0)

    def as_list(self) -> list[float]:
        return [self.r, self.g, self.b, self.a]


BLACK = Color(0.0, 0.0, 0.0, 1.0)


@dataclass(frozen=True)
class ElementState:
    """Interaction state of a widget, used to pick style colours."""

    focused: bool = False
    hovered: bool = False
    clicked: bool = False
    selected: bool = False


class Alignment(Enum):
    LEFT = "left"
    CENTER = "center"


@dataclass(frozen=True)
class LabelParams:
    """Colour and alignment for drawing a label."""

    color: Color = BLACK
    alignment: Alignment = Alignment.LEFT

    @classmethod
    def from_color(cls, color: Optional[Color]) -> "LabelParams":
        return cls(color=color if color is not None else BLACK)


_DEFAULT_BUDGET = (10, 10)


@dataclass(frozen=True)
class DrawCharacter:
    dest: Rect
    source: Rect
    color: Color

    def offset(self, offset: Vec2) -> "DrawCharacter":
        return replace(self, dest=self.dest.offset(offset))

    def estimate_triangles_budget(self) -> tuple[int, int]:
        return _DEFAULT_BUDGET


@dataclass(frozen=True)
class DrawRect:
    rect: Rect
    source: Rect
    fill: Optional[Color] = None
    stroke: Optional[Color] = None

    def offset(self, offset: Vec2) -> "DrawRect":
        return replace(self, rect=self.rect.offset(offset))

    def estimate_triangles_budget(self) -> tuple[int, int]:
        return _DEFAULT_BUDGET


@dataclass(frozen=True)
class DrawSprite:
    rect: Rect
    source: Rect
    color: Color
    offsets: Optional[RectOffset] = None
    offsets_uv: Optional[RectOffset] = None

    def offset(self, offset: Vec2) -> "DrawSprite":
        return replace(self, rect=self.rect.offset(offset))

    def estimate_triangles_budget(self) -> tuple[int, int]:
        return (0, 0)


@dataclass(frozen=True)
class DrawTriangle:
    p0: Vec2
    p1: Vec2
    p2: Vec2
    source: Rect
    color: Color

    def offset(self, offset: Vec2) -> "DrawTriangle":
        return replace(
            self, p0=self.p0 + offset, p1=self.p1 + offset, p2=self.p2 + offset
        )

    def estimate_triangles_budget(self) -> tuple[int, int]:
        return _DEFAULT_BUDGET


@dataclass(frozen=True)
class DrawLine:
    start: Vec2
    end: Vec2
    source: Rect
    color: Color

    def offset(self, offset: Vec2) -> "DrawLine":
        return replace(self, start=self.start + offset, end=self.end + offset)

    def estimate_triangles_budget(self) -> tuple[int, int]:
        return _DEFAULT_BUDGET


@dataclass(frozen=True)
class DrawRawTexture:
    rect: Rect
    texture: Any = field(default=None, compare=True)

    def offset(self, offset: Vec2) -> "DrawRawTexture":
        return replace(self, rect=self.rect.offset(offset))

    def estimate_triangles_budget(self) -> tuple[int, int]:
        return _DEFAULT_BUDGET


@dataclass(frozen=True)
class Clip:
    rect: Optional[Rect] = None

    def offset(self, offset: Vec2) -> "Clip":
        return Clip(None if self.rect is None else self.rect.offset(offset))

    def estimate_triangles_budget(self) -> tuple[int, int]:
        return (0, 0)