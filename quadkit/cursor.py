"""Layout cursor deciding where the next widget in a window is placed."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Union

from quadkit.primitives import Rect, Vec2


@dataclass
class Scroll:
    """Scroll state of a window's content area."""

    rect: Rect
    inner_rect: Rect
    inner_rect_previous_frame: Rect
    scroll: Vec2 = field(default_factory=Vec2)
    dragging_x: bool = False
    dragging_y: bool = False
    initial_scroll: Vec2 = field(default_factory=Vec2)

    def _clamped(self, y: float) -> float:
        inner = self.inner_rect_previous_frame
        return min(max(y, inner.y), inner.h - self.rect.h + inner.y)

    def scroll_to(self, y: float) -> None:
        """Scroll to ``y``, clamped to the content of the previous frame."""
        self.rect = replace(self.rect, y=self._clamped(y))

    def update(self) -> None:
        """Re-clamp the current scroll position to the previous frame's content."""
        self.rect = replace(self.rect, y=self._clamped(self.rect.y))


class Layout(Enum):
    """How a widget is placed relative to the previous one.

    Wherever a layout is accepted, a ``Vec2`` may be given instead to place
    the widget freely at that point.
    """

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass
class Cursor:
    """Position where the next widget goes inside ``area``."""

    area: Rect
    margin: float
    x: float = field(init=False)
    y: float = field(init=False)
    start_x: float = field(init=False)
    start_y: float = field(init=False)
    ident: float = field(init=False, default=0.0)
    scroll: Scroll = field(init=False)
    next_same_line: Optional[float] = field(init=False, default=None)
    max_row_y: float = field(init=False, default=0.0)

    def __post_init__(self) -> None:
        self.x = self.margin
        self.y = self.margin
        self.start_x = self.margin
        self.start_y = self.margin
        self.scroll = Scroll(
            rect=Rect(0.0, 0.0, self.area.w, self.area.h),
            inner_rect=Rect(0.0, 0.0, self.area.w, self.area.h),
            inner_rect_previous_frame=Rect(0.0, 0.0, self.area.w, self.area.h),
        )

    def reset(self) -> None:
        """Start a new frame: rewind the cursor and remember the content size."""
        self.x = self.start_x
        self.y = self.start_y
        self.max_row_y = 0.0
        self.ident = 0.0
        self.scroll.inner_rect_previous_frame = self.scroll.inner_rect
        self.scroll.inner_rect = Rect(0.0, 0.0, self.area.w, self.area.h)

    def _to_screen(self, local: Vec2) -> Vec2:
        return local + Vec2(self.area.x, self.area.y) + self.scroll.scroll + Vec2(self.ident, 0.0)

    def current_position(self) -> Vec2:
        return self._to_screen(Vec2(self.x, self.y))

    def fit(self, size: Vec2, layout: Union[Layout, Vec2]) -> Vec2:
        """Reserve room for a widget of ``size`` and return its screen position."""
        if self.next_same_line is not None:
            same_line_x = self.next_same_line
            self.next_same_line = None
            if same_line_x != 0.0:
                self.x = same_line_x
            layout = Layout.HORIZONTAL

        if isinstance(layout, Vec2):
            res = layout
        elif layout is Layout.HORIZONTAL:
            self.max_row_y = max(self.max_row_y, size.y)
            if self.x + size.x >= self.area.w - self.margin * 2.0:
                # the extra 1.0 makes a following vertical widget start a new row
                self.x = self.margin + 1.0
                self.y += self.max_row_y + self.margin
                self.max_row_y = 0.0
            res = Vec2(self.x, self.y)
            self.x += size.x + self.margin
        elif layout is Layout.VERTICAL:
            if self.x != self.margin:
                self.x = self.margin
                self.y += self.max_row_y
            res = Vec2(self.x, self.y)
            self.x += size.x + self.margin
            self.max_row_y = size.y + self.margin
        else:
            raise TypeError(f"unsupported layout: {layout!r}")

        self.scroll.inner_rect = self.scroll.inner_rect.combine_with(
            Rect(res.x, res.y, size.x, size.y)
        )
        return self._to_screen(res)