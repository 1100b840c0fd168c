"""Widget styles: colours, margins and background sprites resolved by element state."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Hashable, Optional

from quadkit.primitives import Color, ElementState, RectOffset

_BLACK = Color.from_rgba(0, 0, 0, 255)
_WHITE = Color.from_rgba(255, 255, 255, 255)

_UNFOCUSED_TEXT_DIM = 0.6
_UNFOCUSED_ALPHA = 0.8


def _to_byte(value: float) -> int:
    """Convert a 0..255 float to a byte, truncating and saturating."""
    if value != value:  # NaN
        return 0
    return int(min(max(value, 0.0), 255.0))


def _add_offsets(first: RectOffset, second: RectOffset) -> RectOffset:
    return RectOffset(
        left=first.left + second.left,
        right=first.right + second.right,
        top=first.top + second.top,
        bottom=first.bottom + second.bottom,
    )


@dataclass
class Style:
    """Look of one kind of widget.

    ``background_margin`` is the part of the background sprite that is not
    stretched (useful for borders); ``margin`` is extra space between the
    element border and its content and does not affect textures.
    Background sprites are atlas keys; ``font`` is the font object used to
    draw text.
    """

    font: Any = None
    background: Optional[Hashable] = None
    background_hovered: Optional[Hashable] = None
    background_clicked: Optional[Hashable] = None
    color: Color = _WHITE
    color_inactive: Optional[Color] = None
    color_hovered: Color = _WHITE
    color_clicked: Color = _WHITE
    color_selected: Color = _WHITE
    color_selected_hovered: Color = _WHITE
    background_margin: Optional[RectOffset] = None
    margin: Optional[RectOffset] = None
    text_color: Color = _BLACK
    text_color_hovered: Color = _BLACK
    text_color_clicked: Color = _BLACK
    font_size: int = 16
    reverse_background_z: bool = False

    def border_margin(self) -> RectOffset:
        """Total space between the element border and its content."""
        return _add_offsets(
            self.background_margin or RectOffset(), self.margin or RectOffset()
        )

    def resolve_text_color(self, element_state: ElementState) -> Color:
        """Text colour for the given state; unfocused text is dimmed."""
        if element_state.clicked:
            return self.text_color_clicked
        if element_state.hovered:
            return self.text_color_hovered
        if element_state.focused:
            return self.text_color
        base = self.text_color
        return Color(
            base.r * _UNFOCUSED_TEXT_DIM,
            base.g * _UNFOCUSED_TEXT_DIM,
            base.b * _UNFOCUSED_TEXT_DIM,
            base.a * _UNFOCUSED_TEXT_DIM,
        )

    def resolve_color(self, element_state: ElementState) -> Color:
        """Background colour for the given state."""
        if not element_state.focused:
            if self.color_inactive is not None:
                return self.color_inactive
            base = self.color
            return Color.from_rgba(
                _to_byte(base.r * 255.0),
                _to_byte(base.g * 255.0),
                _to_byte(base.b * 255.0),
                _to_byte(base.a * 255.0 * _UNFOCUSED_ALPHA),
            )
        if element_state.clicked:
            return self.color_clicked
        if element_state.selected and element_state.hovered:
            return self.color_selected_hovered
        if element_state.selected:
            return self.color_selected
        if element_state.hovered:
            return self.color_hovered
        return self.color

    def background_sprite(self, element_state: ElementState) -> Optional[Hashable]:
        """Background sprite key for the given state, if the style has one."""
        if element_state.clicked and self.background_clicked is not None:
            return self.background_clicked
        if element_state.hovered and self.background_hovered is not None:
            return self.background_hovered
        return self.background