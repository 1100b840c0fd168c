import pytest

from quadkit.cursor import Cursor, Layout, Scroll
from quadkit.primitives import Rect, Vec2


def make_cursor(area=Rect(0.0, 0.0, 200.0, 100.0), margin=2.0):
    return Cursor(area, margin)


def test_new_cursor_starts_at_margin():
    cursor = make_cursor(margin=3.0)
    assert cursor.x == 3.0
    assert cursor.y == 3.0
    assert cursor.current_position() == Vec2(3.0, 3.0)


def test_fit_adds_area_offset():
    cursor = make_cursor(area=Rect(10.0, 20.0, 200.0, 100.0), margin=2.0)
    pos = cursor.fit(Vec2(5.0, 5.0), Layout.VERTICAL)
    assert pos == Vec2(2.0 + 10.0, 2.0 + 20.0)


def test_vertical_layout_stacks_widgets():
    margin = 2.0
    size = Vec2(30.0, 12.0)
    cursor = make_cursor(margin=margin)
    first = cursor.fit(size, Layout.VERTICAL)
    second = cursor.fit(size, Layout.VERTICAL)
    assert second.x == first.x
    assert second.y - first.y == size.y + margin


def test_horizontal_layout_keeps_row():
    margin = 2.0
    size = Vec2(30.0, 12.0)
    cursor = make_cursor(margin=margin)
    first = cursor.fit(size, Layout.HORIZONTAL)
    second = cursor.fit(size, Layout.HORIZONTAL)
    assert second.y == first.y
    assert second.x - first.x == size.x + margin


def test_horizontal_layout_wraps_when_full():
    margin = 2.0
    size = Vec2(30.0, 12.0)
    cursor = make_cursor(area=Rect(0.0, 0.0, 50.0, 100.0), margin=margin)
    first = cursor.fit(size, Layout.HORIZONTAL)
    second = cursor.fit(size, Layout.HORIZONTAL)
    assert second.x == margin + 1.0
    assert second.y == first.y + size.y + margin


def test_free_layout_uses_point():
    cursor = make_cursor(area=Rect(7.0, 9.0, 200.0, 100.0))
    pos = cursor.fit(Vec2(5.0, 5.0), Vec2(40.0, 50.0))
    assert pos == Vec2(40.0 + 7.0, 50.0 + 9.0)


def test_free_layout_does_not_move_cursor():
    cursor = make_cursor()
    before = (cursor.x, cursor.y)
    cursor.fit(Vec2(5.0, 5.0), Vec2(40.0, 50.0))
    assert (cursor.x, cursor.y) == before


def test_next_same_line_forces_horizontal():
    size = Vec2(30.0, 12.0)
    cursor = make_cursor()
    first = cursor.fit(size, Layout.VERTICAL)
    cursor.next_same_line = 100.0
    second = cursor.fit(size, Layout.VERTICAL)
    assert second.y == first.y
    assert second.x == 100.0
    assert cursor.next_same_line is None


def test_fit_grows_inner_rect():
    cursor = make_cursor(area=Rect(0.0, 0.0, 50.0, 50.0))
    cursor.fit(Vec2(10.0, 10.0), Vec2(100.0, 120.0))
    inner = cursor.scroll.inner_rect
    assert inner.right == 110.0
    assert inner.bottom == 130.0


def test_reset_rewinds_and_keeps_previous_content():
    cursor = make_cursor(area=Rect(0.0, 0.0, 50.0, 50.0))
    cursor.fit(Vec2(10.0, 10.0), Vec2(100.0, 120.0))
    grown = cursor.scroll.inner_rect
    cursor.ident = 5.0
    cursor.reset()
    assert cursor.scroll.inner_rect_previous_frame == grown
    assert cursor.scroll.inner_rect == Rect(0.0, 0.0, 50.0, 50.0)
    assert (cursor.x, cursor.y, cursor.ident) == (cursor.margin, cursor.margin, 0.0)


def test_ident_shifts_positions():
    cursor = make_cursor()
    plain = cursor.current_position()
    cursor.ident = 5.0
    assert cursor.current_position() - plain == Vec2(5.0, 0.0)


def make_scroll(view_h=50.0, content=Rect(0.0, 0.0, 100.0, 200.0)):
    return Scroll(
        rect=Rect(0.0, 0.0, 100.0, view_h),
        inner_rect=content,
        inner_rect_previous_frame=content,
    )


@pytest.mark.parametrize("target", [-30.0, 0.0, 75.0, 150.0, 400.0])
def test_scroll_to_stays_within_content(target):
    scroll = make_scroll()
    scroll.scroll_to(target)
    inner = scroll.inner_rect_previous_frame
    assert inner.y <= scroll.rect.y <= inner.h - scroll.rect.h + inner.y


def test_scroll_to_within_range_is_exact():
    scroll = make_scroll()
    scroll.scroll_to(75.0)
    assert scroll.rect.y == 75.0


def test_update_clamps_current_position():
    scroll = make_scroll()
    scroll.rect = Rect(0.0, 1000.0, 100.0, 50.0)
    scroll.update()
    inner = scroll.inner_rect_previous_frame
    assert scroll.rect.y == inner.h - scroll.rect.h + inner.y