import pytest

from oledhome.display import PAGE_SEGMENTS, Display
from oledhome.graphics import (
    bitmaps,
    draw_bitmap,
    draw_circle,
    draw_cursor,
    draw_line,
    set_pixel,
)
from oledhome.transport import MemoryTransport


def make():
    transport = MemoryTransport()
    display = Display(transport, 128, 64, sleep=lambda _s: None)
    return display, transport


def lit(display, x, y):
    page, bit = divmod(y, 8)
    return bool((display.frame[page][x] >> bit) & 1)


def lit_points(display):
    return {
        (x, y)
        for x in range(PAGE_SEGMENTS)
        for y in range(display.pages * 8)
        if lit(display, x, y)
    }


def test_set_pixel_and_clear():
    display, _ = make()
    set_pixel(display, 5, 9, False)
    assert lit_points(display) == {(5, 9)}
    set_pixel(display, 5, 9, True)
    assert lit_points(display) == set()


def test_set_pixel_off_frame_ignored():
    display, _ = make()
    set_pixel(display, 200, 5, False)
    set_pixel(display, 5, 100, False)
    set_pixel(display, -1, 5, False)
    assert lit_points(display) == set()


def test_horizontal_line():
    display, _ = make()
    draw_line(display, 0, 3, 10, 3, False)
    assert lit_points(display) == {(x, 3) for x in range(11)}


def test_vertical_line_reversed_direction():
    display, _ = make()
    draw_line(display, 4, 20, 4, 2, False)
    assert lit_points(display) == {(4, y) for y in range(2, 21)}


def test_diagonal_line():
    display, _ = make()
    draw_line(display, 0, 0, 7, 7, False)
    assert lit_points(display) == {(i, i) for i in range(8)}


def test_line_endpoints_included():
    display, _ = make()
    draw_line(display, 3, 5, 40, 17, False)
    points = lit_points(display)
    assert (3, 5) in points
    assert (40, 17) in points
    assert len({x for x, _ in points}) == len(points)


def test_circle_is_symmetric():
    display, _ = make()
    draw_circle(display, 60, 30, 10, False)
    points = lit_points(display)
    for x, y in points:
        assert (120 - x, y) in points
        assert (x, 60 - y) in points
    for point in ((50, 30), (70, 30), (60, 20), (60, 40)):
        assert point in points
    assert (60, 30) not in points


def test_cursor_is_a_cross():
    display, _ = make()
    draw_cursor(display, 20, 20, 3, False)
    expected = {(x, 20) for x in range(17, 24)} | {(20, y) for y in range(17, 24)}
    assert lit_points(display) == expected


def test_bitmap_single_top_left_pixel():
    display, _ = make()
    draw_bitmap(display, 0, 0, [0x80], 8, 1, False)
    assert lit_points(display) == {(0, 0)}


def test_bitmap_spanning_pages():
    display, _ = make()
    draw_bitmap(display, 10, 4, [0xFF] * 8, 8, 8, False)
    assert lit_points(display) == {(x, y) for x in range(10, 18) for y in range(4, 12)}


def test_bitmap_inverted_clears_pixels():
    display, _ = make()
    display.set_buffer(b"\xff" * (8 * PAGE_SEGMENTS))
    draw_bitmap(display, 0, 0, [0xFF] * 2, 16, 1, True)
    assert display.get_page(0) == b"\xfe" * 16 + b"\xff" * (PAGE_SEGMENTS - 16)
    assert display.get_buffer()[PAGE_SEGMENTS:] == b"\xff" * (7 * PAGE_SEGMENTS)


def test_bitmap_width_must_be_multiple_of_eight():
    display, _ = make()
    with pytest.raises(ValueError):
        draw_bitmap(display, 0, 0, [0xFF] * 2, 9, 1, False)


def test_bitmap_too_short_raises():
    display, _ = make()
    with pytest.raises(ValueError):
        draw_bitmap(display, 0, 0, [0xFF], 16, 2, False)


def test_bitmaps_shows_frame():
    display, transport = make()
    bitmaps(display, 0, 0, [0xAA] * 8, 8, 8, False)
    assert b"".join(bytes(r) for r in transport.ram) == display.get_buffer()
    assert display.get_buffer() != bytes(8 * PAGE_SEGMENTS)