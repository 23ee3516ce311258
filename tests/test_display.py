import pytest

from oledhome.bitops import flip, invert, rotate_image
from oledhome.commands import ScrollType, pages_for_height
from oledhome.display import PAGE_SEGMENTS, Display
from oledhome.font import glyph
from oledhome.transport import MemoryTransport


def make(height=64, width=128, flip_panel=False, tick_seconds=1):
    sleeps = []
    transport = MemoryTransport(pages=pages_for_height(height))
    display = Display(
        transport,
        width,
        height,
        flip=flip_panel,
        sleep=sleeps.append,
        tick_seconds=tick_seconds,
    )
    return display, transport, sleeps


def lit(display, x, y):
    page, bit = divmod(y, 8)
    return bool((display.frame[page][x] >> bit) & 1)


def test_init_switches_panel_on_with_blank_frame():
    display, transport, _ = make()
    assert transport.display_on is True
    assert transport.contrast == 0xFF
    assert display.get_buffer() == bytes(8 * PAGE_SEGMENTS)


def test_short_panel_has_four_pages():
    display, _, _ = make(height=32)
    assert display.pages == 4
    assert len(display.frame) == 4


def test_invalid_width_rejected():
    with pytest.raises(ValueError):
        Display(MemoryTransport(), 200, 64)


def test_buffer_round_trip():
    display, _, _ = make()
    data = bytes(range(256)) * 4
    display.set_buffer(data)
    assert display.get_buffer() == data


def test_set_buffer_wrong_length():
    display, _, _ = make()
    with pytest.raises(ValueError):
        display.set_buffer(b"\x00" * 10)


def test_page_round_trip_and_bad_page():
    display, _, _ = make()
    data = bytes(reversed(range(PAGE_SEGMENTS)))
    display.set_page(3, data)
    assert display.get_page(3) == data
    with pytest.raises(ValueError):
        display.get_page(8)


def test_show_buffer_matches_panel_ram():
    display, transport, _ = make()
    data = bytes((i * 7) & 0xFF for i in range(8 * PAGE_SEGMENTS))
    display.set_buffer(data)
    display.show_buffer()
    assert b"".join(bytes(r) for r in transport.ram) == data


def test_display_image_updates_frame_and_panel():
    display, transport, _ = make()
    display.display_image(2, 10, b"\x11\x22\x33")
    assert display.frame[2][10:13] == b"\x11\x22\x33"
    assert transport.ram[2][10:13] == b"\x11\x22\x33"


def test_display_image_out_of_range_raises():
    display, _, _ = make()
    with pytest.raises(ValueError):
        display.display_image(0, 127, b"\x01\x02")
    with pytest.raises(ValueError):
        display.display_image(8, 0, b"\x01")


def test_display_image_beyond_width_not_sent():
    display, transport, _ = make(width=64)
    transport.data.clear()
    display.display_image(0, 100, b"\x05")
    assert transport.data == []
    assert display.frame[0][100] == 5


def test_display_text_writes_glyphs():
    display, transport, _ = make()
    display.display_text(1, "Hi", False)
    assert display.frame[1][:16] == glyph("H") + glyph("i")
    assert transport.ram[1][:16] == glyph("H") + glyph("i")


def test_display_text_inverted():
    display, _, _ = make()
    display.display_text(0, "A", True)
    assert display.frame[0][:8] == invert(glyph("A"))


def test_display_text_truncates_to_sixteen():
    display, _, _ = make()
    text = "ABCDEFGHIJKLMNOPQRST"
    display.display_text(0, text, False)
    assert display.frame[0] == b"".join(glyph(c) for c in text[:16])


def test_display_text_page_beyond_panel_ignored():
    display, _, _ = make(height=32)
    display.display_text(5, "A", False)
    assert display.get_buffer() == bytes(4 * PAGE_SEGMENTS)


def test_flipped_panel_reverses_pages_and_bits():
    display, transport, _ = make(flip_panel=True)
    display.display_text(0, "A", False)
    assert display.frame[0][:8] == flip(glyph("A"))
    assert transport.ram[7][:8] == flip(glyph("A"))


def test_clear_screen_inverted_fills_all():
    display, _, _ = make()
    display.clear_screen(True)
    assert display.get_buffer() == b"\xff" * (8 * PAGE_SEGMENTS)


def test_clear_line_only_that_page():
    display, _, _ = make()
    display.clear_line(2, True)
    assert display.frame[2] == b"\xff" * PAGE_SEGMENTS
    assert display.frame[1] == bytes(PAGE_SEGMENTS)


def test_contrast_is_clamped():
    display, transport, _ = make()
    display.contrast(300)
    assert transport.contrast == 0xFF
    display.contrast(-5)
    assert transport.contrast == 0


def test_scroll_text_pushes_lines_down():
    display, transport, _ = make()
    display.software_scroll(0, 3)
    display.scroll_text("a", False)
    display.scroll_text("b", False)
    assert display.frame[0][:8] == glyph("b")
    assert display.frame[1][:8] == glyph("a")
    assert transport.ram[1][:8] == glyph("a")


def test_scroll_text_reverse_direction():
    display, _, _ = make()
    display.software_scroll(3, 0)
    assert display.scroll_direction == -1
    display.scroll_text("a", False)
    display.scroll_text("b", False)
    assert display.frame[3][:8] == glyph("b")
    assert display.frame[2][:8] == glyph("a")


def test_scroll_disabled_out_of_range():
    display, _, _ = make()
    display.software_scroll(0, 9)
    assert display.scroll_enabled is False
    display.scroll_text("a", False)
    assert display.get_buffer() == bytes(8 * PAGE_SEGMENTS)


def test_scroll_clear_blanks_range():
    display, _, _ = make()
    display.set_buffer(b"\xff" * (8 * PAGE_SEGMENTS))
    display.software_scroll(1, 3)
    display.scroll_clear()
    for page in (1, 2, 3):
        assert display.frame[page][:PAGE_SEGMENTS] == bytes(PAGE_SEGMENTS)
    assert display.frame[0] == b"\xff" * PAGE_SEGMENTS
    assert display.frame[4] == b"\xff" * PAGE_SEGMENTS


def test_hardware_scroll_start_and_stop():
    display, transport, _ = make()
    display.hardware_scroll(ScrollType.SCROLL_RIGHT)
    assert transport.scrolling is True
    display.hardware_scroll(ScrollType.SCROLL_STOP)
    assert transport.scrolling is False


def test_wrap_right_moves_last_column_to_first():
    display, _, _ = make()
    data = bytes(range(PAGE_SEGMENTS)) * 8
    display.set_buffer(data)
    display.wrap_around(ScrollType.SCROLL_RIGHT, 0, 7, -1)
    assert display.frame[0][0] == data[PAGE_SEGMENTS - 1]
    assert display.frame[0][1:] == data[: PAGE_SEGMENTS - 1]


@pytest.mark.parametrize(
    "there,back",
    [
        (ScrollType.SCROLL_RIGHT, ScrollType.SCROLL_LEFT),
        (ScrollType.SCROLL_UP, ScrollType.SCROLL_DOWN),
        (ScrollType.PAGE_SCROLL_UP, ScrollType.PAGE_SCROLL_DOWN),
    ],
)
@pytest.mark.parametrize("flip_panel", [False, True])
def test_wrap_round_trip(there, back, flip_panel):
    display, _, _ = make(flip_panel=flip_panel)
    data = bytes((i * 37 + 11) & 0xFF for i in range(8 * PAGE_SEGMENTS))
    display.set_buffer(data)
    display.wrap_around(there, 0, 127, -1)
    assert display.get_buffer() != data
    display.wrap_around(back, 0, 127, -1)
    assert display.get_buffer() == data


def test_wrap_up_moves_top_pixel_to_bottom():
    display, _, _ = make()
    display.frame[0][5] = 1
    display.wrap_around(ScrollType.SCROLL_UP, 0, 127, -1)
    expected = bytearray(8 * PAGE_SEGMENTS)
    expected[7 * PAGE_SEGMENTS + 5] = 0x80
    assert display.get_buffer() == bytes(expected)


def test_wrap_down_moves_bottom_pixel_to_top():
    display, _, _ = make()
    display.frame[7][9] = 0x80
    display.wrap_around(ScrollType.SCROLL_DOWN, 0, 127, -1)
    expected = bytearray(8 * PAGE_SEGMENTS)
    expected[9] = 0x01
    assert display.get_buffer() == bytes(expected)


def test_wrap_up_full_cycle_restores_frame():
    display, _, _ = make()
    data = bytes((i * 13) & 0xFF for i in range(8 * PAGE_SEGMENTS))
    display.set_buffer(data)
    for _ in range(64):
        display.wrap_around(ScrollType.SCROLL_UP, 0, 127, -1)
    assert display.get_buffer() == data


def test_wrap_delay_controls_sending():
    display, transport, sleeps = make()
    transport.data.clear()
    display.wrap_around(ScrollType.PAGE_SCROLL_UP, 0, 7, -1)
    assert transport.data == []
    display.wrap_around(ScrollType.PAGE_SCROLL_UP, 0, 7, 0)
    assert len(transport.data) == display.pages
    assert sleeps == []
    display.wrap_around(ScrollType.PAGE_SCROLL_UP, 0, 7, 3)
    assert sleeps == [3] * display.pages


def test_display_text_x3_underscore():
    display, _, _ = make()
    display.display_text_x3(0, "_", False)
    assert display.frame[0][:24] == bytes(24)
    assert display.frame[1][:24] == bytes(24)
    assert display.frame[2][:24] == b"\xe0" * 24


def test_display_text_x3_pixel_tripling():
    display, _, _ = make()
    display.display_text_x3(0, "A", False)
    source = glyph("A")
    for x in range(8):
        for y in range(8):
            expected = bool((source[x] >> y) & 1)
            for dx in range(3):
                for dy in range(3):
                    assert lit(display, x * 3 + dx, y * 3 + dy) == expected


def test_fadeout_darkens_everything():
    display, transport, _ = make()
    display.set_buffer(b"\xff" * (8 * PAGE_SEGMENTS))
    display.show_buffer()
    display.fadeout()
    assert display.get_buffer() == bytes(8 * PAGE_SEGMENTS)
    assert all(row == bytes(PAGE_SEGMENTS) for row in transport.ram)


def test_display_rotate_text_from_bottom_page():
    display, _, _ = make()
    display.display_rotate_text(4, "AB", False)
    assert display.frame[7][4:12] == rotate_image(glyph("A"), False)
    assert display.frame[6][4:12] == rotate_image(glyph("B"), False)


def test_box1_scrolls_rest_of_text_into_box():
    display, _, sleeps = make()
    display.display_text_box1(0, 8, "ABCD", 2, False, 2)
    assert display.frame[0][8:24] == glyph("C") + glyph("D")
    assert sleeps == [2] * (1 + 2 * 8)


def test_box1_too_wide_does_nothing():
    display, _, _ = make()
    display.display_text_box1(0, 120, "ABCD", 2, False, 0)
    assert display.get_buffer() == bytes(8 * PAGE_SEGMENTS)


def test_box2_ends_blank_after_text_passes():
    display, _, _ = make()
    display.set_page(0, b"\xff" * PAGE_SEGMENTS)
    display.display_text_box2(0, 0, "XY", 2, False, 0)
    assert display.frame[0][:16] == glyph(" ") * 2
    assert display.frame[0][16:] == b"\xff" * (PAGE_SEGMENTS - 16)


def test_box_width_must_be_positive():
    display, _, _ = make()
    with pytest.raises(ValueError):
        display.display_text_box2(0, 0, "XY", 0, False, 0)


def test_dump_reports_geometry():
    display, _, _ = make(height=32)
    lines = display.dump().splitlines()
    assert f"width={128:x}" in lines
    assert "pages=4" in lines