"""Pixel drawing into a Display's frame; nothing is sent until shown."""

from __future__ import annotations

from collections.abc import Iterable

from oledhome.bitops import copy_bit, rotate_byte
from oledhome.display import PAGE_SEGMENTS, Display


def _in_frame(display: Display, xpos: int, page: int) -> bool:
    return 0 <= xpos < PAGE_SEGMENTS and 0 <= page < display.pages


def set_pixel(display: Display, xpos: int, ypos: int, invert: bool) -> None:
    """Set (or with ``invert`` clear) one pixel. Pixels off the frame are ignored."""
    if ypos < 0:
        return
    page, bit = divmod(ypos, 8)
    if not _in_frame(display, xpos, page):
        return
    mask = 1 << bit
    value = display.frame[page][xpos]
    value = value & ~mask & 0xFF if invert else value | mask
    # The stored byte is reversed as a whole on a flipped panel.
    if display.flip:
        value = rotate_byte(value)
    display.frame[page][xpos] = value


def draw_line(display: Display, x1: int, y1: int, x2: int, y2: int, invert: bool) -> None:
    """Draw a straight line between two points, both ends included."""
    dx = abs(x2 - x1)
    dy = abs(y2 - y1)
    sx = 1 if x2 > x1 else -1
    sy = 1 if y2 > y1 else -1
    if dx > dy:
        err = -dx
        for _ in range(dx + 1):
            set_pixel(display, x1, y1, invert)
            x1 += sx
            err += 2 * dy
            if err >= 0:
                y1 += sy
                err -= 2 * dx
    else:
        err = -dy
        for _ in range(dy + 1):
            set_pixel(display, x1, y1, invert)
            y1 += sy
            err += 2 * dx
            if err >= 0:
                x1 += sx
                err -= 2 * dy


def draw_circle(display: Display, x0: int, y0: int, r: int, invert: bool) -> None:
    """Draw the outline of a circle of radius ``r`` around ``x0``/``y0``."""
    x = 0
    y = -r
    err = 2 - 2 * r
    while True:
        set_pixel(display, x0 - x, y0 + y, invert)
        set_pixel(display, x0 - y, y0 - x, invert)
        set_pixel(display, x0 + x, y0 - y, invert)
        set_pixel(display, x0 + y, y0 + x, invert)
        old_err = err
        if old_err <= x:
            x += 1
            err += x * 2 + 1
        if old_err > y or err > x:
            y += 1
            err += y * 2 + 1
        if y >= 0:
            break


def draw_cursor(display: Display, x0: int, y0: int, r: int, invert: bool) -> None:
    """Draw a cross with arms of length ``r`` centred on ``x0``/``y0``."""
    draw_line(display, x0 - r, y0, x0 + r, y0, invert)
    draw_line(display, x0, y0 - r, x0, y0 + r, invert)


def draw_bitmap(
    display: Display,
    xpos: int,
    ypos: int,
    bitmap: Iterable[int],
    width: int,
    height: int,
    invert: bool,
) -> None:
    """Copy a row-major, most-significant-bit-first bitmap into the frame.

    ``width`` must be a multiple of 8. Pixels off the frame are dropped.
    """
    if width % 8:
        raise ValueError("width must be a multiple of 8")
    if xpos < 0 or ypos < 0:
        raise ValueError(f"position must not be negative, got ({xpos}, {ypos})")
    row_bytes = width // 8
    data = bytes(bitmap)
    if len(data) < row_bytes * height:
        raise ValueError(f"bitmap needs {row_bytes * height} bytes, got {len(data)}")

    page, dst_bit = divmod(ypos, 8)
    for row in range(height):
        if page < display.pages:
            target = display.frame[page]
            seg = xpos
            for byte in data[row * row_bytes : (row + 1) * row_bytes]:
                source = byte ^ 0xFF if invert else byte
                for src_bit in range(7, -1, -1):
                    if seg < PAGE_SEGMENTS:
                        current = target[seg]
                        if display.flip:
                            current = rotate_byte(current)
                        updated = copy_bit(source, src_bit, current, dst_bit)
                        if display.flip:
                            updated = rotate_byte(updated)
                        target[seg] = updated
                    seg += 1
        dst_bit += 1
        if dst_bit == 8:
            page += 1
            dst_bit = 0


def bitmaps(
    display: Display,
    xpos: int,
    ypos: int,
    bitmap: Iterable[int],
    width: int,
    height: int,
    invert: bool,
) -> None:
    """Draw a bitmap into the frame and show the frame."""
    draw_bitmap(display, xpos, ypos, bitmap, width, height, invert)
    display.show_buffer()