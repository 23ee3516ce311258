"""Frame-buffered SSD1306 display: text, scrolling and page operations."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable, Sequence

from oledhome.bitops import flip as flip_bytes
from oledhome.bitops import invert as invert_bytes
from oledhome.bitops import rotate_byte, rotate_image
from oledhome.commands import (
    SPI_ADDRESS,
    ScrollType,
    addressing_sequence,
    contrast_sequence,
    hardware_scroll_sequence,
    init_sequence,
    pages_for_height,
)
from oledhome.font import GLYPH_WIDTH, glyph
from oledhome.transport import I2cTransport, Transport

PAGE_SEGMENTS = 128
TEXT_COLUMNS = 16
X3_COLUMNS = 5
ROTATED_ROWS = 8
DEFAULT_TICK_SECONDS = 0.01

_SPACE = 0x20
_X3_WIDTH = GLYPH_WIDTH * 3

Text = str | bytes | Sequence[int]


def _triple_height(column: int) -> int:
    """Stretch an 8-pixel column to 24 pixels, each pixel three high."""
    return sum(0b111 << (3 * y) for y in range(8) if (column >> y) & 1)


class Display:
    """An SSD1306 panel with a local copy of its display RAM.

    ``frame`` holds one bytearray of 128 column bytes per page. Drawing
    updates both the panel (through ``transport``) and ``frame``. Delays
    are given in ticks; one tick lasts ``tick_seconds``.
    """

    def __init__(
        self,
        transport: Transport,
        width: int = 128,
        height: int = 64,
        *,
        flip: bool = False,
        offset_x: int = 0,
        sleep: Callable[[float], object] = time.sleep,
        tick_seconds: float = DEFAULT_TICK_SECONDS,
    ) -> None:
        if not 0 < width <= PAGE_SEGMENTS:
            raise ValueError(f"width must be in 1..{PAGE_SEGMENTS}, got {width}")
        if height <= 0:
            raise ValueError(f"height must be positive, got {height}")
        self.transport = transport
        self.width = width
        self.height = height
        self.pages = pages_for_height(height)
        self.flip = flip
        self.offset_x = offset_x
        self.tick_seconds = tick_seconds
        self._sleep = sleep
        self.frame = [bytearray(PAGE_SEGMENTS) for _ in range(self.pages)]
        self.scroll_enabled = False
        self.scroll_start = 0
        self.scroll_end = 0
        self.scroll_direction = 1
        transport.send_commands(init_sequence(height, flip))

    # -- low level -------------------------------------------------------

    def _delay(self, ticks: int) -> None:
        if ticks > 0:
            self._sleep(ticks * self.tick_seconds)

    def _check_page(self, page: int) -> None:
        if not 0 <= page < self.pages:
            raise ValueError(f"page must be in 0..{self.pages - 1}, got {page}")

    def _send(self, page: int, seg: int, data: bytes) -> None:
        if page >= self.pages or seg >= self.width:
            return
        self.transport.send_commands(
            addressing_sequence(page, seg, self.pages, self.flip, self.offset_x)
        )
        self.transport.send_data(data)

    def _glyph_image(self, code: int | str, invert: bool) -> bytes:
        image = glyph(code)
        if invert:
            image = invert_bytes(image)
        if self.flip:
            image = flip_bytes(image)
        return image

    # -- buffer access ---------------------------------------------------

    def show_buffer(self) -> None:
        """Send the whole frame to the panel."""
        for page, row in enumerate(self.frame):
            self._send(page, 0, bytes(row[: self.width]))

    def set_buffer(self, buffer: Iterable[int]) -> None:
        """Replace the frame with ``pages * 128`` bytes, page after page."""
        data = bytes(buffer)
        expected = self.pages * PAGE_SEGMENTS
        if len(data) != expected:
            raise ValueError(f"buffer must hold {expected} bytes, got {len(data)}")
        for page, row in enumerate(self.frame):
            row[:] = data[page * PAGE_SEGMENTS : (page + 1) * PAGE_SEGMENTS]

    def get_buffer(self) -> bytes:
        """Return the frame as ``pages * 128`` bytes."""
        return b"".join(bytes(row) for row in self.frame)

    def set_page(self, page: int, buffer: Iterable[int]) -> None:
        """Replace one page of the frame with 128 bytes."""
        self._check_page(page)
        data = bytes(buffer)
        if len(data) != PAGE_SEGMENTS:
            raise ValueError(f"page data must hold {PAGE_SEGMENTS} bytes, got {len(data)}")
        self.frame[page][:] = data

    def get_page(self, page: int) -> bytes:
        """Return the 128 bytes of one page."""
        self._check_page(page)
        return bytes(self.frame[page])

    def display_image(self, page: int, seg: int, images: Iterable[int]) -> None:
        """Write column bytes at ``page``/``seg`` to the panel and the frame."""
        data = bytes(images)
        self._check_page(page)
        if seg < 0 or seg + len(data) > PAGE_SEGMENTS:
            raise ValueError(f"image of {len(data)} columns does not fit at segment {seg}")
        self._send(page, seg, data)
        self.frame[page][seg : seg + len(data)] = data

    # -- text ------------------------------------------------------------

    def display_text(self, page: int, text: Text, invert: bool) -> None:
        """Draw up to 16 characters from the left edge of ``page``."""
        if page >= self.pages:
            return
        for index, code in enumerate(text[:TEXT_COLUMNS]):
            self.display_image(page, index * GLYPH_WIDTH, self._glyph_image(code, invert))

    def _shift_in(self, page: int, seg: int, pixels: int, image: bytes, delay: int) -> None:
        row = self.frame[page]
        for column in image:
            row[seg : seg + pixels - 1] = row[seg + 1 : seg + pixels]
            row[seg + pixels - 1] = column
            self.display_image(page, seg, bytes(row[seg : seg + pixels]))
            self._delay(delay)

    def _box_pixels(self, page: int, seg: int, box_width: int) -> int | None:
        if box_width <= 0:
            raise ValueError(f"box width must be positive, got {box_width}")
        if page >= self.pages:
            return None
        pixels = box_width * GLYPH_WIDTH
        if seg + pixels > self.width:
            return None
        return pixels

    def display_text_box1(
        self, page: int, seg: int, text: Text, box_width: int, invert: bool, delay: int
    ) -> None:
        """Show the start of ``text`` in a box, then scroll the rest through it."""
        pixels = self._box_pixels(page, seg, box_width)
        if pixels is None:
            return
        codes = list(text)
        head = codes[:box_width] + [_SPACE] * (box_width - len(codes[:box_width]))
        for index, code in enumerate(head):
            self.display_image(page, seg + index * GLYPH_WIDTH, self._glyph_image(code, invert))
        self._delay(delay)
        for code in codes[box_width:]:
            self._shift_in(page, seg, pixels, self._glyph_image(code, invert), delay)

    def display_text_box2(
        self, page: int, seg: int, text: Text, box_width: int, invert: bool, delay: int
    ) -> None:
        """Scroll ``text`` through an initially blank box until it leaves it."""
        pixels = self._box_pixels(page, seg, box_width)
        if pixels is None:
            return
        blank = self._glyph_image(_SPACE, invert)
        for index in range(box_width):
            self.display_image(page, seg + index * GLYPH_WIDTH, blank)
        self._delay(delay)
        for code in text:
            self._shift_in(page, seg, pixels, self._glyph_image(code, invert), delay)
        for _ in range(box_width):
            self._shift_in(page, seg, pixels, blank, delay)

    def display_text_x3(self, page: int, text: Text, invert: bool) -> None:
        """Draw up to 5 characters three times as large, over three pages."""
        if page >= self.pages:
            return
        for index, code in enumerate(text[:X3_COLUMNS]):
            tall = [_triple_height(column) for column in glyph(code)]
            seg = index * _X3_WIDTH
            for band in range(3):
                image = bytes(
                    part
                    for column in tall
                    for part in [(column >> (8 * band)) & 0xFF] * 3
                )
                if invert:
                    image = invert_bytes(image)
                if self.flip:
                    image = flip_bytes(image)
                if page + band < self.pages:
                    self.display_image(page + band, seg, image)

    def clear_screen(self, invert: bool) -> None:
        """Blank every page."""
        for page in range(self.pages):
            self.clear_line(page, invert)

    def clear_line(self, page: int, invert: bool) -> None:
        """Blank the text area of one page."""
        self.display_text(page, bytes(TEXT_COLUMNS), invert)

    def contrast(self, contrast: int) -> None:
        """Set the panel contrast, clamped to 0..255."""
        self.transport.send_commands(contrast_sequence(contrast))

    # -- scrolling -------------------------------------------------------

    def software_scroll(self, start: int, end: int) -> None:
        """Choose the page range used by scroll_text and scroll_clear.

        A page outside the panel disables software scrolling.
        """
        if start < 0 or end < 0 or start >= self.pages or end >= self.pages:
            self.scroll_enabled = False
            return
        self.scroll_enabled = True
        self.scroll_start = start
        self.scroll_end = end
        self.scroll_direction = -1 if start > end else 1

    def scroll_text(self, text: Text, invert: bool) -> None:
        """Move the scroll range one page towards its end and write at its start."""
        if not self.scroll_enabled:
            return
        step = self.scroll_direction
        for src in range(self.scroll_end - step, self.scroll_start - step, -step):
            dst = src + step
            self.frame[dst][: self.width] = self.frame[src][: self.width]
            self._send(dst, 0, bytes(self.frame[dst]))
        self.display_text(self.scroll_start, text, invert)

    def scroll_clear(self) -> None:
        """Blank every page of the scroll range."""
        if not self.scroll_enabled:
            return
        step = self.scroll_direction
        for page in range(self.scroll_end, self.scroll_start - step, -step):
            self.clear_line(page, False)

    def hardware_scroll(self, scroll: ScrollType | int) -> None:
        """Start or stop the panel's own scrolling."""
        self.transport.send_commands(hardware_scroll_sequence(scroll, self.height))

    def _orient(self, value: int) -> int:
        return rotate_byte(value) if self.flip else value

    def _wrap_vertical(self, up: bool, start: int, last: int) -> None:
        pages = self.pages
        for seg in range(start, last + 1):
            column = [self._orient(self.frame[p][seg]) for p in range(pages)]
            for p in range(pages):
                if up:
                    value = (column[p] >> 1) | ((column[(p + 1) % pages] & 0x01) << 7)
                else:
                    value = ((column[p] << 1) & 0xFF) | ((column[(p - 1) % pages] & 0x80) >> 7)
                self.frame[p][seg] = self._orient(value)

    def wrap_around(self, scroll: ScrollType | int, start: int, end: int, delay: int) -> None:
        """Rotate the frame by one pixel or one page, wrapping at the edges.

        Horizontal scrolls act on pages ``start..end``; vertical pixel
        scrolls act on segments ``start..end``. With ``delay`` >= 0 the
        frame is then shown, waiting ``delay`` ticks after each page;
        with a negative ``delay`` nothing is sent.
        """
        kind = ScrollType(scroll)
        if start < 0:
            raise ValueError(f"start must not be negative, got {start}")
        if kind in (ScrollType.SCROLL_RIGHT, ScrollType.SCROLL_LEFT):
            for page in range(start, min(end, self.pages - 1) + 1):
                row = self.frame[page]
                if kind is ScrollType.SCROLL_RIGHT:
                    row[:] = row[-1:] + row[:-1]
                else:
                    row[:] = row[1:] + row[:1]
        elif kind in (ScrollType.SCROLL_UP, ScrollType.SCROLL_DOWN):
            self._wrap_vertical(kind is ScrollType.SCROLL_UP, start, min(end, self.width - 1))
        elif kind is ScrollType.PAGE_SCROLL_DOWN:
            self.frame[:] = self.frame[-1:] + self.frame[:-1]
        elif kind is ScrollType.PAGE_SCROLL_UP:
            self.frame[:] = self.frame[1:] + self.frame[:1]

        if delay >= 0:
            for page in range(self.pages):
                self._send(page, 0, bytes(self.frame[page]))
                self._delay(delay)

    # -- effects ---------------------------------------------------------

    def fadeout(self) -> None:
        """Wipe every page line by line until the screen is dark."""
        for page in range(self.pages):
            level = 0xFF
            for _ in range(8):
                level = level >> 1 if self.flip else (level << 1) & 0xFF
                for seg in range(PAGE_SEGMENTS):
                    self._send(page, seg, bytes((level,)))
                    self.frame[page][seg] = level

    def display_rotate_text(self, seg: int, text: Text, invert: bool) -> None:
        """Draw up to 8 characters turned a quarter, bottom page upwards."""
        page = self.pages - 1
        for code in text[:ROTATED_ROWS]:
            image = rotate_image(glyph(code), self.flip)
            if invert:
                image = invert_bytes(image)
            self.display_image(page, seg, image)
            page -= 1
            if page < 0:
                return

    def dump(self) -> str:
        """Describe the panel geometry, numbers in hexadecimal."""
        if isinstance(self.transport, I2cTransport):
            address = self.transport.address
        else:
            address = SPI_ADDRESS
        return "\n".join(
            (
                f"address={address:x}",
                f"width={self.width:x}",
                f"height={self.height:x}",
                f"pages={self.pages:x}",
            )
        )