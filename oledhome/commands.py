"""SSD1306 command bytes and the command sequences the driver sends."""

from __future__ import annotations

from enum import IntEnum

# Control bytes that prefix an I2C transfer.
CONTROL_CMD_SINGLE = 0x80
CONTROL_CMD_STREAM = 0x00
CONTROL_DATA_SINGLE = 0xC0
CONTROL_DATA_STREAM = 0x40

# Fundamental commands.
SET_CONTRAST = 0x81
DISPLAY_RAM = 0xA4
DISPLAY_ALLON = 0xA5
DISPLAY_NORMAL = 0xA6
DISPLAY_INVERTED = 0xA7
DISPLAY_OFF = 0xAE
DISPLAY_ON = 0xAF

# Addressing.
SET_MEMORY_ADDR_MODE = 0x20
SET_HORI_ADDR_MODE = 0x00
SET_VERT_ADDR_MODE = 0x01
SET_PAGE_ADDR_MODE = 0x02
SET_COLUMN_RANGE = 0x21
SET_PAGE_RANGE = 0x22
SET_LOWER_COLUMN = 0x00
SET_HIGHER_COLUMN = 0x10
SET_PAGE_START = 0xB0

# Hardware configuration.
SET_DISPLAY_START_LINE = 0x40
SET_SEGMENT_REMAP_0 = 0xA0
SET_SEGMENT_REMAP_1 = 0xA1
SET_MUX_RATIO = 0xA8
SET_COM_SCAN_MODE = 0xC8
SET_DISPLAY_OFFSET = 0xD3
SET_COM_PIN_MAP = 0xDA
NOP = 0xE3

# Timing and driving scheme.
SET_DISPLAY_CLK_DIV = 0xD5
SET_PRECHARGE = 0xD9
SET_VCOMH_DESELECT = 0xDB

# Charge pump.
SET_CHARGE_PUMP = 0x8D

# Scrolling.
HORIZONTAL_RIGHT = 0x26
HORIZONTAL_LEFT = 0x27
CONTINUOUS_SCROLL = 0x29
DEACTIVATE_SCROLL = 0x2E
ACTIVATE_SCROLL = 0x2F
VERTICAL = 0xA3

I2C_ADDRESS = 0x3C
SPI_ADDRESS = 0xFF

DEFAULT_PAGES = 8
_PAGES_BY_HEIGHT = {32: 4}


class ScrollType(IntEnum):
    """Scroll directions understood by hardware and software scrolling."""

    SCROLL_RIGHT = 1
    SCROLL_LEFT = 2
    SCROLL_DOWN = 3
    SCROLL_UP = 4
    PAGE_SCROLL_DOWN = 5
    PAGE_SCROLL_UP = 6
    SCROLL_STOP = 7


def pages_for_height(height: int) -> int:
    """Number of 8-pixel pages: 4 for a 32-pixel panel, otherwise 8."""
    if isinstance(height, bool) or not isinstance(height, int):
        raise TypeError(f"height must be an int, got {type(height).__name__}")
    return _PAGES_BY_HEIGHT.get(height, DEFAULT_PAGES)


def _mux_ratio(height: int) -> bytes:
    return {64: b"\x3f", 32: b"\x1f"}.get(height, b"")


def _com_pin_map(height: int) -> bytes:
    return {64: b"\x12", 32: b"\x02"}.get(height, b"")


def _vertical_rows(height: int) -> bytes:
    return {64: b"\x40", 32: b"\x20"}.get(height, b"")


def init_sequence(height: int, flip: bool) -> bytes:
    """Command bytes that configure the panel and switch it on."""
    return b"".join(
        (
            bytes((DISPLAY_OFF, SET_MUX_RATIO)),
            _mux_ratio(height),
            bytes((SET_DISPLAY_OFFSET, 0x00, SET_DISPLAY_START_LINE)),
            bytes((SET_SEGMENT_REMAP_0 if flip else SET_SEGMENT_REMAP_1,)),
            bytes((SET_COM_SCAN_MODE, SET_DISPLAY_CLK_DIV, 0x80, SET_COM_PIN_MAP)),
            _com_pin_map(height),
            bytes(
                (
                    SET_CONTRAST,
                    0xFF,
                    DISPLAY_RAM,
                    SET_VCOMH_DESELECT,
                    0x40,
                    SET_MEMORY_ADDR_MODE,
                    SET_PAGE_ADDR_MODE,
                    SET_LOWER_COLUMN,
                    SET_HIGHER_COLUMN,
                    SET_CHARGE_PUMP,
                    0x14,
                    DEACTIVATE_SCROLL,
                    DISPLAY_NORMAL,
                    DISPLAY_ON,
                )
            ),
        )
    )


def addressing_sequence(
    page: int, seg: int, pages: int, flip: bool, offset_x: int = 0
) -> bytes:
    """Command bytes that place the write cursor at ``page`` and ``seg``.

    With ``flip`` the page order is reversed. ``offset_x`` shifts the
    column for panels whose visible area does not start at column 0.
    """
    if not 0 <= page < pages:
        raise ValueError(f"page must be in 0..{pages - 1}, got {page}")
    column = seg + offset_x
    if not 0 <= column <= 0xFF:
        raise ValueError(f"column must be in 0..255, got {column}")
    device_page = pages - page - 1 if flip else page
    return bytes(
        (
            SET_LOWER_COLUMN + (column & 0x0F),
            SET_HIGHER_COLUMN + ((column >> 4) & 0x0F),
            SET_PAGE_START | device_page,
        )
    )


def contrast_sequence(contrast: int) -> bytes:
    """Command bytes that set the contrast, clamped to 0..255."""
    level = min(max(contrast, 0), 0xFF)
    return bytes((SET_CONTRAST, level))


def _horizontal(command: int) -> bytes:
    return bytes((command, 0x00, 0x00, 0x07, 0x07, 0x00, 0xFF, ACTIVATE_SCROLL))


def _vertical(offset: int, height: int) -> bytes:
    return b"".join(
        (
            bytes((CONTINUOUS_SCROLL, 0x00, 0x00, 0x07, 0x00, offset, VERTICAL, 0x00)),
            _vertical_rows(height),
            bytes((ACTIVATE_SCROLL,)),
        )
    )


def hardware_scroll_sequence(scroll: ScrollType | int, height: int) -> bytes:
    """Command bytes that start or stop the panel's built-in scrolling.

    Page scroll types have no hardware counterpart and give no bytes.
    """
    kind = ScrollType(scroll)
    if kind is ScrollType.SCROLL_RIGHT:
        return _horizontal(HORIZONTAL_RIGHT)
    if kind is ScrollType.SCROLL_LEFT:
        return _horizontal(HORIZONTAL_LEFT)
    if kind is ScrollType.SCROLL_DOWN:
        return _vertical(0x3F, height)
    if kind is ScrollType.SCROLL_UP:
        return _vertical(0x01, height)
    if kind is ScrollType.SCROLL_STOP:
        return bytes((DEACTIVATE_SCROLL,))
    return b""