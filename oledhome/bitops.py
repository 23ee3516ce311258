"""Byte-level helpers for SSD1306 page images."""

from __future__ import annotations

from collections.abc import Iterable


def _check_byte(value: int, name: str = "value") -> int:
    if not 0 <= value <= 0xFF:
        raise ValueError(f"{name} must be in 0..255, got {value}")
    return value


def _check_bit(bit: int, name: str) -> int:
    if not 0 <= bit <= 7:
        raise ValueError(f"{name} must be in 0..7, got {bit}")
    return bit


def rotate_byte(value: int) -> int:
    """Reverse the bit order of one byte (0x12 becomes 0x48)."""
    _check_byte(value)
    result = 0
    for _ in range(8):
        result = (result << 1) | (value & 1)
        value >>= 1
    return result


def invert(data: Iterable[int]) -> bytes:
    """Return the bitwise complement of every byte."""
    return bytes(_check_byte(b) ^ 0xFF for b in data)


def flip(data: Iterable[int]) -> bytes:
    """Flip column bytes upside down by reversing the bits of each."""
    return bytes(rotate_byte(b) for b in data)


def copy_bit(src: int, src_bit: int, dst: int, dst_bit: int) -> int:
    """Return ``dst`` with bit ``dst_bit`` set to bit ``src_bit`` of ``src``."""
    _check_byte(src, "src")
    _check_byte(dst, "dst")
    _check_bit(src_bit, "src_bit")
    _check_bit(dst_bit, "dst_bit")
    mask = 1 << dst_bit
    if src & (1 << src_bit):
        return dst | mask
    return dst & ~mask & 0xFF


def rotate_image(image: Iterable[int], flip: bool) -> bytes:
    """Rotate an 8x8 column image a quarter turn, optionally flipping it.

    Column ``i`` of the result has bit ``7 - j`` set when bit ``i`` of
    column ``j`` of the input is set.
    """
    columns = bytes(_check_byte(b) for b in image)
    if len(columns) != 8:
        raise ValueError(f"image must have exactly 8 columns, got {len(columns)}")
    rotated = bytes(
        sum(0x80 >> j for j, column in enumerate(columns) if column & (1 << i))
        for i in range(8)
    )
    if flip:
        rotated = bytes(rotate_byte(b) for b in rotated)
    return rotated