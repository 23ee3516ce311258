"""8x8 bitmap font for basic Latin (U+0000 to U+007F) in column-major layout.

Each glyph is eight column bytes. Bit 0 of a column byte is the top pixel.
This matches the SSD1306 GDDRAM page layout, so glyphs can be written
straight into a display page.
"""

from __future__ import annotations

GLYPH_WIDTH = 8
GLYPH_COUNT = 128

_BLANK = "00 00 00 00 00 00 00 00"

_GLYPH_HEX: tuple[str, ...] = (
    _BLANK,                        # U+0000 (nul)
    "00 04 02 FF 02 04 00 00",     # U+0001 (up arrow)
    "00 20 40 FF 40 20 00 00",     # U+0002 (down arrow)
    *([_BLANK] * 29),              # U+0003 .. U+001F
    _BLANK,                        # U+0020 (space)
    "00 00 06 5F 5F 06 00 00",     # U+0021 (!)
    "00 03 03 00 03 03 00 00",     # U+0022 (")
    "14 7F 7F 14 7F 7F 14 00",     # U+0023 (#)
    "24 2E 6B 6B 3A 12 00 00",     # U+0024 ($)
    "46 66 30 18 0C 66 62 00",     # U+0025 (%)
    "30 7A 4F 5D 37 7A 48 00",     # U+0026 (&)
    "04 07 03 00 00 00 00 00",     # U+0027 (')
    "00 1C 3E 63 41 00 00 00",     # U+0028 (()
    "00 41 63 3E 1C 00 00 00",     # U+0029 ())
    "08 2A 3E 1C 1C 3E 2A 08",     # U+002A (*)
    "08 08 3E 3E 08 08 00 00",     # U+002B (+)
    "00 80 E0 60 00 00 00 00",     # U+002C (,)
    "08 08 08 08 08 08 00 00",     # U+002D (-)
    "00 00 60 60 00 00 00 00",     # U+002E (.)
    "60 30 18 0C 06 03 01 00",     # U+002F (/)
    "3E 7F 71 59 4D 7F 3E 00",     # U+0030 (0)
    "40 42 7F 7F 40 40 00 00",     # U+0031 (1)
    "62 73 59 49 6F 66 00 00",     # U+0032 (2)
    "22 63 49 49 7F 36 00 00",     # U+0033 (3)
    "18 1C 16 53 7F 7F 50 00",     # U+0034 (4)
    "27 67 45 45 7D 39 00 00",     # U+0035 (5)
    "3C 7E 4B 49 79 30 00 00",     # U+0036 (6)
    "03 03 71 79 0F 07 00 00",     # U+0037 (7)
    "36 7F 49 49 7F 36 00 00",     # U+0038 (8)
    "06 4F 49 69 3F 1E 00 00",     # U+0039 (9)
    "00 00 66 66 00 00 00 00",     # U+003A (:)
    "00 80 E6 66 00 00 00 00",     # U+003B (;)
    "08 1C 36 63 41 00 00 00",     # U+003C (<)
    "24 24 24 24 24 24 00 00",     # U+003D (=)
    "00 41 63 36 1C 08 00 00",     # U+003E (>)
    "02 03 51 59 0F 06 00 00",     # U+003F (?)
    "3E 7F 41 5D 5D 1F 1E 00",     # U+0040 (@)
    "7C 7E 13 13 7E 7C 00 00",     # U+0041 (A)
    "41 7F 7F 49 49 7F 36 00",     # U+0042 (B)
    "1C 3E 63 41 41 63 22 00",     # U+0043 (C)
    "41 7F 7F 41 63 3E 1C 00",     # U+0044 (D)
    "41 7F 7F 49 5D 41 63 00",     # U+0045 (E)
    "41 7F 7F 49 1D 01 03 00",     # U+0046 (F)
    "1C 3E 63 41 51 73 72 00",     # U+0047 (G)
    "7F 7F 08 08 7F 7F 00 00",     # U+0048 (H)
    "00 41 7F 7F 41 00 00 00",     # U+0049 (I)
    "30 70 40 41 7F 3F 01 00",     # U+004A (J)
    "41 7F 7F 08 1C 77 63 00",     # U+004B (K)
    "41 7F 7F 41 40 60 70 00",     # U+004C (L)
    "7F 7F 0E 1C 0E 7F 7F 00",     # U+004D (M)
    "7F 7F 06 0C 18 7F 7F 00",     # U+004E (N)
    "1C 3E 63 41 63 3E 1C 00",     # U+004F (O)
    "41 7F 7F 49 09 0F 06 00",     # U+0050 (P)
    "1E 3F 21 71 7F 5E 00 00",     # U+0051 (Q)
    "41 7F 7F 09 19 7F 66 00",     # U+0052 (R)
    "26 6F 4D 59 73 32 00 00",     # U+0053 (S)
    "03 41 7F 7F 41 03 00 00",     # U+0054 (T)
    "7F 7F 40 40 7F 7F 00 00",     # U+0055 (U)
    "1F 3F 60 60 3F 1F 00 00",     # U+0056 (V)
    "7F 7F 30 18 30 7F 7F 00",     # U+0057 (W)
    "43 67 3C 18 3C 67 43 00",     # U+0058 (X)
    "07 4F 78 78 4F 07 00 00",     # U+0059 (Y)
    "47 63 71 59 4D 67 73 00",     # U+005A (Z)
    "00 7F 7F 41 41 00 00 00",     # U+005B ([)
    "01 03 06 0C 18 30 60 00",     # U+005C (backslash)
    "00 41 41 7F 7F 00 00 00",     # U+005D (])
    "08 0C 06 03 06 0C 08 00",     # U+005E (^)
    "80 80 80 80 80 80 80 80",     # U+005F (_)
    "00 00 03 07 04 00 00 00",     # U+0060 (`)
    "20 74 54 54 3C 78 40 00",     # U+0061 (a)
    "41 7F 3F 48 48 78 30 00",     # U+0062 (b)
    "38 7C 44 44 6C 28 00 00",     # U+0063 (c)
    "30 78 48 49 3F 7F 40 00",     # U+0064 (d)
    "38 7C 54 54 5C 18 00 00",     # U+0065 (e)
    "48 7E 7F 49 03 02 00 00",     # U+0066 (f)
    "98 BC A4 A4 F8 7C 04 00",     # U+0067 (g)
    "41 7F 7F 08 04 7C 78 00",     # U+0068 (h)
    "00 44 7D 7D 40 00 00 00",     # U+0069 (i)
    "60 E0 80 80 FD 7D 00 00",     # U+006A (j)
    "41 7F 7F 10 38 6C 44 00",     # U+006B (k)
    "00 41 7F 7F 40 00 00 00",     # U+006C (l)
    "7C 7C 18 38 1C 7C 78 00",     # U+006D (m)
    "7C 7C 04 04 7C 78 00 00",     # U+006E (n)
    "38 7C 44 44 7C 38 00 00",     # U+006F (o)
    "84 FC F8 A4 24 3C 18 00",     # U+0070 (p)
    "18 3C 24 A4 F8 FC 84 00",     # U+0071 (q)
    "44 7C 78 4C 04 1C 18 00",     # U+0072 (r)
    "48 5C 54 54 74 24 00 00",     # U+0073 (s)
    "00 04 3E 7F 44 24 00 00",     # U+0074 (t)
    "3C 7C 40 40 3C 7C 40 00",     # U+0075 (u)
    "1C 3C 60 60 3C 1C 00 00",     # U+0076 (v)
    "3C 7C 70 38 70 7C 3C 00",     # U+0077 (w)
    "44 6C 38 10 38 6C 44 00",     # U+0078 (x)
    "9C BC A0 A0 FC 7C 00 00",     # U+0079 (y)
    "4C 64 74 5C 4C 64 00 00",     # U+007A (z)
    "08 08 3E 77 41 41 00 00",     # U+007B ({)
    "00 00 00 77 77 00 00 00",     # U+007C (|)
    "41 41 77 3E 08 08 00 00",     # U+007D (})
    "02 03 01 03 02 03 01 00",     # U+007E (~)
    _BLANK,                        # U+007F
)

FONT8X8: tuple[bytes, ...] = tuple(bytes.fromhex(h) for h in _GLYPH_HEX)

assert len(FONT8X8) == GLYPH_COUNT


def glyph(code: int | str) -> bytes:
    """Return the eight column bytes for a character or code point.

    ``code`` is either a one-character string or an integer code point.
    Raises ValueError for code points outside 0..127 and TypeError for
    anything that is neither an int nor a one-character string.
    """
    if isinstance(code, str):
        if len(code) != 1:
            raise ValueError(f"expected a single character, got {code!r}")
        point = ord(code)
    elif isinstance(code, int) and not isinstance(code, bool):
        point = code
    else:
        raise TypeError(f"glyph code must be int or str, not {type(code).__name__}")
    if not 0 <= point < GLYPH_COUNT:
        raise ValueError(f"code point {point} is outside the basic Latin font")
    return FONT8X8[point]