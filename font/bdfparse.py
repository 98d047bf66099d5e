import binascii, sys
from enum import Enum

import magicopen

WARNING = "\033[1;31mWARNING\033[0m"

class FontError(Exception):
    """Base class for every fatal problem with an input font."""

class ParseError(FontError):
    def __init__(self, lineno, message):
        self.lineno = lineno
        self.message = message
        super().__init__("line {}: {}".format(lineno, message))

class ParseState(Enum):
    NONE=0
    SKIPCHAR=1
    CHAR=2
    BITMAP=3

class Glyph():
    def __init__(self, name=""):
        self.name = name
        self.code = None
        self.width = 0
        self.height = 0
        self.x_offset = 0
        self.bbx_y = 0
        self.x_advance = 0
        self.bitmap = bytearray()
        self.rows = 0
        self.y_offset = 0
        self.bitmap_offset = 0

    def bytes_per_row(self):
        return (self.width + 7) // 8

    def expected_len(self):
        return self.height * self.bytes_per_row()

    def __repr__(self):
        code = "None" if self.code is None else "0x{:04x}".format(self.code)
        return "Glyph({!r}, code={}, bbx={}x{}{:+d}{:+d})".format(
            self.name, code, self.width, self.height,
            self.x_offset, self.bbx_y)


def parse_int(lineno, words, index):
    if len(words) <= index:
        raise ParseError(lineno, "{} needs at least {} argument(s)".format(
            words[0], index))
    try:
        return int(words[index])
    except ValueError:
        raise ParseError(lineno, "{}: {!r} is not an integer".format(
            words[0], words[index])) from None

def parse_row(lineno, glyph, line):
    try:
        row = binascii.unhexlify(line)
    except (binascii.Error, ValueError) as e:
        raise ParseError(lineno, "bad bitmap row {!r} in {}: {}".format(
            line, glyph.name, e)) from None
    if len(row) != glyph.bytes_per_row():
        raise ParseError(lineno, "expected {} bytes per row in {}, got {}".format(
            glyph.bytes_per_row(), glyph.name, len(row)))
    return row

def finish_glyph(lineno, glyph, codes):
    if glyph.code is None:
        raise ParseError(lineno, "no ENCODING in {}".format(glyph.name))
    if glyph.code in codes:
        raise ParseError(lineno, "duplicate code 0x{:04x} in {} (first seen in {})"
                         .format(glyph.code, glyph.name, codes[glyph.code]))
    if glyph.rows != glyph.height:
        raise ParseError(lineno, "expected {} bitmap rows in {}, got {}".format(
            glyph.height, glyph.name, glyph.rows))
    glyph.y_offset = -(glyph.bbx_y + glyph.height)
    glyph.bitmap = bytes(glyph.bitmap)
    codes[glyph.code] = glyph.name
    return glyph


def parse_bdf(lines):
    """Parse BDF text into (ascent, descent, glyphs).

    lines is any iterable of text lines. Glyphs are returned sorted by code.
    Only the FONT_ASCENT, FONT_DESCENT, STARTCHAR, ENCODING, DWIDTH, BBX,
    BITMAP and ENDCHAR keywords are looked at, everything else is skipped.
    Glyphs with a negative ENCODING are dropped with a warning."""
    ascent = descent = 0
    glyphs = []
    codes = {}
    glyph = None
    state = ParseState.NONE
    lineno = 0
    for lineno, line in enumerate(lines, 1):
        if state == ParseState.BITMAP:
            line = line.strip()
            if line == "ENDCHAR":
                glyphs.append(finish_glyph(lineno, glyph, codes))
                glyph = None
                state = ParseState.NONE
            else:
                glyph.bitmap += parse_row(lineno, glyph, line)
                glyph.rows += 1
            continue

        words = line.split()
        if not words:
            continue
        keyword = words[0]

        if keyword == "FONT_ASCENT":
            ascent = parse_int(lineno, words, 1)
        elif keyword == "FONT_DESCENT":
            descent = parse_int(lineno, words, 1)
        elif state == ParseState.SKIPCHAR:
            if keyword == "STARTCHAR":
                raise ParseError(lineno, "STARTCHAR before ENDCHAR of {}".format(
                    glyph.name))
            if keyword == "ENDCHAR":
                glyph = None
                state = ParseState.NONE
        elif keyword == "STARTCHAR":
            if state == ParseState.CHAR:
                raise ParseError(lineno, "STARTCHAR before ENDCHAR of {}".format(
                    glyph.name))
            glyph = Glyph(" ".join(words[1:]))
            state = ParseState.CHAR
        elif state == ParseState.CHAR:
            if keyword == "ENCODING":
                glyph.code = parse_int(lineno, words, 1)
                if glyph.code < 0:
                    print(WARNING + " skipping unencoded glyph {}".format(glyph.name),
                          file=sys.stderr)
                    state = ParseState.SKIPCHAR
            elif keyword == "DWIDTH":
                glyph.x_advance = parse_int(lineno, words, 1)
                # vertical advance is validated but unused, GFX has a single yAdvance
                parse_int(lineno, words, 2)
                if glyph.x_advance < 0:
                    raise ParseError(lineno, "negative advance in {}".format(glyph.name))
            elif keyword == "BBX":
                glyph.width = parse_int(lineno, words, 1)
                glyph.height = parse_int(lineno, words, 2)
                glyph.x_offset = parse_int(lineno, words, 3)
                glyph.bbx_y = parse_int(lineno, words, 4)
                if glyph.width < 0 or glyph.height < 0:
                    raise ParseError(lineno, "negative bounding box in {}".format(
                        glyph.name))
            elif keyword == "BITMAP":
                glyph.bitmap = bytearray()
                glyph.rows = 0
                state = ParseState.BITMAP
            elif keyword == "ENDCHAR":
                raise ParseError(lineno, "ENDCHAR without BITMAP in {}".format(
                    glyph.name))

    if state != ParseState.NONE:
        raise ParseError(lineno, "end of input inside glyph {}".format(glyph.name))

    glyphs.sort(key=lambda g: g.code)
    return ascent, descent, glyphs


def read_bdf(fn):
    with magicopen.magic_open(fn, "rt", encoding="latin-1") as f:
        return parse_bdf(f)
