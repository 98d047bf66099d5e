from collections import namedtuple

from bdfparse import FontError

"""
Encode parsed glyphs as an Adafruit-GFX style font: one flat bitmap blob, a
GFXglyph table that indexes into it, and the GFXfont summary record. The
header is plain C meant to be pasted into (or #included by) firmware.
"""

class EmptyFontError(FontError):
    def __init__(self):
        super().__init__("no glyphs found in input")

class RangeError(FontError):
    pass

GFXGlyph = namedtuple("GFXGlyph",
    ["bitmap_offset", "width", "height", "x_advance", "x_offset", "y_offset", "code"])

GFXFont = namedtuple("GFXFont", ["bitmaps", "glyphs", "first", "last", "y_advance"])

CTYPES = {
    "uint8_t": (0, 0xff),
    "int8_t": (-0x80, 0x7f),
    "uint16_t": (0, 0xffff),
}

# field name in the C structs -> its type
GLYPH_FIELDS = [
    ("bitmapOffset", "uint16_t"),
    ("width", "uint8_t"),
    ("height", "uint8_t"),
    ("xAdvance", "uint8_t"),
    ("xOffset", "int8_t"),
    ("yOffset", "int8_t"),
]

def check_range(name, value, ctype):
    lo, hi = CTYPES[ctype]
    if not lo <= value <= hi:
        raise RangeError("{} = {} does not fit in {} ({}..{})".format(
            name, value, ctype, lo, hi))

def pack_bitmaps(glyphs):
    """Concatenate glyph bitmaps in order, setting each glyph's bitmap_offset."""
    blob = bytearray()
    offset = 0
    for glyph in glyphs:
        glyph.bitmap_offset = offset
        blob += glyph.bitmap
        offset += len(glyph.bitmap)
    return blob

def encode_font(ascent, descent, glyphs):
    if not glyphs:
        raise EmptyFontError()
    bitmaps = pack_bitmaps(glyphs)
    table = []
    for glyph in glyphs:
        entry = GFXGlyph(glyph.bitmap_offset, glyph.width, glyph.height,
                         glyph.x_advance, glyph.x_offset, glyph.y_offset, glyph.code)
        for (name, ctype), value in zip(GLYPH_FIELDS, entry):
            check_range("0x{:04x} {}".format(glyph.code, name), value, ctype)
        table.append(entry)

    font = GFXFont(bitmaps, table, glyphs[0].code, glyphs[-1].code, ascent + descent)
    check_range("first", font.first, "uint16_t")
    check_range("last", font.last, "uint16_t")
    check_range("yAdvance", font.y_advance, "uint8_t")
    return font


HEADER = """\
// typedef struct {
//   uint16_t bitmapOffset;
//   uint8_t  width;
//   uint8_t  height;
//   uint8_t  xAdvance;
//   int8_t   xOffset;
//   int8_t   yOffset;
} GFXglyph;

// typedef struct {
//   uint8_t  *bitmap;
//   GFXglyph *glyph;
//   uint16_t  first;
//   uint16_t  last;
//   uint8_t   yAdvance;
} GFXfont;

"""

def format_header(font):
    out = [HEADER]

    # rows of one line height each, purely cosmetic
    per_row = font.y_advance
    out.append("const uint8_t FontBitmaps[] PROGMEM = {\n  ")
    for i, b in enumerate(font.bitmaps):
        if per_row > 0 and i > 0 and i % per_row == 0:
            out.append("\n  ")
        out.append("0x{:02X}, ".format(b))
    out.append("\n};\n\n")

    out.append("const GFXglyph FontGlyphs[] PROGMEM = {\n")
    for g in font.glyphs:
        out.append("  {{ {:5d}, {:2d}, {:2d}, {:2d}, {:3d}, {:3d} }}, // 0x{:04X}\n".format(
            g.bitmap_offset, g.width, g.height, g.x_advance, g.x_offset, g.y_offset, g.code))
    out.append("};\n\n")

    out.append("const GFXfont Font PROGMEM = {\n")
    out.append("  (uint8_t*)FontBitmaps,\n")
    out.append("  (GFXglyph*)FontGlyphs,\n")
    out.append("  0x{:x}, 0x{:x}, {}\n}};\n".format(font.first, font.last, font.y_advance))
    return "".join(out)

def write_header(f, font):
    f.write(format_header(font))
