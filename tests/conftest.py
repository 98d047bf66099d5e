import pytest


def glyph_block(code, rows, *, name=None, bbx=None, dwidth=None):
    """One STARTCHAR..ENDCHAR block. bbx defaults to 8 x len(rows) at 0,0."""
    if bbx is None:
        bbx = (8, len(rows), 0, 0)
    if dwidth is None:
        dwidth = bbx[0]
    lines = [
        "STARTCHAR {}".format(name or "U+{:04X}".format(code)),
        "ENCODING {}".format(code),
        "SWIDTH 500 0",
        "DWIDTH {} 0".format(dwidth),
        "BBX {} {} {} {}".format(*bbx),
        "BITMAP",
    ]
    lines.extend(rows)
    lines.append("ENDCHAR")
    return "\n".join(lines)


def bdf_text(*blocks, ascent=8, descent=0):
    head = [
        "STARTFONT 2.1",
        "FONT -misc-test-medium-r-normal--8-80-75-75-c-80-iso10646-1",
        "SIZE 8 75 75",
        "FONTBOUNDINGBOX 8 8 0 0",
        "STARTPROPERTIES 2",
        "FONT_ASCENT {}".format(ascent),
        "FONT_DESCENT {}".format(descent),
        "ENDPROPERTIES",
        "CHARS {}".format(len(blocks)),
    ]
    return "\n".join(head + list(blocks) + ["ENDFONT", ""])


@pytest.fixture
def make_glyph():
    return glyph_block


@pytest.fixture
def make_bdf():
    return bdf_text


@pytest.fixture
def two_glyph_bdf():
    # B before A in file order
    return bdf_text(
        glyph_block(66, ["FC", "82", "FC", "82", "FC"], bbx=(7, 5, 0, 0), dwidth=8),
        glyph_block(65, ["FF"] * 8),
    )
