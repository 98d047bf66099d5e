#!/usr/bin/env python3

import argparse, sys

import bdfparse, gfxfont, magicopen

def parse_args(argv=None):
    a = argparse.ArgumentParser(
            prog="bdf2gfx",
            description="Convert a BDF font to an Adafruit-GFX C header: one flat " +
            "bitmap array, a GFXglyph table indexing into it, and a GFXfont record.",
            epilog="The input can be plain, or in gz, bz2, or xz compressed format")
    a.add_argument("input", metavar="input.bdf",
            help="BDF file to convert")
    a.add_argument("output", metavar="output.h",
            help="header file to write")
    return a.parse_args(argv)

def convert(infile, outfile):
    ascent, descent, glyphs = bdfparse.read_bdf(infile)
    font = gfxfont.encode_font(ascent, descent, glyphs)
    # encode and range-check before touching the output, so a failed run leaves no file
    with magicopen.magic_open(outfile, "wt") as of:
        gfxfont.write_header(of, font)
    return font

def main(argv=None):
    options = parse_args(argv)
    try:
        font = convert(options.input, options.output)
    except (bdfparse.FontError, OSError) as e:
        print(f"bdf2gfx: error: {e}", file=sys.stderr)
        sys.exit(1)

    print(f"{len(font.glyphs)} glyphs, {len(font.bitmaps)} bitmap bytes," +
          f" codes 0x{font.first:04x}-0x{font.last:04x}, yAdvance {font.y_advance}")


if __name__ == "__main__":
    main()
