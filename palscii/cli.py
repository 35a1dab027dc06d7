"""
palscii - generate ASCII font palettes for roguelike engines.

Takes a font file and makes a PNG palette: a grid of fixed-size cells, one
character per cell, each glyph scaled to fit its cell.

Usage:
    palscii --input VT323-Regular.ttf --output palette.png
    palscii --format otf --rows 8 --cols 16 --charset ascii < Font.otf > palette.png

If --input is omitted the font is read from stdin and --format is required.
If --output is omitted the PNG is written to stdout.
"""

import argparse
import sys
import warnings

from . import charsets
from .charsets import CharsetError
from .exporter import Exporter
from .fonts import FORMATS, FontFormatError, check_format, describe, missing_characters, resolve_format
from .grid import Grid
from .rasterizer import Rasterizer

DEFAULT_ROWS = 16
DEFAULT_COLS = 16
DEFAULT_CELL_WIDTH = 8
DEFAULT_CELL_HEIGHT = 16


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {number}")
    return number


def non_negative_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}") from None
    if number < 0:
        raise argparse.ArgumentTypeError(f"must not be negative: {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="palscii",
        description="Generate ASCII font palettes for roguelike engines.",
    )
    p.add_argument("-i", "--input",
                   help="font file to read; stdin if omitted")
    p.add_argument("-f", "--format", type=str.lower, choices=FORMATS,
                   help="input format; inferred from --input, required for stdin")
    p.add_argument("-o", "--output",
                   help="PNG file to write; stdout if omitted")
    p.add_argument("--rows", type=positive_int, default=DEFAULT_ROWS)
    p.add_argument("--cols", type=positive_int, default=DEFAULT_COLS)
    p.add_argument("--cell-width", type=positive_int, default=DEFAULT_CELL_WIDTH)
    p.add_argument("--cell-height", type=positive_int, default=DEFAULT_CELL_HEIGHT)
    p.add_argument("--face-index", type=non_negative_int, default=0,
                   help="face to use from a .ttc collection")
    chars = p.add_mutually_exclusive_group()
    chars.add_argument("--charset",
                       help=f"built-in character set name or path to a .yaml file "
                            f"(default: {charsets.DEFAULT_CHARSET})")
    chars.add_argument("--chars",
                       help="characters to render, in grid order")
    p.add_argument("--list-charsets", action="store_true",
                   help="print the built-in character sets and exit")
    p.add_argument("-q", "--quiet", action="store_true",
                   help="do not print a summary to stderr")
    p.add_argument("-v", "--verbose", action="store_true",
                   help="show glyph fit warnings")
    return p


def read_font(path: str | None) -> bytes:
    if path is None:
        return sys.stdin.buffer.read()
    with open(path, "rb") as f:
        return f.read()


def write_image(data: bytes, path: str | None):
    if path is None:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
        return
    with open(path, "wb") as f:
        f.write(data)


def run(args) -> bytes:
    """Render the palette described by parsed arguments; return PNG bytes."""
    fmt = resolve_format(args.format, args.input)
    if args.chars is not None:
        characters = args.chars
    else:
        characters = charsets.load_charset(args.charset or charsets.DEFAULT_CHARSET)
    characters = charsets.fit_to_grid(characters, args.rows, args.cols)

    data = read_font(args.input)
    check_format(data, fmt)
    rasterizer = Rasterizer.load_from_bytes(data, args.face_index)
    info = describe(data, args.face_index)

    grid = Grid(args.rows, args.cols, args.cell_width, args.cell_height)
    rasterizer.render_to(characters, grid)
    png = Exporter.from_grid(grid).to_bytes()

    if not args.quiet:
        width, height = grid.image_size()
        missing = missing_characters(info, characters)
        print(f"Font: {info.family or rasterizer.family_name} ({fmt})", file=sys.stderr)
        print(f"  Grid: {args.rows}x{args.cols} cells of {args.cell_width}x{args.cell_height}",
              file=sys.stderr)
        print(f"  Image: {width}x{height} pixels", file=sys.stderr)
        if missing:
            print(f"  Missing glyphs: {len(missing)} ({''.join(missing[:16])}"
                  f"{'...' if len(missing) > 16 else ''})", file=sys.stderr)

    return png


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.list_charsets:
        for name in charsets.available():
            print(name)
        return 0

    with warnings.catch_warnings():
        if not args.verbose:
            warnings.filterwarnings("ignore", category=RuntimeWarning,
                                    module=r"palscii\.rasterizer")
        try:
            png = run(args)
            write_image(png, args.output)
        except (OSError, FontFormatError, CharsetError) as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

    if not args.quiet and args.output is not None:
        print(f"Palette saved to: {args.output}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
