"""
Rasterize glyphs into grid cells.

Each character is scaled so its rendered bounding box fits the cell, drawn
with FreeType (unhinted), reduced to ink / no ink and centered in its cell.
"""

import io
import warnings
from collections import namedtuple
from pathlib import Path

import freetype
from freetype.ft_errors import FT_Exception

from .fonts import FontFormatError
from .grid import Grid

# Glyphs whose probe box is empty never draw anything, so any size will do.
EMPTY_GLYPH_SIZE = 1.0

# Hinting snaps outlines to the pixel grid, which would make the probe
# metrics disagree with the final bitmap.
LOAD_FLAGS = freetype.FT_LOAD_NO_HINTING | freetype.FT_LOAD_NO_BITMAP

GlyphMetrics = namedtuple("GlyphMetrics", ["width", "height"])
GlyphBitmap = namedtuple("GlyphBitmap", ["width", "height", "coverage"])


def _floor_pixel(value: int) -> int:
    return value >> 6


def _ceil_pixel(value: int) -> int:
    return (value + 63) >> 6


class Rasterizer:
    """Owns a parsed font face and renders characters into a Grid."""

    def __init__(self, face: freetype.Face):
        self._face = face

    @classmethod
    def load_from_path(cls, path, face_index: int = 0) -> "Rasterizer":
        """Load a font file. Raises OSError or FontFormatError."""
        with open(Path(path), "rb") as f:
            return cls.load_from(f, face_index)

    @classmethod
    def load_from(cls, stream, face_index: int = 0) -> "Rasterizer":
        """Load a font from any binary stream, reading it to the end."""
        return cls.load_from_bytes(stream.read(), face_index)

    @classmethod
    def load_from_bytes(cls, data: bytes, face_index: int = 0) -> "Rasterizer":
        try:
            face = freetype.Face(io.BytesIO(data), face_index)
        except FT_Exception as e:
            raise FontFormatError(f"Not a usable font: {e}") from e
        if not face.is_scalable:
            raise FontFormatError("Font has no scalable outlines")
        return cls(face)

    @property
    def family_name(self) -> str:
        name = self._face.family_name
        return name.decode("utf-8", "replace") if name else ""

    def _load(self, char: str, size: float, flags: int):
        size_26_6 = max(1, round(size * 64))
        self._face.set_char_size(size_26_6, size_26_6, 72, 72)
        self._face.load_char(ord(char), flags)
        return self._face.glyph

    def metrics(self, char: str, size: float) -> GlyphMetrics:
        """
        Pixel bounding box of `char` at `size` pixels per em.

        Computed from the outline control box, so nothing is rendered.
        """
        glyph = self._load(char, size, LOAD_FLAGS)
        if glyph.outline.n_points == 0:
            return GlyphMetrics(0, 0)
        cbox = glyph.outline.get_cbox()
        width = _ceil_pixel(cbox.xMax) - _floor_pixel(cbox.xMin)
        height = _ceil_pixel(cbox.yMax) - _floor_pixel(cbox.yMin)
        return GlyphMetrics(width, height)

    def rasterize(self, char: str, size: float) -> GlyphBitmap:
        """Render `char` at `size` and return its coverage bitmap."""
        glyph = self._load(char, size, LOAD_FLAGS | freetype.FT_LOAD_RENDER)
        bitmap = glyph.bitmap
        width, height, pitch = bitmap.width, bitmap.rows, bitmap.pitch
        if width == 0 or height == 0:
            return GlyphBitmap(width, height, [])
        buffer = bitmap.buffer
        coverage = []
        for y in range(height):
            coverage.extend(buffer[y * pitch:y * pitch + width])
        return GlyphBitmap(width, height, coverage)

    def render_size(self, char: str, cell_width: int, cell_height: int) -> float:
        """
        Largest size at which `char` fits a cell_width x cell_height cell.

        The probe is taken at cell_width pixels per em. The axis where the
        probe box is larger decides the scale, and the size is that scale
        applied to the cell dimension of the same axis.
        """
        return self._fit(char, cell_width, cell_height)[0]

    def _fit(self, char: str, cell_width: int, cell_height: int) -> tuple[float, str | None]:
        """Return (size, binding axis). The axis is None for empty glyphs."""
        probe = self.metrics(char, cell_width)
        if probe.width == 0 or probe.height == 0:
            return EMPTY_GLYPH_SIZE, None

        if probe.width > probe.height:
            return (cell_width / probe.width) * cell_width, "width"
        return (cell_height / probe.height) * cell_height, "height"

    def rasterize_to_fit(self, char: str, cell_width: int, cell_height: int) -> GlyphBitmap:
        """Rasterize `char` at its render size for the given cell."""
        size, binding = self._fit(char, cell_width, cell_height)
        glyph = self.rasterize(char, size)

        # The binding axis fits by construction; the other one may not.
        if __debug__ and binding is not None:
            if binding == "width":
                axis, actual, limit = "height", glyph.height, cell_height
            else:
                axis, actual, limit = "width", glyph.width, cell_width
            if actual > limit:
                warnings.warn(
                    f"Glyph {char!r} at size {size:.3f}: {axis} {actual} "
                    f"exceeds cell {axis} {limit}",
                    RuntimeWarning,
                    stacklevel=2,
                )

        return glyph

    def render_to(self, characters, grid: Grid):
        """
        Fill every cell of `grid` with the matching character.

        Characters map to cells in row-major order. Bitmaps larger than the
        cell are cropped to their top-left corner, then centered.
        """
        rows, cols = grid.dimensions()
        cell_width, cell_height = grid.cell_dimensions()
        characters = list(characters)

        if len(characters) != rows * cols:
            raise ValueError(
                f"dimension mismatch - cannot render {len(characters)} glyph(s) "
                f"to {rows}x{cols} grid"
            )

        for index, char in enumerate(characters):
            row, col = divmod(index, cols)
            glyph = self.rasterize_to_fit(char, cell_width, cell_height)

            glyph_width = min(glyph.width, cell_width)
            glyph_height = min(glyph.height, cell_height)
            offset_x = (cell_width - glyph_width) // 2
            offset_y = (cell_height - glyph_height) // 2

            for y in range(glyph_height):
                line = y * glyph.width
                for x in range(glyph_width):
                    grid.set(row, col, x + offset_x, y + offset_y, glyph.coverage[line + x] > 0)
