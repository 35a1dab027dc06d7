"""
Turn a filled Grid into an RGBA image and write it as PNG.
"""

import io

from PIL import Image

from .grid import Grid

FOREGROUND = (255, 255, 255, 255)
BACKGROUND = (0, 0, 0, 0)

# zlib level 1: fastest; PNG stays lossless at any level.
COMPRESS_LEVEL = 1


class Exporter:
    """Pixel buffer built from a Grid, one opaque white pixel per set bit."""

    def __init__(self, image: Image.Image):
        self.image = image

    @classmethod
    def from_grid(cls, grid: Grid) -> "Exporter":
        rows, cols = grid.dimensions()
        cell_width, cell_height = grid.cell_dimensions()

        image = Image.new("RGBA", grid.image_size(), BACKGROUND)
        pixels = image.load()
        for row in range(rows):
            for col in range(cols):
                cell = grid.get(row, col)
                base_x = col * cell_width
                base_y = row * cell_height
                for y in range(cell_height):
                    for x in range(cell_width):
                        if cell[y * cell_width + x]:
                            pixels[base_x + x, base_y + y] = FOREGROUND

        return cls(image)

    @property
    def size(self) -> tuple[int, int]:
        """Pixel (width, height)."""
        return self.image.size

    def pixels(self) -> list[tuple[int, int, int, int]]:
        """All pixels in row-major order."""
        width, height = self.image.size
        access = self.image.load()
        return [access[x, y] for y in range(height) for x in range(width)]

    def write_to(self, sink):
        """Encode as PNG into a binary file object."""
        self.image.save(sink, format="PNG", compress_level=COMPRESS_LEVEL)

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.write_to(buffer)
        return buffer.getvalue()
