"""
Dense grid of monochrome glyph cells.

Every cell has the same width and height. All bits live in one flat list,
cell by cell in row-major order, and each cell is itself row-major:

    index = ((row * cols + col) * cell_height + y) * cell_width + x
"""


class Grid:
    """Fixed-size rows x cols grid of cell_width x cell_height bit masks."""

    def __init__(self, rows: int, cols: int, cell_width: int, cell_height: int):
        self._rows = rows
        self._cols = cols
        self._cell_width = cell_width
        self._cell_height = cell_height
        self._cell_size = cell_width * cell_height
        self._bits = [False] * (rows * cols * self._cell_size)

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def cell_width(self) -> int:
        return self._cell_width

    @property
    def cell_height(self) -> int:
        return self._cell_height

    def dimensions(self) -> tuple[int, int]:
        """Return (rows, cols)."""
        return self._rows, self._cols

    def cell_dimensions(self) -> tuple[int, int]:
        """Return (cell_width, cell_height)."""
        return self._cell_width, self._cell_height

    def image_size(self) -> tuple[int, int]:
        """Pixel (width, height) of the grid laid out as one image."""
        return self._cols * self._cell_width, self._rows * self._cell_height

    def __len__(self) -> int:
        return self._rows * self._cols

    def __repr__(self) -> str:
        return (
            f"Grid(rows={self._rows}, cols={self._cols}, "
            f"cell_width={self._cell_width}, cell_height={self._cell_height})"
        )

    def _cell_start(self, row: int, col: int) -> int:
        if not 0 <= row < self._rows:
            raise IndexError(f"row out of bounds: {row}")
        if not 0 <= col < self._cols:
            raise IndexError(f"column out of bounds: {col}")
        return (row * self._cols + col) * self._cell_size

    def set(self, row: int, col: int, x: int, y: int, value: bool):
        """Set bit (x, y) of cell (row, col)."""
        start = self._cell_start(row, col)
        if not 0 <= x < self._cell_width:
            raise IndexError(f"x out of bounds: {x}")
        if not 0 <= y < self._cell_height:
            raise IndexError(f"y out of bounds: {y}")
        self._bits[start + y * self._cell_width + x] = bool(value)

    def get(self, row: int, col: int) -> list[bool]:
        """Return the row-major mask of cell (row, col)."""
        start = self._cell_start(row, col)
        return self._bits[start:start + self._cell_size]
