"""Generate ASCII font palettes for roguelike engines."""

from .charsets import CharsetError, load_charset
from .exporter import Exporter
from .fonts import FontFormatError
from .grid import Grid
from .rasterizer import Rasterizer

__version__ = "0.1.0"

__all__ = [
    "CharsetError",
    "Exporter",
    "FontFormatError",
    "Grid",
    "Rasterizer",
    "load_charset",
]
