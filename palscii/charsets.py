"""
Character sets: the ordered characters that fill a grid.

A character set is a YAML file with a `rows` list of strings, read in order
and concatenated. Built-in sets live in the package's data directory.
"""

from pathlib import Path

import yaml

DATA_DIR = Path(__file__).parent / "data"
DEFAULT_CHARSET = "cp437"
PAD_CHARACTER = " "


class CharsetError(ValueError):
    """A character set could not be found, parsed or fitted to the grid."""


def available() -> list[str]:
    """Names of the built-in character sets."""
    return sorted(path.stem for path in DATA_DIR.glob("*.yaml"))


def _resolve(name_or_path) -> Path:
    path = Path(name_or_path)
    if path.suffix in (".yaml", ".yml"):
        return path
    builtin = DATA_DIR / f"{name_or_path}.yaml"
    if not builtin.exists():
        raise CharsetError(
            f"Unknown character set {name_or_path!r}, "
            f"available: {', '.join(available())}"
        )
    return builtin


def load_charset(name_or_path) -> str:
    """Load a built-in set by name, or a set from a .yaml file."""
    path = _resolve(name_or_path)
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        raise CharsetError(f"Character set file not found: {path}") from None
    except yaml.YAMLError as e:
        raise CharsetError(f"Invalid character set file {path}: {e}") from e

    if not isinstance(data, dict) or "rows" not in data:
        raise CharsetError(f"Character set {path} has no 'rows' list")
    rows = data["rows"]
    if not isinstance(rows, list):
        raise CharsetError(f"Character set {path}: 'rows' must be a list")
    for row_idx, row in enumerate(rows):
        if not isinstance(row, str):
            raise CharsetError(
                f"Character set {path}: row {row_idx} is not a string: {row!r}"
            )
    return "".join(rows)


def fit_to_grid(characters, rows: int, cols: int) -> list[str]:
    """
    Return exactly rows * cols characters.

    Short sets are padded with spaces, which render as empty cells.
    """
    characters = list(characters)
    capacity = rows * cols
    if len(characters) > capacity:
        raise CharsetError(
            f"{len(characters)} characters do not fit a {rows}x{cols} grid "
            f"({capacity} cells)"
        )
    return characters + [PAD_CHARACTER] * (capacity - len(characters))
