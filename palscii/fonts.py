"""
Font container formats and character coverage.

FreeType does the rendering; fontTools is used here to look inside the
container: which flavor it is, how many faces a collection holds, what the
family is called and which characters have glyphs.
"""

import io
from collections import namedtuple
from pathlib import Path

from fontTools.ttLib import TTCollection, TTFont, TTLibError

FORMATS = ("otf", "ttf", "ttc")

COLLECTION_TAG = b"ttcf"
SFNT_TAGS = (b"OTTO", b"\x00\x01\x00\x00", b"true")

FontInfo = namedtuple("FontInfo", ["family", "face_count", "codepoints"])


class FontFormatError(ValueError):
    """Font data is not a supported or valid font container."""


def infer_format(path) -> str | None:
    """Format named by a file's suffix, or None if it isn't one we know."""
    if path is None:
        return None
    suffix = Path(path).suffix.lower().lstrip(".")
    return suffix if suffix in FORMATS else None


def resolve_format(explicit: str | None, path=None) -> str:
    """
    Decide the input format.

    An explicit format always wins. Otherwise it is inferred from the input
    file name; with neither available the format is unknown and that is an
    error.
    """
    if explicit is not None:
        fmt = explicit.lower().lstrip(".")
        if fmt not in FORMATS:
            raise FontFormatError(
                f"Unsupported format {explicit!r}, expected one of: {', '.join(FORMATS)}"
            )
        return fmt

    fmt = infer_format(path)
    if fmt is None:
        if path is None:
            raise FontFormatError("Input format is required when reading from stdin")
        raise FontFormatError(f"Cannot infer font format from file name: {path}")
    return fmt


def sniff_container(data: bytes) -> str:
    """Return "collection" or "sfnt" from the header tag."""
    tag = data[:4]
    if tag == COLLECTION_TAG:
        return "collection"
    if tag in SFNT_TAGS:
        return "sfnt"
    raise FontFormatError("Not a TrueType or OpenType font (bad sfnt version)")


def check_format(data: bytes, fmt: str):
    """Make sure the container matches the declared format."""
    container = sniff_container(data)
    expected = "collection" if fmt == "ttc" else "sfnt"
    if container != expected:
        raise FontFormatError(f"Font data is a {container}, but format is {fmt}")


def describe(data: bytes, face_index: int = 0) -> FontInfo:
    """Family name, face count and mapped code points of one face."""
    try:
        if sniff_container(data) == "collection":
            face_count = len(TTCollection(io.BytesIO(data), lazy=True).fonts)
        else:
            face_count = 1
        if not 0 <= face_index < face_count:
            raise FontFormatError(
                f"Face index {face_index} out of range, font has {face_count} face(s)"
            )
        font = TTFont(io.BytesIO(data), fontNumber=face_index, lazy=True)
        family = font["name"].getBestFamilyName() if "name" in font else None
        cmap = font.getBestCmap() or {}
    except FontFormatError:
        raise
    except TTLibError as e:
        raise FontFormatError(str(e)) from e
    except Exception as e:
        # fontTools reports damaged tables with struct.error, KeyError and others
        raise FontFormatError(f"Unreadable font tables: {e!r}") from e

    return FontInfo(family or "", face_count, frozenset(cmap))


def missing_characters(info: FontInfo, characters) -> list[str]:
    """Distinct printable characters with no glyph in the font, in order."""
    missing = []
    seen = set()
    for char in characters:
        if char in seen or not char.isprintable() or char.isspace():
            continue
        seen.add(char)
        if ord(char) not in info.codepoints:
            missing.append(char)
    return missing
