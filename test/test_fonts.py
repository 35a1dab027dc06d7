import struct

import pytest

from palscii import fonts
from palscii.cli import main
from palscii.fonts import (
    FontFormatError,
    check_format,
    describe,
    infer_format,
    missing_characters,
    resolve_format,
    sniff_container,
)


@pytest.mark.parametrize("path,expected", [
    ("fonts/VT323-Regular.ttf", "ttf"),
    ("SourceCodePro-Regular.OTF", "otf"),
    ("Collection.ttc", "ttc"),
    ("font.woff2", None),
    ("font", None),
    (None, None),
])
def test_infer_format(path, expected):
    assert infer_format(path) == expected


def test_explicit_format_wins():
    assert resolve_format("otf", "font.ttf") == "otf"
    assert resolve_format("TTC", None) == "ttc"


def test_format_inferred_from_input_path():
    assert resolve_format(None, "font.ttf") == "ttf"


def test_format_required_for_stdin():
    with pytest.raises(FontFormatError, match="stdin"):
        resolve_format(None, None)


def test_format_not_inferable():
    with pytest.raises(FontFormatError, match="infer"):
        resolve_format(None, "font.woff")


def test_unknown_explicit_format():
    with pytest.raises(FontFormatError, match="Unsupported format"):
        resolve_format("bdf", "font.ttf")


def test_sniff_container(font_paths):
    assert sniff_container(font_paths["otf"].read_bytes()) == "sfnt"
    assert sniff_container(font_paths["ttf"].read_bytes()) == "sfnt"
    assert sniff_container(font_paths["ttc"].read_bytes()) == "collection"


def test_sniff_rejects_other_data():
    with pytest.raises(FontFormatError):
        sniff_container(b"GIF89a")


def test_check_format_accepts_matching_container(font_paths):
    for fmt in ("otf", "ttf", "ttc"):
        check_format(font_paths[fmt].read_bytes(), fmt)


def test_check_format_rejects_mismatch(font_paths):
    with pytest.raises(FontFormatError, match="collection"):
        check_format(font_paths["ttc"].read_bytes(), "ttf")
    with pytest.raises(FontFormatError, match="sfnt"):
        check_format(font_paths["otf"].read_bytes(), "ttc")


def test_describe_single_font(otf_path):
    info = describe(otf_path.read_bytes())

    assert info.family == "Palscii Test"
    assert info.face_count == 1
    assert {0x20, 0x2E, 0x41, 0x57} <= info.codepoints
    assert 0x78 not in info.codepoints


def test_describe_collection(ttc_path):
    info = describe(ttc_path.read_bytes(), face_index=1)

    assert info.face_count == 2
    assert info.family == "Palscii Test"


def test_describe_face_out_of_range(ttc_path):
    with pytest.raises(FontFormatError, match="out of range"):
        describe(ttc_path.read_bytes(), face_index=2)


def test_missing_characters(ttf_bytes):
    info = describe(ttf_bytes)

    assert missing_characters(info, "AxW.yx \x01") == ["x", "y"]


def test_describe_damaged_tables(ttf_bytes, monkeypatch):
    def damaged(*args, **kwargs):
        raise struct.error("unpack requires a buffer of 6 bytes")

    monkeypatch.setattr(fonts, "TTFont", damaged)

    with pytest.raises(FontFormatError, match="Unreadable font tables"):
        describe(ttf_bytes)


def test_damaged_tables_reported_by_cli(ttf_path, tmp_path, monkeypatch, capsys):
    def damaged(*args, **kwargs):
        raise KeyError("cmap")

    monkeypatch.setattr(fonts, "TTFont", damaged)
    out = tmp_path / "palette.png"

    assert main(["-i", str(ttf_path), "-o", str(out)]) == 1
    assert not out.exists()
    assert "Error: Unreadable font tables" in capsys.readouterr().err
