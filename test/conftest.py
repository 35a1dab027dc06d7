import io
from pathlib import Path

import pytest

from fontgen import build_collection, build_font, load_glyph_data

from palscii.rasterizer import Rasterizer

HERE = Path(__file__).resolve().parent
GLYPH_DATA_PATH = HERE / "test_glyphs.yaml"


@pytest.fixture(scope="session")
def font_paths(tmp_path_factory):
    """Paths to the generated test fonts, keyed by format."""
    out_dir = tmp_path_factory.mktemp("fonts")
    glyph_data = load_glyph_data(GLYPH_DATA_PATH)

    paths = {
        "otf": out_dir / "PalsciiTest.otf",
        "ttf": out_dir / "PalsciiTest.ttf",
        "ttc": out_dir / "PalsciiTest.ttc",
    }
    build_font(glyph_data, paths["otf"], flavor="otf")
    build_font(glyph_data, paths["ttf"], flavor="ttf")
    build_collection([paths["ttf"], paths["otf"]], paths["ttc"])
    return paths


@pytest.fixture(scope="session")
def otf_path(font_paths):
    return font_paths["otf"]


@pytest.fixture(scope="session")
def ttf_path(font_paths):
    return font_paths["ttf"]


@pytest.fixture(scope="session")
def ttc_path(font_paths):
    return font_paths["ttc"]


@pytest.fixture(scope="session")
def ttf_bytes(ttf_path):
    return ttf_path.read_bytes()


@pytest.fixture(params=["otf", "ttf"])
def rasterizer(request, font_paths):
    """A Rasterizer over each single-face test font."""
    return Rasterizer.load_from(io.BytesIO(font_paths[request.param].read_bytes()))
