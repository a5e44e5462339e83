import pytest
import numpy as np

from src.branding.color import DominantColorExtractor, hex_to_rgb, is_dark, lighter_color, rgb_to_hex
from src.domain.contracts import ColorExtractionConfig
from src.domain.raster_image import RasterImage


def solid(rgb, height=40, width=50, alpha=255):
    pixels = np.empty((height, width, 4), dtype=np.uint8)
    pixels[:, :, :3] = rgb
    pixels[:, :, 3] = alpha
    return pixels


@pytest.fixture
def extractor():
    return DominantColorExtractor()


# ============================================================================
# HEX ↔ RGB
# ============================================================================

@pytest.mark.parametrize("hex_color", ["#000000", "#ffffff", "#1a2b3c", "#c81e1e"])
def test_hex_roundtrip(hex_color):
    assert rgb_to_hex(*hex_to_rgb(hex_color)) == hex_color


def test_hex_parsing_is_case_insensitive():
    assert hex_to_rgb("#FFaa00") == (255, 170, 0)


@pytest.mark.parametrize("value", ["ffffff", "#fff", "#gggggg", "#1234567", " #123456", "#123456\n", "", None, 123])
def test_hex_parsing_rejects_non_strict(value):
    assert hex_to_rgb(value) is None


def test_rgb_to_hex_range_check():
    with pytest.raises(ValueError):
        rgb_to_hex(256, 0, 0)


@pytest.mark.parametrize("hex_color, expected", [
    ("#000000", True),
    ("#ffffff", False),
    ("#7f7f7f", True),      # 127 < 128
    ("#808080", False),     # 128
    ("#0000ff", True),      # 0.114 * 255 ≈ 29
    ("not a color", False),
])
def test_is_dark(hex_color, expected):
    assert is_dark(hex_color) is expected


def test_lighter_color():
    assert lighter_color("#1a2b3c") == "rgba(26, 43, 60, 0.1)"
    assert lighter_color("#1a2b3c", 0.5) == "rgba(26, 43, 60, 0.5)"
    assert lighter_color("oops") == "oops"


# ============================================================================
# DominantColorExtractor
# ============================================================================

def test_primary_of_solid_image(extractor):
    image = RasterImage(pixels=solid((200, 30, 30)))

    assert extractor.extract_primary(image) == "#c81e1e"


def test_primary_is_majority_color(extractor):
    """Тест: 75% синего и 25% жёлтого → синий, палитра из двух цветов."""
    pixels = solid((20, 40, 200), height=80, width=60)
    pixels[60:, :, :3] = (240, 200, 20)
    image = RasterImage(pixels=pixels)

    assert extractor.extract_primary(image) == "#1428c8"
    assert extractor.extract_palette(image) == ["#1428c8", "#f0c814"]


def test_white_and_transparent_pixels_ignored(extractor):
    pixels = solid((255, 255, 255), height=80, width=60)
    pixels[:20, :, :3] = (10, 120, 60)
    pixels[20:40, :, :3] = (250, 0, 0)
    pixels[20:40, :, 3] = 0  # прозрачный красный
    image = RasterImage(pixels=pixels)

    assert extractor.extract_primary(image) == "#0a783c"


def test_all_white_image_falls_back(extractor):
    image = RasterImage(pixels=solid((255, 255, 255)))

    assert extractor.extract_primary(image) == "#ffffff"


def test_extraction_is_deterministic(extractor):
    rng = np.random.default_rng(11)
    pixels = rng.integers(0, 256, size=(50, 50, 4), dtype=np.uint8)
    pixels[:, :, 3] = 255
    image = RasterImage(pixels=pixels)

    assert extractor.extract_palette(image) == extractor.extract_palette(image)
    assert len(extractor.extract_palette(image, 3)) <= 3


def test_custom_sample_step():
    extractor = DominantColorExtractor(ColorExtractionConfig(sample_step=1, palette_size=2))
    image = RasterImage(pixels=solid((1, 2, 3)))

    assert extractor.extract_palette(image) == ["#010203"]
