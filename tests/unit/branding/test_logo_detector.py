import pytest
import numpy as np

from src.branding.logo import LogoRegionDetector
from src.domain.contracts import LogoDetectionConfig
from src.domain.raster_image import RasterImage


def checkerboard(size, cell):
    """Шахматка 0/255 с клеткой cell пикселей."""
    yy, xx = np.indices((size, size))
    board = ((yy // cell + xx // cell) % 2 * 255).astype(np.uint8)
    return np.repeat(board[:, :, None], 3, axis=2)


def white_card(height=100, width=100):
    return np.full((height, width, 4), 255, dtype=np.uint8)


@pytest.fixture
def detector():
    return LogoRegionDetector()


def test_candidate_regions_are_corners(detector):
    image = RasterImage(pixels=white_card(100, 200))

    regions = {r.name: (r.x, r.y, r.width, r.height) for r in detector.candidate_regions(image)}

    assert regions == {
        "top_left": (0, 0, 60, 30),
        "top_right": (140, 0, 60, 30),
        "bottom_left": (0, 70, 60, 30),
        "bottom_right": (140, 70, 60, 30),
    }
    assert all(r.fits(200, 100) for r in detector.candidate_regions(image))


def test_flat_corner_has_no_contrast(detector):
    """Тест: однотонный левый верхний угол не является кандидатом."""
    pixels = white_card()
    pixels[:30, :30, :3] = (30, 90, 160)
    image = RasterImage(pixels=pixels)

    top_left = detector.score_candidates(image)[0]

    assert top_left.name == "top_left"
    assert top_left.contrast == 0
    assert not detector.qualifies(top_left)


def test_plain_card_has_no_logo(detector):
    image = RasterImage(pixels=white_card())

    assert detector.detect(image) is None
    assert detector.extract(image) is None


def test_detects_checkerboard_logo(detector):
    pixels = white_card()
    pixels[:30, 70:, :3] = checkerboard(30, 4)
    image = RasterImage(pixels=pixels, source="card")

    region = detector.detect(image)

    assert region is not None
    assert region.name == "top_right"
    assert region.contrast == 255
    assert 10 < region.complexity < 100
    assert region.score == pytest.approx(region.contrast + 100 - abs(50 - region.complexity))


def test_extract_is_lossless_independent_copy(detector):
    pixels = white_card()
    pixels[:30, 70:, :3] = checkerboard(30, 4)
    image = RasterImage(pixels=pixels, source="card")

    logo = detector.extract(image)

    assert (logo.width, logo.height) == (30, 30)
    assert np.array_equal(logo.pixels, pixels[:30, 70:])
    assert logo.source == "card#top_right"

    logo.pixels[:] = 0
    assert image.pixels[0, 70:, :3].max() == 255


def test_top_half_preferred_over_higher_score(detector):
    """Тест: нижний угол с большим score проигрывает подходящему верхнему."""
    pixels = white_card()
    pixels[70:, 70:, :3] = checkerboard(30, 4)          # complexity ≈ 41
    pixels[:30, :30, :3] = checkerboard(30, 2) // 2     # ниже контраст
    image = RasterImage(pixels=pixels)

    scored = {r.name: r for r in detector.score_candidates(image)}
    assert scored["bottom_right"].score > scored["top_left"].score
    assert detector.qualifies(scored["top_left"])

    assert detector.detect(image).name == "top_left"


def test_too_complex_region_rejected():
    config = LogoDetectionConfig(max_complexity=20)
    pixels = white_card()
    pixels[:30, :30, :3] = checkerboard(30, 4)
    image = RasterImage(pixels=pixels)

    assert LogoRegionDetector(config).detect(image) is None
