import pytest
import numpy as np
from unittest.mock import patch

from src.domain.contracts import RotationConfig, RotationDecision
from src.domain.raster_image import RasterImage
from src.extraction.domain.exceptions import RotationError
from src.extraction.pre_ocr import RotationCorrectionStage
from src.extraction.pre_ocr.infrastructure.filters import build_edge_map, longest_runs


def stripes(height, width, period, vertical):
    """Чёрно-белые полосы шириной period (вертикальные или горизонтальные)."""
    pixels = np.full((height, width, 4), 255, dtype=np.uint8)
    axis = np.arange(width if vertical else height)
    dark = (axis // period) % 2 == 1
    if vertical:
        pixels[:, dark, :3] = 0
    else:
        pixels[dark, :, :3] = 0
    return RasterImage(pixels=pixels, source="stripes")


@pytest.fixture
def corrector():
    return RotationCorrectionStage()


def test_longest_runs_counts_border_runs():
    """Тест: серия, доходящая до края строки, тоже учитывается."""
    mask = np.array([
        [0, 1, 1, 0, 1, 1, 1],
        [1, 1, 1, 1, 0, 0, 0],
        [0, 0, 0, 0, 0, 0, 0],
    ], dtype=bool)

    assert list(longest_runs(mask)) == [3, 4, 0]


def test_edge_map_finite_differences():
    luma = np.array([
        [0, 0, 100],
        [0, 0, 0],
    ], dtype=np.float32)

    edges = build_edge_map(luma, threshold=50)

    # (0,1): сосед справа 100; (0,2): сосед снизу 0
    assert edges.tolist() == [[False, True, True], [False, False, False]]


def test_vertical_lines_trigger_rotation(corrector):
    image = stripes(80, 120, period=10, vertical=True)

    decision = corrector.detect(image)

    assert decision.rotation == 90
    assert decision.vertical_lines > 0
    assert decision.horizontal_lines == 0


def test_horizontal_lines_keep_orientation(corrector):
    image = stripes(80, 120, period=10, vertical=False)

    rotated, rotation = corrector.correct(image)

    assert rotation == 0
    assert rotated is image


def test_flat_image_not_rotated(corrector):
    image = RasterImage(pixels=np.full((40, 60, 4), 128, dtype=np.uint8))

    assert corrector.detect(image) == RotationDecision(rotation=0, horizontal_lines=0, vertical_lines=0)


def test_correct_swaps_dimensions(corrector):
    """Тест: поворот на 90° меняет ширину и высоту, исходный буфер не трогается."""
    image = stripes(80, 120, period=10, vertical=True)
    image.pixels[0, 0, :3] = (10, 20, 30)
    before = image.pixels.copy()

    rotated, rotation = corrector.correct(image)

    assert rotation == 90
    assert (rotated.width, rotated.height) == (80, 120)
    # По часовой: левый верхний угол уходит в правый верхний
    assert tuple(rotated.pixels[0, -1, :3]) == (10, 20, 30)
    assert np.array_equal(image.pixels, before)


def test_detection_is_deterministic(corrector):
    rng = np.random.default_rng(3)
    pixels = rng.integers(0, 256, size=(64, 48, 4), dtype=np.uint8)
    image = RasterImage(pixels=pixels)

    assert corrector.detect(image) == corrector.detect(image)


def test_dominance_ratio_is_configurable():
    """Тест: при очень высоком ratio вертикальные полосы не дают поворота."""
    image = stripes(80, 120, period=10, vertical=True)
    image.pixels[40, :, :3] = 0  # одна горизонтальная линия
    image.pixels[41, :, :3] = 255

    lenient = RotationCorrectionStage(RotationConfig(dominance_ratio=1000))

    assert lenient.detect(image).rotation == 0


def test_analysis_failure_raises_rotation_error(corrector):
    image = RasterImage(pixels=np.zeros((10, 10, 4), dtype=np.uint8))

    with patch(
        "src.extraction.pre_ocr.s4_rotation.stage.build_edge_map",
        side_effect=RuntimeError("boom"),
    ):
        with pytest.raises(RotationError):
            corrector.detect(image)
