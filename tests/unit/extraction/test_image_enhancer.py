import pytest
import numpy as np
from unittest.mock import MagicMock

from src.domain.contracts import EnhancementParams
from src.domain.raster_image import RasterImage
from src.extraction.domain.exceptions import EnhancementError
from src.extraction.pre_ocr import ImageEnhancer
from src.extraction.pre_ocr.infrastructure.filters import apply_convolution_3x3
from src.extraction.pre_ocr.s1_resize import ImageResizeStage
from src.extraction.pre_ocr.s2_photometric import BrightnessContrastStage
from src.extraction.pre_ocr.s3_convolution import ConvolutionStage

SHARPEN = [[0, -1, 0], [-1, 5, -1], [0, -1, 0]]
DENOISE = [[1, 2, 1], [2, 4, 2], [1, 2, 1]]


@pytest.fixture
def noisy_image():
    """Fixture: случайное RGBA изображение 12x16 с полупрозрачной альфой."""
    rng = np.random.default_rng(42)
    pixels = rng.integers(0, 256, size=(12, 16, 4), dtype=np.uint8)
    pixels[:, :, 3] = 128
    return RasterImage(pixels=pixels, source="noisy")


def naive_convolution(pixels, kernel, divisor):
    """Эталон: попиксельная свёртка, чтение только из исходного буфера."""
    src = pixels.astype(np.int64)
    out = pixels.copy()
    h, w = pixels.shape[:2]
    for y in range(1, h - 1):
        for x in range(1, w - 1):
            for c in range(3):
                acc = 0
                for ky in range(3):
                    for kx in range(3):
                        acc += kernel[ky][kx] * src[y + ky - 1, x + kx - 1, c]
                out[y, x, c] = np.clip(np.rint(acc / divisor), 0, 255)
    return out


# ============================================================================
# Stage 1: Resize
# ============================================================================

@pytest.mark.parametrize("size, expected", [
    ((400, 200), (800, 400)),       # увеличение до min_dimension
    ((3000, 1500), (2000, 1000)),   # уменьшение до max_dimension
    ((1000, 500), (1000, 500)),     # уже в диапазоне
    ((300, 700), (343, 800)),       # портрет, округление
])
def test_compute_target_size(size, expected):
    assert ImageResizeStage.compute_target_size(*size, EnhancementParams()) == expected


def test_resize_noop_returns_same_object():
    image = RasterImage(pixels=np.zeros((500, 1000, 4), dtype=np.uint8))

    assert ImageResizeStage().process(image, EnhancementParams()) is image


def test_resize_upscales_small_image():
    image = RasterImage(pixels=np.full((50, 100, 4), 200, dtype=np.uint8))

    resized = ImageResizeStage().process(image, EnhancementParams())

    assert (resized.width, resized.height) == (800, 400)
    assert image.width == 100


# ============================================================================
# Stage 2: Brightness / Contrast
# ============================================================================

def test_identity_params_are_byte_identical(noisy_image):
    """Тест: Δb=0, f=1 не меняет ни одного байта."""
    params = EnhancementParams(brightness_delta=0, contrast_factor=1.0)

    adjusted = BrightnessContrastStage().process(noisy_image, params)

    assert np.array_equal(adjusted.pixels, noisy_image.pixels)


def test_default_brightness_contrast_formula():
    """Тест: v' = clamp(((v + 10) - 128) * 1.2 + 128)."""
    pixels = np.zeros((1, 3, 4), dtype=np.uint8)
    pixels[0, :, 0] = [0, 100, 250]
    pixels[0, :, 3] = 7
    image = RasterImage(pixels=pixels)

    adjusted = BrightnessContrastStage().process(image, EnhancementParams())

    # 0 → -13.6 → 0; 100 → 106.4 → 106; 250 → 286.4 → 255
    assert list(adjusted.pixels[0, :, 0]) == [0, 106, 255]
    assert list(adjusted.pixels[0, :, 3]) == [7, 7, 7]


# ============================================================================
# Stage 3: Convolution
# ============================================================================

@pytest.mark.parametrize("kernel, divisor", [(SHARPEN, 1), (DENOISE, 16)])
def test_convolution_reads_from_snapshot(noisy_image, kernel, divisor):
    """Тест: результат совпадает с эталоном, читающим только исходный буфер."""
    result = apply_convolution_3x3(noisy_image.pixels, kernel, divisor)

    assert np.array_equal(result, naive_convolution(noisy_image.pixels, kernel, divisor))


def test_convolution_keeps_border_and_alpha(noisy_image):
    """Тест: рамка в 1 пиксель и альфа-канал не меняются."""
    original = noisy_image.pixels
    result = ConvolutionStage().process(noisy_image, EnhancementParams()).pixels

    assert np.array_equal(result[0], original[0])
    assert np.array_equal(result[-1], original[-1])
    assert np.array_equal(result[:, 0], original[:, 0])
    assert np.array_equal(result[:, -1], original[:, -1])
    assert np.array_equal(result[:, :, 3], original[:, :, 3])


def test_convolution_does_not_mutate_input(noisy_image):
    before = noisy_image.pixels.copy()

    ConvolutionStage().process(noisy_image, EnhancementParams())

    assert np.array_equal(noisy_image.pixels, before)


def test_convolution_tiny_image_unchanged():
    pixels = np.full((2, 5, 4), 90, dtype=np.uint8)

    assert np.array_equal(apply_convolution_3x3(pixels, SHARPEN, 1), pixels)


# ============================================================================
# ImageEnhancer
# ============================================================================

def test_enhance_runs_all_stages():
    image = RasterImage(pixels=np.full((100, 200, 4), 120, dtype=np.uint8), source="card")

    enhanced = ImageEnhancer().enhance(image)

    assert (enhanced.width, enhanced.height) == (800, 400)
    assert enhanced.source == "card"
    assert enhanced is not image


def test_enhance_wraps_stage_failure():
    """Тест: сбой стадии превращается в EnhancementError."""
    enhancer = ImageEnhancer()
    enhancer.photometric = MagicMock()
    enhancer.photometric.process.side_effect = RuntimeError("boom")
    image = RasterImage(pixels=np.zeros((900, 900, 4), dtype=np.uint8))

    with pytest.raises(EnhancementError) as exc_info:
        enhancer.enhance(image)

    assert isinstance(exc_info.value.original_error, RuntimeError)


def test_invalid_kernel_rejected():
    with pytest.raises(ValueError):
        EnhancementParams(sharpen_kernel=[[1, 2], [3, 4]])
