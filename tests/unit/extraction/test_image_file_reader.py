import pytest
import cv2
import numpy as np

from src.domain.raster_image import RasterImage
from src.extraction.domain.exceptions import FailureKind, ImageDecodingError
from src.extraction.pre_ocr.image_file_reader import ImageFileReader
from src.extraction.pre_ocr.image_encoder import ImageEncoder


@pytest.fixture
def temp_image_png(tmp_path):
    """Fixture: создает временный PNG файл (BGR на диске)."""
    image_path = tmp_path / "card.png"

    test_image = np.zeros((60, 100, 3), dtype=np.uint8)
    test_image[:, :, 0] = 100  # Blue
    test_image[:, :, 1] = 150  # Green
    test_image[:, :, 2] = 200  # Red

    cv2.imwrite(str(image_path), test_image)
    return image_path


@pytest.fixture
def temp_grayscale_png(tmp_path):
    image_path = tmp_path / "gray.png"
    cv2.imwrite(str(image_path), np.full((20, 30), 77, dtype=np.uint8))
    return image_path


@pytest.fixture
def temp_corrupted_file(tmp_path):
    """Fixture: создает файл с некорректными данными."""
    corrupted_path = tmp_path / "corrupted.jpg"
    corrupted_path.write_bytes(b"This is not a valid image file")
    return corrupted_path


def test_read_png_to_rgba(temp_image_png):
    """Тест: PNG читается в RGBA, каналы переставлены из BGR."""
    image = ImageFileReader.read(temp_image_png)

    assert isinstance(image, RasterImage)
    assert (image.width, image.height) == (100, 60)
    assert image.pixels.shape == (60, 100, 4)
    assert tuple(image.pixels[0, 0]) == (200, 150, 100, 255)
    assert image.source == "card.png"


def test_read_grayscale(temp_grayscale_png):
    """Тест: grayscale приводится к RGBA."""
    image = ImageFileReader.read(temp_grayscale_png)

    assert tuple(image.pixels[5, 5]) == (77, 77, 77, 255)


def test_file_not_found_error(tmp_path):
    """Тест: ImageDecodingError для несуществующего файла."""
    with pytest.raises(ImageDecodingError, match="Image not found"):
        ImageFileReader.read(tmp_path / "non_existent.jpg")


def test_corrupted_file_error(temp_corrupted_file):
    """Тест: ImageDecodingError для поврежденного файла."""
    with pytest.raises(ImageDecodingError, match="Failed to decode image") as exc_info:
        ImageFileReader.read(temp_corrupted_file)

    assert exc_info.value.kind == FailureKind.DECODE


def test_empty_bytes_error():
    with pytest.raises(ImageDecodingError):
        ImageFileReader.decode(b"")


def test_load_accepts_all_sources(temp_image_png):
    """Тест: load() принимает путь, строку, байты и готовый RasterImage."""
    from_path = ImageFileReader.load(temp_image_png)
    from_str = ImageFileReader.load(str(temp_image_png))
    from_bytes = ImageFileReader.load(temp_image_png.read_bytes())

    assert np.array_equal(from_path.pixels, from_str.pixels)
    assert np.array_equal(from_path.pixels, from_bytes.pixels)
    assert ImageFileReader.load(from_path) is from_path


def test_load_unsupported_type():
    with pytest.raises(ImageDecodingError, match="Неподдерживаемый тип"):
        ImageFileReader.load(12345)


def test_png_roundtrip_is_lossless():
    """Тест: encode_png → decode сохраняет RGBA без потерь."""
    rng = np.random.default_rng(7)
    pixels = rng.integers(0, 256, size=(16, 24, 4), dtype=np.uint8)
    image = RasterImage(pixels=pixels)

    png = ImageEncoder.encode_png(image)
    decoded = ImageFileReader.decode(png)

    assert png[:8] == b"\x89PNG\r\n\x1a\n"
    assert np.array_equal(decoded.pixels, pixels)
