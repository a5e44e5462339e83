"""
Image File Reader для пайплайна визиток.

Чтение и декодирование изображений из файлов и байтов в RasterImage (RGBA).
Единственное место, где возникает ImageDecodingError.
"""

from pathlib import Path
from typing import Union

import cv2
import numpy as np
from loguru import logger

from src.domain.raster_image import RasterImage
from ..domain.exceptions import ImageDecodingError


ImageSource = Union[RasterImage, bytes, bytearray, Path, str]


class ImageFileReader:
    """
    Декодирует изображение в RasterImage.

    ЦКП: RGBA буфер uint8 независимо от исходного формата
    (Grayscale, BGR, BGRA, 16-bit).
    """

    @staticmethod
    def decode(raw_bytes: bytes, source: str = "memory") -> RasterImage:
        """
        Декодирует байты (JPEG/PNG/WebP/BMP/TIFF) в RasterImage.

        Raises:
            ImageDecodingError: Если байты не являются изображением
        """
        if not raw_bytes:
            raise ImageDecodingError(
                message=f"Пустые данные изображения: {source}",
                component="ImageFileReader"
            )

        nparr = np.frombuffer(raw_bytes, np.uint8)
        image = cv2.imdecode(nparr, cv2.IMREAD_UNCHANGED)

        if image is None:
            raise ImageDecodingError(
                message=f"Failed to decode image: {source}",
                component="ImageFileReader"
            )

        rgba = ImageFileReader._to_rgba(image)
        logger.debug(f"[ImageFileReader] Изображение декодировано: {source}, размер: {rgba.shape}")

        return RasterImage(pixels=rgba, source=source)

    @staticmethod
    def read(image_path: Path) -> RasterImage:
        """
        Читает файл изображения и декодирует в RasterImage.

        Raises:
            ImageDecodingError: Если файл не найден или не декодируется
        """
        if not image_path.exists():
            raise ImageDecodingError(
                message=f"Image not found: {image_path}",
                component="ImageFileReader"
            )

        with open(image_path, "rb") as f:
            raw_bytes = f.read()

        return ImageFileReader.decode(raw_bytes, source=image_path.name)

    @staticmethod
    def load(source: ImageSource) -> RasterImage:
        """Приводит любой поддерживаемый вход к RasterImage."""
        if isinstance(source, RasterImage):
            return source
        if isinstance(source, (bytes, bytearray)):
            return ImageFileReader.decode(bytes(source))
        if isinstance(source, (str, Path)):
            return ImageFileReader.read(Path(source))
        raise ImageDecodingError(
            message=f"Неподдерживаемый тип входа: {type(source).__name__}",
            component="ImageFileReader"
        )

    @staticmethod
    def _to_rgba(image: np.ndarray) -> np.ndarray:
        if image.dtype == np.uint16:
            image = (image // 257).astype(np.uint8)
        elif image.dtype != np.uint8:
            image = cv2.convertScaleAbs(image)

        if image.ndim == 2:
            return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
        channels = image.shape[2]
        if channels == 1:
            return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
        if channels == 3:
            return cv2.cvtColor(image, cv2.COLOR_BGR2RGBA)
        if channels == 4:
            return cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)

        raise ImageDecodingError(
            message=f"Неподдерживаемое число каналов: {channels}",
            component="ImageFileReader"
        )
