"""
Image Encoder для пайплайна визиток.

Кодирование RasterImage в PNG bytes (без потерь): используется для
отправки в OCR и для логотипа в ContactRecord.
"""

import cv2
from loguru import logger

from src.domain.raster_image import RasterImage


class ImageEncoder:
    """
    Кодирует RasterImage в PNG bytes.

    ЦКП: PNG байты изображения (RGBA сохраняется).
    """

    @staticmethod
    def encode_png(image: RasterImage, compression: int = 3) -> bytes:
        """
        Кодирует RasterImage в PNG bytes.

        Args:
            image: RGBA изображение
            compression: Уровень сжатия PNG (0-9), по умолчанию 3

        Raises:
            RuntimeError: Если не удалось закодировать изображение
        """
        bgra = cv2.cvtColor(image.pixels, cv2.COLOR_RGBA2BGRA)
        success, buffer = cv2.imencode(
            ".png",
            bgra,
            [cv2.IMWRITE_PNG_COMPRESSION, compression]
        )

        if not success:
            raise RuntimeError("Failed to encode image to PNG")

        encoded_bytes = buffer.tobytes()

        logger.debug(
            f"[ImageEncoder] Изображение закодировано: "
            f"{image.width}x{image.height}, размер {len(encoded_bytes)} байт"
        )

        return encoded_bytes
