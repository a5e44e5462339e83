"""
Stage 1: Resize.

Приводит большую сторону изображения в диапазон [min_dimension, max_dimension]
с сохранением пропорций. Если сторона уже в диапазоне — no-op.

Входные данные:
- image: RasterImage (оригинал визитки)

Выходные данные:
- image: RasterImage (новый буфер, если был resize)
"""

from typing import Tuple

import cv2
from loguru import logger

from src.domain.contracts import EnhancementParams
from src.domain.raster_image import RasterImage


class ImageResizeStage:
    """
    Stage 1: Resize.

    Маленькие фото визиток увеличиваются до min_dimension (OCR плохо читает
    мелкий шрифт), большие уменьшаются до max_dimension.
    """

    def __init__(self) -> None:
        logger.debug("[Stage 1: Resize] Инициализирован")

    @staticmethod
    def compute_target_size(width: int, height: int, params: EnhancementParams) -> Tuple[int, int]:
        """
        Вычисляет целевой размер (width, height).

        Масштаб единый для обеих сторон, результат округляется до пикселя.
        """
        longest = max(width, height)

        if params.min_dimension <= longest <= params.max_dimension:
            return width, height

        if longest < params.min_dimension:
            scale = params.min_dimension / longest
        else:
            scale = params.max_dimension / longest

        target_w = max(1, int(round(width * scale)))
        target_h = max(1, int(round(height * scale)))
        return target_w, target_h

    def process(self, image: RasterImage, params: EnhancementParams) -> RasterImage:
        target_w, target_h = self.compute_target_size(image.width, image.height, params)

        if (target_w, target_h) == (image.width, image.height):
            logger.debug(f"[Stage 1] Размер в допустимом диапазоне: {image.width}x{image.height}")
            return image

        upscale = target_w > image.width
        interpolation = cv2.INTER_CUBIC if upscale else cv2.INTER_AREA
        resized = cv2.resize(image.pixels, (target_w, target_h), interpolation=interpolation)

        logger.debug(
            f"[Stage 1] Resize {image.width}x{image.height} → {target_w}x{target_h} "
            f"({'увеличение' if upscale else 'уменьшение'})"
        )
        return RasterImage(pixels=resized, source=image.source)
