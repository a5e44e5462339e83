"""
ImageEnhancer: Pre-OCR пайплайн улучшения фото визитки.

3-stage оркестратор (порядок фиксирован):
1. Resize: большая сторона в [800, 2000] px
2. Photometric: яркость/контраст по каналам RGB
3. Convolution: Sharpen, затем Denoise (только внутренние пиксели)

Rotation (Stage 4) вызывается отдельно оркестратором, после улучшения.

Любая ошибка оборачивается в EnhancementError: вызывающий код
продолжает работу с неулучшенным изображением.
"""

import time
from typing import Optional

from loguru import logger

from src.domain.contracts import EnhancementParams
from src.domain.raster_image import RasterImage
from .domain.interfaces import IImageEnhancer
from .s1_resize import ImageResizeStage
from .s2_photometric import BrightnessContrastStage
from .s3_convolution import ConvolutionStage
from ..domain.exceptions import EnhancementError


class ImageEnhancer(IImageEnhancer):
    """
    Пайплайн улучшения изображения (3 Stages).

    Stages:
    1. Resize
    2. Brightness/Contrast
    3. Sharpen + Denoise
    """

    def __init__(self, params: Optional[EnhancementParams] = None) -> None:
        self.params = params or EnhancementParams()
        self.resize = ImageResizeStage()
        self.photometric = BrightnessContrastStage()
        self.convolution = ConvolutionStage()
        logger.debug("[ImageEnhancer] Инициализирован (3 stages)")

    def enhance(
        self,
        image: RasterImage,
        params: Optional[EnhancementParams] = None
    ) -> RasterImage:
        """
        Прогоняет изображение через все стадии.

        Raises:
            EnhancementError: если любая стадия упала
        """
        params = params or self.params
        start_time = time.time()

        try:
            logger.debug(f"[ImageEnhancer] Stage 1: Resize ({image.source})")
            resized = self.resize.process(image, params)

            logger.debug("[ImageEnhancer] Stage 2: Brightness/Contrast")
            adjusted = self.photometric.process(resized, params)

            logger.debug("[ImageEnhancer] Stage 3: Sharpen + Denoise")
            enhanced = self.convolution.process(adjusted, params)
        except Exception as e:
            logger.error(f"[ImageEnhancer] Ошибка улучшения: {e}")
            raise EnhancementError(
                message=f"Ошибка улучшения изображения: {image.source}",
                component="ImageEnhancer",
                original_error=e
            )

        elapsed_ms = (time.time() - start_time) * 1000
        logger.debug(
            f"[ImageEnhancer] ✅ Готово: {image.width}x{image.height} → "
            f"{enhanced.width}x{enhanced.height}, время={elapsed_ms:.0f}ms"
        )
        return enhanced
