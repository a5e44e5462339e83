"""
Stage 2: Яркость и контраст.

Поканальная (R, G, B) линейная коррекция, альфа не трогается.
"""

from loguru import logger

from src.domain.contracts import EnhancementParams
from src.domain.raster_image import RasterImage
from ..infrastructure.filters import apply_brightness_contrast


class BrightnessContrastStage:
    """Stage 2: v' = clamp(((v + Δb) - 128) * f + 128, 0, 255)."""

    def process(self, image: RasterImage, params: EnhancementParams) -> RasterImage:
        logger.debug(
            f"[Stage 2] Яркость/контраст: Δb={params.brightness_delta}, f={params.contrast_factor}"
        )
        adjusted = apply_brightness_contrast(
            image.pixels,
            brightness_delta=params.brightness_delta,
            contrast_factor=params.contrast_factor
        )
        return RasterImage(pixels=adjusted, source=image.source)
