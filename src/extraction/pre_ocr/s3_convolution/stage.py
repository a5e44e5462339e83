"""
Stage 3: Свёртки (Sharpen → Denoise).

Оба шага — свёртка 3x3 по внутренним пикселям. Каждый шаг читает только
из снимка буфера, сделанного ДО шага, и пишет в новый буфер.

Sharpen: [0,-1,0; -1,5,-1; 0,-1,0] / 1
Denoise: [1,2,1; 2,4,2; 1,2,1] / 16 (лёгкое гауссово размытие)
"""

from typing import List

from loguru import logger

from src.domain.contracts import EnhancementParams
from src.domain.raster_image import RasterImage
from ..infrastructure.filters import apply_convolution_3x3


class ConvolutionStage:
    """Stage 3: Sharpen, затем Denoise."""

    def sharpen(self, image: RasterImage, params: EnhancementParams) -> RasterImage:
        return self._convolve(image, params.sharpen_kernel, params.sharpen_divisor, "sharpen")

    def denoise(self, image: RasterImage, params: EnhancementParams) -> RasterImage:
        return self._convolve(image, params.denoise_kernel, params.denoise_divisor, "denoise")

    def process(self, image: RasterImage, params: EnhancementParams) -> RasterImage:
        sharpened = self.sharpen(image, params)
        return self.denoise(sharpened, params)

    @staticmethod
    def _convolve(image: RasterImage, kernel: List[List[int]], divisor: int, name: str) -> RasterImage:
        logger.debug(f"[Stage 3] Применяю {name} (divisor={divisor})")
        return RasterImage(
            pixels=apply_convolution_3x3(image.pixels, kernel, divisor),
            source=image.source
        )
