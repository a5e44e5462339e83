"""
Pre-OCR Domain: Интерфейсы и абстракции.

Определяет контракты для компонентов подготовки изображения визитки.
"""

from abc import ABC, abstractmethod
from typing import Optional, Tuple

from src.domain.contracts import EnhancementParams, RotationDecision
from src.domain.raster_image import RasterImage


class IImageEnhancer(ABC):
    """
    Интерфейс улучшения изображения перед OCR.

    Resize → Яркость/контраст → Sharpen → Denoise.
    """

    @abstractmethod
    def enhance(
        self,
        image: RasterImage,
        params: Optional[EnhancementParams] = None
    ) -> RasterImage:
        """
        Улучшает изображение.

        Args:
            image: Исходное изображение (не изменяется)
            params: Параметры; None → значения из settings

        Returns:
            Новое изображение
        """
        pass


class IRotationCorrector(ABC):
    """Интерфейс коррекции ориентации (0° или 90°)."""

    @abstractmethod
    def detect(self, image: RasterImage) -> RotationDecision:
        """Определяет поворот без изменения изображения."""
        pass

    @abstractmethod
    def correct(self, image: RasterImage) -> Tuple[RasterImage, int]:
        """Возвращает (изображение, применённый поворот 0|90)."""
        pass
