"""
Pre-OCR: подготовка фото визитки к распознаванию.

- ImageEnhancer: resize + яркость/контраст + sharpen + denoise
- RotationCorrectionStage: коррекция ориентации 0°/90°
"""

from .pipeline import ImageEnhancer
from .s4_rotation import RotationCorrectionStage
from .image_file_reader import ImageFileReader
from .image_encoder import ImageEncoder

__all__ = [
    "ImageEnhancer",
    "RotationCorrectionStage",
    "ImageFileReader",
    "ImageEncoder",
]
