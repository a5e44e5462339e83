"""
Домен Extraction: Pre-OCR + OCR обработка фото визитки.

Этот домен отвечает за:
1. Декодирование входа в RasterImage
2. Улучшение изображения и коррекцию ориентации (pre-ocr)
3. Вызов Google Vision API

Граница домена: contracts.RecognitionResult
"""

from .pre_ocr import ImageEnhancer, RotationCorrectionStage, ImageFileReader, ImageEncoder
from .ocr.google_vision_ocr import GoogleVisionOCR

__all__ = [
    "ImageEnhancer",
    "RotationCorrectionStage",
    "ImageFileReader",
    "ImageEncoder",
    "GoogleVisionOCR",
]
