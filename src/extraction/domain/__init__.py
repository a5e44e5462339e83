"""
Domain слой домена Extraction.

Содержит интерфейс внешнего OCR и исключения всего пайплайна.
"""

from .interfaces import ITextRecognizer

from .exceptions import (
    FailureKind,
    ExtractionError,
    ImageDecodingError,
    RecognitionError,
    StageError,
    EnhancementError,
    RotationError,
    ColorExtractionError,
    LogoDetectionError,
)

__all__ = [
    # Интерфейсы
    "ITextRecognizer",

    # Исключения
    "FailureKind",
    "ExtractionError",
    "ImageDecodingError",
    "RecognitionError",
    "StageError",
    "EnhancementError",
    "RotationError",
    "ColorExtractionError",
    "LogoDetectionError",
]
