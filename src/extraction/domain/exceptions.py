"""
Исключения для пайплайна анализа визитки.

Жёсткие ошибки (прерывают analyze()):
  - ImageDecodingError: вход не удалось декодировать как изображение
  - RecognitionError: OCR упал или не вернул текст

Мягкие ошибки стадий (оркестратор ловит их и деградирует):
  - EnhancementError, RotationError, ColorExtractionError, LogoDetectionError
"""

from enum import Enum
from typing import Optional


class FailureKind(str, Enum):
    """Тип ошибки, по которому вызывающий код выбирает фолбэк."""
    DECODE = "decode_failure"
    RECOGNITION = "recognition_failure"
    STAGE = "stage_failure"
    UNEXPECTED = "unexpected_error"


class ExtractionError(Exception):
    """Базовое исключение пайплайна."""

    kind: FailureKind = FailureKind.UNEXPECTED

    def __init__(
        self,
        message: str,
        component: Optional[str] = None,
        original_error: Optional[Exception] = None
    ):
        self.message = message
        self.component = component
        self.original_error = original_error
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = f"Extraction Error: {self.message}"
        if self.component:
            msg += f" (Component: {self.component})"
        if self.original_error:
            msg += f" [Original: {type(self.original_error).__name__}: {str(self.original_error)}]"
        return msg


class ImageDecodingError(ExtractionError):
    """Ошибка декодирования изображения."""
    kind = FailureKind.DECODE


class RecognitionError(ExtractionError):
    """Ошибка внешнего OCR (сбой вызова или пустой текст)."""
    kind = FailureKind.RECOGNITION


class StageError(ExtractionError):
    """Ошибка отдельной стадии анализа (не фатальная для analyze())."""
    kind = FailureKind.STAGE


class EnhancementError(StageError):
    """Ошибка улучшения изображения."""
    pass


class RotationError(StageError):
    """Ошибка определения/применения поворота."""
    pass


class ColorExtractionError(StageError):
    """Ошибка извлечения основного цвета."""
    pass


class LogoDetectionError(StageError):
    """Ошибка поиска логотипа."""
    pass
