"""
Интерфейсы (абстрактные классы) для домена Extraction.

Домен Extraction отвечает за:
1. Подготовку изображения визитки (pre-ocr)
2. Вызов внешнего OCR
"""

from abc import ABC, abstractmethod
from typing import Optional

from contracts.card_extraction_dto import RecognitionResult
from src.domain.raster_image import RasterImage


class ITextRecognizer(ABC):
    """
    Интерфейс внешнего движка распознавания текста.

    Жизненный цикл хэндла (ленивое создание клиента, переиспользование,
    явное освобождение через close()) принадлежит вызывающему коду.
    Поддерживает with-блок.
    """

    @abstractmethod
    def recognize(self, image: RasterImage, timeout: Optional[float] = None) -> RecognitionResult:
        """
        Распознаёт текст на изображении.

        Args:
            image: Подготовленное изображение
            timeout: Таймаут вызова в секундах

        Returns:
            RecognitionResult(text, confidence)

        Raises:
            RecognitionError: при сбое вызова
        """
        pass

    def close(self) -> None:
        """Освобождает ресурсы движка (по умолчанию ничего не делает)."""
        pass

    def __enter__(self) -> "ITextRecognizer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
