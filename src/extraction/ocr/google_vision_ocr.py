"""
OCR: Google Vision API интеграция.

Внешний движок распознавания для пайплайна визиток:
- Кодирование RasterImage в PNG
- Отправка в Google Vision (DOCUMENT_TEXT_DETECTION) с таймаутом
- Формирование RecognitionResult(text, confidence)

Клиент создаётся лениво при первом вызове, переиспользуется и
освобождается явно через close() (или with-блок).
"""

import os
import threading
from pathlib import Path
from typing import Any, List, Optional

from google.cloud import vision
from loguru import logger

from config.settings import GOOGLE_APPLICATION_CREDENTIALS, OCR_LANGUAGE_HINTS, OCR_TIMEOUT_SECONDS
from contracts.card_extraction_dto import RecognitionResult
from src.domain.raster_image import RasterImage
from ..domain.interfaces import ITextRecognizer
from ..domain.exceptions import RecognitionError
from ..pre_ocr.image_encoder import ImageEncoder


class GoogleVisionOCR(ITextRecognizer):
    """
    Обёртка над Google Cloud Vision API.

    Реализует интерфейс ITextRecognizer.
    """

    def __init__(
        self,
        credentials_path: Optional[str] = None,
        language_hints: Optional[List[str]] = None,
        timeout: float = OCR_TIMEOUT_SECONDS,
        client: Optional[Any] = None
    ):
        """
        Инициализация OCR (без подключения к API).

        Args:
            credentials_path: Путь к JSON-файлу credentials.
                            Если не указан, берётся из settings.
            language_hints: Подсказки языка; по умолчанию из settings
            timeout: Таймаут вызова по умолчанию (сек)
            client: Готовый ImageAnnotatorClient (для тестов/переиспользования)
        """
        self.credentials_path = credentials_path or GOOGLE_APPLICATION_CREDENTIALS
        self.language_hints = language_hints if language_hints is not None else list(OCR_LANGUAGE_HINTS)
        self.timeout = timeout
        self._client = client
        self._client_lock = threading.Lock()

        logger.debug("[GoogleVisionOCR] Создан (клиент будет инициализирован при первом вызове)")

    @property
    def client(self) -> Any:
        """Ленивая инициализация ImageAnnotatorClient (один клиент на все потоки)."""
        if self._client is None:
            with self._client_lock:
                if self._client is None:
                    self._client = self._create_client()
        return self._client

    def _create_client(self) -> Any:
        if not self.credentials_path:
            raise RecognitionError(
                message="Google credentials не указаны! Укажите путь в config/settings.py",
                component="GoogleVisionOCR"
            )

        if not Path(self.credentials_path).exists():
            raise RecognitionError(
                message=f"Credentials файл не найден: {self.credentials_path}",
                component="GoogleVisionOCR"
            )

        os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = str(self.credentials_path)

        try:
            client = vision.ImageAnnotatorClient()
        except Exception as e:
            raise RecognitionError(
                message="Не удалось создать клиент Google Vision",
                component="GoogleVisionOCR",
                original_error=e
            )

        logger.info("[GoogleVisionOCR] Клиент инициализирован")
        return client

    def recognize(self, image: RasterImage, timeout: Optional[float] = None) -> RecognitionResult:
        """
        Распознаёт текст на изображении.

        Raises:
            RecognitionError: ошибка API, таймаут или ошибка в ответе
        """
        logger.debug(f"[GoogleVisionOCR] Распознавание: {image.source}")

        content = ImageEncoder.encode_png(image)
        request_image = vision.Image(content=content)
        image_context = vision.ImageContext(language_hints=self.language_hints)

        try:
            response = self.client.document_text_detection(
                image=request_image,
                image_context=image_context,
                timeout=timeout or self.timeout
            )
        except RecognitionError:
            raise
        except Exception as e:
            raise RecognitionError(
                message=f"Ошибка вызова Google Vision: {image.source}",
                component="GoogleVisionOCR",
                original_error=e
            )

        if response.error.message:
            raise RecognitionError(
                message=f"Google Vision API error: {response.error.message}",
                component="GoogleVisionOCR"
            )

        return self._parse_response(response)

    def _parse_response(self, response: Any) -> RecognitionResult:
        """
        Парсит ответ Google Vision в RecognitionResult.

        confidence = среднее по страницам (0.0 если страниц нет).
        """
        full_text = ""
        confidences: List[float] = []

        annotation = response.full_text_annotation
        if annotation:
            full_text = annotation.text or ""
            confidences = [page.confidence for page in annotation.pages]

        confidence = sum(confidences) / len(confidences) if confidences else 0.0
        confidence = max(0.0, min(1.0, confidence))

        logger.debug(
            f"[GoogleVisionOCR] Получено символов: {len(full_text)}, confidence={confidence:.2f}"
        )
        return RecognitionResult(text=full_text, confidence=confidence)

    def close(self) -> None:
        """Закрывает транспорт клиента (если он был создан)."""
        with self._client_lock:
            if self._client is None:
                return

            transport = getattr(self._client, "transport", None)
            if transport is not None and hasattr(transport, "close"):
                transport.close()

            self._client = None
        logger.debug("[GoogleVisionOCR] Клиент закрыт")
