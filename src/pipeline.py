"""
Основной пайплайн анализа визитки.

Объединяет все компоненты в одну операцию analyze(image) → ContactRecord:
1. Декодирование входа (жёсткая ошибка: ImageDecodingError)
2. ImageEnhancer (мягкая: фолбэк на исходное изображение)
3. RotationCorrector (мягкая: фолбэк без поворота)
4. Внешний OCR (жёсткая: RecognitionError, в т.ч. пустой текст)
5. DominantColorExtractor и LogoRegionDetector по ОРИГИНАЛУ (мягкие)
6. FieldExtractor по распознанному тексту (никогда не падает)

analyze_all() обрабатывает пачку изображений: каждый элемент завершается
независимо (success/failed), порядок входа сохраняется, повторов нет.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Callable, List, Optional, Sequence, TypeVar

from loguru import logger

from contracts.card_extraction_dto import (
    AnalysisMetadata,
    AnalysisOutcome,
    ContactRecord,
    Contacts,
    RecognitionResult,
)
from src.branding.color import DominantColorExtractor
from src.branding.logo import LogoRegionDetector
from src.domain.contracts import PipelineConfig
from src.domain.raster_image import RasterImage
from src.extraction.domain.exceptions import (
    ExtractionError,
    FailureKind,
    ImageDecodingError,
    RecognitionError,
)
from src.extraction.domain.interfaces import ITextRecognizer
from src.extraction.pre_ocr import ImageEncoder, ImageEnhancer, ImageFileReader, RotationCorrectionStage
from src.extraction.pre_ocr.image_file_reader import ImageSource
from src.parsing import FieldExtractor

T = TypeVar("T")


class CardAnalysisPipeline:
    """
    Оркестратор анализа визитки.

    Владеет только своими стадиями; жизненный цикл recognizer
    (создание клиента, close()) принадлежит вызывающему коду.
    """

    def __init__(
        self,
        recognizer: Optional[ITextRecognizer] = None,
        enhancer: Optional[ImageEnhancer] = None,
        rotation: Optional[RotationCorrectionStage] = None,
        color: Optional[DominantColorExtractor] = None,
        logo: Optional[LogoRegionDetector] = None,
        field_extractor: Optional[FieldExtractor] = None,
        config: Optional[PipelineConfig] = None
    ):
        """
        Args:
            recognizer: Внешний OCR; может отсутствовать, если текст
                        всегда передаётся в analyze() явно
            config: Пороги всех стадий; используется для стадий,
                    которые не переданы явно
        """
        self.config = config or PipelineConfig()
        self.recognizer = recognizer
        self.enhancer = enhancer or ImageEnhancer(self.config.enhancement)
        self.rotation = rotation or RotationCorrectionStage(self.config.rotation)
        self.color = color or DominantColorExtractor(self.config.color)
        self.logo = logo or LogoRegionDetector(self.config.logo)
        self.field_extractor = field_extractor or FieldExtractor()

        logger.info("[CardPipeline] Pipeline инициализирован")

    def analyze(self, image: ImageSource, recognized_text: Optional[str] = None) -> ContactRecord:
        """
        Анализирует одну визитку.

        Args:
            image: RasterImage, байты файла или путь
            recognized_text: Готовый текст; если None, вызывается recognizer

        Returns:
            ContactRecord (может быть пустым, это не ошибка)

        Raises:
            ImageDecodingError: вход не декодируется
            RecognitionError: OCR упал или вернул пустой текст
        """
        start_time = time.time()
        original = self._decode(image)
        logger.info(f"[CardPipeline] Обработка: {original.source} ({original.width}x{original.height})")

        degraded: List[str] = []

        # 1. Улучшение (фолбэк: оригинал)
        enhanced = self._soft_stage("enhance", degraded, lambda: self.enhancer.enhance(original))
        prepared = enhanced if enhanced is not None else original

        # 2. Поворот (фолбэк: без поворота)
        corrected = self._soft_stage("rotation", degraded, lambda: self.rotation.correct(prepared))
        prepared, rotation_applied = corrected if corrected is not None else (prepared, 0)

        # 3. Текст
        recognition = self._recognize(prepared, recognized_text)

        # 4. Брендинг по оригиналу
        primary_color = self._soft_stage("color", degraded, lambda: self.color.extract_primary(original))
        logo = self._soft_stage("logo", degraded, lambda: self._extract_logo(original))

        # 5. Поля
        fields = self.field_extractor.extract(recognition.text)

        record = ContactRecord(
            company_name=fields.company_name,
            contacts=Contacts(
                phone=fields.phone,
                email=fields.email,
                website=fields.website,
                address=fields.address,
            ),
            primary_color=primary_color,
            logo=logo,
            metadata=AnalysisMetadata(
                source=original.source,
                image_width=original.width,
                image_height=original.height,
                rotation_applied=rotation_applied,
                enhanced=enhanced is not None,
                recognition_confidence=recognition.confidence if recognized_text is None else None,
                degraded_stages=degraded,
            ),
        )

        elapsed_ms = (time.time() - start_time) * 1000
        logger.info(
            f"[CardPipeline] ✅ Готово: {original.source}, "
            f"company={record.company_name!r}, color={record.primary_color}, "
            f"logo={'да' if logo else 'нет'}, время={elapsed_ms:.0f}ms"
        )
        return record

    def analyze_all(
        self,
        images: Sequence[ImageSource],
        recognized_texts: Optional[Sequence[Optional[str]]] = None
    ) -> List[AnalysisOutcome]:
        """
        Обрабатывает несколько визиток.

        Ошибка одного элемента не прерывает остальные; каждый элемент
        возвращается как AnalysisOutcome в порядке входа.
        """
        if recognized_texts is not None and len(recognized_texts) != len(images):
            raise ValueError(
                f"recognized_texts ({len(recognized_texts)}) не совпадает с images ({len(images)})"
            )

        texts = list(recognized_texts) if recognized_texts is not None else [None] * len(images)

        with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
            futures = [
                executor.submit(self._settle, index, image, text)
                for index, (image, text) in enumerate(zip(images, texts))
            ]
            outcomes = [future.result() for future in futures]

        succeeded = sum(1 for outcome in outcomes if outcome.succeeded)
        logger.info(f"[CardPipeline] Batch: {succeeded}/{len(outcomes)} успешно")
        return outcomes

    def _settle(self, index: int, image: ImageSource, text: Optional[str]) -> AnalysisOutcome:
        source = self._describe(index, image)
        try:
            record = self.analyze(image, recognized_text=text)
        except ExtractionError as e:
            logger.error(f"[CardPipeline] ❌ {source}: {e}")
            return AnalysisOutcome(index=index, source=source, error_kind=e.kind.value, error=str(e))
        except Exception as e:
            logger.exception(f"[CardPipeline] ❌ Непредвиденная ошибка: {source}")
            return AnalysisOutcome(
                index=index,
                source=source,
                error_kind=FailureKind.UNEXPECTED.value,
                error=f"{type(e).__name__}: {e}",
            )
        return AnalysisOutcome(index=index, source=source, record=record)

    @staticmethod
    def _describe(index: int, image: ImageSource) -> str:
        if isinstance(image, RasterImage):
            return image.source
        if isinstance(image, (str, Path)):
            return Path(image).name
        return f"item[{index}]"

    @staticmethod
    def _decode(image: ImageSource) -> RasterImage:
        try:
            return ImageFileReader.load(image)
        except ImageDecodingError:
            raise
        except Exception as e:
            raise ImageDecodingError(
                message="Не удалось декодировать вход",
                component="CardPipeline",
                original_error=e
            )

    def _recognize(self, image: RasterImage, recognized_text: Optional[str]) -> RecognitionResult:
        # Готовый текст от вызывающего кода: пустой допустим (только цвет и логотип)
        if recognized_text is not None:
            return RecognitionResult(text=recognized_text)

        if self.recognizer is None:
            raise RecognitionError(
                message="Recognizer не задан и текст не передан",
                component="CardPipeline"
            )

        try:
            result = self.recognizer.recognize(image, timeout=self.config.recognition_timeout)
        except RecognitionError:
            raise
        except Exception as e:
            raise RecognitionError(
                message=f"Ошибка OCR: {image.source}",
                component="CardPipeline",
                original_error=e
            )

        if not result.text or not result.text.strip():
            raise RecognitionError(
                message=f"OCR не вернул текст: {image.source}",
                component="CardPipeline"
            )
        return result

    def _extract_logo(self, image: RasterImage) -> Optional[bytes]:
        cropped = self.logo.extract(image)
        if cropped is None:
            return None
        return ImageEncoder.encode_png(cropped)

    @staticmethod
    def _soft_stage(name: str, degraded: List[str], run: Callable[[], T]) -> Optional[T]:
        """Выполняет необязательную стадию; при ошибке отмечает её как деградировавшую."""
        try:
            return run()
        except Exception as e:
            logger.warning(f"[CardPipeline] ❌ Стадия '{name}' пропущена: {e}")
            degraded.append(name)
            return None
