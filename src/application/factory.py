"""
Фабрика для создания компонентов пайплайна визиток.

Предоставляет удобные методы для создания и конфигурации
всех компонентов через единый интерфейс.
"""

from typing import Optional

from loguru import logger

from src.branding.color import DominantColorExtractor
from src.branding.logo import LogoRegionDetector
from src.domain.contracts import PipelineConfig
from src.extraction.domain.interfaces import ITextRecognizer
from src.extraction.ocr.google_vision_ocr import GoogleVisionOCR
from src.extraction.pre_ocr import ImageEnhancer, RotationCorrectionStage
from src.parsing import FieldConfigLoader, FieldExtractor
from src.pipeline import CardAnalysisPipeline


class CardComponentFactory:
    """
    Фабрика компонентов анализа визитки.

    Recognizer создаётся отдельно: его жизненный цикл (close())
    принадлежит вызывающему коду.
    """

    @staticmethod
    def create_recognizer(
        credentials_path: Optional[str] = None,
        timeout: Optional[float] = None
    ) -> ITextRecognizer:
        """
        Создает OCR (клиент Google Vision подключается лениво).

        Args:
            credentials_path: Путь к credentials файлу Google Cloud
            timeout: Таймаут вызова OCR по умолчанию (сек)
        """
        logger.debug("[CardFactory] Создание OCR провайдера")
        if timeout is None:
            return GoogleVisionOCR(credentials_path)
        return GoogleVisionOCR(credentials_path, timeout=timeout)

    @staticmethod
    def create_field_extractor(locale_code: Optional[str] = None) -> FieldExtractor:
        logger.debug(f"[CardFactory] Создание FieldExtractor (locale={locale_code or 'default'})")
        return FieldExtractor(FieldConfigLoader.load(locale_code))

    @staticmethod
    def create_pipeline(
        recognizer: Optional[ITextRecognizer] = None,
        config: Optional[PipelineConfig] = None,
        locale_code: Optional[str] = None
    ) -> CardAnalysisPipeline:
        """
        Создает пайплайн из конфигурации.

        Args:
            recognizer: OCR (опционально; без него текст передаётся в analyze())
            config: Пороги всех стадий (по умолчанию из settings)
            locale_code: Локаль ключевых слов FieldExtractor
        """
        config = config or PipelineConfig()
        logger.debug("[CardFactory] Создание пайплайна")

        return CardAnalysisPipeline(
            recognizer=recognizer,
            enhancer=ImageEnhancer(config.enhancement),
            rotation=RotationCorrectionStage(config.rotation),
            color=DominantColorExtractor(config.color),
            logo=LogoRegionDetector(config.logo),
            field_extractor=CardComponentFactory.create_field_extractor(locale_code),
            config=config,
        )
