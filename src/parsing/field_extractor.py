"""
FieldExtractor: распознанный текст → ExtractedFields.

Пять независимых экстракторов работают по одному и тому же тексту;
порядок между ними не важен, результат детерминирован.
Метод extract() не бросает исключений: несовпадение = поле None.
"""

from typing import Callable, Optional

from loguru import logger

from contracts.card_extraction_dto import ExtractedFields
from src.domain.contracts import FieldExtractionConfig
from .fields import (
    PhoneExtractor,
    EmailExtractor,
    WebsiteExtractor,
    CompanyNameExtractor,
    AddressExtractor,
)
from .locales import FieldConfigLoader


class FieldExtractor:
    """
    Извлекает phone, email, website, company_name, address.

    Ключевые слова берутся из FieldExtractionConfig (YAML локали).
    """

    def __init__(self, config: Optional[FieldExtractionConfig] = None):
        self.config = config or FieldConfigLoader.load()
        self.phone = PhoneExtractor(self.config)
        self.email = EmailExtractor()
        self.website = WebsiteExtractor()
        self.company_name = CompanyNameExtractor(self.config)
        self.address = AddressExtractor(self.config)

        logger.debug(f"[FieldExtractor] Инициализирован (locale={self.config.locale_code})")

    def extract(self, text: Optional[str]) -> ExtractedFields:
        if not text or not isinstance(text, str):
            return ExtractedFields()

        fields = ExtractedFields(
            phone=self._safe("phone", self.phone.extract, text),
            email=self._safe("email", self.email.extract, text),
            website=self._safe("website", self.website.extract, text),
            company_name=self._safe("company_name", self.company_name.extract, text),
            address=self._safe("address", self.address.extract, text),
        )

        found = [name for name, value in vars(fields).items() if value]
        logger.debug(f"[FieldExtractor] Найдено полей: {len(found)} {found}")
        return fields

    @staticmethod
    def _safe(field_name: str, extract: Callable[[str], Optional[str]], text: str) -> Optional[str]:
        try:
            return extract(text)
        except Exception as e:
            logger.warning(f"[FieldExtractor] ❌ Ошибка извлечения {field_name}: {e}")
            return None
