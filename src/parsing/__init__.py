"""
Домен Parsing: распознанный текст визитки → структурированные поля.

Содержит:
- FieldExtractor: агрегатор экстракторов полей
- fields/: по одному экстрактору на поле
- locales/: ключевые слова локалей (YAML)
"""

from .field_extractor import FieldExtractor
from .locales import FieldConfigLoader

__all__ = [
    "FieldExtractor",
    "FieldConfigLoader",
]
