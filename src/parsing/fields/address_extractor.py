from typing import Optional

from src.domain.contracts import FieldExtractionConfig
from .company_name_extractor import non_empty_lines


class AddressExtractor:
    """
    Первая строка длиной [5, 100] с >= 2 разными маркерами адреса
    (подписи, административные единицы, улицы/здания).

    Строка возвращается как есть (после strip), без скоринга.
    """

    def __init__(self, config: FieldExtractionConfig):
        self.config = config

    def count_markers(self, line: str) -> int:
        return sum(1 for kw in self.config.address_keywords if kw in line)

    def extract(self, text: str) -> Optional[str]:
        for line in non_empty_lines(text):
            if not self.config.address_min_length <= len(line) <= self.config.address_max_length:
                continue
            if self.count_markers(line) >= self.config.address_min_keywords:
                return line
        return None
