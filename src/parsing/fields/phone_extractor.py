"""
PhoneExtractor: мобильный или стационарный телефон.

Цепочка (порядок = приоритет):
1. подписанный мобильный ("电话: 138...")
2. подписанный стационарный с кодом города ("座机: 010-...")
3. +86 мобильный
4. группы через дефис (138-1234-5678)
5. голые 11 цифр

Разделители (дефис, пробелы) удаляются; номер принимается только если
проходит ^1[3-9]\\d{9}$ или ^0\\d{2,3}\\d{7,8}$.
"""

import re
from typing import List, Optional

from src.domain.contracts import FieldExtractionConfig
from .contact_patterns import PatternRule, first_valid_match, keyword_alternation

MOBILE_PATTERN = re.compile(r"^1[3-9][0-9]{9}$")
LANDLINE_PATTERN = re.compile(r"^0[0-9]{2,3}[0-9]{7,8}$")
SEPARATORS = re.compile(r"[-\s]")


def clean_phone_number(raw: str) -> str:
    return SEPARATORS.sub("", raw)


def is_valid_phone_number(phone: str) -> bool:
    return bool(MOBILE_PATTERN.match(phone) or LANDLINE_PATTERN.match(phone))


class PhoneExtractor:
    """Извлекает первый валидный номер по цепочке правил."""

    def __init__(self, config: FieldExtractionConfig):
        self.config = config
        self.rules = self._build_rules()

    def _build_rules(self) -> List[PatternRule]:
        rules: List[PatternRule] = []

        if self.config.phone_labels:
            labels = keyword_alternation(self.config.phone_labels)
            rules.append(self._rule(
                "labeled_mobile",
                rf"(?:{labels})\s*[:：]?\s*(1[3-9][0-9]{{9}})(?![0-9])"
            ))

        if self.config.landline_labels:
            labels = keyword_alternation(self.config.landline_labels)
            rules.append(self._rule(
                "labeled_landline",
                rf"(?:{labels})\s*[:：]?\s*(0[0-9]{{2,3}}[-\s]?[0-9]{{7,8}})(?![0-9])"
            ))

        rules.append(self._rule("country_code_mobile", r"\+86\s?(1[3-9][0-9]{9})(?![0-9])"))
        rules.append(self._rule("dash_grouped", r"(?<![0-9])([0-9]{3}-[0-9]{4}-[0-9]{4})(?![0-9])"))
        rules.append(self._rule("bare_digits", r"(?<![0-9])([0-9]{11})(?![0-9])"))
        return rules

    @staticmethod
    def _rule(name: str, pattern: str) -> PatternRule:
        return PatternRule(
            name=name,
            pattern=re.compile(pattern),
            normalize=clean_phone_number,
            validate=is_valid_phone_number,
        )

    def extract(self, text: str) -> Optional[str]:
        found = first_valid_match(text, self.rules)
        return found[1] if found else None
