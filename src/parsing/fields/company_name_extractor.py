"""
CompanyNameExtractor: скоринг строк текста.

Кандидаты: непустые строки (после strip) длиной [3, 50].
score = +3 за каждое вхождение маркера компании
        -5 за каждое вхождение маркера должности
        +1 если длина в [4, 20]
        +1 если нет цифр и спецсимволов
        +max(0, 2 - индекс строки)
Побеждает максимальный score (при равенстве первая строка).
score <= 0 → названия нет.
"""

import re
from typing import List, Optional, Tuple

from loguru import logger

from src.domain.contracts import FieldExtractionConfig

PUNCTUATION_PATTERN = re.compile(r"[\d@#$%^&*()_+\-=\[\]{};':\"\\|,.<>/?]")

SHORT_LENGTH_RANGE = (4, 20)


def non_empty_lines(text: str) -> List[str]:
    return [line.strip() for line in text.splitlines() if line.strip()]


class CompanyNameExtractor:
    """Выбирает строку, наиболее похожую на название компании."""

    def __init__(self, config: FieldExtractionConfig):
        self.config = config

    def score_line(self, line: str, line_index: int) -> int:
        score = 0
        score += 3 * sum(line.count(kw) for kw in self.config.company_keywords)
        score -= 5 * sum(line.count(kw) for kw in self.config.role_keywords)

        if SHORT_LENGTH_RANGE[0] <= len(line) <= SHORT_LENGTH_RANGE[1]:
            score += 1
        if not PUNCTUATION_PATTERN.search(line):
            score += 1

        score += max(0, 2 - line_index)
        return score

    def extract(self, text: str) -> Optional[str]:
        best: Optional[Tuple[str, int]] = None

        for index, line in enumerate(non_empty_lines(text)):
            if not self.config.company_min_length <= len(line) <= self.config.company_max_length:
                continue

            score = self.score_line(line, index)
            if best is None or score > best[1]:
                best = (line, score)

        if best is None or best[1] <= 0:
            return None

        logger.debug(f"[CompanyNameExtractor] '{best[0]}' (score={best[1]})")
        return best[0]
