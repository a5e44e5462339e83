"""
Упорядоченные цепочки правил (matcher, validator) для контактов.

Порядок правил = приоритет. Для каждого правила перебираются все
совпадения; побеждает первое совпадение, прошедшее валидацию.
Дальнейшего скоринга нет.
"""

import re
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Pattern, Sequence, Tuple


@dataclass(frozen=True)
class PatternRule:
    """Одно правило цепочки: регулярка + нормализация + проверка."""
    name: str
    pattern: Pattern[str]
    normalize: Callable[[str], str]
    validate: Callable[[str], bool]
    group: int = 1

    def candidates(self, text: str) -> Iterable[str]:
        for match in self.pattern.finditer(text):
            yield self.normalize(match.group(self.group))


def first_valid_match(text: str, rules: Sequence[PatternRule]) -> Optional[Tuple[str, str]]:
    """
    Первое валидное значение по цепочке правил.

    Returns:
        (имя правила, нормализованное значение) или None
    """
    for rule in rules:
        for value in rule.candidates(text):
            if rule.validate(value):
                return rule.name, value
    return None


def keyword_alternation(keywords: Sequence[str]) -> str:
    """
    Альтернация для regex из ключевых слов.

    Длинные слова идут первыми: "联系电话" должен выиграть у "电话".
    """
    ordered: List[str] = sorted(set(keywords), key=lambda kw: (-len(kw), kw))
    return "|".join(re.escape(kw) for kw in ordered)
