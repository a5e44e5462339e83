"""
WebsiteExtractor: адрес сайта со схемой.

Цепочка: явная схема → префикс www. → голый домен с разрешённым TLD.
Результат в нижнем регистре; без схемы добавляется http://.

Домен из адреса почты сайтом не считается: для "abc@test.com" без
отдельной строки сайта website = None (а не "http://test.com").
"""

import re
from typing import Optional

from .contact_patterns import PatternRule, first_valid_match

ALLOWED_TLDS = ("com.cn", "com", "net", "org", "cn", "gov", "edu", "info", "biz")
SCHEME_PATTERN = re.compile(r"^https?://")
TRAILING_PUNCTUATION = ".,;:!?)]}>\"'，。；：！？）、"

_NO_SPACE_NO_HAN = r"[^\s\u4e00-\u9fa5]+"
_TLD_ALTERNATION = "|".join(re.escape(tld) for tld in ALLOWED_TLDS)


def clean_website(raw: str) -> str:
    cleaned = raw.strip().rstrip(TRAILING_PUNCTUATION).lower()
    if cleaned and not SCHEME_PATTERN.match(cleaned):
        cleaned = "http://" + cleaned
    return cleaned


def is_valid_website(website: str) -> bool:
    host = SCHEME_PATTERN.sub("", website)
    return "." in host and not host.startswith(".")


WEBSITE_RULES = (
    PatternRule(
        name="explicit_scheme",
        pattern=re.compile(rf"(https?://{_NO_SPACE_NO_HAN})", re.IGNORECASE),
        normalize=clean_website,
        validate=is_valid_website,
    ),
    PatternRule(
        name="www_prefix",
        pattern=re.compile(rf"(www\.{_NO_SPACE_NO_HAN})", re.IGNORECASE),
        normalize=clean_website,
        validate=is_valid_website,
    ),
    # Домен почты (после "@") сайтом не считается
    PatternRule(
        name="bare_domain",
        pattern=re.compile(
            r"(?<![@A-Za-z0-9_.-])"
            r"([a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?"
            rf"\.(?:{_TLD_ALTERNATION})(?:\.[a-zA-Z]{{2,}})?)"
            r"(?![A-Za-z0-9-])",
            re.IGNORECASE
        ),
        normalize=clean_website,
        validate=is_valid_website,
    ),
)


class WebsiteExtractor:
    """Извлекает первый сайт по цепочке правил."""

    def extract(self, text: str) -> Optional[str]:
        found = first_valid_match(text, WEBSITE_RULES)
        return found[1] if found else None
