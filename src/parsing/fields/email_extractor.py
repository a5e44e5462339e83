import re
from typing import Optional

EMAIL_PATTERN = re.compile(
    r"[a-zA-Z0-9](?:[a-zA-Z0-9._-]*[a-zA-Z0-9])?"
    r"@[a-zA-Z0-9](?:[a-zA-Z0-9.-]*[a-zA-Z0-9])?\.[a-zA-Z]{2,}"
)


class EmailExtractor:
    """Первое совпадение вида local@domain.tld, в нижнем регистре."""

    def extract(self, text: str) -> Optional[str]:
        match = EMAIL_PATTERN.search(text)
        return match.group(0).lower() if match else None
