"""
DTO контракт: пайплайн визитки -> генератор сайта.

ContactRecord — структурированный результат анализа одной визитки.
Создаётся один раз за прогон и ядром больше не изменяется (frozen).

Инварианты (гарантируются экстракторами):
- phone: ^1[3-9]\\d{9}$ или ^0\\d{2,3}\\d{7,8}$
- email: в нижнем регистре, local@domain.tld
- website: всегда со схемой (http:// или https://)
- primary_color: ровно "#" + 6 hex цифр
"""

import base64
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class RecognitionResult:
    """
    Ответ внешнего OCR.

    confidence носит информационный характер и не влияет на логику.
    """
    text: str
    confidence: float = 0.0


@dataclass(frozen=True)
class ExtractedFields:
    """Поля, извлечённые FieldExtractor из текста. Все опциональны."""
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    company_name: Optional[str] = None
    address: Optional[str] = None

    def is_empty(self) -> bool:
        return not any((self.phone, self.email, self.website, self.company_name, self.address))


@dataclass(frozen=True)
class Contacts:
    """Контакты компании."""
    phone: Optional[str] = None
    email: Optional[str] = None
    website: Optional[str] = None
    address: Optional[str] = None


@dataclass(frozen=True)
class AnalysisMetadata:
    """
    Метаданные обработки.
    """
    source: str                                         # Имя исходного файла / "memory"
    image_width: int                                    # Ширина оригинала (px)
    image_height: int                                   # Высота оригинала (px)
    rotation_applied: int = 0                           # 0 или 90
    enhanced: bool = False                              # Удалось ли улучшение
    recognition_confidence: Optional[float] = None      # Информационно
    degraded_stages: List[str] = field(default_factory=list)  # Стадии, упавшие мягко


@dataclass(frozen=True)
class ContactRecord:
    """
    Результат анализа визитки.

    Пустая запись (все поля None) — легитимный результат, не ошибка.
    """
    company_name: Optional[str] = None
    contacts: Contacts = field(default_factory=Contacts)
    primary_color: Optional[str] = None
    logo: Optional[bytes] = None                        # PNG независимой вырезки
    metadata: Optional[AnalysisMetadata] = None

    def to_dict(self) -> Dict[str, Any]:
        """JSON-совместимое представление (логотип как data URL)."""
        logo_url = None
        if self.logo is not None:
            logo_url = "data:image/png;base64," + base64.b64encode(self.logo).decode("ascii")

        result: Dict[str, Any] = {
            "companyName": self.company_name,
            "contacts": {
                "phone": self.contacts.phone,
                "email": self.contacts.email,
                "website": self.contacts.website,
                "address": self.contacts.address,
            },
            "primaryColor": self.primary_color,
            "logo": logo_url,
        }
        if self.metadata is not None:
            result["metadata"] = {
                "source": self.metadata.source,
                "imageWidth": self.metadata.image_width,
                "imageHeight": self.metadata.image_height,
                "rotationApplied": self.metadata.rotation_applied,
                "enhanced": self.metadata.enhanced,
                "recognitionConfidence": self.metadata.recognition_confidence,
                "degradedStages": list(self.metadata.degraded_stages),
            }
        return result


@dataclass(frozen=True)
class AnalysisOutcome:
    """
    Итог обработки одного элемента в analyze_all().

    Всегда "settled": либо success с record, либо failed с причиной.
    """
    index: int
    source: str
    record: Optional[ContactRecord] = None
    error_kind: Optional[str] = None                    # decode_failure / recognition_failure / ...
    error: Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.record is not None

    @property
    def status(self) -> str:
        return "success" if self.succeeded else "failed"
