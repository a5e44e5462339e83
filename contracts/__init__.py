"""
Контракты DTO проекта Card Extraction.

Контракты:
- OCR -> Parsing: RecognitionResult
- Parsing -> Orchestrator: ExtractedFields
- Orchestrator -> Генератор сайта: ContactRecord, AnalysisOutcome
"""

from .card_extraction_dto import (
    RecognitionResult,
    ExtractedFields,
    Contacts,
    AnalysisMetadata,
    ContactRecord,
    AnalysisOutcome,
)

__all__ = [
    "RecognitionResult",
    "ExtractedFields",
    "Contacts",
    "AnalysisMetadata",
    "ContactRecord",
    "AnalysisOutcome",
]
