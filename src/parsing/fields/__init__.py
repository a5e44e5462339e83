"""
Экстракторы отдельных полей визитки.
"""

from .contact_patterns import PatternRule, first_valid_match
from .phone_extractor import PhoneExtractor, is_valid_phone_number
from .email_extractor import EmailExtractor
from .website_extractor import WebsiteExtractor
from .company_name_extractor import CompanyNameExtractor
from .address_extractor import AddressExtractor

__all__ = [
    "PatternRule",
    "first_valid_match",
    "PhoneExtractor",
    "is_valid_phone_number",
    "EmailExtractor",
    "WebsiteExtractor",
    "CompanyNameExtractor",
    "AddressExtractor",
]
