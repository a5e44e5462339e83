"""
Локали домена Parsing: ключевые слова FieldExtractor из YAML.
"""

from .config_loader import FieldConfigLoader

__all__ = [
    "FieldConfigLoader",
]
