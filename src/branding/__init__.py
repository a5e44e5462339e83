"""
Домен Branding: анализ ОРИГИНАЛЬНОГО (неулучшенного) изображения.

- DominantColorExtractor: основной цвет и палитра
- LogoRegionDetector: поиск логотипа в углах визитки
"""

from .color import DominantColorExtractor
from .logo import LogoRegionDetector

__all__ = [
    "DominantColorExtractor",
    "LogoRegionDetector",
]
