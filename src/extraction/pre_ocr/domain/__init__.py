"""Pre-OCR Domain exports."""

from .interfaces import (
    IImageEnhancer,
    IRotationCorrector,
)

__all__ = [
    'IImageEnhancer',
    'IRotationCorrector',
]
