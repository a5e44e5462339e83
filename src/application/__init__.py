"""
Application слой: сборка пайплайна визиток.
"""

from .factory import CardComponentFactory

__all__ = ["CardComponentFactory"]
