from .stage import ImageResizeStage

__all__ = ["ImageResizeStage"]
