from .stage import BrightnessContrastStage

__all__ = ["BrightnessContrastStage"]
