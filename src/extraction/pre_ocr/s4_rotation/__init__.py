from .stage import RotationCorrectionStage

__all__ = ["RotationCorrectionStage"]
