from .stage import ConvolutionStage

__all__ = ["ConvolutionStage"]
