from .color_utils import rgb_to_hex, hex_to_rgb, is_dark, lighter_color
from .dominant_color import DominantColorExtractor

__all__ = [
    "rgb_to_hex",
    "hex_to_rgb",
    "is_dark",
    "lighter_color",
    "DominantColorExtractor",
]
