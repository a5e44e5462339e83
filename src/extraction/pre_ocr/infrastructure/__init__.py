"""Pre-OCR Infrastructure exports."""

from .filters import (
    apply_brightness_contrast,
    apply_convolution_3x3,
    calculate_luma,
    build_edge_map,
    longest_runs,
    rotate_clockwise_90,
)

__all__ = [
    'apply_brightness_contrast',
    'apply_convolution_3x3',
    'calculate_luma',
    'build_edge_map',
    'longest_runs',
    'rotate_clockwise_90',
]
