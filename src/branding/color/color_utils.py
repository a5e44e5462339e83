"""
Преобразования цвета: HEX ↔ RGB, яркость, фоновые оттенки.
"""

import re
from typing import Optional, Tuple

from config.settings import COLOR_DARK_LUMINANCE, COLOR_LIGHTER_OPACITY

HEX_COLOR_PATTERN = re.compile(r"^#([0-9a-f]{2})([0-9a-f]{2})([0-9a-f]{2})\Z", re.IGNORECASE)


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """(r, g, b) → "#rrggbb" (нижний регистр)."""
    for value in (r, g, b):
        if not 0 <= int(value) <= 255:
            raise ValueError(f"Компонента цвета вне [0, 255]: {value}")
    return "#{:02x}{:02x}{:02x}".format(int(r), int(g), int(b))


def hex_to_rgb(hex_color: Optional[str]) -> Optional[Tuple[int, int, int]]:
    """
    "#RRGGBB" → (r, g, b).

    Принимается только строгий формат с "#" (регистр не важен);
    всё остальное → None.
    """
    if not isinstance(hex_color, str):
        return None
    match = HEX_COLOR_PATTERN.match(hex_color)
    if not match:
        return None
    return int(match.group(1), 16), int(match.group(2), 16), int(match.group(3), 16)


def is_dark(hex_color: str) -> bool:
    """Тёмный цвет: 0.299R + 0.587G + 0.114B < 128. Невалидный HEX → False."""
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return False
    r, g, b = rgb
    return (r * 299 + g * 587 + b * 114) / 1000 < COLOR_DARK_LUMINANCE


def lighter_color(hex_color: str, opacity: float = COLOR_LIGHTER_OPACITY) -> str:
    """
    Полупрозрачный вариант цвета для фона сайта: "rgba(r, g, b, opacity)".

    Невалидный HEX возвращается без изменений.
    """
    rgb = hex_to_rgb(hex_color)
    if rgb is None:
        return hex_color
    r, g, b = rgb
    return f"rgba({r}, {g}, {b}, {opacity})"
