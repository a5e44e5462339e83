"""
DominantColorExtractor: основной цвет и палитра визитки.

Работает с ОРИГИНАЛЬНЫМ изображением (до улучшения): яркость/контраст
исказили бы фирменный цвет.

Алгоритм (median cut, как в ColorThief):
1. Берём каждый sample_step-й пиксель
2. Отбрасываем прозрачные (alpha < 125) и почти белые (R, G, B > 250)
3. Квантуем Pillow MEDIANCUT в palette_size цветов
4. Сортируем кластеры по числу пикселей; первый — основной цвет
"""

from typing import List, Optional, Tuple

import numpy as np
from PIL import Image
from loguru import logger

from src.domain.contracts import ColorExtractionConfig
from src.domain.raster_image import RasterImage
from src.extraction.domain.exceptions import ColorExtractionError
from .color_utils import rgb_to_hex


class DominantColorExtractor:
    """
    Извлекает основной цвет (#rrggbb) и палитру.

    Детерминирован: одинаковое изображение → одинаковый результат.
    """

    def __init__(self, config: Optional[ColorExtractionConfig] = None) -> None:
        self.config = config or ColorExtractionConfig()
        logger.debug(f"[DominantColorExtractor] Инициализирован (palette={self.config.palette_size})")

    def extract_primary(self, image: RasterImage) -> str:
        """
        Основной цвет визитки.

        Raises:
            ColorExtractionError: если квантование не удалось
        """
        clusters = self._quantize(image, self.config.palette_size)
        primary = rgb_to_hex(*clusters[0][1])
        logger.debug(f"[DominantColorExtractor] Основной цвет: {primary} ({image.source})")
        return primary

    def extract_palette(self, image: RasterImage, color_count: Optional[int] = None) -> List[str]:
        """
        Палитра из color_count цветов (по убыванию доли пикселей, без дублей).

        Raises:
            ColorExtractionError: если квантование не удалось
        """
        count = color_count or self.config.palette_size
        if count < 1:
            raise ColorExtractionError(
                message=f"Размер палитры должен быть >= 1, получено: {count}",
                component="DominantColorExtractor"
            )

        palette: List[str] = []
        for _, rgb in self._quantize(image, count):
            hex_color = rgb_to_hex(*rgb)
            if hex_color not in palette:
                palette.append(hex_color)

        logger.debug(f"[DominantColorExtractor] Палитра: {palette}")
        return palette[:count]

    def _sample_pixels(self, image: RasterImage) -> np.ndarray:
        """Выборка RGB пикселей (N, 3) без прозрачных и почти белых."""
        flat = image.pixels.reshape(-1, 4)[::self.config.sample_step]

        opaque = flat[:, 3] >= self.config.alpha_threshold
        near_white = np.all(flat[:, :3] > self.config.white_threshold, axis=1)
        selected = flat[opaque & ~near_white, :3]

        if selected.size == 0:
            # Визитка целиком белая/прозрачная: квантуем всё что есть
            logger.debug("[DominantColorExtractor] Фильтр отбросил все пиксели, используем выборку целиком")
            selected = flat[:, :3]

        return np.ascontiguousarray(selected)

    def _quantize(self, image: RasterImage, color_count: int) -> List[Tuple[int, Tuple[int, int, int]]]:
        """Кластеры (число пикселей, (r, g, b)) по убыванию числа пикселей."""
        try:
            samples = self._sample_pixels(image)
            strip = Image.fromarray(samples.reshape(1, -1, 3))
            quantized = strip.quantize(colors=color_count, method=Image.Quantize.MEDIANCUT)

            palette = quantized.getpalette() or []
            counts = quantized.getcolors(maxcolors=256) or []
        except Exception as e:
            raise ColorExtractionError(
                message=f"Ошибка квантования цвета: {image.source}",
                component="DominantColorExtractor",
                original_error=e
            )

        clusters: List[Tuple[int, Tuple[int, int, int]]] = []
        for pixel_count, index in sorted(counts, key=lambda item: (-item[0], item[1])):
            base = index * 3
            if base + 2 >= len(palette):
                continue
            rgb = (palette[base], palette[base + 1], palette[base + 2])
            clusters.append((pixel_count, rgb))

        if not clusters:
            raise ColorExtractionError(
                message=f"Квантование не вернуло ни одного цвета: {image.source}",
                component="DominantColorExtractor"
            )

        return clusters
