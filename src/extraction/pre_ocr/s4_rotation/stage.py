"""
Stage 4: Rotation (коррекция ориентации 0°/90°).

Строит бинарную карту границ по разностям яркости соседних пикселей и
считает:
- строки, в которых есть горизонтальная серия границ длиннее 30% ширины;
- столбцы, в которых есть вертикальная серия длиннее 30% высоты.

Если вертикальных линий больше чем в 1.5 раза — поворачиваем на 90°
по часовой стрелке.

ОГРАНИЧЕНИЕ: эвристика различает только "нужен поворот на 90°" и
"поворот не нужен". 180° и 270° не определяются.

Детерминирована: одинаковый вход → одинаковое решение.
"""

from typing import Optional, Tuple

from pydantic import ValidationError
from loguru import logger

from src.domain.contracts import RotationConfig, RotationDecision, ContractValidationError
from src.domain.raster_image import RasterImage
from ..domain.interfaces import IRotationCorrector
from ..infrastructure.filters import (
    calculate_luma,
    build_edge_map,
    longest_runs,
    rotate_clockwise_90,
)
from ...domain.exceptions import RotationError


class RotationCorrectionStage(IRotationCorrector):
    """
    Stage 4: RotationCorrector.

    КОНТРАКТЫ:
      Выходные: RotationDecision (rotation ∈ {0, 90})
    """

    def __init__(self, config: Optional[RotationConfig] = None) -> None:
        self.config = config or RotationConfig()
        logger.debug(
            f"[Stage 4: Rotation] Инициализирован "
            f"(edge>{self.config.edge_threshold}, run>{self.config.min_run_ratio:.0%}, "
            f"ratio={self.config.dominance_ratio})"
        )

    def detect(self, image: RasterImage) -> RotationDecision:
        """Определяет нужен ли поворот на 90°, не меняя изображение."""
        try:
            edges = build_edge_map(calculate_luma(image.pixels), self.config.edge_threshold)

            horizontal = int((longest_runs(edges) > image.width * self.config.min_run_ratio).sum())
            vertical = int((longest_runs(edges.T) > image.height * self.config.min_run_ratio).sum())
        except Exception as e:
            raise RotationError(
                message=f"Ошибка анализа границ: {image.source}",
                component="RotationCorrectionStage",
                original_error=e
            )

        rotation = 90 if vertical > horizontal * self.config.dominance_ratio else 0

        try:
            decision = RotationDecision(
                rotation=rotation,
                horizontal_lines=horizontal,
                vertical_lines=vertical
            )
        except ValidationError as e:
            raise ContractValidationError("S4", "RotationDecision", e.errors())

        logger.debug(
            f"[Stage 4] Линии: горизонтальные={horizontal}, вертикальные={vertical} "
            f"→ поворот {rotation}°"
        )
        return decision

    def correct(self, image: RasterImage) -> Tuple[RasterImage, int]:
        """
        Определяет и применяет поворот.

        Returns:
            (image', rotation): rotation ∈ {0, 90}; при 0 возвращается исходный объект
        """
        decision = self.detect(image)

        if decision.rotation == 0:
            return image, 0

        rotated = RasterImage(pixels=rotate_clockwise_90(image.pixels), source=image.source)
        logger.info(
            f"[Stage 4] ✅ Повёрнуто на 90°: {image.width}x{image.height} → "
            f"{rotated.width}x{rotated.height}"
        )
        return rotated, 90
