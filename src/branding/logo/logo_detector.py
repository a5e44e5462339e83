"""
LogoRegionDetector: поиск логотипа в углах визитки.

Кандидаты фиксированы: четыре угла по 30% x 30% ширины/высоты
(top_left, top_right, bottom_left, bottom_right).

Для каждого кандидата:
- contrast   = max(luma) - min(luma)
- complexity = edge_count / (area / 100), граница — разность яркости > 30
- подходит, если contrast > 50 и 10 < complexity < 100
- score      = contrast + (100 - |50 - complexity|)

Выбор: среди подходящих сначала верхняя половина (y < height / 2),
иначе лучший по score; если подходящих нет — None (логотип опционален).
"""

from typing import List, Optional

import numpy as np
from pydantic import ValidationError
from loguru import logger

from src.domain.contracts import LogoDetectionConfig, Region, ContractValidationError
from src.domain.raster_image import RasterImage
from src.extraction.domain.exceptions import LogoDetectionError
from src.extraction.pre_ocr.infrastructure.filters import calculate_luma, build_edge_map


class LogoRegionDetector:
    """Эвристический поиск логотипа по контрасту и сложности угловых регионов."""

    CORNERS = ("top_left", "top_right", "bottom_left", "bottom_right")

    def __init__(self, config: Optional[LogoDetectionConfig] = None) -> None:
        self.config = config or LogoDetectionConfig()
        logger.debug(
            f"[LogoRegionDetector] Инициализирован "
            f"(region={self.config.region_ratio:.0%}, contrast>{self.config.min_contrast}, "
            f"complexity∈({self.config.min_complexity}, {self.config.max_complexity}))"
        )

    def candidate_regions(self, image: RasterImage) -> List[Region]:
        """Четыре угловых региона (без оценок)."""
        region_w = max(1, int(image.width * self.config.region_ratio))
        region_h = max(1, int(image.height * self.config.region_ratio))
        right_x = image.width - region_w
        bottom_y = image.height - region_h

        origins = {
            "top_left": (0, 0),
            "top_right": (right_x, 0),
            "bottom_left": (0, bottom_y),
            "bottom_right": (right_x, bottom_y),
        }

        regions = []
        for name in self.CORNERS:
            x, y = origins[name]
            try:
                region = Region(name=name, x=x, y=y, width=region_w, height=region_h)
            except ValidationError as e:
                raise ContractValidationError("LogoRegionDetector", "Region", e.errors())
            regions.append(region)
        return regions

    def score_candidates(self, image: RasterImage) -> List[Region]:
        """Все четыре угла с contrast, complexity и score (порядок CORNERS)."""
        luma = calculate_luma(image.pixels)

        scored = []
        for region in self.candidate_regions(image):
            patch = luma[region.y:region.y + region.height, region.x:region.x + region.width]
            contrast = float(patch.max() - patch.min())
            complexity = self._complexity(patch)
            score = contrast + (100.0 - abs(50.0 - complexity))

            scored.append(region.model_copy(update={
                "contrast": contrast,
                "complexity": complexity,
                "score": score,
            }))

            logger.debug(
                f"[LogoRegionDetector] {region.name}: contrast={contrast:.1f}, "
                f"complexity={complexity:.1f}, score={score:.1f}"
            )
        return scored

    def qualifies(self, region: Region) -> bool:
        return (
            region.contrast > self.config.min_contrast
            and self.config.min_complexity < region.complexity < self.config.max_complexity
        )

    def detect(self, image: RasterImage) -> Optional[Region]:
        """
        Лучший регион-кандидат на логотип или None.

        Raises:
            LogoDetectionError: при сбое анализа (не при отсутствии логотипа)
        """
        try:
            candidates = [r for r in self.score_candidates(image) if self.qualifies(r)]
        except ContractValidationError:
            raise
        except Exception as e:
            raise LogoDetectionError(
                message=f"Ошибка анализа регионов: {image.source}",
                component="LogoRegionDetector",
                original_error=e
            )

        if not candidates:
            logger.debug(f"[LogoRegionDetector] Логотип не найден: {image.source}")
            return None

        # sorted стабилен: при равном score побеждает порядок CORNERS
        ranked = sorted(candidates, key=lambda r: r.score, reverse=True)
        top_half = [r for r in ranked if r.y < image.height / 2]
        best = top_half[0] if top_half else ranked[0]

        logger.debug(f"[LogoRegionDetector] Выбран регион {best.name} (score={best.score:.1f})")
        return best

    def extract(self, image: RasterImage) -> Optional[RasterImage]:
        """Вырезает лучший регион без потерь в независимое изображение."""
        region = self.detect(image)
        if region is None:
            return None
        return image.crop(region)

    def _complexity(self, patch: np.ndarray) -> float:
        """
        Плотность границ: число граничных пикселей на 100 пикселей площади.

        Считаются пиксели без последней строки/столбца региона: их соседи
        справа и снизу лежат внутри региона.
        """
        area = patch.shape[0] * patch.shape[1]
        edges = build_edge_map(patch, self.config.edge_threshold)
        edge_count = int(edges[:-1, :-1].sum())
        return edge_count / (area / 100.0)
