"""
RasterImage: изображение визитки в памяти.

Буфер — numpy uint8 (height, width, 4), порядок каналов RGBA.
Живёт только в рамках одного прогона пайплайна и нигде не сохраняется.
Стадии, меняющие пиксели (свёртка, поворот), возвращают НОВЫЙ RasterImage.
"""

from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

from src.domain.contracts import Region


@dataclass(frozen=True)
class RasterImage:
    """RGBA изображение (interleaved 8-bit)."""

    pixels: npt.NDArray[np.uint8]
    source: str = "memory"

    def __post_init__(self) -> None:
        if self.pixels.ndim != 3 or self.pixels.shape[2] != 4:
            raise ValueError(f"Ожидается буфер (H, W, 4), получено: {self.pixels.shape}")
        if self.pixels.dtype != np.uint8:
            raise ValueError(f"Ожидается dtype uint8, получено: {self.pixels.dtype}")
        if self.pixels.shape[0] == 0 or self.pixels.shape[1] == 0:
            raise ValueError("Пустое изображение")

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])

    def crop(self, region: Region) -> "RasterImage":
        """Вырезает регион без потерь в независимый буфер."""
        if not region.fits(self.width, self.height):
            raise ValueError(
                f"Регион {region.name} ({region.x},{region.y},{region.width}x{region.height}) "
                f"вне изображения {self.width}x{self.height}"
            )
        view = self.pixels[region.y:region.y + region.height, region.x:region.x + region.width]
        return RasterImage(pixels=view.copy(), source=f"{self.source}#{region.name}")
