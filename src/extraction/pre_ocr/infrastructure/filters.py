"""
Pre-OCR Infrastructure: Фильтры и операции обработки изображений.

Утилиты низкого уровня над RGBA буфером (H, W, 4), uint8.
Альфа-канал никогда не изменяется.
"""

from typing import List

import cv2
import numpy as np
import numpy.typing as npt


def apply_brightness_contrast(
    pixels: npt.NDArray[np.uint8],
    brightness_delta: float,
    contrast_factor: float
) -> npt.NDArray[np.uint8]:
    """
    Яркость/контраст по каналам R, G, B.

    v' = clamp(((v + Δb) - 128) * f + 128, 0, 255)

    При Δb=0, f=1 результат побайтно совпадает со входом.
    """
    result = pixels.copy()
    rgb = pixels[:, :, :3].astype(np.float32)
    adjusted = ((rgb + brightness_delta) - 128.0) * contrast_factor + 128.0
    result[:, :, :3] = np.clip(np.rint(adjusted), 0, 255).astype(np.uint8)
    return result


def apply_convolution_3x3(
    pixels: npt.NDArray[np.uint8],
    kernel: List[List[int]],
    divisor: int
) -> npt.NDArray[np.uint8]:
    """
    Свёртка 3x3 только по внутренним пикселям (рамка в 1 пиксель не меняется).

    Читает исключительно из неизменяемого снимка буфера и пишет в отдельный
    выходной буфер: частично обновлённые соседи никогда не читаются.

    Args:
        pixels: RGBA буфер
        kernel: Ядро 3x3
        divisor: Делитель суммы
    """
    output = pixels.copy()
    height, width = pixels.shape[:2]
    if height < 3 or width < 3:
        return output

    snapshot = pixels[:, :, :3].astype(np.float32)

    # Ядра симметричны, поэтому корреляция filter2D == свёртка
    weights = np.asarray(kernel, dtype=np.float32)
    response = cv2.filter2D(snapshot, cv2.CV_32F, weights, borderType=cv2.BORDER_REPLICATE)

    interior = response[1:-1, 1:-1] / float(divisor)
    output[1:-1, 1:-1, :3] = np.clip(np.rint(interior), 0, 255).astype(np.uint8)
    return output


def calculate_luma(pixels: npt.NDArray[np.uint8]) -> npt.NDArray[np.float32]:
    """Невзвешенная яркость (R + G + B) / 3."""
    return pixels[:, :, :3].astype(np.float32).sum(axis=2) / 3.0


def build_edge_map(luma: npt.NDArray[np.float32], threshold: float) -> npt.NDArray[np.bool_]:
    """
    Бинарная карта границ конечными разностями.

    Пиксель (x, y) — граница, если
    |luma(x,y) - luma(x+1,y)| > threshold или |luma(x,y) - luma(x,y+1)| > threshold.
    У последнего столбца/строки соответствующего соседа нет.
    """
    edges = np.zeros(luma.shape, dtype=bool)
    if luma.shape[1] > 1:
        edges[:, :-1] |= np.abs(luma[:, :-1] - luma[:, 1:]) > threshold
    if luma.shape[0] > 1:
        edges[:-1, :] |= np.abs(luma[:-1, :] - luma[1:, :]) > threshold
    return edges


def longest_runs(mask: npt.NDArray[np.bool_]) -> npt.NDArray[np.int64]:
    """
    Длина самой длинной серии True в каждой строке маски.

    Для столбцов передавайте mask.T.
    """
    rows, cols = mask.shape
    padded = np.zeros((rows, cols + 2), dtype=np.int8)
    padded[:, 1:-1] = mask
    transitions = np.diff(padded, axis=1)

    # nonzero идёт по строкам слева направо, поэтому начала и концы серий совпадают попарно
    start_rows, start_cols = np.nonzero(transitions == 1)
    _, end_cols = np.nonzero(transitions == -1)

    result = np.zeros(rows, dtype=np.int64)
    if start_rows.size:
        np.maximum.at(result, start_rows, end_cols - start_cols)
    return result


def rotate_clockwise_90(pixels: npt.NDArray[np.uint8]) -> npt.NDArray[np.uint8]:
    """Поворот на 90° по часовой стрелке (ширина и высота меняются местами)."""
    return np.ascontiguousarray(cv2.rotate(pixels, cv2.ROTATE_90_CLOCKWISE))
