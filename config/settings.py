"""
Настройки проекта Card Extraction.

ВАЖНО: Для OCR через Google Vision укажите путь к credentials файлу
(переменная окружения GOOGLE_APPLICATION_CREDENTIALS).
"""

import os
from pathlib import Path

# =============================================================================
# ПУТИ ПРОЕКТА
# =============================================================================
PROJECT_ROOT = Path(__file__).parent.parent
DATA_DIR = PROJECT_ROOT / "data"
INPUT_DIR = DATA_DIR / "input"
OUTPUT_DIR = DATA_DIR / "output"

# =============================================================================
# GOOGLE CLOUD VISION API
# =============================================================================
# Путь к JSON-файлу с ключом сервисного аккаунта
GOOGLE_APPLICATION_CREDENTIALS = os.getenv(
    "GOOGLE_APPLICATION_CREDENTIALS",
    str(PROJECT_ROOT / "config" / "google_credentials.json")
)

# Язык распознавания (подсказка OCR): визитки на китайском + английском
OCR_LANGUAGE_HINTS = ["zh", "en"]

# Таймаут одного вызова распознавания (секунды)
OCR_TIMEOUT_SECONDS = 30.0

# Поддерживаемые форматы изображений
SUPPORTED_IMAGE_FORMATS = [".jpg", ".jpeg", ".png", ".webp", ".bmp", ".tiff"]

# =============================================================================
# IMAGE ENHANCER (resize + яркость/контраст + свёртки)
# =============================================================================
# Большая сторона после resize должна лежать в [MIN, MAX]
ENHANCE_MIN_DIMENSION = 800
ENHANCE_MAX_DIMENSION = 2000

# v' = clamp(((v + Δb) - 128) * f + 128, 0, 255)
ENHANCE_BRIGHTNESS_DELTA = 10
ENHANCE_CONTRAST_FACTOR = 1.2

SHARPEN_KERNEL = [
    [0, -1, 0],
    [-1, 5, -1],
    [0, -1, 0],
]
SHARPEN_DIVISOR = 1

DENOISE_KERNEL = [
    [1, 2, 1],
    [2, 4, 2],
    [1, 2, 1],
]
DENOISE_DIVISOR = 16

# =============================================================================
# ROTATION CORRECTOR
# =============================================================================
ROTATION_EDGE_THRESHOLD = 50      # Порог разницы яркости соседних пикселей
ROTATION_MIN_RUN_RATIO = 0.3      # Минимальная длина линии (доля ширины/высоты)
ROTATION_DOMINANCE_RATIO = 1.5    # vertical > ratio * horizontal → поворот 90°

# =============================================================================
# LOGO REGION DETECTOR
# =============================================================================
LOGO_REGION_RATIO = 0.3           # Угол 30% x 30%
LOGO_EDGE_THRESHOLD = 30
LOGO_MIN_CONTRAST = 50
LOGO_MIN_COMPLEXITY = 10
LOGO_MAX_COMPLEXITY = 100

# =============================================================================
# DOMINANT COLOR EXTRACTOR
# =============================================================================
COLOR_PALETTE_SIZE = 5
COLOR_SAMPLE_STEP = 10            # Берём каждый N-й пиксель
COLOR_ALPHA_THRESHOLD = 125       # Пиксели прозрачнее игнорируются
COLOR_WHITE_THRESHOLD = 250       # Почти белые пиксели игнорируются
COLOR_DARK_LUMINANCE = 128        # 0.299R + 0.587G + 0.114B < 128 → тёмный
COLOR_LIGHTER_OPACITY = 0.1

# =============================================================================
# FIELD EXTRACTOR
# =============================================================================
# Локаль с ключевыми словами (src/parsing/locales/<locale>/fields.yaml)
DEFAULT_LOCALE = "zh_CN"

# Фолбэк-локаль: используется если конфигурации DEFAULT_LOCALE нет
FALLBACK_LOCALE = "zh_CN"

COMPANY_MIN_LENGTH = 3
COMPANY_MAX_LENGTH = 50
ADDRESS_MIN_LENGTH = 5
ADDRESS_MAX_LENGTH = 100
ADDRESS_MIN_KEYWORDS = 2

# =============================================================================
# BATCH
# =============================================================================
# 1 = последовательная обработка
BATCH_MAX_WORKERS = 1


# =============================================================================
# ПРОВЕРКА КОНФИГУРАЦИИ
# =============================================================================
def validate_config():
    """Проверяет корректность конфигурации для работы с Google Vision."""
    errors = []

    if not GOOGLE_APPLICATION_CREDENTIALS:
        errors.append(
            "GOOGLE_APPLICATION_CREDENTIALS не указан!\n"
            "Укажите путь к JSON-ключу в config/settings.py или через переменную окружения."
        )
    elif not Path(GOOGLE_APPLICATION_CREDENTIALS).exists():
        errors.append(
            f"Файл credentials не найден: {GOOGLE_APPLICATION_CREDENTIALS}"
        )

    if errors:
        raise ValueError("\n".join(errors))

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

    return True
