"""
Валидационные контракты (contracts) для пайплайна анализа визитки.

Каждый контракт гарантирует:
  1. Правильный тип данных (type safety)
  2. Значения в допустимых диапазонах (data integrity)
  3. Обязательные поля (completeness)

Все пороги ("магические числа") вынесены сюда в виде именованных
конфигураций, которые передаются в каждую стадию. Значения по умолчанию
берутся из config/settings.py.

Все модели используют Pydantic v2 с Field validators.
"""

from typing import List, Dict, Any, Union
from pydantic import BaseModel, Field, field_validator, model_validator, ConfigDict

from config.settings import (
    ENHANCE_MIN_DIMENSION,
    ENHANCE_MAX_DIMENSION,
    ENHANCE_BRIGHTNESS_DELTA,
    ENHANCE_CONTRAST_FACTOR,
    SHARPEN_KERNEL,
    SHARPEN_DIVISOR,
    DENOISE_KERNEL,
    DENOISE_DIVISOR,
    ROTATION_EDGE_THRESHOLD,
    ROTATION_MIN_RUN_RATIO,
    ROTATION_DOMINANCE_RATIO,
    LOGO_REGION_RATIO,
    LOGO_EDGE_THRESHOLD,
    LOGO_MIN_CONTRAST,
    LOGO_MIN_COMPLEXITY,
    LOGO_MAX_COMPLEXITY,
    COLOR_PALETTE_SIZE,
    COLOR_SAMPLE_STEP,
    COLOR_ALPHA_THRESHOLD,
    COLOR_WHITE_THRESHOLD,
    COMPANY_MIN_LENGTH,
    COMPANY_MAX_LENGTH,
    ADDRESS_MIN_LENGTH,
    ADDRESS_MAX_LENGTH,
    ADDRESS_MIN_KEYWORDS,
    OCR_TIMEOUT_SECONDS,
    BATCH_MAX_WORKERS,
)


# ============================================================================
# IMAGE ENHANCER
# ============================================================================

class EnhancementParams(BaseModel):
    """Параметры ImageEnhancer (resize → яркость/контраст → sharpen → denoise)."""

    model_config = ConfigDict(frozen=True)

    min_dimension: int = Field(ENHANCE_MIN_DIMENSION, gt=0, description="Минимум для большей стороны (px)")
    max_dimension: int = Field(ENHANCE_MAX_DIMENSION, gt=0, description="Максимум для большей стороны (px)")
    brightness_delta: float = Field(ENHANCE_BRIGHTNESS_DELTA, ge=-255, le=255, description="Сдвиг яркости Δb")
    contrast_factor: float = Field(ENHANCE_CONTRAST_FACTOR, ge=0, description="Множитель контраста f")
    sharpen_kernel: List[List[int]] = Field(default_factory=lambda: [row[:] for row in SHARPEN_KERNEL])
    sharpen_divisor: int = Field(SHARPEN_DIVISOR, gt=0)
    denoise_kernel: List[List[int]] = Field(default_factory=lambda: [row[:] for row in DENOISE_KERNEL])
    denoise_divisor: int = Field(DENOISE_DIVISOR, gt=0)

    @field_validator('sharpen_kernel', 'denoise_kernel')
    @classmethod
    def kernel_is_3x3(cls, v: List[List[int]]) -> List[List[int]]:
        """Ядро свёртки должно быть строго 3x3."""
        if len(v) != 3 or any(len(row) != 3 for row in v):
            raise ValueError(f"Ядро свёртки должно быть 3x3, получено: {v}")
        return v

    @model_validator(mode='after')
    def dimensions_ordered(self) -> "EnhancementParams":
        if self.min_dimension > self.max_dimension:
            raise ValueError(
                f"min_dimension ({self.min_dimension}) > max_dimension ({self.max_dimension})"
            )
        return self


# ============================================================================
# ROTATION CORRECTOR
# ============================================================================

class RotationConfig(BaseModel):
    """Пороги детектора ориентации по длинным линиям границ."""

    model_config = ConfigDict(frozen=True)

    edge_threshold: float = Field(ROTATION_EDGE_THRESHOLD, ge=0, le=255)
    min_run_ratio: float = Field(ROTATION_MIN_RUN_RATIO, gt=0, le=1)
    dominance_ratio: float = Field(ROTATION_DOMINANCE_RATIO, gt=0)


class RotationDecision(BaseModel):
    """Решение RotationCorrector (0 или 90) вместе с подсчётами линий."""

    model_config = ConfigDict(frozen=True)

    rotation: int = Field(..., description="Применённый поворот по часовой стрелке")
    horizontal_lines: int = Field(..., ge=0)
    vertical_lines: int = Field(..., ge=0)

    @field_validator('rotation')
    @classmethod
    def only_zero_or_ninety(cls, v: int) -> int:
        """Детектор различает только 0° и 90°."""
        if v not in (0, 90):
            raise ValueError(f"Поворот должен быть 0 или 90, получено: {v}")
        return v


# ============================================================================
# LOGO REGION DETECTOR
# ============================================================================

class LogoDetectionConfig(BaseModel):
    """Пороги поиска логотипа в углах визитки."""

    model_config = ConfigDict(frozen=True)

    region_ratio: float = Field(LOGO_REGION_RATIO, gt=0, le=0.5, description="Доля стороны для угла")
    edge_threshold: float = Field(LOGO_EDGE_THRESHOLD, ge=0, le=255)
    min_contrast: float = Field(LOGO_MIN_CONTRAST, ge=0, le=255)
    min_complexity: float = Field(LOGO_MIN_COMPLEXITY, ge=0)
    max_complexity: float = Field(LOGO_MAX_COMPLEXITY, gt=0)

    @model_validator(mode='after')
    def complexity_bounds_ordered(self) -> "LogoDetectionConfig":
        if self.min_complexity >= self.max_complexity:
            raise ValueError(
                f"min_complexity ({self.min_complexity}) >= max_complexity ({self.max_complexity})"
            )
        return self


class Region(BaseModel):
    """
    Кандидат на логотип.

    Координаты всегда в пределах изображения (проверяется через fits()).
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="top_left, top_right, bottom_left, bottom_right")
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)
    width: int = Field(..., gt=0)
    height: int = Field(..., gt=0)
    contrast: float = Field(0.0, ge=0, le=255)
    complexity: float = Field(0.0, ge=0)
    score: float = Field(0.0)

    def fits(self, image_width: int, image_height: int) -> bool:
        return self.x + self.width <= image_width and self.y + self.height <= image_height


# ============================================================================
# DOMINANT COLOR EXTRACTOR
# ============================================================================

class ColorExtractionConfig(BaseModel):
    """Параметры квантования цвета (median cut)."""

    model_config = ConfigDict(frozen=True)

    palette_size: int = Field(COLOR_PALETTE_SIZE, ge=1, le=256)
    sample_step: int = Field(COLOR_SAMPLE_STEP, ge=1)
    alpha_threshold: int = Field(COLOR_ALPHA_THRESHOLD, ge=0, le=255)
    white_threshold: int = Field(COLOR_WHITE_THRESHOLD, ge=0, le=255)


# ============================================================================
# FIELD EXTRACTOR
# ============================================================================

class FieldExtractionConfig(BaseModel):
    """
    Конфигурация FieldExtractor.

    Наборы ключевых слов загружаются из YAML локали
    (src/parsing/locales/<locale>/fields.yaml), пороги длины — из settings.
    """

    model_config = ConfigDict(frozen=True)

    locale_code: str = Field(..., min_length=2)
    company_keywords: List[str] = Field(..., min_length=1, description="Маркеры названия компании (+3)")
    role_keywords: List[str] = Field(default_factory=list, description="Маркеры должности (-5)")
    address_keywords: List[str] = Field(..., min_length=1, description="Маркеры адреса")
    phone_labels: List[str] = Field(default_factory=list, description="Подписи мобильного телефона")
    landline_labels: List[str] = Field(default_factory=list, description="Подписи стационарного телефона")
    company_min_length: int = Field(COMPANY_MIN_LENGTH, ge=1)
    company_max_length: int = Field(COMPANY_MAX_LENGTH, ge=1)
    address_min_length: int = Field(ADDRESS_MIN_LENGTH, ge=1)
    address_max_length: int = Field(ADDRESS_MAX_LENGTH, ge=1)
    address_min_keywords: int = Field(ADDRESS_MIN_KEYWORDS, ge=1)

    @field_validator('company_keywords', 'role_keywords', 'address_keywords', 'phone_labels', 'landline_labels')
    @classmethod
    def no_blank_keywords(cls, v: List[str]) -> List[str]:
        """Пустые ключевые слова совпадали бы с любой строкой."""
        if any(not kw.strip() for kw in v):
            raise ValueError("Ключевые слова не могут быть пустыми")
        return v


# ============================================================================
# PIPELINE
# ============================================================================

class PipelineConfig(BaseModel):
    """Полная конфигурация CardAnalysisPipeline."""

    model_config = ConfigDict(frozen=True)

    enhancement: EnhancementParams = Field(default_factory=EnhancementParams)
    rotation: RotationConfig = Field(default_factory=RotationConfig)
    logo: LogoDetectionConfig = Field(default_factory=LogoDetectionConfig)
    color: ColorExtractionConfig = Field(default_factory=ColorExtractionConfig)
    recognition_timeout: float = Field(OCR_TIMEOUT_SECONDS, gt=0, description="Таймаут OCR (сек)")
    max_workers: int = Field(BATCH_MAX_WORKERS, ge=1, description="Потоки для analyze_all")


# ============================================================================
# ERRORS & DIAGNOSTICS
# ============================================================================

class ContractValidationError(Exception):
    """Exception для нарушения контрактов (используется вместо Pydantic ValidationError)."""

    def __init__(self, stage_name: str, contract_name: str, errors: Union[List[Dict[str, Any]], List[Any]]) -> None:
        self.stage_name = stage_name
        self.contract_name = contract_name
        self.errors = errors

        error_messages = []
        for err in errors:
            if isinstance(err, dict):
                loc = err.get('loc', [])[0] if err.get('loc') else 'unknown'
                err_type = err.get('type', 'unknown')
                msg = err.get('msg', 'unknown error')
                error_messages.append(f"  {loc} ({err_type}): {msg}")
            else:
                error_messages.append(f"  {str(err)}")

        message = (
            f"❌ Contract violation in {stage_name} ({contract_name}):\n"
            + "\n".join(error_messages)
        )
        super().__init__(message)
