"""
Config Loader для ключевых слов FieldExtractor.

Загружает FieldExtractionConfig для локали из YAML:
- <locale>/fields.yaml — наборы ключевых слов локали
- base.yaml — общие списки, подключаемые через "$extends: <ключ>"

Если конфига локали нет, используется FALLBACK_LOCALE из settings.
"""

from pathlib import Path
from typing import Any, ClassVar, Dict, List, Optional

import yaml
from loguru import logger
from pydantic import ValidationError

from config.settings import DEFAULT_LOCALE, FALLBACK_LOCALE
from src.domain.contracts import FieldExtractionConfig, ContractValidationError

KEYWORD_FIELDS = (
    "company_keywords",
    "role_keywords",
    "address_keywords",
    "phone_labels",
    "landline_labels",
)


class FieldConfigLoader:
    """
    Загрузчик FieldExtractionConfig с кешем по коду локали.

    Директория конфигов по умолчанию: рядом с этим файлом.
    """

    _config_dir: ClassVar[Optional[Path]] = None
    _cache: ClassVar[Dict[str, FieldExtractionConfig]] = {}

    @classmethod
    def config_dir(cls) -> Path:
        if cls._config_dir is None:
            cls._config_dir = Path(__file__).parent
        return Path(cls._config_dir)

    @classmethod
    def set_config_dir(cls, config_dir: Optional[Path]) -> None:
        """Меняет директорию конфигов и сбрасывает кеш."""
        cls._config_dir = Path(config_dir) if config_dir is not None else None
        cls._cache.clear()

    @classmethod
    def available_locales(cls) -> List[str]:
        return sorted(p.parent.name for p in cls.config_dir().glob("*/fields.yaml"))

    @classmethod
    def load(cls, locale_code: Optional[str] = None) -> FieldExtractionConfig:
        """
        Загружает конфигурацию локали.

        Raises:
            FileNotFoundError: нет ни конфига локали, ни фолбэка
            ContractValidationError: YAML не проходит валидацию
        """
        locale_code = locale_code or DEFAULT_LOCALE

        if locale_code in cls._cache:
            return cls._cache[locale_code]

        config_file = cls.config_dir() / locale_code / "fields.yaml"
        if not config_file.exists():
            if locale_code == FALLBACK_LOCALE:
                raise FileNotFoundError(
                    f"[ConfigLoader] Конфиг для {locale_code} не найден: {config_file}"
                )
            logger.warning(
                f"[ConfigLoader] Конфиг для {locale_code} не найден, используется {FALLBACK_LOCALE}"
            )
            return cls.load(FALLBACK_LOCALE)

        config = cls._load_locale_yaml(config_file, locale_code)
        cls._cache[locale_code] = config

        logger.debug(
            f"[ConfigLoader] Загружен FieldExtractionConfig для {locale_code}: "
            f"{len(config.company_keywords)} company_keywords, "
            f"{len(config.address_keywords)} address_keywords"
        )
        return config

    @classmethod
    def _load_base_config(cls) -> dict:
        base_file = cls.config_dir() / "base.yaml"

        if not base_file.exists():
            logger.warning(f"[ConfigLoader] base.yaml не найден: {base_file}")
            return {}

        with open(base_file, 'r', encoding='utf-8') as f:
            return yaml.safe_load(f) or {}

    @classmethod
    def _resolve_extends(cls, value: Any, base_config: dict) -> Any:
        """
        Раскрывает элементы "$extends: key" в списке значениями из base.yaml.

        Поддерживает строку "$extends: key" и словарь {"$extends": "key"}.
        Порядок элементов сохраняется, дубликаты отбрасываются.
        """
        if not isinstance(value, list):
            return value

        result: List[Any] = []
        for item in value:
            extended_key = None
            if isinstance(item, str) and item.startswith("$extends:"):
                extended_key = item.split(":", 1)[1].strip()
            elif isinstance(item, dict) and "$extends" in item:
                extended_key = item["$extends"]

            if extended_key is None:
                items = [item]
            else:
                items = base_config.get(extended_key) or []
                if not items:
                    logger.warning(f"[ConfigLoader] Ключ '{extended_key}' для $extends не найден в base.yaml")

            for entry in items:
                if entry not in result:
                    result.append(entry)

        return result

    @classmethod
    def _load_locale_yaml(cls, config_file: Path, locale_code: str) -> FieldExtractionConfig:
        base_config = cls._load_base_config()

        with open(config_file, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f) or {}

        if config_data.get("locale_code", locale_code) != locale_code:
            raise ValueError(
                f"[ConfigLoader] locale_code в {config_file} не совпадает с директорией: "
                f"{config_data.get('locale_code')} != {locale_code}"
            )

        payload = {"locale_code": locale_code}
        for key in KEYWORD_FIELDS:
            if key in config_data:
                payload[key] = cls._resolve_extends(config_data[key], base_config)

        try:
            return FieldExtractionConfig(**payload)
        except ValidationError as e:
            raise ContractValidationError("ConfigLoader", "FieldExtractionConfig", e.errors())
