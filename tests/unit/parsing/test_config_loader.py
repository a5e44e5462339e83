import pytest

from src.domain.contracts import ContractValidationError, FieldExtractionConfig
from src.parsing.locales import FieldConfigLoader

# Mock data
MOCK_BASE_YAML = """
company_en:
  - Ltd
  - Inc

role_en:
  - Manager
"""

MOCK_LOCALE_YAML = """
locale_code: test_LOC

company_keywords:
  - 公司
  - $extends: company_en
  - Ltd

role_keywords:
  - "$extends: role_en"
  - 经理

address_keywords:
  - 路
  - 号
"""

MOCK_BLANK_KEYWORD_YAML = """
locale_code: test_BAD
company_keywords:
  - "  "
address_keywords:
  - 路
"""


@pytest.fixture
def mock_config_dir(tmp_path):
    """Создает временные base.yaml и <locale>/fields.yaml."""
    (tmp_path / "base.yaml").write_text(MOCK_BASE_YAML, encoding="utf-8")

    for locale_code, content in (("test_LOC", MOCK_LOCALE_YAML), ("test_BAD", MOCK_BLANK_KEYWORD_YAML)):
        locale_dir = tmp_path / locale_code
        locale_dir.mkdir()
        (locale_dir / "fields.yaml").write_text(content, encoding="utf-8")

    FieldConfigLoader.set_config_dir(tmp_path)
    yield tmp_path
    FieldConfigLoader.set_config_dir(None)


@pytest.fixture
def default_config_dir():
    FieldConfigLoader.set_config_dir(None)
    yield
    FieldConfigLoader.set_config_dir(None)


def test_resolve_extends_list(mock_config_dir):
    """$extends раскрывается на месте, порядок сохраняется, дубли отбрасываются."""
    base_config = FieldConfigLoader._load_base_config()

    resolved = FieldConfigLoader._resolve_extends(["公司", "$extends: company_en", "Ltd"], base_config)
    assert resolved == ["公司", "Ltd", "Inc"]

    resolved = FieldConfigLoader._resolve_extends([{"$extends": "role_en"}, "经理"], base_config)
    assert resolved == ["Manager", "经理"]


def test_resolve_extends_missing_key(mock_config_dir):
    """Отсутствующий ключ: предупреждение, остальные элементы остаются."""
    resolved = FieldConfigLoader._resolve_extends(["$extends: invalid_key", "local"], {})
    assert resolved == ["local"]


def test_load_locale_with_inheritance(mock_config_dir):
    config = FieldConfigLoader.load("test_LOC")

    assert isinstance(config, FieldExtractionConfig)
    assert config.locale_code == "test_LOC"
    assert config.company_keywords == ["公司", "Ltd", "Inc"]
    assert config.role_keywords == ["Manager", "经理"]
    assert config.phone_labels == []


def test_load_is_cached(mock_config_dir):
    assert FieldConfigLoader.load("test_LOC") is FieldConfigLoader.load("test_LOC")
    assert ConfigLoader().load("test_LOC") is FieldConfigLoader.load("test_LOC")


def test_blank_keyword_rejected(mock_config_dir):
    with pytest.raises(ContractValidationError, match="FieldExtractionConfig"):
        FieldConfigLoader.load("test_BAD")


def test_missing_fallback_raises(mock_config_dir):
    """Тест: во временной директории нет ни локали, ни фолбэка zh_CN."""
    with pytest.raises(FileNotFoundError):
        FieldConfigLoader.load("xx_XX")


def test_default_locale_is_zh_cn(default_config_dir):
    config = FieldConfigLoader.load()

    assert config.locale_code == "zh_CN"
    assert "公司" in config.company_keywords
    assert "Ltd" in config.company_keywords          # из base.yaml
    assert "联系电话" in config.phone_labels
    assert "办公电话" in config.landline_labels


def test_unknown_locale_falls_back(default_config_dir):
    assert FieldConfigLoader.load("fr_FR").locale_code == "zh_CN"


def test_available_locales(default_config_dir):
    assert {"zh_CN", "en_US"} <= set(FieldConfigLoader.available_locales())
