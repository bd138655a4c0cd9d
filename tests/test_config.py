"""설정 어댑터 테스트"""

import pytest
from pydantic import ValidationError

from config.adapters import (
    ConfigAdapter,
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ["ENVIRONMENT", "DATABASE_URL", "LOG_LEVEL", "ENABLED_SALES_CHANNELS", "EXPIRY_DISPLAY_FIELD"]:
        monkeypatch.delenv(name, raising=False)


@pytest.mark.parametrize(
    "environment, config_class",
    [
        ("testing", TestingConfig),
        ("development", DevelopmentConfig),
        ("anything", DevelopmentConfig),
    ],
)
def test_environment_selection(monkeypatch, environment, config_class):
    monkeypatch.setenv("ENVIRONMENT", environment)
    assert isinstance(ConfigAdapter.create_config(), config_class)


def test_testing_defaults():
    config = TestingConfig()

    assert config.get_database_url() == "sqlite+aiosqlite:///:memory:"
    assert config.get_log_level() == "WARNING"
    assert config.get_mhd_date_field() == "custom_product_mhd_date"
    assert config.get_expiry_display_field() == "custom_product_detail_expiry_date"
    assert config.get_enabled_sales_channels() == []


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("ENABLED_SALES_CHANNELS", "web, pos,")
    monkeypatch.setenv("EXPIRY_DISPLAY_FIELD", "")

    config = TestingConfig()

    assert config.get_log_level() == "DEBUG"
    assert config.get_enabled_sales_channels() == ["web", "pos"]
    assert config.get_expiry_display_field() is None


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        TestingConfig(log_level="LOUD")


def test_invalid_batch_size():
    with pytest.raises(ValidationError):
        TestingConfig(sync_batch_size=0)


def test_production_rejects_sqlite(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite+aiosqlite:///./prod.db")
    with pytest.raises(ValidationError):
        ProductionConfig()


def test_production_accepts_postgres(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "postgresql+asyncpg://shop@localhost/shop")
    config = ProductionConfig()

    assert not config.is_debug()
    assert config.get_log_level() == "INFO"
