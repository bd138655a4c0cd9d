"""
설정 어댑터

pydantic-settings 기반으로 ConfigPort를 구현합니다.
ENVIRONMENT 값에 따라 개발/운영/테스트 설정 클래스를 선택합니다.
"""

import os
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.ports import ConfigPort


class BaseConfig(BaseSettings, ConfigPort):
    """기본 설정 클래스"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # 환경 설정
    environment: str = Field(default="development")
    debug: bool = Field(default=False)

    # 데이터베이스 설정
    database_url: str = Field(...)

    # 로깅 설정
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    # 동기화 설정
    sync_batch_size: int = Field(default=100, ge=1, le=10_000)
    default_language_id: str = Field(default="de-DE")
    # 쉼표로 구분된 판매 채널 ID (비어 있으면 전체 활성화)
    enabled_sales_channels: str = Field(default="")

    # 커스텀 필드 키
    mhd_date_field: str = Field(default="custom_product_mhd_date", min_length=1)
    mhd_days_field: str = Field(default="custom_product_mhd_days", min_length=1)
    expiry_display_field: Optional[str] = Field(default="custom_product_detail_expiry_date")
    single_ean_field: str = Field(default="custom_product_single_ean", min_length=1)
    legacy_ean_field: str = Field(default="migration_SW566_product_attr12", min_length=1)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """로그 레벨 검증"""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"로그 레벨은 {valid_levels} 중 하나여야 합니다")
        return v.upper()

    @field_validator("expiry_display_field")
    @classmethod
    def validate_expiry_display_field(cls, v):
        """빈 문자열은 사용 안 함(None)으로 처리"""
        return v or None

    # ConfigPort 인터페이스 구현
    def get_environment(self) -> str:
        return self.environment

    def is_debug(self) -> bool:
        return self.debug

    def get_database_url(self) -> str:
        return self.database_url

    def get_log_level(self) -> str:
        return self.log_level

    def get_log_format(self) -> str:
        return self.log_format

    def get_sync_batch_size(self) -> int:
        return self.sync_batch_size

    def get_default_language_id(self) -> str:
        return self.default_language_id

    def get_enabled_sales_channels(self) -> List[str]:
        return [c.strip() for c in self.enabled_sales_channels.split(",") if c.strip()]

    def get_mhd_date_field(self) -> str:
        return self.mhd_date_field

    def get_mhd_days_field(self) -> str:
        return self.mhd_days_field

    def get_expiry_display_field(self) -> Optional[str]:
        return self.expiry_display_field

    def get_single_ean_field(self) -> str:
        return self.single_ean_field

    def get_legacy_ean_field(self) -> str:
        return self.legacy_ean_field


class DevelopmentConfig(BaseConfig):
    """개발 환경 설정"""

    environment: str = "development"
    debug: bool = True
    log_level: str = "DEBUG"

    database_url: str = Field(default="sqlite+aiosqlite:///./mhd_sync.db")


class ProductionConfig(BaseConfig):
    """운영 환경 설정"""

    environment: str = "production"
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("database_url")
    @classmethod
    def validate_production_database_url(cls, v):
        """운영 환경에서는 SQLite를 사용할 수 없음"""
        if not v or v.startswith("sqlite"):
            raise ValueError("운영 환경에서는 PostgreSQL 데이터베이스가 필요합니다")
        return v


class TestingConfig(BaseConfig):
    """테스트 환경 설정"""

    environment: str = "testing"
    debug: bool = True
    log_level: str = "WARNING"

    database_url: str = Field(default="sqlite+aiosqlite:///:memory:")


class ConfigAdapter:
    """설정 어댑터 팩토리"""

    @staticmethod
    def create_config() -> ConfigPort:
        """환경에 따른 설정 객체를 생성합니다."""
        environment = os.getenv("ENVIRONMENT", "development").lower()

        if environment == "production":
            return ProductionConfig()
        elif environment == "testing":
            return TestingConfig()
        else:
            return DevelopmentConfig()


# 전역 설정 인스턴스
_config: Optional[ConfigPort] = None


def get_config() -> ConfigPort:
    """전역 설정 인스턴스를 반환합니다."""
    global _config
    if _config is None:
        _config = ConfigAdapter.create_config()
    return _config
