"""
어댑터 팩토리

모든 어댑터들을 생성하고 의존성을 주입하는 팩토리 클래스입니다.
클린 아키텍처의 의존성 역전 원칙을 구현합니다.
"""

from datetime import date
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from core.domain.ports import (
    ClockPort,
    ConfigPort,
    LoggerPort,
    ProductRepositoryPort,
)
from core.domain.synchronizer import CustomFieldKeys, FieldSynchronizer
from core.usecases.ean_management import EanManagementUseCase
from core.usecases.mhd_sync import MhdSyncUseCase

from .clock import create_clock
from .db.repositories import ProductRepositoryAdapter
from .logger import LoggerAdapter
from config.adapters import get_config


class AdapterFactory:
    """어댑터 팩토리"""

    def __init__(self, config: Optional[ConfigPort] = None):
        self.config = config or get_config()
        self._logger: Optional[LoggerPort] = None
        self._synchronizer: Optional[FieldSynchronizer] = None

    def create_logger(self) -> LoggerPort:
        """로거 어댑터를 생성합니다."""
        if self._logger is None:
            self._logger = LoggerAdapter(
                name="mhd_sync",
                level=self.config.get_log_level(),
                format_string=self.config.get_log_format(),
            )
        return self._logger

    def create_clock(self, today: Optional[date] = None) -> ClockPort:
        """시계 어댑터를 생성합니다. 기준일을 주면 고정 시계를 사용합니다."""
        return create_clock(today)

    def create_field_keys(self) -> CustomFieldKeys:
        """설정에서 커스텀 필드 키를 읽습니다."""
        return CustomFieldKeys(
            mhd_date=self.config.get_mhd_date_field(),
            mhd_days=self.config.get_mhd_days_field(),
            expiry_display=self.config.get_expiry_display_field(),
            single_ean=self.config.get_single_ean_field(),
            legacy_ean=self.config.get_legacy_ean_field(),
        )

    def create_synchronizer(self) -> FieldSynchronizer:
        """필드 동기화기를 생성합니다."""
        if self._synchronizer is None:
            self._synchronizer = FieldSynchronizer(keys=self.create_field_keys())
        return self._synchronizer

    def create_product_repository(self, session: AsyncSession) -> ProductRepositoryPort:
        """상품 Repository 어댑터를 생성합니다."""
        return ProductRepositoryAdapter(session)

    def create_mhd_sync_usecase(
        self,
        session: AsyncSession,
        today: Optional[date] = None,
    ) -> MhdSyncUseCase:
        """MHD 동기화 유즈케이스를 생성합니다."""
        return MhdSyncUseCase(
            product_repository=self.create_product_repository(session),
            synchronizer=self.create_synchronizer(),
            clock=self.create_clock(today),
            logger=self.create_logger(),
            enabled_sales_channels=self.config.get_enabled_sales_channels(),
        )

    def create_ean_management_usecase(self, session: AsyncSession) -> EanManagementUseCase:
        """단품 EAN 관리 유즈케이스를 생성합니다."""
        return EanManagementUseCase(
            product_repository=self.create_product_repository(session),
            synchronizer=self.create_synchronizer(),
            logger=self.create_logger(),
        )

    def get_config(self) -> ConfigPort:
        """설정 객체를 반환합니다."""
        return self.config
