"""
포트 인터페이스 정의

클린 아키텍처의 핵심으로, Core 레이어와 외부 어댑터 간의 계약을 정의합니다.
모든 포트는 추상 기본 클래스(ABC)로 정의되어 구현을 강제합니다.
"""

from abc import ABC, abstractmethod
from datetime import date
from typing import List, Optional

from .entities import Product, VariantUpdate


class ProductRepositoryPort(ABC):
    """상품 저장소 포트 (레코드 소스 + 싱크)"""

    @abstractmethod
    async def create(self, product: Product) -> Product:
        """상품 생성"""
        pass

    @abstractmethod
    async def get_by_id(self, product_id: str) -> Optional[Product]:
        """ID로 상품 조회 (번역 포함)"""
        pass

    @abstractmethod
    async def get_by_product_number(self, product_number: str) -> Optional[Product]:
        """상품 번호로 상품 조회 (번역 포함)"""
        pass

    @abstractmethod
    async def list_all(self, skip: int = 0, limit: int = 100) -> List[Product]:
        """모든 상품 목록 조회"""
        pass

    @abstractmethod
    async def count_with_token(self) -> int:
        """제조사 번호가 비어 있지 않은 상품 수"""
        pass

    @abstractmethod
    async def list_with_token(self, skip: int = 0, limit: int = 100) -> List[Product]:
        """제조사 번호가 비어 있지 않은 상품 목록 조회"""
        pass

    @abstractmethod
    async def update_variants(self, product_id: str, updates: List[VariantUpdate]) -> None:
        """번역 부분 업데이트 (None 필드는 유지)"""
        pass

    @abstractmethod
    async def update_token(self, product_id: str, manufacturer_number: Optional[str]) -> None:
        """제조사 번호 업데이트"""
        pass

    @abstractmethod
    async def delete(self, product_id: str) -> bool:
        """상품 삭제"""
        pass


class ClockPort(ABC):
    """시계 포트"""

    @abstractmethod
    def today(self) -> date:
        """오늘 날짜"""
        pass


class LoggerPort(ABC):
    """로거 포트"""

    @abstractmethod
    def info(self, message: str, **kwargs) -> None:
        """정보 로그"""
        pass

    @abstractmethod
    def warning(self, message: str, **kwargs) -> None:
        """경고 로그"""
        pass

    @abstractmethod
    def error(self, message: str, **kwargs) -> None:
        """오류 로그"""
        pass

    @abstractmethod
    def debug(self, message: str, **kwargs) -> None:
        """디버그 로그"""
        pass


class ConfigPort(ABC):
    """설정 포트"""

    # 환경 설정
    @abstractmethod
    def get_environment(self) -> str:
        """환경 조회 (development, production, testing)"""
        pass

    @abstractmethod
    def is_debug(self) -> bool:
        """디버그 모드 여부"""
        pass

    # 데이터베이스 설정
    @abstractmethod
    def get_database_url(self) -> str:
        """데이터베이스 URL 조회"""
        pass

    # 로깅 설정
    @abstractmethod
    def get_log_level(self) -> str:
        """로그 레벨 조회"""
        pass

    @abstractmethod
    def get_log_format(self) -> str:
        """로그 포맷 조회"""
        pass

    # 동기화 설정
    @abstractmethod
    def get_sync_batch_size(self) -> int:
        """배치 크기 조회"""
        pass

    @abstractmethod
    def get_default_language_id(self) -> str:
        """기본 언어 ID 조회"""
        pass

    @abstractmethod
    def get_enabled_sales_channels(self) -> List[str]:
        """MHD 동기화가 활성화된 판매 채널 목록 (비어 있으면 전체)"""
        pass

    # 커스텀 필드 키
    @abstractmethod
    def get_mhd_date_field(self) -> str:
        """MHD 날짜 커스텀 필드 키"""
        pass

    @abstractmethod
    def get_mhd_days_field(self) -> str:
        """남은 일수 커스텀 필드 키"""
        pass

    @abstractmethod
    def get_expiry_display_field(self) -> Optional[str]:
        """표시용 유통기한 커스텀 필드 키"""
        pass

    @abstractmethod
    def get_single_ean_field(self) -> str:
        """단품 EAN 커스텀 필드 키"""
        pass

    @abstractmethod
    def get_legacy_ean_field(self) -> str:
        """레거시 EAN 커스텀 필드 키"""
        pass
