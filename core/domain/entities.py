"""
도메인 엔티티 정의

상품, 번역(텍스트 변형), 동기화 결과 등 비즈니스 핵심 개념을 정의합니다.
모든 엔티티는 Pydantic 모델을 기반으로 하여 타입 안정성을 보장합니다.
"""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, field_validator


class MhdState(str, Enum):
    """상품의 MHD 상태"""
    NO_DATE = "no_date"
    HAS_DATE = "has_date"


class SyncOutcome(str, Enum):
    """상품 단위 동기화 결과"""
    UPDATED = "updated"
    SKIPPED = "skipped"
    ERROR = "error"


class TextVariant(BaseModel):
    """상품의 언어별 텍스트 (제목, 설명, 커스텀 필드)"""

    language_id: str = Field(default="default", description="언어 ID")
    title: Optional[str] = Field(None, description="상품명")
    description: Optional[str] = Field(None, description="상품 설명 HTML")
    custom_fields: Dict[str, Any] = Field(default_factory=dict, description="커스텀 필드")

    @field_validator("custom_fields", mode="before")
    @classmethod
    def default_custom_fields(cls, v):
        """None은 빈 맵으로 취급"""
        return v if v is not None else {}


class VariantUpdate(BaseModel):
    """번역 한 건에 대한 부분 업데이트 (None 필드는 변경하지 않음)"""

    language_id: str = Field(..., description="언어 ID")
    title: Optional[str] = Field(None, description="새 상품명")
    description: Optional[str] = Field(None, description="새 설명")
    custom_fields: Optional[Dict[str, Any]] = Field(None, description="새 커스텀 필드 전체")

    def is_empty(self) -> bool:
        """변경할 내용이 없는지 확인"""
        return self.title is None and self.description is None and self.custom_fields is None


class Product(BaseModel):
    """상품 엔티티"""

    id: str = Field(..., description="상품 ID")
    product_number: str = Field(..., description="상품 번호")
    manufacturer_number: Optional[str] = Field(None, description="제조사 번호 (DDMMYY MHD 토큰)")
    variants: List[TextVariant] = Field(default_factory=list, description="언어별 텍스트")
    created_at: Optional[datetime] = Field(None, description="생성 시간")
    updated_at: Optional[datetime] = Field(None, description="수정 시간")

    def get_variant(self, language_id: str) -> Optional[TextVariant]:
        """언어 ID로 번역 조회"""
        for variant in self.variants:
            if variant.language_id == language_id:
                return variant
        return None


class SynchronizationResult(BaseModel):
    """번역 한 건에 대해 계산된 파생 필드 값"""

    language_id: str = Field(..., description="언어 ID")
    state: MhdState = Field(..., description="MHD 상태")
    structured_date: Optional[datetime] = Field(None, description="MHD (자정 기준 timestamp)")
    days_remaining: Optional[int] = Field(None, description="MHD까지 남은 일수 (음수 = 만료)")
    title: Optional[str] = Field(None, description="새 상품명")
    description: Optional[str] = Field(None, description="새 설명")
    custom_fields: Dict[str, Any] = Field(default_factory=dict, description="새 커스텀 필드")

    def changed_fields(self, variant: TextVariant) -> List[str]:
        """입력 번역과 비교해 달라진 필드 이름 목록"""
        changed = []
        if self.title != variant.title:
            changed.append("title")
        if self.description != variant.description:
            changed.append("description")
        if self.custom_fields != variant.custom_fields:
            changed.append("custom_fields")
        return changed

    def has_changes(self, variant: TextVariant) -> bool:
        """저장이 필요한지 확인"""
        return bool(self.changed_fields(variant))

    def to_update(self, variant: TextVariant) -> Optional[VariantUpdate]:
        """달라진 필드만 담은 부분 업데이트를 만듭니다. 변경이 없으면 None."""
        changed = self.changed_fields(variant)
        if not changed:
            return None

        return VariantUpdate(
            language_id=self.language_id,
            title=self.title if "title" in changed else None,
            description=self.description if "description" in changed else None,
            custom_fields=dict(self.custom_fields) if "custom_fields" in changed else None,
        )


class ProductSyncReport(BaseModel):
    """상품 한 건의 동기화 결과"""

    product_id: str = Field(..., description="상품 ID")
    product_number: Optional[str] = Field(None, description="상품 번호")
    token: Optional[str] = Field(None, description="사용한 토큰")
    state: MhdState = Field(default=MhdState.NO_DATE, description="MHD 상태")
    outcome: SyncOutcome = Field(..., description="결과")
    updates: List[VariantUpdate] = Field(default_factory=list, description="적용(예정)된 업데이트")
    error_message: Optional[str] = Field(None, description="오류 메시지")


class SyncStats(BaseModel):
    """배치 동기화 통계"""

    total: int = Field(default=0, description="처리한 상품 수")
    updated: int = Field(default=0, description="업데이트된 상품 수")
    skipped: int = Field(default=0, description="건너뛴 상품 수 (변경 없음/잘못된 토큰)")
    errors: int = Field(default=0, description="오류 발생 수")
    dry_run: bool = Field(default=False, description="드라이런 여부")
    started_at: datetime = Field(default_factory=datetime.now, description="시작 시간")
    completed_at: Optional[datetime] = Field(None, description="완료 시간")

    def record(self, outcome: SyncOutcome) -> None:
        """상품 하나의 결과를 집계"""
        self.total += 1
        if outcome == SyncOutcome.UPDATED:
            self.updated += 1
        elif outcome == SyncOutcome.SKIPPED:
            self.skipped += 1
        else:
            self.errors += 1

    def mark_as_completed(self) -> None:
        """동기화 완료로 표시"""
        self.completed_at = datetime.now()


class EanMigrationStats(BaseModel):
    """레거시 EAN 마이그레이션 통계"""

    total: int = Field(default=0, description="검사한 상품 수")
    migrated: int = Field(default=0, description="마이그레이션된 상품 수")
    skipped: int = Field(default=0, description="건너뛴 상품 수")
    failed: int = Field(default=0, description="실패한 상품 수")
