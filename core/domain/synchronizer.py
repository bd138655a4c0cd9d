"""
MHD 필드 동기화

토큰 하나와 "오늘" 날짜로부터 번역 한 건의 파생 필드 전체
(구조화된 날짜, 남은 일수, 제목, 설명, 커스텀 필드)를 계산합니다.

입력 번역은 변경하지 않고 항상 새 결과를 반환하며, 실제로 바뀌지 않은 필드는
입력 값을 그대로 유지합니다. 호출자는 결과를 비교해 불필요한 저장을 건너뜁니다.
"""

from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .date_token import DateTokenCodec, parse_storage_value
from .entities import MhdState, SynchronizationResult, TextVariant
from .markers import DescriptionMarkerPolicy, TitleMarkerPolicy


class CustomFieldKeys(BaseModel):
    """커스텀 필드 키 이름"""

    mhd_date: str = Field(default="custom_product_mhd_date", description="MHD datetime 필드")
    mhd_days: str = Field(default="custom_product_mhd_days", description="남은 일수 필드")
    expiry_display: Optional[str] = Field(
        default="custom_product_detail_expiry_date",
        description="표시용 유통기한 필드 (None이면 사용 안 함)",
    )
    single_ean: str = Field(default="custom_product_single_ean", description="단품 EAN 필드")
    legacy_ean: str = Field(default="migration_SW566_product_attr12", description="레거시 EAN 필드")

    def date_keys(self) -> List[str]:
        """날짜와 함께 설정/삭제되는 키 목록"""
        keys = [self.mhd_date, self.mhd_days]
        if self.expiry_display:
            keys.append(self.expiry_display)
        return keys


def _keep_if_same(old: Optional[str], new: str) -> Optional[str]:
    # None 입력이 ""로 바뀌는 것은 변경으로 보지 않음
    return old if (old or "") == new else new


class FieldSynchronizer:
    """DateTokenCodec과 마커 정책을 조합해 파생 필드를 계산합니다."""

    def __init__(
        self,
        codec: Optional[DateTokenCodec] = None,
        keys: Optional[CustomFieldKeys] = None,
    ):
        self.codec = codec or DateTokenCodec()
        self.keys = keys or CustomFieldKeys()
        self.title_policy = TitleMarkerPolicy()
        self.best_before_policy = DescriptionMarkerPolicy.best_before()
        self.single_ean_policy = DescriptionMarkerPolicy.single_ean()

    def synchronize(
        self,
        token: Optional[str],
        today: date,
        variant: TextVariant,
    ) -> SynchronizationResult:
        """
        토큰으로부터 번역 한 건의 파생 필드를 계산합니다.

        토큰이 잘못되었으면 "MHD 없음"으로 처리하여 제목/설명 마커와
        날짜 커스텀 필드를 모두 제거합니다.

        Args:
            token: DDMMYY 토큰 (None 또는 잘못된 값 허용)
            today: 기준 날짜
            variant: 현재 번역 값

        Returns:
            계산된 동기화 결과
        """
        mhd_date = self.codec.decode(token)
        custom_fields = dict(variant.custom_fields)

        if mhd_date is None:
            for key in self.keys.date_keys():
                custom_fields.pop(key, None)

            return SynchronizationResult(
                language_id=variant.language_id,
                state=MhdState.NO_DATE,
                title=_keep_if_same(variant.title, self.title_policy.remove(variant.title)),
                description=_keep_if_same(
                    variant.description,
                    self.best_before_policy.remove(variant.description),
                ),
                custom_fields=custom_fields,
            )

        display_date = self.codec.format_for_display(mhd_date)
        days_remaining = self.codec.days_until(mhd_date, today)

        custom_fields[self.keys.mhd_date] = self.codec.format_for_storage(mhd_date)
        custom_fields[self.keys.mhd_days] = days_remaining
        if self.keys.expiry_display:
            custom_fields[self.keys.expiry_display] = display_date

        return SynchronizationResult(
            language_id=variant.language_id,
            state=MhdState.HAS_DATE,
            structured_date=self.codec.to_timestamp(mhd_date),
            days_remaining=days_remaining,
            title=_keep_if_same(
                variant.title,
                self.title_policy.upsert(variant.title, display_date),
            ),
            description=_keep_if_same(
                variant.description,
                self.best_before_policy.upsert(
                    variant.description,
                    self.codec.format_for_description(mhd_date),
                ),
            ),
            custom_fields=custom_fields,
        )

    def synchronize_ean(
        self,
        ean: Optional[str],
        variant: TextVariant,
    ) -> SynchronizationResult:
        """
        단품 EAN span과 커스텀 필드를 갱신합니다. ean이 비어 있으면 둘 다 제거합니다.

        MHD 관련 필드는 건드리지 않습니다.
        """
        ean = str(ean).strip() if ean is not None else None
        custom_fields = dict(variant.custom_fields)

        if ean:
            custom_fields[self.keys.single_ean] = ean
        else:
            custom_fields.pop(self.keys.single_ean, None)

        stored_date = parse_storage_value(custom_fields.get(self.keys.mhd_date))
        stored_days = custom_fields.get(self.keys.mhd_days)

        return SynchronizationResult(
            language_id=variant.language_id,
            state=MhdState.HAS_DATE if stored_date else MhdState.NO_DATE,
            structured_date=stored_date,
            days_remaining=stored_days if stored_date and isinstance(stored_days, int) else None,
            title=variant.title,
            description=_keep_if_same(
                variant.description,
                self.single_ean_policy.upsert(variant.description, ean),
            ),
            custom_fields=custom_fields,
        )

    def refresh_ean(self, variant: TextVariant) -> SynchronizationResult:
        """커스텀 필드에 저장된 EAN 값으로 설명 span을 맞춥니다."""
        return self.synchronize_ean(variant.custom_fields.get(self.keys.single_ean), variant)

    def extract_markers(self, variant: TextVariant) -> Dict[str, Any]:
        """번역에 현재 들어 있는 마커 값을 추출합니다."""
        return {
            "title_mhd": self.title_policy.extract(variant.title),
            "description_mhd": self.best_before_policy.extract(variant.description),
            "single_ean": self.single_ean_policy.extract(variant.description),
            "mhd_date": variant.custom_fields.get(self.keys.mhd_date),
            "mhd_days": variant.custom_fields.get(self.keys.mhd_days),
        }
