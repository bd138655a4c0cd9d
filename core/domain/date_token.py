"""
MHD 날짜 토큰 코덱

제조사 번호(manufacturer number)에 저장된 6자리 DDMMYY 토큰을
달력 날짜로 해석하고, 제목/설명/커스텀 필드용 문자열로 변환합니다.
잘못된 토큰은 예외가 아니라 None("날짜 없음")으로 처리됩니다.
"""

import re
from datetime import date, datetime, time
from typing import Any, Optional

TOKEN_PATTERN = re.compile(r"^[0-9]{6}$")

DISPLAY_FORMAT = "%d.%m.%y"
DESCRIPTION_FORMAT = "%d.%m.%Y"
TOKEN_FORMAT = "%d%m%y"
# 저장용 datetime 커스텀 필드 형식 (밀리초 포함)
STORAGE_FORMAT = "%Y-%m-%d %H:%M:%S.000"

CENTURY_BASE = 2000


class DateTokenCodec:
    """DDMMYY 토큰 파서/포매터"""

    def is_valid_format(self, token: Any) -> bool:
        """토큰이 정확히 6자리 ASCII 숫자인지 확인"""
        if not isinstance(token, str):
            return False
        return TOKEN_PATTERN.match(token.strip()) is not None

    def decode(self, token: Any) -> Optional[date]:
        """
        토큰을 달력 날짜로 변환합니다.

        연도는 항상 2000년대로 해석합니다 (세기 보정 없음).
        달력상 존재하지 않는 날짜(예: 30.02., 29.02.2025)는 None을 반환합니다.

        Args:
            token: DDMMYY 형식 문자열

        Returns:
            검증된 날짜 또는 None
        """
        if not self.is_valid_format(token):
            return None

        token = token.strip()
        day = int(token[0:2])
        month = int(token[2:4])
        year = CENTURY_BASE + int(token[4:6])

        try:
            return date(year, month, day)
        except ValueError:
            return None

    def format_for_display(self, value: date) -> str:
        """제목 표시용 형식 (DD.MM.YY)"""
        return value.strftime(DISPLAY_FORMAT)

    def format_for_description(self, value: date) -> str:
        """설명 마커용 형식 (DD.MM.YYYY)"""
        return value.strftime(DESCRIPTION_FORMAT)

    def format_for_storage(self, value: date) -> str:
        """datetime 커스텀 필드 저장 형식 (자정 기준)"""
        return self.to_timestamp(value).strftime(STORAGE_FORMAT)

    def to_token(self, value: date) -> str:
        """날짜를 다시 DDMMYY 토큰으로 변환"""
        return value.strftime(TOKEN_FORMAT)

    def to_timestamp(self, value: date) -> datetime:
        """자정 시각의 datetime으로 변환"""
        return datetime.combine(value, time.min)

    def days_until(self, value: date, today: date) -> int:
        """
        오늘부터 MHD까지 남은 일수를 계산합니다.

        음수는 이미 지난 날짜를 의미합니다. today는 반드시 호출자가 주입합니다.
        """
        if isinstance(value, datetime):
            value = value.date()
        if isinstance(today, datetime):
            today = today.date()
        return (value - today).days


def parse_storage_value(raw: Any) -> Optional[datetime]:
    """
    커스텀 필드에 저장된 날짜 값을 datetime으로 변환합니다.

    저장 형식 외에 ISO 8601 문자열과 date/datetime 객체도 허용합니다.
    해석할 수 없으면 None을 반환합니다.
    """
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw
    if isinstance(raw, date):
        return datetime.combine(raw, time.min)
    if not isinstance(raw, str) or not raw.strip():
        return None

    try:
        parsed = datetime.fromisoformat(raw.strip())
    except ValueError:
        return None
    return parsed.replace(tzinfo=None)
