"""
시계 어댑터

Core 레이어의 ClockPort 구현입니다.
"""

from datetime import date
from typing import Optional

from core.domain.ports import ClockPort


class SystemClockAdapter(ClockPort):
    """시스템 로컬 날짜를 사용하는 시계"""

    def today(self) -> date:
        return date.today()


class FixedClockAdapter(ClockPort):
    """항상 같은 날짜를 반환하는 시계 (재계산, 테스트용)"""

    def __init__(self, fixed_date: date):
        self.fixed_date = fixed_date

    def today(self) -> date:
        return self.fixed_date


def create_clock(today: Optional[date] = None) -> ClockPort:
    """기준일이 주어지면 고정 시계, 아니면 시스템 시계를 생성합니다."""
    if today is not None:
        return FixedClockAdapter(today)
    return SystemClockAdapter()
