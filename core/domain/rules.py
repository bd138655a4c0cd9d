"""
MHD 날짜 규칙

장바구니 라인 아이템의 MHD를 사용자가 지정한 날짜와 비교합니다.
연산자: =, !=, <, <=, >, >=, empty

MHD가 없는 아이템은 부정 연산자(!=, empty)만 만족하며,
구체적인 비교(=, <, <=, >, >=)는 절대 만족하지 않습니다.
"""

import operator
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Union

from .date_token import parse_storage_value

MHD_DATE_FIELD = "custom_product_mhd_date"


class RuleOperator(str, Enum):
    """비교 연산자"""
    EQ = "="
    NEQ = "!="
    LT = "<"
    LTE = "<="
    GT = ">"
    GTE = ">="
    EMPTY = "empty"

    def is_negative(self) -> bool:
        """값이 없을 때 참이 되는 연산자인지 확인"""
        return self in (RuleOperator.NEQ, RuleOperator.EMPTY)


_COMPARATORS = {
    RuleOperator.EQ: operator.eq,
    RuleOperator.NEQ: operator.ne,
    RuleOperator.LT: operator.lt,
    RuleOperator.LTE: operator.le,
    RuleOperator.GT: operator.gt,
    RuleOperator.GTE: operator.ge,
}


class MhdDateRule:
    """라인 아이템 MHD 비교 규칙"""

    name = "cartLineItemMhdDate"

    def __init__(
        self,
        rule_operator: Union[RuleOperator, str] = RuleOperator.EQ,
        mhd_date: Optional[Union[str, date, datetime]] = None,
        field_name: str = MHD_DATE_FIELD,
    ):
        self.operator = RuleOperator(rule_operator)
        self.mhd_date = mhd_date
        self.field_name = field_name

    def _rule_value(self) -> Optional[datetime]:
        return parse_storage_value(self.mhd_date)

    def match_line_item(self, custom_fields: Optional[Dict[str, Any]]) -> bool:
        """
        라인 아이템 하나의 커스텀 필드가 규칙을 만족하는지 확인합니다.

        Args:
            custom_fields: 라인 아이템 payload의 커스텀 필드 (None 허용)
        """
        raw = (custom_fields or {}).get(self.field_name)
        if raw is None:
            return self.operator.is_negative()

        item_value = parse_storage_value(raw)
        if item_value is None:
            return False

        if self.operator == RuleOperator.EMPTY:
            return False

        rule_value = self._rule_value()
        if rule_value is None:
            return False

        return _COMPARATORS[self.operator](item_value, rule_value)

    def match_any(self, line_items: Iterable[Optional[Dict[str, Any]]]) -> bool:
        """장바구니의 라인 아이템 중 하나라도 규칙을 만족하는지 확인"""
        return any(self.match_line_item(custom_fields) for custom_fields in line_items)
