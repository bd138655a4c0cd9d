"""MhdDateRule 테스트"""

from datetime import date

import pytest

from core.domain.rules import MhdDateRule, RuleOperator

ITEM = {"custom_product_mhd_date": "2024-12-31 00:00:00.000"}


@pytest.mark.parametrize(
    "rule_operator, rule_date, expected",
    [
        ("=", "2024-12-31", True),
        ("=", "2025-01-01", False),
        ("!=", "2025-01-01", True),
        ("<", "2025-01-01", True),
        ("<=", "2024-12-31", True),
        (">", "2024-12-31", False),
        (">=", "2024-12-31", True),
        ("empty", None, False),
    ],
)
def test_item_with_date(rule_operator, rule_date, expected):
    rule = MhdDateRule(rule_operator, rule_date)
    assert rule.match_line_item(ITEM) is expected


@pytest.mark.parametrize(
    "rule_operator, expected",
    [
        (RuleOperator.EQ, False),
        (RuleOperator.LT, False),
        (RuleOperator.LTE, False),
        (RuleOperator.GT, False),
        (RuleOperator.GTE, False),
        (RuleOperator.NEQ, True),
        (RuleOperator.EMPTY, True),
    ],
)
def test_item_without_date_matches_only_negative_operators(rule_operator, expected):
    rule = MhdDateRule(rule_operator, date(2024, 12, 31))
    assert rule.match_line_item({}) is expected
    assert rule.match_line_item(None) is expected


def test_unparseable_item_value_never_matches():
    rule = MhdDateRule(RuleOperator.NEQ, "2024-12-31")
    assert rule.match_line_item({"custom_product_mhd_date": "bald"}) is False


def test_missing_rule_date_never_matches_comparison():
    rule = MhdDateRule(RuleOperator.LT, None)
    assert rule.match_line_item(ITEM) is False


def test_match_any():
    rule = MhdDateRule(RuleOperator.LT, "2025-01-01")
    assert rule.match_any([{}, ITEM])
    assert not rule.match_any([{}, {"custom_product_mhd_date": "2025-06-01 00:00:00.000"}])
    assert not rule.match_any([])


def test_unknown_operator_is_rejected():
    with pytest.raises(ValueError):
        MhdDateRule("~", "2024-12-31")
