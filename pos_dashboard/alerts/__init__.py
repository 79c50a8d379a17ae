"""
비즈니스 알림 계층

규칙 테이블, 카테고리별 평가 함수, 알림 보드를 제공합니다.
Streamlit에 의존하지 않습니다.
"""

from .board import AlertBoard
from .engine import (
    CONDITIONS,
    check_customer_alerts,
    check_financial_alerts,
    check_inventory_alerts,
    check_operational_alerts,
    check_sales_alerts,
    fires,
    generate_business_alerts,
)
from .rules import AlertRule, RuleTable, build_default_rules, rule_table, toggle_rule

__all__ = [
    "AlertBoard",
    "AlertRule",
    "RuleTable",
    "CONDITIONS",
    "build_default_rules",
    "rule_table",
    "toggle_rule",
    "fires",
    "check_inventory_alerts",
    "check_sales_alerts",
    "check_customer_alerts",
    "check_operational_alerts",
    "check_financial_alerts",
    "generate_business_alerts",
]
