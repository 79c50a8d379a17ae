"""
알림 규칙 테이블

임계값 설정(AlertThresholds)으로 규칙 테이블을 만들고 구성을 검증합니다.
규칙 ID는 그대로 알림 ID로 쓰입니다.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Mapping, Optional, Tuple

from pos_dashboard.core.config import AlertThresholds
from pos_dashboard.domain.exceptions import AlertRuleError
from pos_dashboard.domain.models import CATEGORIES, PRIORITIES, SEVERITIES, Category, Priority, Severity

logger = logging.getLogger(__name__)

RuleTable = Mapping[str, "AlertRule"]


@dataclass(frozen=True)
class AlertRule:
    """
    임계값 알림 규칙 한 건.

    Attributes:
        id: 규칙 ID (알림 ID로 사용)
        name: 표시 이름
        category: 평가 카테고리
        severity: 생성되는 알림의 심각도
        priority: 생성되는 알림의 우선순위
        threshold: 비교 기준값 (규칙마다 의미가 다름)
        min_count: 최소 표본 수 (환불률 규칙의 주문 수 등, 초과 비교)
        hours: 발생 시간대 (시작시, 종료시), 양끝 포함
        enabled: 비활성 규칙은 발생하지 않음
    """

    id: str
    name: str
    category: Category
    severity: Severity
    priority: Priority
    threshold: float = 0.0
    min_count: int = 0
    hours: Optional[Tuple[int, int]] = None
    enabled: bool = True

    def in_hours(self, hour: int) -> bool:
        if self.hours is None:
            return True
        start, end = self.hours
        return start <= hour <= end


def build_default_rules(thresholds: AlertThresholds = AlertThresholds()) -> Dict[str, AlertRule]:
    """
    임계값 설정으로 기본 규칙 테이블을 만듭니다.

    반환되는 딕셔너리는 평가 순서(재고 → 매출 → 고객 → 운영 → 재무)를 따릅니다.
    """
    t = thresholds
    return rule_table(
        [
            # 재고
            AlertRule("out-of-stock", "Out of Stock", "inventory", "critical", "high"),
            AlertRule("low-stock", "Low Stock", "inventory", "warning", "medium"),
            # 매출
            AlertRule(
                "sales-target-achieved", "Sales Target Achieved", "sales", "success", "low",
                threshold=t.sales_target_achieved_pct,
            ),
            AlertRule(
                "sales-behind", "Sales Behind Target", "sales", "warning", "medium",
                threshold=t.sales_behind_pct,
                hours=(t.sales_behind_after_hour + 1, 23),
            ),
            AlertRule(
                "peak-hours", "Peak Hours", "sales", "opportunity", "low",
                hours=t.peak_hours,
            ),
            # 고객
            AlertRule("new-customers", "New Customers", "customers", "info", "low"),
            AlertRule(
                "vip-opportunity", "VIP Customer Opportunity", "customers", "opportunity", "low",
                threshold=t.vip_spend,
            ),
            AlertRule(
                "customer-churn", "Customer Churn Risk", "customers", "warning", "medium",
                threshold=float(t.churn_days),
            ),
            # 운영
            AlertRule(
                "high-refund-rate", "High Refund Rate", "operations", "warning", "medium",
                threshold=t.refund_rate_pct,
                min_count=t.refund_min_orders,
            ),
            AlertRule("overdue-laybys", "Overdue Laybys", "operations", "warning", "medium"),
            # 재무
            AlertRule(
                "profit-margin-low", "Low Profit Margin", "financial", "warning", "medium",
                threshold=t.profit_margin_pct,
            ),
            AlertRule(
                "daily-summary", "Daily Summary", "financial", "info", "low",
                hours=(t.daily_summary_hour, t.daily_summary_hour),
            ),
        ]
    )


def rule_table(rules: Iterable[AlertRule]) -> Dict[str, AlertRule]:
    """
    규칙 목록을 ID → 규칙 딕셔너리로 만들고 검증합니다.

    Raises:
        AlertRuleError: ID 중복, 알 수 없는 심각도/카테고리/우선순위, 잘못된 시간대
    """
    table: Dict[str, AlertRule] = {}
    for rule in rules:
        if rule.id in table:
            raise AlertRuleError(f"Duplicate alert rule id: {rule.id}")
        if rule.severity not in SEVERITIES:
            raise AlertRuleError(f"Unknown severity for {rule.id}: {rule.severity}")
        if rule.category not in CATEGORIES:
            raise AlertRuleError(f"Unknown category for {rule.id}: {rule.category}")
        if rule.priority not in PRIORITIES:
            raise AlertRuleError(f"Unknown priority for {rule.id}: {rule.priority}")
        if rule.hours is not None:
            start, end = rule.hours
            if not (0 <= start <= 23 and 0 <= end <= 23):
                raise AlertRuleError(f"Invalid hours for {rule.id}: {rule.hours}")
        table[rule.id] = rule
    return table


def toggle_rule(rules: RuleTable, rule_id: str, enabled: bool) -> Dict[str, AlertRule]:
    """
    규칙 하나의 활성 여부를 바꾼 새 테이블을 반환합니다.

    Raises:
        AlertRuleError: 테이블에 없는 규칙 ID
    """
    if rule_id not in rules:
        raise AlertRuleError(f"Unknown alert rule id: {rule_id}")
    updated = dict(rules)
    updated[rule_id] = replace(rules[rule_id], enabled=enabled)
    logger.info(f"Alert rule {rule_id} {'enabled' if enabled else 'disabled'}")
    return updated
