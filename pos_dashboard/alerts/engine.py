"""
임계값 기반 비즈니스 알림 생성기

지표 스냅샷(BusinessMetrics)을 규칙 테이블과 비교해 알림 목록을 만듭니다.
카테고리마다 순수 함수 하나가 담당하며, 규칙끼리는 서로 영향을 주지 않습니다.
같은 스냅샷과 같은 시각이면 타임스탬프를 제외하고 같은 알림 목록이 나옵니다.
"""

from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

import pandas as pd

from pos_dashboard.core.config import CONFIG
from pos_dashboard.domain.exceptions import AlertRuleError
from pos_dashboard.domain.models import Alert, AlertAction, BusinessMetrics

from .rules import AlertRule, RuleTable, build_default_rules

logger = logging.getLogger(__name__)

Condition = Callable[[AlertRule, BusinessMetrics, int], bool]

# ============================================================
# 규칙별 발생 조건 (rule, metrics, hour) -> bool
# ============================================================
CONDITIONS: Dict[str, Condition] = {
    "out-of-stock": lambda r, m, h: m.out_of_stock_items > 0,
    "low-stock": lambda r, m, h: m.low_stock_items > 0,
    "sales-target-achieved": lambda r, m, h: m.sales_target_progress >= r.threshold,
    "sales-behind": lambda r, m, h: m.sales_target_progress < r.threshold and r.in_hours(h),
    "peak-hours": lambda r, m, h: r.in_hours(h),
    "new-customers": lambda r, m, h: m.new_customers_today > 0,
    "vip-opportunity": lambda r, m, h: m.potential_vips > 0,
    "customer-churn": lambda r, m, h: m.churn_risk_customers > 0,
    "high-refund-rate": lambda r, m, h: m.refund_rate > r.threshold and m.orders_total > r.min_count,
    "overdue-laybys": lambda r, m, h: m.overdue_laybys > 0,
    "profit-margin-low": lambda r, m, h: m.profit_margin < r.threshold and m.gross_revenue > 0,
    "daily-summary": lambda r, m, h: r.in_hours(h),
}


def fires(rules: RuleTable, rule_id: str, metrics: BusinessMetrics, hour: int) -> bool:
    """
    규칙이 활성 상태이고 조건을 만족하는지 확인합니다.

    테이블에 없는 규칙은 발생하지 않습니다.

    Raises:
        AlertRuleError: 조건이 정의되지 않은 규칙 ID
    """
    rule = rules.get(rule_id)
    if rule is None or not rule.enabled:
        return False
    condition = CONDITIONS.get(rule_id)
    if condition is None:
        raise AlertRuleError(f"No condition defined for alert rule: {rule_id}")
    return bool(condition(rule, metrics, hour))


def _alert(
    rule: AlertRule,
    title: str,
    message: str,
    *,
    now: pd.Timestamp,
    details: Optional[str] = None,
    action: Optional[AlertAction] = None,
    auto_resolve: bool = False,
) -> Alert:
    return Alert(
        id=rule.id,
        severity=rule.severity,
        category=rule.category,
        title=title,
        message=message,
        details=details,
        action=action,
        priority=rule.priority,
        timestamp=pd.Timestamp(now),
        auto_resolve=auto_resolve,
    )


def _names(values) -> Optional[str]:
    return ", ".join(values) if values else None


# ============================================================
# 카테고리별 평가 함수
# ============================================================

def check_inventory_alerts(
    metrics: BusinessMetrics, rules: RuleTable, *, now: pd.Timestamp
) -> List[Alert]:
    """품절(critical)과 저재고(warning) 알림."""
    alerts: List[Alert] = []
    hour = pd.Timestamp(now).hour

    if fires(rules, "out-of-stock", metrics, hour):
        alerts.append(
            _alert(
                rules["out-of-stock"],
                "Out of Stock Alert",
                f"{metrics.out_of_stock_items} products are out of stock",
                now=now,
                details=_names(metrics.out_of_stock_names),
                action=AlertAction("Restock Now", "inventory"),
            )
        )

    if fires(rules, "low-stock", metrics, hour):
        alerts.append(
            _alert(
                rules["low-stock"],
                "Low Stock Alert",
                f"{metrics.low_stock_items} products are running low on stock",
                now=now,
                details=_names(metrics.low_stock_names),
                action=AlertAction("View Inventory", "inventory"),
            )
        )

    return alerts


def check_sales_alerts(
    metrics: BusinessMetrics, rules: RuleTable, *, now: pd.Timestamp
) -> List[Alert]:
    """
    매출 목표 달성/부진과 피크 시간대 알림.

    목표 달성 조건을 만족하면 부진 규칙은 평가하지 않습니다.
    """
    alerts: List[Alert] = []
    hour = pd.Timestamp(now).hour
    achieved = rules.get("sales-target-achieved")
    reached = achieved is not None and metrics.sales_target_progress >= achieved.threshold

    if reached:
        if fires(rules, "sales-target-achieved", metrics, hour):
            alerts.append(
                _alert(
                    rules["sales-target-achieved"],
                    "Sales Target Achieved!",
                    "Congratulations! You've reached today's sales target",
                    now=now,
                    auto_resolve=True,
                )
            )
    elif fires(rules, "sales-behind", metrics, hour):
        behind = max(0.0, 100.0 - metrics.sales_target_progress)
        alerts.append(
            _alert(
                rules["sales-behind"],
                "Sales Behind Target",
                f"Sales are {behind:.0f}% behind today's target",
                now=now,
                details=(
                    f"Current: ${metrics.todays_sales:,.2f} | "
                    f"Target: ${metrics.sales_target:,.2f}"
                ),
                action=AlertAction("View Strategies", "pos"),
            )
        )

    if fires(rules, "peak-hours", metrics, hour):
        alerts.append(
            _alert(
                rules["peak-hours"],
                "Peak Hours Active",
                "This is typically your busiest time - maximize sales!",
                now=now,
                auto_resolve=True,
            )
        )

    return alerts


def check_customer_alerts(
    metrics: BusinessMetrics, rules: RuleTable, *, now: pd.Timestamp
) -> List[Alert]:
    """신규 고객, VIP 후보, 이탈 위험 알림."""
    alerts: List[Alert] = []
    hour = pd.Timestamp(now).hour

    if fires(rules, "new-customers", metrics, hour):
        alerts.append(
            _alert(
                rules["new-customers"],
                "New Customers Today",
                f"{metrics.new_customers_today} new customers acquired today",
                now=now,
                action=AlertAction("View Customers", "customers"),
            )
        )

    if fires(rules, "vip-opportunity", metrics, hour):
        alerts.append(
            _alert(
                rules["vip-opportunity"],
                "VIP Customer Opportunity",
                f"{metrics.potential_vips} customers qualify for VIP status",
                now=now,
                details=_names(metrics.potential_vip_names),
                action=AlertAction("Upgrade to VIP", "customers"),
            )
        )

    if fires(rules, "customer-churn", metrics, hour):
        days = int(rules["customer-churn"].threshold)
        alerts.append(
            _alert(
                rules["customer-churn"],
                "Customer Churn Risk",
                f"{metrics.churn_risk_customers} customers haven't ordered in over {days} days",
                now=now,
                action=AlertAction("View Customers", "customers"),
            )
        )

    return alerts


def check_operational_alerts(
    metrics: BusinessMetrics, rules: RuleTable, *, now: pd.Timestamp
) -> List[Alert]:
    """환불률과 연체 레이바이 알림."""
    alerts: List[Alert] = []
    hour = pd.Timestamp(now).hour

    if fires(rules, "high-refund-rate", metrics, hour):
        alerts.append(
            _alert(
                rules["high-refund-rate"],
                "High Refund Rate",
                f"Refund rate is {metrics.refund_rate:.1f}% today",
                now=now,
                details=f"{metrics.refunded_orders} refunds out of {metrics.orders_total} orders",
                action=AlertAction("Investigate", "reports"),
            )
        )

    if fires(rules, "overdue-laybys", metrics, hour):
        alerts.append(
            _alert(
                rules["overdue-laybys"],
                "Overdue Laybys",
                f"{metrics.overdue_laybys} layby orders are past their due date",
                now=now,
                details=f"Outstanding balance: ${metrics.outstanding_payments:,.2f}",
                action=AlertAction("View Laybys", "layby"),
            )
        )

    return alerts


def check_financial_alerts(
    metrics: BusinessMetrics, rules: RuleTable, *, now: pd.Timestamp
) -> List[Alert]:
    """이익률 경고와 일일 요약 알림."""
    alerts: List[Alert] = []
    hour = pd.Timestamp(now).hour

    if fires(rules, "profit-margin-low", metrics, hour):
        alerts.append(
            _alert(
                rules["profit-margin-low"],
                "Low Profit Margin",
                f"Profit margin is {metrics.profit_margin:.1f}% today",
                now=now,
                details=(
                    f"Net profit ${metrics.net_profit:,.2f} "
                    f"on ${metrics.gross_revenue:,.2f} revenue"
                ),
                action=AlertAction("View Reports", "reports"),
            )
        )

    if fires(rules, "daily-summary", metrics, hour):
        alerts.append(
            _alert(
                rules["daily-summary"],
                "Daily Summary Available",
                "Your daily financial summary is ready for review",
                now=now,
                action=AlertAction("View Summary", "reports"),
            )
        )

    return alerts


CHECKS = (
    check_inventory_alerts,
    check_sales_alerts,
    check_customer_alerts,
    check_operational_alerts,
    check_financial_alerts,
)


def generate_business_alerts(
    metrics: BusinessMetrics,
    *,
    now: pd.Timestamp,
    rules: Optional[RuleTable] = None,
) -> List[Alert]:
    """
    지표 스냅샷으로 전체 알림 목록을 생성합니다.

    평가 순서: 재고 → 매출 → 고객 → 운영 → 재무

    Args:
        metrics: 지표 스냅샷
        now: 기준 시각 (현지, 시간대 규칙에 사용)
        rules: 규칙 테이블. None이면 기본 설정으로 생성

    Returns:
        알림 목록 (알림 ID = 규칙 ID)

    Examples:
        >>> metrics = BusinessMetrics(out_of_stock_items=2)
        >>> [a.id for a in generate_business_alerts(metrics, now=pd.Timestamp("2024-01-01 09:00"))]
        ['out-of-stock']
    """
    table = rules if rules is not None else build_default_rules(CONFIG.alerts)
    alerts: List[Alert] = []
    for check in CHECKS:
        alerts.extend(check(metrics, table, now=now))
    logger.debug(f"Generated {len(alerts)} alerts: {[a.id for a in alerts]}")
    return alerts
