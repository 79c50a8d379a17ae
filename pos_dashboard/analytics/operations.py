"""운영(주문 처리) 분석 함수들."""

from __future__ import annotations

import pandas as pd

from pos_dashboard.domain.models import OperationsSummary
from pos_dashboard.domain.validation import numeric, text


def summarize_operations(orders: pd.DataFrame) -> OperationsSummary:
    """
    오늘 주문(상태 무관)으로 처리 현황과 손익을 계산합니다.

    순이익은 매출에서 할인액을 뺀 값입니다 (원가 미반영).

    Examples:
        >>> frame = pd.DataFrame({"status": ["completed", "refunded"], "total": [100, 50]})
        >>> summarize_operations(frame).refund_rate
        50.0
    """
    if orders is None or orders.empty:
        return OperationsSummary()

    status = text(orders, "status").str.lower()
    total_orders = int(len(orders))
    refunded = int((status == "refunded").sum())

    gross = float(numeric(orders, "total").sum())
    discounts = float(numeric(orders, "discount_amount").sum())
    net_profit = gross - discounts

    return OperationsSummary(
        orders_total=total_orders,
        orders_fulfilled=int((status == "completed").sum()),
        pending_orders=int((status == "pending").sum()),
        refunded_orders=refunded,
        refund_rate=refunded / total_orders * 100.0,
        gross_revenue=gross,
        total_discounts=discounts,
        net_profit=net_profit,
        profit_margin=net_profit / gross * 100.0 if gross > 0 else 0.0,
    )
