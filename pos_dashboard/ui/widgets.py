"""
대시보드 위젯 카드

매출, 재고, 고객, 지출, 레이바이, 거래 위젯을 HTML 카드로 만들고 렌더링합니다.
각 빌더는 이미 계산된 요약 모델만 받으며 조회는 하지 않습니다.
"""

from __future__ import annotations

from typing import Iterable, Optional, Sequence, Tuple

import pandas as pd

from pos_dashboard.domain.models import (
    BusinessMetrics,
    ExpenseSummary,
    LaybySummary,
    MetricData,
    TransactionSummary,
)

from .kpi import (
    build_metric_row,
    escape,
    format_currency,
    format_percentage,
    progress_status,
    render_widget_cards,
)

# (왼쪽 텍스트, 오른쪽 텍스트, 보조 설명)
WidgetItem = Tuple[str, str, Optional[str]]

STATUS_ICONS = {
    "completed": "✅",
    "pending": "⏳",
    "refunded": "↩️",
    "cancelled": "✖️",
    "active": "🟢",
    "partial": "🟡",
    "overdue": "🔴",
}


def build_item_list(items: Iterable[WidgetItem], *, empty_text: str = "Nothing yet") -> str:
    rows = []
    for left, right, meta in items:
        meta_html = f'<div class="kpi-widget-item-meta">{escape(meta)}</div>' if meta else ""
        rows.append(
            '<div class="kpi-widget-item">'
            f"<div>{escape(left)}{meta_html}</div>"
            f"<div>{escape(right)}</div>"
            "</div>"
        )
    if not rows:
        rows.append(f'<div class="kpi-widget-item kpi-widget-item-meta">{escape(empty_text)}</div>')
    return '<div class="kpi-widget-list">' + "".join(rows) + "</div>"


def build_list_widget(
    title: str,
    metrics: Sequence[MetricData],
    items: Iterable[WidgetItem] = (),
    *,
    empty_text: str = "Nothing yet",
) -> str:
    """지표 줄 아래에 최근 항목 목록이 붙는 위젯 카드."""
    rows = "".join(build_metric_row(metric) for metric in metrics)
    return (
        '<div class="kpi-widget-card">'
        f'<div class="kpi-widget-title">{escape(title)}</div>'
        f"{rows}"
        f"{build_item_list(items, empty_text=empty_text)}"
        "</div>"
    )


def _records(frame: Optional[pd.DataFrame]) -> list[dict]:
    if frame is None or frame.empty:
        return []
    return frame.to_dict("records")


def _status(value: object) -> str:
    status = str(value or "")
    return f"{STATUS_ICONS.get(status, '')} {status}".strip()


# ============================================================
# 위젯 빌더
# ============================================================

def sales_widget(metrics: BusinessMetrics, recent_orders: Optional[pd.DataFrame] = None) -> str:
    """오늘 매출과 목표 진행률, 최근 주문."""
    progress = metrics.sales_target_progress
    items = [
        (
            str(row.get("order_number") or row.get("id") or "-"),
            format_currency(row.get("total")),
            str(row.get("customer") or "Walk-in Customer"),
        )
        for row in _records(recent_orders)
    ]
    return build_list_widget(
        "Sales",
        [
            MetricData(
                label="Today's sales",
                value=metrics.todays_sales,
                format="currency",
                change=metrics.sales_velocity,
                target=metrics.sales_target,
                progress=progress,
                status=progress_status(progress),
            ),
        ],
        items,
        empty_text="No orders yet",
    )


def inventory_widget(metrics: BusinessMetrics) -> str:
    """재고 가치와 저재고/품절 상품 이름."""
    items: list[WidgetItem] = [(name, "out", None) for name in metrics.out_of_stock_names]
    items += [(name, "low", None) for name in metrics.low_stock_names]
    status = "critical" if metrics.out_of_stock_items else ("warning" if metrics.low_stock_items else "good")
    return build_list_widget(
        "Inventory",
        [
            MetricData(
                label="Inventory value",
                value=metrics.inventory_value,
                format="currency",
                subtitle=f"{metrics.total_products} active products",
                status=status,
            ),
            MetricData(
                label="Slow moving",
                value=metrics.slow_moving_items,
                format="number",
            ),
        ],
        items,
        empty_text="All products are well stocked",
    )


def customers_widget(metrics: BusinessMetrics) -> str:
    """고객 수, VIP, 이탈 위험과 VIP 승급 후보."""
    items = [(name, "VIP candidate", None) for name in metrics.potential_vip_names]
    return build_list_widget(
        "Customers",
        [
            MetricData(
                label="Total customers",
                value=metrics.total_customers,
                format="number",
                subtitle=f"{metrics.new_customers_today} new today, {metrics.vip_customers} VIP",
            ),
            MetricData(
                label="Average customer value",
                value=metrics.average_customer_value,
                format="currency",
            ),
            MetricData(
                label="Churn risk",
                value=metrics.churn_risk_customers,
                format="number",
                status="warning" if metrics.churn_risk_customers else "good",
            ),
        ],
        items,
        empty_text="No VIP candidates",
    )


def expenses_widget(summary: ExpenseSummary) -> str:
    """오늘/이번 달 지출, 전월 대비 증감, 상위 카테고리와 최근 지출."""
    items: list[WidgetItem] = [
        (
            str(row.get("category") or "Uncategorized"),
            format_currency(row.get("amount")),
            f"{format_percentage(row.get('percentage'), digits=0)} of month",
        )
        for row in _records(summary.top_categories)
    ]
    items += [
        (
            str(row.get("description") or "Expense"),
            format_currency(row.get("amount")),
            str(row.get("when") or ""),
        )
        for row in _records(summary.recent_expenses)
    ]
    return build_list_widget(
        "Expenses",
        [
            MetricData(label="Today", value=summary.total_expenses, format="currency"),
            MetricData(
                label="This month",
                value=summary.monthly_expenses,
                format="currency",
                change=summary.expense_growth,
                subtitle=f"Last month {format_currency(summary.last_month_expenses)}",
            ),
        ],
        items,
        empty_text="No expenses recorded",
    )


def layby_widget(summary: LaybySummary) -> str:
    """진행 중 레이바이 수, 미수 잔액, 연체 건수와 최근 레이바이."""
    items = [
        (
            str(row.get("customer") or "Unknown Customer"),
            format_currency(row.get("balance_remaining")),
            f"{_status(row.get('status'))} · due {row.get('due_date') or '-'}",
        )
        for row in _records(summary.recent_laybys)
    ]
    return build_list_widget(
        "Laybys",
        [
            MetricData(
                label="Active laybys",
                value=summary.active_laybys,
                format="number",
                subtitle=f"{summary.overdue_laybys} overdue",
                status="warning" if summary.overdue_laybys else "good",
            ),
            MetricData(label="Outstanding", value=summary.layby_value, format="currency"),
        ],
        items,
        empty_text="No active laybys",
    )


def transactions_widget(summary: TransactionSummary) -> str:
    """오늘 거래 상태별 건수와 최근 거래."""
    items = [
        (
            f"{row.get('reference')} · {row.get('customer')}",
            format_currency(row.get("amount")),
            f"{_status(row.get('status'))} · {row.get('items', 0)} items · {row.get('when') or ''}",
        )
        for row in _records(summary.recent_transactions)
    ]
    return build_list_widget(
        "Transactions",
        [
            MetricData(
                label="Today's transactions",
                value=summary.total_transactions,
                format="number",
                subtitle=(
                    f"{summary.completed_transactions} completed, "
                    f"{summary.pending_transactions} pending, "
                    f"{summary.refunded_transactions} refunded"
                ),
            ),
            MetricData(label="Total amount", value=summary.total_amount, format="currency"),
        ],
        items,
        empty_text="No transactions today",
    )


def render_widgets(cards: Sequence[str]) -> None:
    """위젯 카드 목록을 그리드로 렌더링합니다."""
    render_widget_cards(cards, min_width=300)
