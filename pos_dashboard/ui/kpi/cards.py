"""KPI 카드 렌더링 모듈.

지표 카드, 카드 그리드, 비즈니스 지표 위젯 카드(MetricData 목록)를 HTML로 만들고 렌더링합니다.
"""

from __future__ import annotations

from typing import Mapping, Optional, Sequence

import streamlit as st

from pos_dashboard.core.config import CONFIG
from pos_dashboard.domain.models import BusinessMetrics, FinancialHealth, MetricData

from .formatters import (
    change_direction,
    escape,
    format_change,
    format_currency,
    format_number,
    format_percentage,
    format_value,
    progress_status,
    value_font_size,
)
from .styles import inject_responsive_styles

ARROWS = {"increase": "▲", "decrease": "▼"}


def build_metric_card(
    label: str,
    value: str,
    *,
    subtitle: Optional[str] = None,
    change: Optional[float] = None,
    compact: bool = False,
) -> str:
    classes = ["kpi-metric-card"]
    if compact:
        classes.append("kpi-metric-card--compact")
    value_text = "-" if value is None else str(value)
    font_size = value_font_size(value_text, base_size=1.3 if compact else 1.55)

    parts = [
        f'<div class="{" ".join(classes)}">',
        f'<div class="kpi-metric-label">{escape(label)}</div>',
        f'<div class="kpi-metric-value" style="font-size:{font_size};">{escape(value_text)}</div>',
    ]
    if change is not None:
        direction = change_direction(change)
        parts.append(
            f'<div class="kpi-change kpi-change--{direction}">{escape(format_change(change))}</div>'
        )
    if subtitle:
        parts.append(f'<div class="kpi-metric-subtitle">{escape(subtitle)}</div>')
    parts.append("</div>")
    return "".join(parts)


def build_grid(
    items: Sequence[str],
    *,
    min_width: int | None = None,
    extra_class: str = "",
    data_attrs: Mapping[str, object] | None = None,
) -> str:
    if not items:
        return ""
    classes = ["kpi-card-grid"]
    if extra_class:
        classes.append(extra_class)
    style = f' style="--min-card-width: {int(min_width)}px;"' if min_width is not None else ""

    attr_parts = [
        f'{escape(key)}="{escape(value)}"'
        for key, value in (data_attrs or {}).items()
        if value is not None
    ]
    attrs = (" " + " ".join(attr_parts)) if attr_parts else ""

    return f'<div class="{" ".join(classes)}"{attrs}{style}>' + "".join(items) + "</div>"


def build_metric_row(metric: MetricData) -> str:
    """위젯 카드의 지표 한 줄 (상태 배지, 증감 화살표, 목표 진행 막대)."""
    parts = ['<div class="kpi-widget-metric">', '<div class="kpi-widget-metric-head">']
    parts.append(f'<span class="kpi-metric-label">{escape(metric.label)}</span>')
    if metric.status:
        parts.append(
            f'<span class="kpi-status kpi-status--{escape(metric.status)}">{escape(metric.status)}</span>'
        )
    parts.append("</div>")

    parts.append(
        f'<div class="kpi-metric-value">{escape(format_value(metric.value, metric.format))}</div>'
    )
    if metric.change is not None:
        direction = metric.change_type or change_direction(metric.change)
        arrow = ARROWS.get(direction, "–")
        parts.append(
            f'<div class="kpi-change kpi-change--{escape(direction)}">'
            f"{arrow} {abs(float(metric.change)):.1f}%</div>"
        )
    if metric.subtitle:
        parts.append(f'<div class="kpi-metric-subtitle">{escape(metric.subtitle)}</div>')
    if metric.target and metric.progress is not None:
        width = max(0.0, min(float(metric.progress), 100.0))
        parts.append(
            '<div class="kpi-progress-label">'
            f"<span>Target: {escape(format_value(metric.target, metric.format))}</span>"
            f"<span>{float(metric.progress):.0f}%</span>"
            "</div>"
            f'<div class="kpi-progress"><div class="kpi-progress-bar" style="width:{width:.0f}%;"></div></div>'
        )
    parts.append("</div>")
    return "".join(parts)


def build_widget_card(title: str, metrics: Sequence[MetricData]) -> str:
    """제목과 지표 목록으로 비즈니스 지표 위젯 카드를 만듭니다."""
    rows = "".join(build_metric_row(metric) for metric in metrics)
    return (
        '<div class="kpi-widget-card">'
        f'<div class="kpi-widget-title">{escape(title)}</div>'
        f"{rows}"
        "</div>"
    )


def render_widget_cards(cards: Sequence[str], *, min_width: int | None = None) -> None:
    """카드 HTML 목록을 그리드로 렌더링합니다."""
    if not cards:
        return
    inject_responsive_styles()
    st.markdown(
        build_grid(cards, min_width=min_width or CONFIG.ui.kpi_min_card_width),
        unsafe_allow_html=True,
    )


# ============================================================
# 비즈니스 지표 카드
# ============================================================

def business_metric_widgets(metrics: BusinessMetrics) -> list[str]:
    """지표 스냅샷으로 매출/재고/고객/수익성 위젯 카드를 만듭니다."""
    progress = metrics.sales_target_progress
    sales = build_widget_card(
        "Sales Velocity",
        [
            MetricData(
                label="Sales today",
                value=metrics.todays_sales,
                format="currency",
                change=metrics.sales_velocity,
                change_type="increase" if metrics.sales_velocity >= 0 else "decrease",
                target=metrics.sales_target,
                progress=progress,
                status=progress_status(progress),
            ),
            MetricData(
                label="Average order value",
                value=metrics.average_order_value,
                format="currency",
                subtitle=f"{metrics.orders_today} orders today",
            ),
        ],
    )
    inventory = build_widget_card(
        "Inventory Health",
        [
            MetricData(
                label="Turnover rate",
                value=round(metrics.inventory_turnover, 1),
                format="number",
                status="good" if metrics.out_of_stock_items == 0 else "critical",
            ),
            MetricData(
                label="Low / out of stock",
                value=f"{metrics.low_stock_items} / {metrics.out_of_stock_items}",
                subtitle=f"{metrics.total_products} active products",
            ),
        ],
    )
    customers = build_widget_card(
        "Customer Acquisition",
        [
            MetricData(
                label="New customers",
                value=metrics.new_customers_today,
                format="number",
                subtitle=f"{metrics.total_customers} total",
            ),
            MetricData(
                label="Retention rate",
                value=metrics.customer_retention_rate,
                format="percentage",
            ),
        ],
    )
    margin = metrics.profit_margin
    profitability = build_widget_card(
        "Profit Margin",
        [
            MetricData(
                label="Net margin",
                value=margin,
                format="percentage",
                status=progress_status(margin, good=30.0, warning=20.0),
            ),
            MetricData(
                label="Refund rate",
                value=metrics.refund_rate,
                format="percentage",
                subtitle=f"{metrics.refunded_orders} refunds",
            ),
        ],
    )
    return [sales, inventory, customers, profitability]


def summary_metric_cards(metrics: BusinessMetrics) -> list[str]:
    """상단 요약 KPI 카드 (오늘 매출, 주문 수, 재고 경고, 진행 중 레이바이)."""
    return [
        build_metric_card(
            "Today's Sales",
            format_currency(metrics.todays_sales),
            change=metrics.sales_velocity,
            subtitle=f"Yesterday {format_currency(metrics.yesterdays_sales)}",
        ),
        build_metric_card(
            "Orders Today",
            format_number(metrics.orders_today),
            subtitle=f"Target {format_percentage(metrics.sales_target_progress, digits=0)} reached",
        ),
        build_metric_card(
            "Stock Warnings",
            format_number(metrics.low_stock_items + metrics.out_of_stock_items),
            subtitle=f"{metrics.out_of_stock_items} out of stock",
        ),
        build_metric_card(
            "Active Laybys",
            format_number(metrics.active_laybys),
            subtitle=f"{format_currency(metrics.outstanding_payments)} outstanding",
        ),
    ]


def financial_health_cards(
    health: FinancialHealth, *, retail_stock_value: Optional[float] = None
) -> list[str]:
    """최근 거래/지출 기준 손익 카드 (매출, 지출, 이익, 이익률)."""
    cards = [
        build_metric_card("Revenue", format_currency(health.total_revenue)),
        build_metric_card("Expenses", format_currency(health.total_expenses)),
        build_metric_card("Profit", format_currency(health.profit)),
        build_metric_card("Profit Margin", format_percentage(health.profit_margin)),
    ]
    if retail_stock_value is not None:
        cards.append(build_metric_card("Stock at Retail", format_currency(retail_stock_value)))
    return cards


def render_business_metrics(metrics: BusinessMetrics) -> None:
    """요약 KPI 카드와 비즈니스 지표 위젯 카드를 렌더링합니다."""
    inject_responsive_styles()
    st.markdown(
        build_grid(summary_metric_cards(metrics), extra_class="kpi-grid--summary"),
        unsafe_allow_html=True,
    )
    st.markdown(
        build_grid(business_metric_widgets(metrics), min_width=CONFIG.ui.kpi_min_card_width),
        unsafe_allow_html=True,
    )
