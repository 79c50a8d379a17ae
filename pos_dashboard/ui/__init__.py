"""
UI 계층

KPI 카드, 차트, 알림 패널, 위젯 카드와 세션 상태 헬퍼를 제공합니다.
data_sources 계층을 임포트하지 않습니다 (data_sources.session이 ui.adapters를 사용).
"""

from .adapters import handle_domain_errors, notify_fetch_errors
from .alerts import render_alert_panel, render_rule_settings, visible_alerts
from .charts import render_sales_expenses_chart, render_top_products
from .kpi import financial_health_cards, inject_responsive_styles, render_business_metrics
from .records import (
    load_store,
    render_customer_records,
    render_expense_records,
    render_inventory_records,
    render_layby_records,
)
from .state import get_alert_board, get_alert_rules, get_store, set_alert_rules
from .widgets import (
    customers_widget,
    expenses_widget,
    inventory_widget,
    layby_widget,
    render_widgets,
    sales_widget,
    transactions_widget,
)

__all__ = [
    "handle_domain_errors",
    "notify_fetch_errors",
    "render_alert_panel",
    "render_rule_settings",
    "visible_alerts",
    "render_sales_expenses_chart",
    "render_top_products",
    "financial_health_cards",
    "inject_responsive_styles",
    "load_store",
    "render_customer_records",
    "render_expense_records",
    "render_inventory_records",
    "render_layby_records",
    "render_business_metrics",
    "get_alert_board",
    "get_alert_rules",
    "get_store",
    "set_alert_rules",
    "customers_widget",
    "expenses_widget",
    "inventory_widget",
    "layby_widget",
    "render_widgets",
    "sales_widget",
    "transactions_widget",
]
