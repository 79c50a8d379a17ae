"""
집계 계층

Supabase 조회 결과(DataFrame)를 요약 모델로 줄이는 순수 pandas 함수들입니다.
Streamlit과 Supabase에 의존하지 않습니다.
"""

from .customers import attach_last_order_date, summarize_customers
from .expenses import relative_time, summarize_expenses
from .financial import financial_health
from .inventory import inventory_retail_value, stock_levels, summarize_inventory
from .laybys import overdue_mask, summarize_laybys
from .operations import summarize_operations
from .sales import (
    calculate_change,
    order_amounts,
    percent_change,
    sales_expenses_series,
    summarize_sales,
    top_selling_products,
)
from .transactions import summarize_transactions

__all__ = [
    "attach_last_order_date",
    "calculate_change",
    "financial_health",
    "inventory_retail_value",
    "order_amounts",
    "overdue_mask",
    "percent_change",
    "relative_time",
    "sales_expenses_series",
    "stock_levels",
    "summarize_customers",
    "summarize_expenses",
    "summarize_inventory",
    "summarize_laybys",
    "summarize_operations",
    "summarize_sales",
    "summarize_transactions",
    "top_selling_products",
]
