"""손익 요약 함수."""

from __future__ import annotations

import pandas as pd

from pos_dashboard.analytics.sales import order_amounts
from pos_dashboard.domain.models import FinancialHealth
from pos_dashboard.domain.validation import numeric


def financial_health(transactions: pd.DataFrame, expenses: pd.DataFrame) -> FinancialHealth:
    """
    전체 거래 매출과 전체 지출로 이익과 이익률을 계산합니다.

    Examples:
        >>> tx = pd.DataFrame({"total_amount": [300.0]})
        >>> ex = pd.DataFrame({"amount": [120.0]})
        >>> financial_health(tx, ex).profit_margin
        60.0
    """
    revenue = float(order_amounts(transactions).sum()) if transactions is not None else 0.0
    spent = float(numeric(expenses, "amount").sum()) if expenses is not None else 0.0
    profit = revenue - spent
    return FinancialHealth(
        total_revenue=revenue,
        total_expenses=spent,
        profit=profit,
        profit_margin=profit / revenue * 100.0 if revenue > 0 else 0.0,
    )
