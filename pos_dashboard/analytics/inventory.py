"""재고 분석 함수들."""

from __future__ import annotations

import pandas as pd

from pos_dashboard.domain.models import InventorySummary
from pos_dashboard.domain.validation import numeric, text


def stock_levels(products: pd.DataFrame) -> pd.DataFrame:
    """
    상품별 재고 수준(out / low / in)을 계산합니다.

    - out: 재고 0 이하
    - low: 0 < 재고 <= low_stock_threshold
    - in: 그 외

    Returns:
        qty, threshold, stock_level 컬럼이 추가된 복사본
    """
    frame = products.copy()
    frame["qty"] = numeric(frame, "stock_quantity")
    frame["threshold"] = numeric(frame, "low_stock_threshold")
    frame["stock_level"] = "in"
    frame.loc[(frame["qty"] > 0) & (frame["qty"] <= frame["threshold"]), "stock_level"] = "low"
    frame.loc[frame["qty"] <= 0, "stock_level"] = "out"
    return frame


def summarize_inventory(
    products: pd.DataFrame,
    *,
    todays_sales: float = 0.0,
    slow_moving_multiplier: int = 3,
) -> InventorySummary:
    """
    활성 상품 목록으로 재고 요약을 계산합니다.

    Args:
        products: stock_quantity, low_stock_threshold, cost 컬럼을 가진 상품
        todays_sales: 오늘 매출 (회전율 계산용)
        slow_moving_multiplier: 재고가 임계값의 몇 배를 넘으면 저회전으로 보는지

    Returns:
        InventorySummary. 재고 금액이 0이면 회전율도 0
    """
    if products is None or products.empty:
        return InventorySummary()

    frame = stock_levels(products)
    names = text(frame, "name", default="Product")

    low = frame["stock_level"] == "low"
    out = frame["stock_level"] == "out"
    slow = frame["qty"] > frame["threshold"] * slow_moving_multiplier

    inventory_value = float((frame["qty"] * numeric(frame, "cost")).sum())
    turnover = todays_sales * 365 / inventory_value if inventory_value > 0 else 0.0

    return InventorySummary(
        total_products=int(len(frame)),
        low_stock_items=int(low.sum()),
        out_of_stock_items=int(out.sum()),
        slow_moving_items=int(slow.sum()),
        inventory_value=inventory_value,
        inventory_turnover=turnover,
        low_stock_names=tuple(
            f"{name} ({int(qty)} left)" for name, qty in zip(names[low], frame.loc[low, "qty"])
        ),
        out_of_stock_names=tuple(names[out]),
    )


def inventory_retail_value(products: pd.DataFrame) -> float:
    """판매가 기준 재고 금액 (Σ 재고 × price)."""
    if products is None or products.empty:
        return 0.0
    return float((numeric(products, "stock_quantity") * numeric(products, "price")).sum())
