"""매출 분석 함수들.

주문/거래 행을 매출 합계, 증감률, 기간별 차트 시계열, 인기 상품 목록으로 집계합니다.
"""

from __future__ import annotations

from typing import Literal

import numpy as np
import pandas as pd

from pos_dashboard.common.data_utils import (
    EMPTY_TOP_PRODUCTS_COLUMNS,
    empty_chart_frame,
    first_present,
)
from pos_dashboard.domain.dates import day_window, to_local_naive
from pos_dashboard.domain.models import SalesSummary
from pos_dashboard.domain.validation import numeric

ChartPeriod = Literal["daily", "weekly", "monthly"]

# 주문은 total, 거래는 total_amount 컬럼에 금액이 있음
AMOUNT_COLUMNS = ("total", "total_amount")
EXPENSE_DATE_COLUMNS = ("expense_date", "date", "created_at")

WEEKLY_BUCKETS = 8
MONTHLY_BUCKETS = 6


def percent_change(current: float, previous: float) -> float:
    """
    이전 값 대비 증감률(%)을 계산합니다. 이전 값이 0이면 0을 반환합니다.

    Examples:
        >>> percent_change(150.0, 100.0)
        50.0
        >>> percent_change(10.0, 0.0)
        0.0
    """
    if previous > 0:
        return (current - previous) / previous * 100.0
    return 0.0


def calculate_change(current: float, previous: float) -> float:
    """
    전일 대비 증감률(%). 이전 값이 0이면 현재 값이 있을 때 100을 반환합니다.

    Examples:
        >>> calculate_change(5.0, 0.0)
        100.0
        >>> calculate_change(0.0, 0.0)
        0.0
    """
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100.0


def order_amounts(frame: pd.DataFrame) -> pd.Series:
    """주문/거래 행의 금액 Series (total 또는 total_amount)."""
    col = first_present(frame, AMOUNT_COLUMNS)
    if col is None:
        return pd.Series(0.0, index=frame.index, dtype=float)
    return numeric(frame, col)


def summarize_sales(
    todays_orders: pd.DataFrame,
    yesterdays_orders: pd.DataFrame,
    *,
    sales_target: float,
) -> SalesSummary:
    """
    오늘/어제 완료 주문으로 매출 요약을 계산합니다.

    Args:
        todays_orders: 오늘 완료된 주문 (total 컬럼)
        yesterdays_orders: 어제 완료된 주문 (total 컬럼)
        sales_target: 일 매출 목표

    Returns:
        SalesSummary. 목표가 0 이하이면 달성률은 0
    """
    todays_sales = float(order_amounts(todays_orders).sum())
    yesterdays_sales = float(order_amounts(yesterdays_orders).sum())
    orders_today = int(len(todays_orders))

    average_order_value = todays_sales / orders_today if orders_today else 0.0
    progress = todays_sales / sales_target * 100.0 if sales_target > 0 else 0.0

    return SalesSummary(
        todays_sales=todays_sales,
        yesterdays_sales=yesterdays_sales,
        sales_velocity=percent_change(todays_sales, yesterdays_sales),
        average_order_value=average_order_value,
        sales_target_progress=progress,
        orders_today=orders_today,
    )


def _bucket_starts(period: ChartPeriod, now: pd.Timestamp, days: int) -> pd.DatetimeIndex:
    today = pd.Timestamp(now).normalize()
    if period == "weekly":
        # 일요일 시작 주
        week_start = today - pd.Timedelta(days=(today.dayofweek + 1) % 7)
        return pd.date_range(end=week_start, periods=WEEKLY_BUCKETS, freq="7D")
    if period == "monthly":
        month_start = today.to_period("M").to_timestamp()
        return pd.date_range(end=month_start, periods=MONTHLY_BUCKETS, freq="MS")
    return pd.date_range(end=today, periods=max(1, int(days)), freq="D")


def _bucket_labels(period: ChartPeriod, starts: pd.DatetimeIndex) -> list[str]:
    if period == "weekly":
        return [f"{ts:%b} {ts.day}" for ts in starts]
    if period == "monthly":
        return [f"{ts:%b %Y}" for ts in starts]
    return [f"{ts:%a}" for ts in starts]


def _assign_bucket(values: pd.Series, starts: pd.DatetimeIndex, end: pd.Timestamp) -> pd.Series:
    """각 시각이 속한 구간의 시작 시각 (범위 밖은 NaT)."""
    if values.empty:
        return pd.Series(pd.NaT, index=values.index, dtype="datetime64[ns]")
    edges = np.asarray(starts.append(pd.DatetimeIndex([end])), dtype="datetime64[ns]")
    positions = np.searchsorted(edges, values.to_numpy(dtype="datetime64[ns]"), side="right") - 1
    valid = (positions >= 0) & (positions < len(starts)) & values.notna().to_numpy()
    result = pd.Series(pd.NaT, index=values.index, dtype="datetime64[ns]")
    result[valid] = starts[positions[valid]].to_numpy()
    return result


def sales_expenses_series(
    transactions: pd.DataFrame,
    expenses: pd.DataFrame,
    *,
    period: ChartPeriod = "daily",
    now: pd.Timestamp,
    days: int = 7,
    tz: str = "UTC",
) -> pd.DataFrame:
    """
    매출/지출/이익 시계열을 기간 단위로 집계합니다.

    - daily: 오늘 포함 최근 days일
    - weekly: 최근 8주 (일요일 시작)
    - monthly: 최근 6개월

    Args:
        transactions: created_at과 금액(total 또는 total_amount) 컬럼을 가진 거래
        expenses: expense_date(또는 date)와 amount 컬럼을 가진 지출
        period: 집계 단위
        now: 기준 시각 (현지)
        days: daily 모드 표시 일수
        tz: 매장 시간대

    Returns:
        period, period_start, sales, expenses, profit, orders 컬럼 DataFrame
        (구간은 과거 → 현재 순서, 데이터가 없는 구간은 0)
    """
    starts = _bucket_starts(period, now, days)
    if len(starts) == 0:
        return empty_chart_frame()
    end = day_window(now).end + pd.Timedelta(microseconds=1)
    if period == "monthly":
        end = starts[-1] + pd.offsets.MonthBegin(1)
    elif period == "weekly":
        end = starts[-1] + pd.Timedelta(days=7)

    # ========================================
    # 거래 → 구간별 매출/건수
    # ========================================
    tx = transactions if transactions is not None else pd.DataFrame()
    if not tx.empty and "created_at" in tx.columns:
        tx_when = to_local_naive(tx["created_at"], tz)
        tx_bucket = _assign_bucket(tx_when, starts, end)
        tx_frame = pd.DataFrame({"bucket": tx_bucket, "amount": order_amounts(tx)}).dropna(
            subset=["bucket"]
        )
        sales = tx_frame.groupby("bucket")["amount"].sum()
        orders = tx_frame.groupby("bucket")["amount"].size()
    else:
        sales = pd.Series(dtype=float)
        orders = pd.Series(dtype=int)

    # ========================================
    # 지출 → 구간별 지출액
    # ========================================
    ex = expenses if expenses is not None else pd.DataFrame()
    date_col = first_present(ex, EXPENSE_DATE_COLUMNS) if not ex.empty else None
    if date_col is not None:
        ex_when = to_local_naive(ex[date_col], tz)
        ex_bucket = _assign_bucket(ex_when, starts, end)
        ex_frame = pd.DataFrame({"bucket": ex_bucket, "amount": numeric(ex, "amount")}).dropna(
            subset=["bucket"]
        )
        spent = ex_frame.groupby("bucket")["amount"].sum()
    else:
        spent = pd.Series(dtype=float)

    out = pd.DataFrame(index=starts)
    out["sales"] = sales.reindex(starts).fillna(0.0).astype(float).to_numpy()
    out["expenses"] = spent.reindex(starts).fillna(0.0).astype(float).to_numpy()
    out["profit"] = out["sales"] - out["expenses"]
    out["orders"] = orders.reindex(starts).fillna(0).astype(int).to_numpy()
    out.insert(0, "period_start", starts)
    out.insert(0, "period", _bucket_labels(period, starts))
    return out.reset_index(drop=True)


def _item_names(items: object) -> list[tuple[str, int]]:
    sold: list[tuple[str, int]] = []
    for item in items if isinstance(items, list) else []:
        if not isinstance(item, dict):
            continue
        name = item.get("name") or item.get("product_name") or item.get("title") or "Unknown Product"
        qty = pd.to_numeric(item.get("quantity"), errors="coerce")
        sold.append((str(name), int(qty) if pd.notna(qty) and qty else 1))
    return sold


def top_selling_products(
    transactions: pd.DataFrame,
    inventory: pd.DataFrame,
    *,
    limit: int = 4,
) -> pd.DataFrame:
    """
    거래 품목 수량 기준 인기 상품을 집계합니다.

    우선순위:
    1. 거래의 items 리스트 (name/product_name/title, quantity 기본 1)
    2. 거래의 product_name (건당 1)
    3. 거래의 description 또는 "Sale Item"
    거래가 없으면 재고 상품명을 판매 0으로, 재고도 없으면 "No products yet"을 반환합니다.

    Returns:
        name, orders 컬럼 DataFrame (판매량 내림차순, 최대 limit행)
    """
    counts: dict[str, int] = {}
    tx = transactions if transactions is not None else pd.DataFrame()
    for row in tx.to_dict("records"):
        sold = _item_names(row.get("items"))
        if not sold:
            if row.get("product_name"):
                sold = [(str(row["product_name"]), 1)]
            else:
                sold = [(str(row.get("description") or "Sale Item"), 1)]
        for name, qty in sold:
            counts[name] = counts.get(name, 0) + qty

    if counts:
        ranked = sorted(counts.items(), key=lambda kv: kv[1], reverse=True)[: max(0, int(limit))]
        return pd.DataFrame(ranked, columns=EMPTY_TOP_PRODUCTS_COLUMNS)

    inv = inventory if inventory is not None else pd.DataFrame()
    if not inv.empty:
        name_col = first_present(inv, ("name", "title"))
        names = inv[name_col].fillna("Product").astype(str) if name_col else pd.Series(["Product"] * len(inv))
        return pd.DataFrame(
            {"name": names.head(int(limit)).tolist(), "orders": 0},
            columns=EMPTY_TOP_PRODUCTS_COLUMNS,
        )

    return pd.DataFrame([("No products yet", 0)], columns=EMPTY_TOP_PRODUCTS_COLUMNS)
