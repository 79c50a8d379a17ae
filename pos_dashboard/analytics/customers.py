"""고객 분석 함수들."""

from __future__ import annotations

import pandas as pd

from pos_dashboard.domain.dates import day_window, to_local_naive
from pos_dashboard.domain.models import CustomerSummary
from pos_dashboard.domain.validation import numeric, text


def attach_last_order_date(customers: pd.DataFrame, orders: pd.DataFrame) -> pd.DataFrame:
    """
    고객별 마지막 주문 시각(last_order_date)을 붙입니다.

    Args:
        customers: id 컬럼을 가진 고객
        orders: customer_id, created_at 컬럼을 가진 주문

    Returns:
        last_order_date 컬럼이 추가된 복사본 (주문 이력이 없으면 None)
    """
    frame = customers.copy()
    if frame.empty or "id" not in frame.columns:
        frame["last_order_date"] = None
        return frame
    if orders is None or orders.empty or "customer_id" not in orders.columns:
        frame["last_order_date"] = None
        return frame

    placed = orders.dropna(subset=["customer_id"]).copy()
    placed["placed_at"] = pd.to_datetime(placed["created_at"], errors="coerce", utc=True, format="mixed")
    latest = placed.groupby("customer_id")["placed_at"].max()
    mapped = frame["id"].map(latest)
    frame["last_order_date"] = [ts.isoformat() if pd.notna(ts) else None for ts in mapped]
    return frame


def summarize_customers(
    customers: pd.DataFrame,
    *,
    now: pd.Timestamp,
    vip_spend: float = 500.0,
    churn_days: int = 30,
    tz: str = "UTC",
) -> CustomerSummary:
    """
    고객 목록으로 고객 요약을 계산합니다.

    - 신규: 오늘 0시 이후 가입
    - VIP 후보: 누적 구매액 > vip_spend 이면서 status != vip
    - 이탈 위험: 마지막 주문이 churn_days일보다 오래됨 (주문 이력 없는 고객 제외)
    - 유지율: active / 전체 × 100

    Args:
        customers: status, total_spent, created_at, last_order_date 컬럼을 가진 고객
        now: 기준 시각 (현지)
        vip_spend: VIP 후보 누적 구매액 기준
        churn_days: 이탈 위험 기준 일수
        tz: 매장 시간대
    """
    if customers is None or customers.empty:
        return CustomerSummary()

    total = int(len(customers))
    status = text(customers, "status").str.lower()
    spent = numeric(customers, "total_spent")

    today_start = day_window(now).start
    created = to_local_naive(customers.get("created_at", pd.Series(index=customers.index, dtype=object)), tz)
    new_today = int((created >= today_start).sum())

    active = int((status == "active").sum())
    potential = (spent > vip_spend) & (status != "vip")
    names = text(customers, "name", default="Customer")

    if "last_order_date" in customers.columns:
        last_order = to_local_naive(customers["last_order_date"], tz)
        cutoff = pd.Timestamp(now) - pd.Timedelta(days=int(churn_days))
        churn_risk = int((last_order < cutoff).sum())
    else:
        churn_risk = 0

    return CustomerSummary(
        total_customers=total,
        new_customers_today=new_today,
        vip_customers=int((status == "vip").sum()),
        active_customers=active,
        average_customer_value=float(spent.sum()) / total,
        customer_retention_rate=active / total * 100.0,
        potential_vips=int(potential.sum()),
        potential_vip_names=tuple(
            f"{name} (${amount:,.2f})" for name, amount in zip(names[potential], spent[potential])
        ),
        churn_risk_customers=churn_risk,
    )
