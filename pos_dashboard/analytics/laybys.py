"""레이바이(할부 예약 판매) 분석 함수들."""

from __future__ import annotations

import pandas as pd

from pos_dashboard.common.data_utils import nested_value
from pos_dashboard.domain.dates import date_string
from pos_dashboard.domain.models import LaybySummary
from pos_dashboard.domain.validation import numeric, text

RECENT_LAYBY_COLUMNS = ["id", "customer", "total_amount", "balance_remaining", "due_date", "status"]


def overdue_mask(laybys: pd.DataFrame, *, now: pd.Timestamp) -> pd.Series:
    """
    연체 여부: 납부 기한이 오늘 이전이고 잔액이 남아 있는 레이바이.

    due_date는 "YYYY-MM-DD" 문자열로 비교합니다.
    """
    if laybys is None or laybys.empty:
        return pd.Series(dtype=bool)
    today = date_string(now)
    due = text(laybys, "due_date").str.slice(0, 10)
    balance = numeric(laybys, "balance_remaining")
    return (due != "") & (due < today) & (balance > 0)


def summarize_laybys(
    laybys: pd.DataFrame,
    *,
    now: pd.Timestamp,
    recent: int = 3,
) -> LaybySummary:
    """
    진행 중(active/partial) 레이바이로 요약을 계산합니다.

    Args:
        laybys: total_amount, balance_remaining, due_date, status,
            customers(조인) 컬럼을 가진 레이바이 (최신순)
        now: 기준 시각 (현지)
        recent: 최근 목록 개수

    Returns:
        LaybySummary. 최근 목록의 status는 연체 시 "overdue"로 표시
    """
    if laybys is None or laybys.empty:
        return LaybySummary(recent_laybys=pd.DataFrame(columns=RECENT_LAYBY_COLUMNS))

    overdue = overdue_mask(laybys, now=now)
    customers = laybys.get("customers", pd.Series(index=laybys.index, dtype=object))

    recent_frame = pd.DataFrame(
        {
            "id": laybys.get("id", pd.Series(index=laybys.index, dtype=object)),
            "customer": nested_value(customers, "name", default="Unknown Customer"),
            "total_amount": numeric(laybys, "total_amount"),
            "balance_remaining": numeric(laybys, "balance_remaining"),
            "due_date": text(laybys, "due_date"),
            "status": text(laybys, "status").where(~overdue, "overdue"),
        },
        columns=RECENT_LAYBY_COLUMNS,
    ).head(recent).reset_index(drop=True)

    return LaybySummary(
        active_laybys=int(len(laybys)),
        layby_value=float(numeric(laybys, "balance_remaining").sum()),
        overdue_laybys=int(overdue.sum()),
        recent_laybys=recent_frame,
    )
