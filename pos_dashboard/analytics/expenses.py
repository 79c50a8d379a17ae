"""지출 분석 함수들."""

from __future__ import annotations

import pandas as pd

from pos_dashboard.analytics.sales import percent_change
from pos_dashboard.domain.dates import to_local_naive
from pos_dashboard.domain.models import ExpenseSummary
from pos_dashboard.domain.validation import numeric, text

RECENT_EXPENSE_COLUMNS = ["id", "description", "amount", "category", "when"]
TOP_CATEGORY_COLUMNS = ["category", "amount", "percentage"]


def relative_time(created: pd.Timestamp, now: pd.Timestamp, *, minutes: bool = False) -> str:
    """
    경과 시간을 "3 hours ago" 같은 문구로 변환합니다.

    Args:
        created: 생성 시각
        now: 기준 시각
        minutes: True면 1시간 미만을 분 단위로 표시 (거래 목록용)

    Examples:
        >>> relative_time(pd.Timestamp("2024-01-01 09:00"), pd.Timestamp("2024-01-01 10:00"))
        '1 hour ago'
        >>> relative_time(pd.Timestamp("2024-01-01"), pd.Timestamp("2024-01-03 01:00"))
        '2 days ago'
    """
    if created is None or pd.isna(created):
        return ""
    elapsed = max(pd.Timestamp(now) - pd.Timestamp(created), pd.Timedelta(0))
    total_minutes = int(elapsed.total_seconds() // 60)
    if minutes and total_minutes < 60:
        return f"{total_minutes} min ago"
    hours = total_minutes // 60
    if hours < 24:
        return f"{hours} hour{'s' if hours != 1 else ''} ago"
    days = hours // 24
    return f"{days} day{'s' if days != 1 else ''} ago"


def summarize_expenses(
    todays_expenses: pd.DataFrame,
    month_expenses: pd.DataFrame,
    last_month_expenses: pd.DataFrame,
    *,
    now: pd.Timestamp,
    recent: int = 3,
    top: int = 3,
    tz: str = "UTC",
) -> ExpenseSummary:
    """
    오늘/이번 달/지난달 지출로 지출 요약을 계산합니다.

    Args:
        todays_expenses: 오늘 지출
        month_expenses: 이번 달 지출 (최신순)
        last_month_expenses: 지난달 지출 (증감률 계산용)
        now: 기준 시각 (현지)
        recent: 최근 지출 표시 개수
        top: 상위 카테고리 개수
        tz: 매장 시간대

    Returns:
        ExpenseSummary. 지난달 지출이 0이면 증감률 0
    """
    total_today = float(numeric(todays_expenses, "amount").sum())
    monthly = float(numeric(month_expenses, "amount").sum())
    last_month = float(numeric(last_month_expenses, "amount").sum())

    if month_expenses is None or month_expenses.empty:
        recent_frame = pd.DataFrame(columns=RECENT_EXPENSE_COLUMNS)
        top_frame = pd.DataFrame(columns=TOP_CATEGORY_COLUMNS)
    else:
        head = month_expenses.head(recent)
        created = to_local_naive(
            head.get("created_at", pd.Series(index=head.index, dtype=object)), tz
        )
        recent_frame = pd.DataFrame(
            {
                "id": head.get("id", pd.Series(index=head.index, dtype=object)),
                "description": text(head, "description"),
                "amount": numeric(head, "amount"),
                "category": text(head, "category", default="Uncategorized"),
                "when": [relative_time(ts, now) for ts in created],
            },
            columns=RECENT_EXPENSE_COLUMNS,
        ).reset_index(drop=True)

        by_category = (
            pd.DataFrame(
                {
                    "category": text(month_expenses, "category", default="Uncategorized").replace(
                        "", "Uncategorized"
                    ),
                    "amount": numeric(month_expenses, "amount"),
                }
            )
            .groupby("category", as_index=False)["amount"]
            .sum()
            .sort_values("amount", ascending=False, kind="stable")
            .head(top)
            .reset_index(drop=True)
        )
        by_category["percentage"] = (
            by_category["amount"] / monthly * 100.0 if monthly > 0 else 0.0
        )
        top_frame = by_category[TOP_CATEGORY_COLUMNS]

    return ExpenseSummary(
        total_expenses=total_today,
        monthly_expenses=monthly,
        last_month_expenses=last_month,
        expense_growth=percent_change(monthly, last_month),
        recent_expenses=recent_frame,
        top_categories=top_frame,
    )
