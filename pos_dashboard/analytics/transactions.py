"""거래 분석 함수들."""

from __future__ import annotations

import pandas as pd

from pos_dashboard.analytics.expenses import relative_time
from pos_dashboard.analytics.sales import order_amounts
from pos_dashboard.common.data_utils import nested_value, sum_nested_quantity
from pos_dashboard.domain.dates import to_local_naive
from pos_dashboard.domain.models import TransactionSummary
from pos_dashboard.domain.validation import text

RECENT_TRANSACTION_COLUMNS = ["id", "reference", "amount", "customer", "when", "status", "items"]


def _reference(row_id: object, reference: object) -> str:
    if isinstance(reference, str) and reference:
        return reference
    return f"TRX-{str(row_id or '')[:6]}"


def summarize_transactions(
    transactions: pd.DataFrame,
    *,
    now: pd.Timestamp,
    recent: int = 4,
    tz: str = "UTC",
) -> TransactionSummary:
    """
    오늘 거래로 상태별 건수와 최근 거래 목록을 만듭니다.

    참조번호가 없으면 "TRX-" + ID 앞 6자리, 고객이 없으면 "Walk-in Customer".
    """
    if transactions is None or transactions.empty:
        return TransactionSummary(
            recent_transactions=pd.DataFrame(columns=RECENT_TRANSACTION_COLUMNS)
        )

    status = text(transactions, "status").str.lower()
    head = transactions.head(recent)
    empty = pd.Series(index=head.index, dtype=object)
    created = to_local_naive(head.get("created_at", empty), tz)

    recent_frame = pd.DataFrame(
        {
            "id": head.get("id", empty),
            "reference": [
                _reference(row_id, ref)
                for row_id, ref in zip(head.get("id", empty), head.get("reference", empty))
            ],
            "amount": order_amounts(head),
            "customer": nested_value(head.get("customers", empty), "name", default="Walk-in Customer"),
            "when": [relative_time(ts, now, minutes=True) for ts in created],
            "status": text(head, "status"),
            "items": sum_nested_quantity(head.get("transaction_items", empty)),
        },
        columns=RECENT_TRANSACTION_COLUMNS,
    ).reset_index(drop=True)

    return TransactionSummary(
        total_transactions=int(len(transactions)),
        completed_transactions=int((status == "completed").sum()),
        pending_transactions=int((status == "pending").sum()),
        refunded_transactions=int((status == "refunded").sum()),
        total_amount=float(order_amounts(transactions).sum()),
        recent_transactions=recent_frame,
    )
