"""레이바이 저장소."""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from pos_dashboard.analytics.laybys import overdue_mask
from pos_dashboard.common.data_utils import nested_value
from pos_dashboard.domain.validation import numeric, text

from .base import RowStore, search_mask, sum_where


@dataclass(frozen=True)
class LaybyFilters:
    search: str = ""
    # "all" 또는 active / partial / overdue / completed / cancelled
    status: str = "all"


@dataclass(frozen=True)
class LaybyStats:
    total: int = 0
    active: int = 0
    overdue: int = 0
    completed: int = 0
    total_value: float = 0.0
    # active + overdue 레이바이의 잔액 합계
    outstanding_balance: float = 0.0
    deposits_collected: float = 0.0


class LaybyStore(RowStore[LaybyFilters, LaybyStats]):
    """
    레이바이 주문 저장소.

    now를 주면 납부 기한이 지난 active/partial 레이바이의 status를 "overdue"로 바꿉니다.
    조인된 customers(name, phone)가 있으면 customer_name/customer_phone을 채웁니다.
    """

    table = "layby_orders"
    required = ("status",)
    optional = (
        "id",
        "layby_number",
        "customer_name",
        "customer_phone",
        "customers",
        "total_amount",
        "deposit_amount",
        "balance_remaining",
        "due_date",
    )

    def _recompute(self) -> None:
        self._rows = self._prepare(self._rows)
        super()._recompute()

    def _prepare(self, frame: pd.DataFrame) -> pd.DataFrame:
        frame = frame.copy()
        if frame.empty:
            return frame
        joined = frame["customers"]
        frame["customer_name"] = text(frame, "customer_name").where(
            text(frame, "customer_name") != "", nested_value(joined, "name", default="")
        )
        frame["customer_phone"] = text(frame, "customer_phone").where(
            text(frame, "customer_phone") != "", nested_value(joined, "phone", default="")
        )
        if self._now is not None:
            is_open = text(frame, "status").isin(["active", "partial"])
            late = overdue_mask(frame, now=self._now) & is_open
            frame.loc[late, "status"] = "overdue"
        return frame

    def _default_filters(self) -> LaybyFilters:
        return LaybyFilters()

    def _apply_filters(self, frame: pd.DataFrame, filters: LaybyFilters) -> pd.DataFrame:
        mask = search_mask(
            frame,
            filters.search,
            ["customer_name", "layby_number", "customer_phone"],
            case_sensitive=["customer_phone"],
        )
        if filters.status != "all":
            mask &= text(frame, "status") == filters.status
        return frame[mask].reset_index(drop=True)

    def _compute_stats(self, frame: pd.DataFrame) -> LaybyStats:
        if frame.empty:
            return LaybyStats()
        status = text(frame, "status")
        return LaybyStats(
            total=int(len(frame)),
            active=int((status == "active").sum()),
            overdue=int((status == "overdue").sum()),
            completed=int((status == "completed").sum()),
            total_value=float(numeric(frame, "total_amount").sum()),
            outstanding_balance=sum_where(
                frame, "balance_remaining", status.isin(["active", "overdue"])
            ),
            deposits_collected=float(numeric(frame, "deposit_amount").sum()),
        )
