"""고객 저장소."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd

from pos_dashboard.domain.validation import numeric, text

from .base import RowStore, range_mask, search_mask


@dataclass(frozen=True)
class CustomerFilters:
    search: str = ""
    # "all" | "active" | "inactive" | "vip"
    status: str = "all"
    min_spent: Optional[float] = None
    max_spent: Optional[float] = None
    min_orders: Optional[int] = None
    max_orders: Optional[int] = None


@dataclass(frozen=True)
class CustomerStats:
    total: int = 0
    active: int = 0
    vip: int = 0
    average_spent: float = 0.0


class CustomerStore(RowStore[CustomerFilters, CustomerStats]):
    """고객 저장소. 검색 대상은 이름/이메일(대소문자 무시)과 전화번호."""

    table = "customers"
    required = ("name",)
    optional = ("id", "email", "phone", "status", "total_spent", "total_orders", "created_at", "last_order_date")

    def _default_filters(self) -> CustomerFilters:
        return CustomerFilters()

    def _apply_filters(self, frame: pd.DataFrame, filters: CustomerFilters) -> pd.DataFrame:
        mask = search_mask(
            frame, filters.search, ["name", "email", "phone"], case_sensitive=["phone"]
        )
        if filters.status != "all":
            mask &= text(frame, "status") == filters.status
        mask &= range_mask(numeric(frame, "total_spent"), filters.min_spent, filters.max_spent)
        mask &= range_mask(numeric(frame, "total_orders"), filters.min_orders, filters.max_orders)
        return frame[mask].reset_index(drop=True)

    def _compute_stats(self, frame: pd.DataFrame) -> CustomerStats:
        if frame.empty:
            return CustomerStats()
        status = text(frame, "status")
        return CustomerStats(
            total=int(len(frame)),
            active=int((status == "active").sum()),
            vip=int((status == "vip").sum()),
            average_spent=float(numeric(frame, "total_spent").mean()),
        )
