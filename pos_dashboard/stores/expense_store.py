"""지출 저장소."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd

from pos_dashboard.analytics.sales import EXPENSE_DATE_COLUMNS
from pos_dashboard.common.data_utils import first_present
from pos_dashboard.domain.dates import local_now, to_local_naive
from pos_dashboard.domain.validation import numeric, text

from .base import RowStore, range_mask, search_mask, sum_where


@dataclass(frozen=True)
class ExpenseFilters:
    search: str = ""
    category: Optional[str] = None
    status: Optional[str] = None
    date_from: Optional[pd.Timestamp] = None
    date_to: Optional[pd.Timestamp] = None


@dataclass(frozen=True)
class ExpenseStats:
    count: int = 0
    total_amount: float = 0.0
    pending_amount: float = 0.0
    paid_amount: float = 0.0
    monthly_total: float = 0.0
    yearly_total: float = 0.0
    average_expense: float = 0.0
    tax_deductible: float = 0.0


class ExpenseStore(RowStore[ExpenseFilters, ExpenseStats]):
    """
    지출 저장소.

    검색 대상: title, description, vendor_name, expense_number
    카테고리 필터는 category_id, 없으면 category 컬럼과 비교합니다.
    """

    table = "expenses"
    required = ("amount",)
    optional = (
        "id",
        "title",
        "description",
        "vendor_name",
        "expense_number",
        "category",
        "category_id",
        "status",
        "is_tax_deductible",
    )

    def _dates(self, frame: pd.DataFrame) -> pd.Series:
        col = first_present(frame, EXPENSE_DATE_COLUMNS)
        if col is None:
            return pd.Series(pd.NaT, index=frame.index, dtype="datetime64[ns]")
        return to_local_naive(frame[col]).dt.normalize()

    def _default_filters(self) -> ExpenseFilters:
        return ExpenseFilters()

    def _apply_filters(self, frame: pd.DataFrame, filters: ExpenseFilters) -> pd.DataFrame:
        mask = search_mask(
            frame, filters.search, ["title", "description", "vendor_name", "expense_number"]
        )
        if filters.category:
            category_col = "category_id" if frame["category_id"].notna().any() else "category"
            mask &= text(frame, category_col) == str(filters.category)
        if filters.status:
            mask &= text(frame, "status") == filters.status
        if filters.date_from is not None or filters.date_to is not None:
            dates = self._dates(frame)
            lower = pd.Timestamp(filters.date_from) if filters.date_from is not None else None
            upper = pd.Timestamp(filters.date_to) if filters.date_to is not None else None
            mask &= range_mask(dates, lower, upper) & dates.notna()
        return frame[mask].reset_index(drop=True)

    def _compute_stats(self, frame: pd.DataFrame) -> ExpenseStats:
        if frame.empty:
            return ExpenseStats()
        now = self._now if self._now is not None else local_now()
        amounts = numeric(frame, "amount")
        status = text(frame, "status")
        dates = self._dates(frame)
        month_start = pd.Timestamp(now).to_period("M").to_timestamp()
        year_start = pd.Timestamp(year=pd.Timestamp(now).year, month=1, day=1)
        deductible = frame["is_tax_deductible"].fillna(False).astype(bool)
        return ExpenseStats(
            count=int(len(frame)),
            total_amount=float(amounts.sum()),
            pending_amount=sum_where(frame, "amount", status == "pending"),
            paid_amount=sum_where(frame, "amount", status == "paid"),
            monthly_total=sum_where(frame, "amount", dates >= month_start),
            yearly_total=sum_where(frame, "amount", dates >= year_start),
            average_expense=float(amounts.mean()),
            tax_deductible=sum_where(frame, "amount", deductible),
        )
