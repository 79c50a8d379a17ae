"""재고(상품) 저장소."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

import pandas as pd

from pos_dashboard.analytics.inventory import stock_levels
from pos_dashboard.common.data_utils import nested_value
from pos_dashboard.domain.validation import numeric, text

from .base import RowStore, range_mask, search_mask

SORT_COLUMNS = ("name", "price", "stock_quantity", "category")


@dataclass(frozen=True)
class InventoryFilters:
    search: str = ""
    category: Optional[str] = None
    # "all" | "in" | "low" | "out"
    stock_level: str = "all"
    min_price: Optional[float] = None
    max_price: Optional[float] = None
    sort_by: str = "name"
    ascending: bool = True


@dataclass(frozen=True)
class InventoryStats:
    total_products: int = 0
    low_stock: int = 0
    out_of_stock: int = 0
    # Σ 재고 × 원가
    total_value: float = 0.0


class InventoryStore(RowStore[InventoryFilters, InventoryStats]):
    """상품 저장소. 재고 수준(in/low/out)은 analytics.inventory.stock_levels 기준."""

    table = "products"
    required = ("stock_quantity",)
    optional = ("id", "name", "sku", "barcode", "price", "cost", "low_stock_threshold", "category", "categories")

    def _recompute(self) -> None:
        frame = stock_levels(self._rows) if not self._rows.empty else self._rows.assign(stock_level=None)
        if not frame.empty:
            frame["category"] = text(frame, "category").where(
                text(frame, "category") != "", nested_value(frame["categories"], "name", default="")
            )
        self._rows = frame
        super()._recompute()

    def _default_filters(self) -> InventoryFilters:
        return InventoryFilters()

    def _apply_filters(self, frame: pd.DataFrame, filters: InventoryFilters) -> pd.DataFrame:
        mask = search_mask(frame, filters.search, ["name", "sku", "barcode"])
        if filters.category:
            mask &= text(frame, "category") == filters.category
        if filters.stock_level != "all":
            mask &= text(frame, "stock_level") == filters.stock_level
        mask &= range_mask(numeric(frame, "price"), filters.min_price, filters.max_price)

        result = frame[mask]
        sort_by = filters.sort_by if filters.sort_by in SORT_COLUMNS else "name"
        if sort_by in result.columns and not result.empty:
            result = result.sort_values(sort_by, ascending=filters.ascending, kind="stable")
        return result.reset_index(drop=True)

    def _compute_stats(self, frame: pd.DataFrame) -> InventoryStats:
        if frame.empty:
            return InventoryStats()
        level = text(frame, "stock_level")
        return InventoryStats(
            total_products=int(len(frame)),
            low_stock=int((level == "low").sum()),
            out_of_stock=int((level == "out").sum()),
            total_value=float((numeric(frame, "stock_quantity") * numeric(frame, "cost")).sum()),
        )
