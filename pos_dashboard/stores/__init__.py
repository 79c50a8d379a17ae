"""
행 저장소 계층

레이바이/지출/재고/고객 행을 보관하고 필터와 통계를 계산합니다.
"""

from .base import RowStore, range_mask, search_mask
from .customer_store import CustomerFilters, CustomerStats, CustomerStore
from .expense_store import ExpenseFilters, ExpenseStats, ExpenseStore
from .inventory_store import InventoryFilters, InventoryStats, InventoryStore
from .layby_store import LaybyFilters, LaybyStats, LaybyStore

__all__ = [
    "RowStore",
    "search_mask",
    "range_mask",
    "LaybyStore",
    "LaybyFilters",
    "LaybyStats",
    "ExpenseStore",
    "ExpenseFilters",
    "ExpenseStats",
    "InventoryStore",
    "InventoryFilters",
    "InventoryStats",
    "CustomerStore",
    "CustomerFilters",
    "CustomerStats",
]
