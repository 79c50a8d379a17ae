"""공통 데이터 처리 유틸리티 함수 모듈.

여러 집계 모듈에서 반복되는 데이터 처리 패턴을 제공합니다.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

# 빈 DataFrame 템플릿 상수
EMPTY_CHART_COLUMNS = ["period", "period_start", "sales", "expenses", "profit", "orders"]
EMPTY_TOP_PRODUCTS_COLUMNS = ["name", "orders"]


def empty_chart_frame() -> pd.DataFrame:
    """빈 매출/지출 차트 DataFrame을 반환합니다."""
    return pd.DataFrame(columns=EMPTY_CHART_COLUMNS)


def first_present(frame: pd.DataFrame, candidates: Sequence[str]) -> str | None:
    """후보 컬럼 중 DataFrame에 있는 첫 컬럼명을 반환합니다.

    Examples:
        >>> first_present(pd.DataFrame(columns=["total_amount"]), ["total", "total_amount"])
        'total_amount'
    """
    for col in candidates:
        if col in frame.columns:
            return col
    return None


def nested_value(values: pd.Series, key: str = "name", default: str = "") -> pd.Series:
    """조인된 관계 컬럼(예: customers → {"name": ...})에서 값을 꺼냅니다.

    PostgREST 조인 결과는 dict 또는 dict 리스트로 내려오므로 둘 다 처리합니다.
    """

    def _pick(value: object) -> str:
        if isinstance(value, list):
            value = value[0] if value else None
        if isinstance(value, dict):
            picked = value.get(key)
            return str(picked) if picked not in (None, "") else default
        return default

    return values.map(_pick).astype(object)


def sum_nested_quantity(values: pd.Series, key: str = "quantity") -> pd.Series:
    """조인된 품목 리스트(예: transaction_items)의 수량 합계를 구합니다."""

    def _sum(items: object) -> int:
        if not isinstance(items, list):
            return 0
        total = 0
        for item in items:
            if isinstance(item, dict):
                qty = pd.to_numeric(item.get(key), errors="coerce")
                total += int(qty) if pd.notna(qty) else 0
        return total

    return values.map(_sum).astype(int)
