"""
행 저장소 공통 기반

저장소는 Supabase에서 읽어 온 행을 보관하고, 행이나 필터가 바뀔 때마다
필터링된 목록과 통계를 다시 계산합니다. Streamlit에 의존하지 않습니다.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Generic, Iterable, Mapping, Optional, Sequence, TypeVar

import pandas as pd

from pos_dashboard.domain.validation import ensure_columns, numeric

logger = logging.getLogger(__name__)

FiltersT = TypeVar("FiltersT")
StatsT = TypeVar("StatsT")


# ========================================
# DataFrame 필터 헬퍼
# ========================================


def search_mask(
    frame: pd.DataFrame,
    term: str,
    columns: Sequence[str],
    *,
    case_sensitive: Sequence[str] = (),
) -> pd.Series:
    """
    검색어가 columns 중 하나에라도 포함된 행의 마스크.

    case_sensitive에 든 컬럼(전화번호 등)은 대소문자를 그대로 비교합니다.

    Examples:
        >>> frame = pd.DataFrame({"name": ["Alice", "Bob"]})
        >>> search_mask(frame, "ali", ["name"]).tolist()
        [True, False]
    """
    mask = pd.Series(False, index=frame.index)
    if not term:
        return ~mask
    lowered = term.lower()
    for col in columns:
        if col not in frame.columns:
            continue
        values = frame[col].fillna("").astype(str)
        if col in case_sensitive:
            mask |= values.str.contains(term, regex=False)
        else:
            mask |= values.str.lower().str.contains(lowered, regex=False)
    return mask


def range_mask(
    values: pd.Series,
    minimum: Optional[float] = None,
    maximum: Optional[float] = None,
) -> pd.Series:
    """minimum <= 값 <= maximum (None인 경계는 무시)."""
    mask = pd.Series(True, index=values.index)
    if minimum is not None:
        mask &= values >= minimum
    if maximum is not None:
        mask &= values <= maximum
    return mask


def sum_where(frame: pd.DataFrame, column: str, mask: pd.Series) -> float:
    return float(numeric(frame, column)[mask].sum())


# ========================================
# 저장소 기반 클래스
# ========================================


class RowStore(Generic[FiltersT, StatsT]):
    """
    행 + 필터 + 통계를 묶은 저장소.

    하위 클래스는 required/optional 컬럼과
    _apply_filters, _compute_stats, _default_filters를 정의합니다.
    """

    table: str = ""
    required: Sequence[str] = ()
    optional: Sequence[str] = ()

    def __init__(
        self,
        rows: Optional[Iterable[Mapping[str, Any]] | pd.DataFrame] = None,
        *,
        now: Optional[pd.Timestamp] = None,
    ) -> None:
        self._now = now
        self._filters: FiltersT = self._default_filters()
        self._rows = ensure_columns(rows, self.required, optional=self.optional, table=self.table)
        self._recompute()

    # ---- 하위 클래스 구현 ----
    def _default_filters(self) -> FiltersT:
        raise NotImplementedError

    def _apply_filters(self, frame: pd.DataFrame, filters: FiltersT) -> pd.DataFrame:
        raise NotImplementedError

    def _compute_stats(self, frame: pd.DataFrame) -> StatsT:
        raise NotImplementedError

    # ---- 공개 API ----
    @property
    def rows(self) -> pd.DataFrame:
        return self._rows

    @property
    def filtered(self) -> pd.DataFrame:
        return self._filtered

    @property
    def filters(self) -> FiltersT:
        return self._filters

    @property
    def stats(self) -> StatsT:
        return self._stats

    def set_rows(
        self,
        rows: Optional[Iterable[Mapping[str, Any]] | pd.DataFrame],
        *,
        now: Optional[pd.Timestamp] = None,
    ) -> None:
        """
        행을 교체하고 필터/통계를 다시 계산합니다.

        now를 주면 기준 시각(연체 판정, 월/연 합계)도 함께 갱신합니다.
        """
        if now is not None:
            self._now = now
        self._rows = ensure_columns(rows, self.required, optional=self.optional, table=self.table)
        logger.debug(f"{type(self).__name__}: {len(self._rows)} rows loaded")
        self._recompute()

    def set_filters(self, **changes: Any) -> None:
        """
        일부 필터만 바꿉니다.

        Raises:
            TypeError: 존재하지 않는 필터 이름
        """
        self._filters = replace(self._filters, **changes)
        self._filtered = self._apply_filters(self._rows, self._filters)

    def reset_filters(self) -> None:
        self._filters = self._default_filters()
        self._filtered = self._apply_filters(self._rows, self._filters)

    def _recompute(self) -> None:
        self._filtered = self._apply_filters(self._rows, self._filters)
        self._stats = self._compute_stats(self._rows)
