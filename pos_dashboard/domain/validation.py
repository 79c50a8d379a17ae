"""
조회 결과 검증 로직

이 모듈은 Supabase 조회 결과(행 목록)를 집계 전에 DataFrame으로 바꾸고
필요한 컬럼이 있는지 확인합니다.
Streamlit 의존성이 없는 순수한 도메인 로직입니다.
"""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional, Sequence

import pandas as pd

from .exceptions import ValidationError

logger = logging.getLogger(__name__)


def ensure_columns(
    rows: Optional[Iterable[Mapping[str, object]] | pd.DataFrame],
    required: Sequence[str],
    *,
    optional: Sequence[str] = (),
    table: str = "",
) -> pd.DataFrame:
    """
    조회 결과를 DataFrame으로 변환하고 컬럼 구성을 검증합니다.

    검증 항목:
    1. 결과가 비어 있으면 required + optional 컬럼만 가진 빈 DataFrame 반환
    2. 필수 컬럼이 빠져 있으면 ValidationError
    3. 선택 컬럼이 없으면 None으로 채워서 추가

    Args:
        rows: 행 목록(dict 리스트) 또는 DataFrame. None은 빈 결과로 취급
        required: 필수 컬럼 목록
        optional: 없으면 채워 넣을 선택 컬럼 목록
        table: 에러 메시지에 사용할 테이블명

    Returns:
        검증된 DataFrame

    Raises:
        ValidationError: 비어 있지 않은 결과에 필수 컬럼이 없는 경우

    Examples:
        >>> ensure_columns([{"total": 10}], ["total"], optional=["status"]).columns.tolist()
        ['total', 'status']
    """
    columns = list(dict.fromkeys([*required, *optional]))

    if rows is None:
        return pd.DataFrame(columns=columns)

    frame = rows.copy() if isinstance(rows, pd.DataFrame) else pd.DataFrame(list(rows))
    if frame.empty:
        return pd.DataFrame(columns=columns)

    missing = [col for col in required if col not in frame.columns]
    if missing:
        logger.error(f"Missing columns in {table or 'result'}: {missing}")
        raise ValidationError(
            f"{table or 'query result'} is missing required columns: {', '.join(missing)}"
        )

    for col in optional:
        if col not in frame.columns:
            frame[col] = None

    return frame


def numeric(frame: pd.DataFrame, column: str) -> pd.Series:
    """컬럼을 숫자로 변환합니다 (변환 실패/누락은 0)."""
    if column not in frame.columns:
        return pd.Series(0.0, index=frame.index, dtype=float)
    return pd.to_numeric(frame[column], errors="coerce").fillna(0.0).astype(float)


def text(frame: pd.DataFrame, column: str, default: str = "") -> pd.Series:
    """컬럼을 문자열로 변환합니다 (누락은 default)."""
    if column not in frame.columns:
        return pd.Series(default, index=frame.index, dtype=object)
    return frame[column].where(frame[column].notna(), default).astype(str)
