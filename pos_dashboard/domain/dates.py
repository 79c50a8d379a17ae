"""
날짜 구간 헬퍼

"오늘", "어제", "이번 달" 같은 조회 구간을 계산하고
Supabase 필터에 넣을 ISO 문자열로 변환합니다.
모든 함수는 기준 시각(now)을 명시적으로 받습니다.
"""

from __future__ import annotations

from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class DayWindow:
    """하루 구간 [start, end] (현지 시각, 양끝 포함)"""

    start: pd.Timestamp
    end: pd.Timestamp

    def iso_bounds(self, tz: str = "UTC") -> tuple[str, str]:
        """쿼리용 (gte, lte) ISO 문자열을 반환합니다."""
        return to_query_iso(self.start, tz), to_query_iso(self.end, tz)

    def contains(self, values: pd.Series) -> pd.Series:
        return (values >= self.start) & (values <= self.end)


def local_now(tz: str = "UTC") -> pd.Timestamp:
    """매장 시간대의 현재 시각을 tz 정보 없는 Timestamp로 반환합니다."""
    return pd.Timestamp.now(tz=tz).tz_localize(None)


def day_window(now: pd.Timestamp, *, days_ago: int = 0) -> DayWindow:
    """
    기준 시각으로부터 days_ago일 전 하루 구간을 계산합니다.

    Examples:
        >>> w = day_window(pd.Timestamp("2024-03-10 15:30"), days_ago=1)
        >>> w.start, w.end
        (Timestamp('2024-03-09 00:00:00'), Timestamp('2024-03-09 23:59:59.999999'))
    """
    start = pd.Timestamp(now).normalize() - pd.Timedelta(days=int(days_ago))
    end = start + pd.Timedelta(days=1) - pd.Timedelta(microseconds=1)
    return DayWindow(start=start, end=end)


def month_prefix(now: pd.Timestamp, *, months_back: int = 0) -> str:
    """
    "YYYY-MM" 형식의 월 접두어를 반환합니다 (like 필터용).

    Examples:
        >>> month_prefix(pd.Timestamp("2024-01-15"), months_back=1)
        '2023-12'
    """
    period = pd.Timestamp(now).to_period("M") - int(months_back)
    return period.strftime("%Y-%m")


def date_string(now: pd.Timestamp) -> str:
    """"YYYY-MM-DD" 형식의 날짜 문자열."""
    return pd.Timestamp(now).strftime("%Y-%m-%d")


def to_query_iso(value: pd.Timestamp, tz: str = "UTC") -> str:
    """현지 시각을 UTC ISO 문자열로 변환합니다."""
    ts = pd.Timestamp(value)
    if ts.tzinfo is None:
        ts = ts.tz_localize(tz)
    return ts.tz_convert("UTC").isoformat()


def to_local_naive(values, tz: str = "UTC") -> pd.Series:
    """
    Supabase의 timestamptz 문자열을 매장 현지 시각(tz 없음)으로 변환합니다.

    날짜만 있는 값("2024-01-15")은 현지 자정으로 해석합니다.
    변환할 수 없는 값은 NaT가 됩니다.
    """
    series = pd.Series(values)
    if series.empty:
        return pd.Series(pd.NaT, index=series.index, dtype="datetime64[ns]")

    parsed = pd.to_datetime(series, errors="coerce", utc=True, format="mixed")
    has_offset = series.astype(str).str.contains(r"(?:Z|[+-]\d{2}:?\d{2})$", regex=True)

    # 오프셋이 있는 값은 현지 시각으로 변환, 없는 값은 그대로 현지 시각으로 간주
    converted = parsed.dt.tz_convert(tz).dt.tz_localize(None)
    naive = parsed.dt.tz_localize(None)
    result = converted.where(has_offset, naive)
    return result.astype("datetime64[ns]")
