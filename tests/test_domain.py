"""
도메인 모델, 날짜 구간, 조회 결과 검증 테스트
"""
from __future__ import annotations

import pandas as pd
import pytest

from pos_dashboard.domain.dates import (
    date_string,
    day_window,
    month_prefix,
    to_local_naive,
    to_query_iso,
)
from pos_dashboard.domain.exceptions import ValidationError
from pos_dashboard.domain.models import Alert, BusinessMetrics
from pos_dashboard.domain.validation import ensure_columns, numeric, text


# ============================================================
# 날짜 구간
# ============================================================

def test_day_window_covers_whole_day():
    window = day_window(pd.Timestamp("2024-03-10 15:30"))

    assert window.start == pd.Timestamp("2024-03-10 00:00")
    assert window.end == pd.Timestamp("2024-03-10 23:59:59.999999")


def test_day_window_days_ago():
    window = day_window(pd.Timestamp("2024-03-01 08:00"), days_ago=1)

    assert window.start == pd.Timestamp("2024-02-29")


def test_iso_bounds_are_utc_strings():
    gte, lte = day_window(pd.Timestamp("2024-03-10 09:00")).iso_bounds("UTC")

    assert gte == "2024-03-10T00:00:00+00:00"
    assert lte.startswith("2024-03-10T23:59:59")


def test_to_query_iso_converts_local_time():
    iso = to_query_iso(pd.Timestamp("2024-03-10 00:00"), "Asia/Seoul")

    assert iso == "2024-03-09T15:00:00+00:00"


def test_month_prefix_and_date_string():
    now = pd.Timestamp("2024-01-15 10:00")

    assert month_prefix(now) == "2024-01"
    assert month_prefix(now, months_back=1) == "2023-12"
    assert date_string(now) == "2024-01-15"


def test_to_local_naive_mixed_values():
    values = pd.Series(["2024-03-10T10:00:00+00:00", "2024-03-09", None, "not a date"])

    result = to_local_naive(values, "UTC")

    assert result.iloc[0] == pd.Timestamp("2024-03-10 10:00")
    assert result.iloc[1] == pd.Timestamp("2024-03-09")
    assert pd.isna(result.iloc[2])
    assert pd.isna(result.iloc[3])


# ============================================================
# 검증
# ============================================================

def test_ensure_columns_empty_result_keeps_schema():
    frame = ensure_columns([], ["total"], optional=["status"], table="orders")

    assert frame.empty
    assert list(frame.columns) == ["total", "status"]


def test_ensure_columns_fills_optional():
    frame = ensure_columns([{"total": 10}], ["total"], optional=["status"])

    assert frame["status"].isna().all()


def test_ensure_columns_missing_required_raises():
    with pytest.raises(ValidationError, match="total"):
        ensure_columns([{"status": "completed"}], ["total"], table="orders")


def test_numeric_and_text_defaults():
    frame = pd.DataFrame({"amount": ["10.5", None, "abc"], "name": ["a", None, "c"]})

    assert numeric(frame, "amount").tolist() == [10.5, 0.0, 0.0]
    assert numeric(frame, "missing").tolist() == [0.0, 0.0, 0.0]
    assert text(frame, "name", default="-").tolist() == ["a", "-", "c"]


# ============================================================
# 모델
# ============================================================

def test_metrics_merge_returns_new_snapshot():
    metrics = BusinessMetrics()
    updated = metrics.merge(todays_sales=250.0)

    assert metrics.todays_sales == 0.0
    assert updated.todays_sales == 250.0


def test_metrics_merge_rejects_unknown_field():
    with pytest.raises(TypeError):
        BusinessMetrics().merge(not_a_metric=1)


def test_alert_signature_ignores_timestamp():
    a = Alert("low-stock", "warning", "inventory", "Low", "msg", timestamp=pd.Timestamp("2024-01-01"))
    b = Alert("low-stock", "warning", "inventory", "Low", "msg", timestamp=pd.Timestamp("2024-01-02"))

    assert a != b
    assert a.signature() == b.signature()
