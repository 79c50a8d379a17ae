"""
세션 상태 관리

Supabase 클라이언트와 지표 스냅샷을 Streamlit 세션 상태에 보관하고,
새로 고침 주기마다 스냅샷을 갱신합니다.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import pandas as pd
import streamlit as st

from pos_dashboard.core.config import CONFIG, DashboardConfig, SupabaseSettings
from pos_dashboard.domain.dates import date_string, local_now
from pos_dashboard.ui.adapters import notify_fetch_errors

from .client import get_supabase_client
from .fetchers import DashboardRows, fetch_customers, fetch_dashboard_rows
from .refresh import RefreshResult, refresh_snapshot

logger = logging.getLogger(__name__)

SNAPSHOT_KEY = "pos_refresh_result"
REFRESH_TRIGGER_KEY = "_trigger_refresh"


@st.cache_resource(show_spinner=False)
def _cached_client(url: str, key: str) -> Any:
    return get_supabase_client(SupabaseSettings(url=url, key=key))


def get_client(settings: SupabaseSettings) -> Any:
    """세션 간 공유되는 Supabase 클라이언트."""
    return _cached_client(settings.url, settings.key)


def request_refresh() -> None:
    """다음 실행에서 스냅샷을 강제로 새로 고치도록 표시합니다 (사이드바 버튼)."""
    st.session_state[REFRESH_TRIGGER_KEY] = True


def _is_stale(result: Optional[RefreshResult], now: pd.Timestamp, max_age_seconds: int) -> bool:
    if result is None or result.refreshed_at is None:
        return True
    return (now - result.refreshed_at).total_seconds() >= max_age_seconds


def ensure_snapshot(
    client: Any,
    store_id: str,
    *,
    sales_target: Optional[float] = None,
    config: DashboardConfig = CONFIG,
    now: Optional[pd.Timestamp] = None,
) -> RefreshResult:
    """
    세션의 지표 스냅샷을 반환하고 필요하면 새로 고칩니다.

    새로 고침 조건:
    1. 세션에 스냅샷이 없음
    2. 사이드바 "새로 고침" 트리거
    3. 매장 또는 매출 목표가 바뀜
    4. 마지막 새로 고침 후 지표 주기(기본 5분)가 지남

    실패한 fetcher는 토스트로 알리고 이전 값을 유지합니다.

    Session State Keys:
        - pos_refresh_result: RefreshResult
        - pos_store_id: 스냅샷의 매장 ID
        - _trigger_refresh: 강제 새로 고침 플래그
    """
    now = now if now is not None else local_now(config.timezone)
    result: Optional[RefreshResult] = st.session_state.get(SNAPSHOT_KEY)

    triggered = st.session_state.get(REFRESH_TRIGGER_KEY, False)
    if triggered:
        st.session_state[REFRESH_TRIGGER_KEY] = False

    store_changed = st.session_state.get("pos_store_id") != store_id
    target_changed = (
        result is not None
        and sales_target is not None
        and result.metrics.sales_target != float(sales_target)
    )

    if not (
        triggered
        or store_changed
        or target_changed
        or _is_stale(result, now, config.refresh.metrics_interval_seconds)
    ):
        return result

    previous = result.metrics if result is not None and not store_changed else None
    result = refresh_snapshot(
        client,
        store_id,
        previous=previous,
        now=now,
        sales_target=sales_target,
        config=config,
    )
    st.session_state[SNAPSHOT_KEY] = result
    st.session_state["pos_store_id"] = store_id

    if result.errors:
        notify_fetch_errors(result.errors)
    return result


@st.cache_data(ttl=300, show_spinner=False)
def load_dashboard_rows(_client: Any, store_id: str, day: str, tz: str = "UTC") -> DashboardRows:
    """
    개요 화면용 행을 조회합니다 (5분 캐시).

    _client는 해시하지 않으며, day("YYYY-MM-DD")가 바뀌면 다시 조회합니다.
    """
    now = local_now(tz)
    logger.info(f"Loading overview rows for store {store_id} ({day})")
    return fetch_dashboard_rows(_client, store_id, now=now, tz=tz)


@st.cache_data(ttl=300, show_spinner=False)
def load_customers(_client: Any, store_id: str, day: str) -> pd.DataFrame:
    """고객 기록 탭용 고객 목록 (5분 캐시)."""
    logger.info(f"Loading customers for store {store_id} ({day})")
    return fetch_customers(_client, store_id)


def today_key(config: DashboardConfig = CONFIG) -> str:
    """캐시 키로 쓰는 현지 날짜 문자열."""
    return date_string(local_now(config.timezone))
