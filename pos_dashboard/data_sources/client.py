"""
Supabase 클라이언트

이 모듈은 Supabase 클라이언트를 만들고 쿼리 빌더를 실행합니다.
조회 실패는 DataLoadError로 감싸서 상위 계층에 전달합니다.
"""

from __future__ import annotations

import logging
from typing import Any

from supabase import Client, create_client

from pos_dashboard.common.performance import global_metrics
from pos_dashboard.core.config import SupabaseSettings
from pos_dashboard.domain.exceptions import ConfigError, DataLoadError

logger = logging.getLogger(__name__)


def get_supabase_client(settings: SupabaseSettings) -> Client:
    """
    설정으로 Supabase 클라이언트를 생성합니다.

    Raises:
        ConfigError: URL 또는 키가 비어 있거나 클라이언트 생성에 실패한 경우
    """
    if not settings.url or not settings.key:
        raise ConfigError("Supabase URL and key are required")

    try:
        client = create_client(settings.url, settings.key)
    except Exception as exc:
        logger.error(f"Failed to create Supabase client: {exc}")
        raise ConfigError(f"Could not connect to Supabase: {exc}") from exc

    logger.info("Supabase client created")
    return client


def run_query(builder: Any, table: str) -> list[dict[str, Any]]:
    """
    쿼리 빌더를 실행하고 행 목록을 반환합니다.

    Args:
        builder: client.table(...).select(...) 등으로 만든 쿼리 빌더
        table: 로그/에러 메시지용 테이블명

    Returns:
        행 목록 (결과가 없으면 빈 리스트)

    Raises:
        DataLoadError: 쿼리 실행에 실패한 경우

    Examples:
        >>> rows = run_query(client.table("orders").select("total").eq("store_id", sid), "orders")
    """
    try:
        with global_metrics.track(f"query:{table}"):
            response = builder.execute()
    except Exception as exc:
        logger.error(f"❌ Query on {table} failed: {exc}")
        raise DataLoadError(f"Failed to load {table}: {exc}", table=table) from exc

    rows = getattr(response, "data", None) or []
    logger.debug(f"{table}: {len(rows)} rows")
    return list(rows)
