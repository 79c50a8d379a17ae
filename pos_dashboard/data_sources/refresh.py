"""
지표 스냅샷 새로 고침 주기

한 번의 새로 고침에서 모든 fetcher를 실행하고 결과를 BusinessMetrics로 합칩니다.

실행 순서:
1. 매출 fetcher (재고 회전율 계산에 오늘 매출이 필요)
2. 재고/고객/운영/레이바이 fetcher를 스레드 풀에서 동시에 실행

실패한 fetcher는 로그와 RefreshResult.errors에 남고,
해당 필드는 이전 스냅샷 값(첫 주기면 0)을 유지합니다. 재시도는 하지 않습니다.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass, field, fields
from typing import Any, Callable, Dict, Optional

import pandas as pd

from pos_dashboard.common.performance import global_metrics
from pos_dashboard.core.config import CONFIG, DashboardConfig
from pos_dashboard.domain.models import BusinessMetrics, LaybySummary, OperationsSummary

from .fetchers import (
    fetch_customer_intelligence,
    fetch_inventory_intelligence,
    fetch_layby_summary,
    fetch_operational_intelligence,
    fetch_sales_intelligence,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RefreshResult:
    """
    새로 고침 한 주기의 결과.

    Attributes:
        metrics: 합쳐진 지표 스냅샷
        errors: 실패한 fetcher 이름 → 에러 메시지
        refreshed_at: 새로 고침 기준 시각 (현지)
    """

    metrics: BusinessMetrics
    errors: Dict[str, str] = field(default_factory=dict)
    refreshed_at: Optional[pd.Timestamp] = None

    @property
    def ok(self) -> bool:
        return not self.errors


def metric_updates(summary: Any) -> Dict[str, Any]:
    """
    요약 모델에서 BusinessMetrics에 대응하는 필드만 뽑아냅니다.

    운영 요약의 현금 흐름은 순이익과 같고,
    레이바이 요약의 잔액 합계는 미수금(outstanding_payments)이 됩니다.
    """
    names = set(BusinessMetrics.field_names())
    updates = {
        f.name: getattr(summary, f.name) for f in fields(summary) if f.name in names
    }
    if isinstance(summary, OperationsSummary):
        updates["cash_flow"] = summary.net_profit
    if isinstance(summary, LaybySummary):
        updates["outstanding_payments"] = summary.layby_value
    return updates


def _run(name: str, task: Callable[[], Any], errors: Dict[str, str]) -> Optional[Any]:
    try:
        with global_metrics.track(name):
            return task()
    except Exception as exc:
        logger.error(f"❌ {name} failed: {exc}", exc_info=True)
        errors[name] = str(exc)
        return None


def refresh_snapshot(
    client: Any,
    store_id: str,
    *,
    previous: Optional[BusinessMetrics] = None,
    now: pd.Timestamp,
    sales_target: Optional[float] = None,
    config: DashboardConfig = CONFIG,
) -> RefreshResult:
    """
    지표 스냅샷을 새로 고칩니다.

    Args:
        client: Supabase 클라이언트
        store_id: 매장 ID
        previous: 이전 스냅샷 (실패한 fetcher의 값 유지용)
        now: 기준 시각 (현지)
        sales_target: 일 매출 목표. None이면 이전 스냅샷 또는 설정값 사용
        config: 대시보드 설정

    Returns:
        RefreshResult
    """
    thresholds = config.alerts
    tz = config.timezone
    if sales_target is None:
        sales_target = previous.sales_target if previous is not None else thresholds.sales_target

    metrics = (previous or BusinessMetrics()).merge(sales_target=float(sales_target))
    errors: Dict[str, str] = {}

    logger.info(f"🔄 Refreshing metrics for store {store_id}")

    # ========================================
    # 1단계: 매출 (회전율 계산의 입력)
    # ========================================
    sales = _run(
        "sales",
        lambda: fetch_sales_intelligence(
            client, store_id, sales_target=float(sales_target), now=now, tz=tz
        ),
        errors,
    )
    if sales is not None:
        metrics = metrics.merge(**metric_updates(sales))
    todays_sales = metrics.todays_sales

    # ========================================
    # 2단계: 나머지 fetcher 동시 실행
    # ========================================
    tasks: Dict[str, Callable[[], Any]] = {
        "inventory": lambda: fetch_inventory_intelligence(
            client,
            store_id,
            todays_sales=todays_sales,
            slow_moving_multiplier=thresholds.slow_moving_multiplier,
        ),
        "customers": lambda: fetch_customer_intelligence(
            client,
            store_id,
            now=now,
            vip_spend=thresholds.vip_spend,
            churn_days=thresholds.churn_days,
            tz=tz,
        ),
        "operations": lambda: fetch_operational_intelligence(client, store_id, now=now, tz=tz),
        "laybys": lambda: fetch_layby_summary(client, store_id, now=now),
    }

    results: Dict[str, Any] = {}
    with ThreadPoolExecutor(max_workers=config.refresh.max_workers) as executor:
        futures = {
            executor.submit(_run, name, task, errors): name for name, task in tasks.items()
        }
        for future in as_completed(futures):
            results[futures[future]] = future.result()

    # 합치는 순서는 작업 정의 순서를 따름
    for name in tasks:
        summary = results.get(name)
        if summary is not None:
            metrics = metrics.merge(**metric_updates(summary))

    if errors:
        logger.warning(f"⚠️  Refresh finished with {len(errors)} failed fetcher(s): {sorted(errors)}")
    else:
        logger.info("✅ Refresh finished")

    return RefreshResult(metrics=metrics, errors=errors, refreshed_at=pd.Timestamp(now))
