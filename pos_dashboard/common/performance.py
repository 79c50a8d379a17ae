"""
성능 모니터링 유틸리티

Supabase 조회와 집계 단계의 실행 시간을 측정하고 로깅합니다.
새로 고침 주기마다 조회별 소요 시간을 모아 진단 화면에 보여줍니다.
"""

from __future__ import annotations

import functools
import logging
import threading
import time
from typing import Any, Callable, Optional, TypeVar

import pandas as pd

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., Any])

# 원격 조회 기준 경고/에러 임계값 (초)
WARN_SECONDS = 2.0
ERROR_SECONDS = 10.0


def _log_elapsed(name: str, elapsed: float, *, failed: bool = False) -> None:
    if failed:
        logger.error(f"❌ {name} failed after {elapsed:.2f}s")
    elif elapsed >= ERROR_SECONDS:
        logger.error(f"⚠️  SLOW: {name} took {elapsed:.2f}s (threshold: {ERROR_SECONDS:.0f}s)")
    elif elapsed >= WARN_SECONDS:
        logger.warning(f"⏱️  {name} took {elapsed:.2f}s (threshold: {WARN_SECONDS:.0f}s)")
    else:
        logger.debug(f"✓ {name} completed in {elapsed:.2f}s")


def measure_time(func: F) -> F:
    """
    함수 실행 시간을 측정하고 로깅하는 데코레이터.

    Examples:
        >>> @measure_time
        ... def fetch_orders():
        ...     ...
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        start_time = time.perf_counter()
        failed = True
        try:
            result = func(*args, **kwargs)
            failed = False
            return result
        finally:
            _log_elapsed(func.__name__, time.perf_counter() - start_time, failed=failed)

    return wrapper  # type: ignore[return-value]


class PerformanceContext:
    """
    코드 블록의 실행 시간을 측정하는 컨텍스트 매니저.

    Attributes:
        operation_name: 측정할 작업의 이름
        elapsed: 경과 시간 (초)
        on_done: 정상 종료 시 (이름, 경과 시간)으로 호출되는 콜백
    """

    def __init__(
        self,
        operation_name: str,
        on_done: Optional[Callable[[str, float], None]] = None,
    ) -> None:
        self.operation_name = operation_name
        self.on_done = on_done
        self.start_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> "PerformanceContext":
        self.start_time = time.perf_counter()
        logger.debug(f"Starting: {self.operation_name}")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.elapsed = time.perf_counter() - self.start_time
        _log_elapsed(self.operation_name, self.elapsed, failed=exc_type is not None)
        if exc_type is None and self.on_done is not None:
            self.on_done(self.operation_name, self.elapsed)


def measure_time_context(operation_name: str) -> PerformanceContext:
    """
    컨텍스트 매니저를 사용한 코드 블록 성능 측정.

    Examples:
        >>> with measure_time_context("orders query"):
        ...     rows = run_query(builder, "orders")
    """
    return PerformanceContext(operation_name)


class PerformanceMetrics:
    """
    작업별 실행 시간 통계.

    새로 고침 주기에서 조회가 여러 스레드로 동시에 실행되므로
    기록은 잠금으로 보호합니다.

    Examples:
        >>> metrics = PerformanceMetrics()
        >>> with metrics.track("fetch_sales_intelligence"):
        ...     do_work()
        >>> metrics.get_stats("fetch_sales_intelligence")["count"]
        1
    """

    def __init__(self) -> None:
        self._metrics: dict[str, list[float]] = {}
        self._lock = threading.Lock()

    def _record(self, operation_name: str, elapsed: float) -> None:
        with self._lock:
            self._metrics.setdefault(operation_name, []).append(elapsed)

    def track(self, operation_name: str) -> PerformanceContext:
        """성공한 실행만 기록하는 측정 컨텍스트를 반환합니다."""
        return PerformanceContext(operation_name, on_done=self._record)

    def get_stats(self, operation_name: str) -> dict[str, float]:
        """count, avg, min, max를 포함한 딕셔너리를 반환합니다."""
        with self._lock:
            times = list(self._metrics.get(operation_name, []))
        if not times:
            return {"count": 0, "avg": 0.0, "min": 0.0, "max": 0.0}
        return {
            "count": len(times),
            "avg": sum(times) / len(times),
            "min": min(times),
            "max": max(times),
        }

    def summary_frame(self) -> pd.DataFrame:
        """모든 작업의 통계를 DataFrame으로 반환합니다 (진단 표시용)."""
        with self._lock:
            names = sorted(self._metrics)
        rows = [{"operation": name, **self.get_stats(name)} for name in names]
        return pd.DataFrame(rows, columns=["operation", "count", "avg", "min", "max"])

    def reset(self) -> None:
        """모든 메트릭을 초기화합니다."""
        with self._lock:
            self._metrics.clear()
        logger.debug("Performance metrics reset")


# 새로 고침 주기에서 공유하는 메트릭 인스턴스
global_metrics = PerformanceMetrics()
