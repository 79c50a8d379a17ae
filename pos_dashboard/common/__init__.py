"""공통 유틸리티 모듈.

여러 모듈에서 공통으로 사용하는 유틸리티 함수들을 제공합니다.
"""

from .data_utils import (
    EMPTY_CHART_COLUMNS,
    EMPTY_TOP_PRODUCTS_COLUMNS,
    empty_chart_frame,
    first_present,
    nested_value,
    sum_nested_quantity,
)
from .performance import (
    PerformanceContext,
    PerformanceMetrics,
    global_metrics,
    measure_time,
    measure_time_context,
)

__all__ = [
    "empty_chart_frame",
    "first_present",
    "nested_value",
    "sum_nested_quantity",
    "EMPTY_CHART_COLUMNS",
    "EMPTY_TOP_PRODUCTS_COLUMNS",
    "measure_time",
    "measure_time_context",
    "PerformanceContext",
    "PerformanceMetrics",
    "global_metrics",
]
