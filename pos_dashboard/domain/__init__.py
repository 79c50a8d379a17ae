"""
도메인 계층 퍼블릭 API

이 모듈은 도메인 계층의 주요 클래스와 함수를 재수출하여
일관된 퍼블릭 API를 제공합니다.
"""
from __future__ import annotations

from .dates import (
    DayWindow,
    date_string,
    day_window,
    local_now,
    month_prefix,
    to_local_naive,
    to_query_iso,
)
from .exceptions import (
    AlertRuleError,
    ConfigError,
    DataLoadError,
    DomainError,
    ValidationError,
)
from .models import (
    CATEGORIES,
    PRIORITIES,
    SEVERITIES,
    Alert,
    AlertAction,
    BusinessMetrics,
    CustomerSummary,
    ExpenseSummary,
    FinancialHealth,
    InventorySummary,
    LaybySummary,
    MetricData,
    OperationsSummary,
    SalesSummary,
    TransactionSummary,
)
from .validation import ensure_columns, numeric, text

__all__ = [
    # 예외
    "DomainError",
    "ValidationError",
    "DataLoadError",
    "ConfigError",
    "AlertRuleError",
    # 모델
    "BusinessMetrics",
    "Alert",
    "AlertAction",
    "MetricData",
    "SalesSummary",
    "InventorySummary",
    "CustomerSummary",
    "OperationsSummary",
    "ExpenseSummary",
    "LaybySummary",
    "TransactionSummary",
    "FinancialHealth",
    "SEVERITIES",
    "CATEGORIES",
    "PRIORITIES",
    # 날짜
    "DayWindow",
    "day_window",
    "local_now",
    "month_prefix",
    "date_string",
    "to_query_iso",
    "to_local_naive",
    # 검증
    "ensure_columns",
    "numeric",
    "text",
]
