"""
도메인 모델: POS 대시보드의 핵심 데이터 구조

이 모듈은 대시보드에서 사용하는 지표 스냅샷, 알림, 위젯 요약 모델을 정의합니다.
모든 모델은 불변(frozen) 데이터클래스로 구현되어 안전한 데이터 전달을 보장합니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Literal, Optional, Tuple, Union

import pandas as pd

Severity = Literal["critical", "warning", "info", "success", "opportunity"]
Category = Literal["inventory", "sales", "customers", "operations", "financial"]
Priority = Literal["high", "medium", "low"]

SEVERITIES: Tuple[str, ...] = ("critical", "warning", "info", "success", "opportunity")
CATEGORIES: Tuple[str, ...] = ("inventory", "sales", "customers", "operations", "financial")
PRIORITIES: Tuple[str, ...] = ("high", "medium", "low")


@dataclass(frozen=True)
class BusinessMetrics:
    """
    한 번의 조회 주기에서 계산된 비즈니스 지표 스냅샷.

    스냅샷은 조회 시점의 집계값만 담으며, 다음 새로 고침까지
    세션 상태에 보관됩니다. 영속성이나 식별자는 없습니다.

    Examples:
        >>> metrics = BusinessMetrics(sales_target=1000.0)
        >>> updated = metrics.merge(todays_sales=250.0, sales_target_progress=25.0)
        >>> updated.todays_sales
        250.0
    """

    # ========================================
    # 매출 지표
    # ========================================
    todays_sales: float = 0.0
    yesterdays_sales: float = 0.0
    sales_velocity: float = 0.0
    average_order_value: float = 0.0
    sales_target: float = 1000.0
    sales_target_progress: float = 0.0
    orders_today: int = 0

    # ========================================
    # 재고 지표
    # ========================================
    total_products: int = 0
    low_stock_items: int = 0
    out_of_stock_items: int = 0
    slow_moving_items: int = 0
    inventory_turnover: float = 0.0
    inventory_value: float = 0.0
    low_stock_names: Tuple[str, ...] = ()
    out_of_stock_names: Tuple[str, ...] = ()

    # ========================================
    # 고객 지표
    # ========================================
    total_customers: int = 0
    new_customers_today: int = 0
    vip_customers: int = 0
    potential_vips: int = 0
    potential_vip_names: Tuple[str, ...] = ()
    churn_risk_customers: int = 0
    customer_retention_rate: float = 0.0
    average_customer_value: float = 0.0

    # ========================================
    # 운영 지표 (오늘 주문 기준)
    # ========================================
    orders_total: int = 0
    orders_fulfilled: int = 0
    pending_orders: int = 0
    refunded_orders: int = 0
    refund_rate: float = 0.0

    # ========================================
    # 재무 지표
    # ========================================
    gross_revenue: float = 0.0
    net_profit: float = 0.0
    profit_margin: float = 0.0
    cash_flow: float = 0.0

    # ========================================
    # 레이바이 지표
    # ========================================
    active_laybys: int = 0
    overdue_laybys: int = 0
    # 진행 중 레이바이의 미수 잔액 합계
    outstanding_payments: float = 0.0

    def merge(self, **updates: object) -> "BusinessMetrics":
        """일부 필드만 덮어쓴 새 스냅샷을 반환합니다.

        Raises:
            TypeError: 존재하지 않는 필드명을 전달한 경우
        """
        return replace(self, **updates)

    @classmethod
    def field_names(cls) -> Tuple[str, ...]:
        return tuple(f.name for f in fields(cls))


@dataclass(frozen=True)
class AlertAction:
    """알림에 붙는 후속 동작 (버튼 라벨과 이동할 화면)"""

    label: str
    target: str


@dataclass(frozen=True)
class Alert:
    """
    임계값 규칙이 만들어 낸 비즈니스 알림 한 건.

    Attributes:
        id: 알림 ID (규칙 ID와 같음, 같은 스냅샷이면 같은 ID)
        severity: critical | warning | info | success | opportunity
        category: inventory | sales | customers | operations | financial
        title: 제목
        message: 본문 메시지
        details: 상세 설명 (선택)
        action: 후속 동작 (선택)
        priority: high | medium | low
        timestamp: 생성 시각
        auto_resolve: 조건이 사라지면 자연히 사라지는 정보성 알림 여부
    """

    id: str
    severity: Severity
    category: Category
    title: str
    message: str
    details: Optional[str] = None
    action: Optional[AlertAction] = None
    priority: Priority = "medium"
    timestamp: Optional[pd.Timestamp] = None
    auto_resolve: bool = False

    def signature(self) -> Tuple[object, ...]:
        """타임스탬프를 제외한 비교용 키."""
        return (
            self.id,
            self.severity,
            self.category,
            self.title,
            self.message,
            self.details,
            self.action,
            self.priority,
            self.auto_resolve,
        )


MetricFormat = Literal["currency", "percentage", "number", "time"]
ChangeType = Literal["increase", "decrease", "neutral"]
MetricStatus = Literal["good", "warning", "critical"]


@dataclass(frozen=True)
class MetricData:
    """위젯 카드의 지표 한 줄."""

    label: str
    value: Union[str, float, int]
    change: Optional[float] = None
    change_type: Optional[ChangeType] = None
    target: Optional[float] = None
    progress: Optional[float] = None
    format: Optional[MetricFormat] = None
    status: Optional[MetricStatus] = None
    subtitle: Optional[str] = None


# ============================================================
# 위젯 요약 모델
# ============================================================

def _empty_frame() -> pd.DataFrame:
    return pd.DataFrame()


@dataclass(frozen=True)
class SalesSummary:
    """오늘/어제 매출 비교 요약"""

    todays_sales: float = 0.0
    yesterdays_sales: float = 0.0
    sales_velocity: float = 0.0
    average_order_value: float = 0.0
    sales_target_progress: float = 0.0
    orders_today: int = 0


@dataclass(frozen=True)
class InventorySummary:
    """활성 상품 재고 요약"""

    total_products: int = 0
    low_stock_items: int = 0
    out_of_stock_items: int = 0
    slow_moving_items: int = 0
    inventory_value: float = 0.0
    inventory_turnover: float = 0.0
    low_stock_names: Tuple[str, ...] = ()
    out_of_stock_names: Tuple[str, ...] = ()


@dataclass(frozen=True)
class CustomerSummary:
    """고객 기반 요약"""

    total_customers: int = 0
    new_customers_today: int = 0
    vip_customers: int = 0
    active_customers: int = 0
    average_customer_value: float = 0.0
    customer_retention_rate: float = 0.0
    potential_vips: int = 0
    potential_vip_names: Tuple[str, ...] = ()
    churn_risk_customers: int = 0


@dataclass(frozen=True)
class OperationsSummary:
    """오늘 주문 처리 현황 요약"""

    orders_total: int = 0
    orders_fulfilled: int = 0
    pending_orders: int = 0
    refunded_orders: int = 0
    refund_rate: float = 0.0
    gross_revenue: float = 0.0
    total_discounts: float = 0.0
    net_profit: float = 0.0
    profit_margin: float = 0.0


@dataclass(frozen=True)
class ExpenseSummary:
    """지출 요약 (오늘, 이번 달, 전월 대비)"""

    total_expenses: float = 0.0
    monthly_expenses: float = 0.0
    last_month_expenses: float = 0.0
    expense_growth: float = 0.0
    recent_expenses: pd.DataFrame = field(default_factory=_empty_frame)
    top_categories: pd.DataFrame = field(default_factory=_empty_frame)


@dataclass(frozen=True)
class LaybySummary:
    """진행 중인 레이바이(할부 예약 판매) 요약"""

    active_laybys: int = 0
    layby_value: float = 0.0
    overdue_laybys: int = 0
    recent_laybys: pd.DataFrame = field(default_factory=_empty_frame)


@dataclass(frozen=True)
class TransactionSummary:
    """오늘 거래 현황 요약"""

    total_transactions: int = 0
    completed_transactions: int = 0
    pending_transactions: int = 0
    refunded_transactions: int = 0
    total_amount: float = 0.0
    recent_transactions: pd.DataFrame = field(default_factory=_empty_frame)


@dataclass(frozen=True)
class FinancialHealth:
    """전체 매출 대비 지출 기반 손익 요약"""

    total_revenue: float = 0.0
    total_expenses: float = 0.0
    profit: float = 0.0
    profit_margin: float = 0.0
