"""Configuration and constants for the POS dashboard.

알림 임계값, 새로 고침 주기, Supabase 접속 정보 등 전역 설정을 제공합니다.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

from pos_dashboard.domain.exceptions import ConfigError


# ============================================================
# 알림 임계값 설정
# ============================================================

@dataclass(frozen=True)
class AlertThresholds:
    """비즈니스 알림 규칙에서 사용하는 고정 임계값"""

    # 일 매출 목표 (통화 단위)
    sales_target: float = 1000.0

    # 목표 달성률이 이 값(%) 미만이면 "매출 부진" 알림
    sales_behind_pct: float = 30.0

    # "매출 부진" 알림은 이 시각(시) 이후에만 발생
    sales_behind_after_hour: int = 16

    # 목표 달성으로 보는 달성률 (%)
    sales_target_achieved_pct: float = 100.0

    # 환불률 경고 기준 (%)
    refund_rate_pct: float = 10.0

    # 환불률 알림을 띄우기 위한 최소 주문 수 (초과)
    refund_min_orders: int = 5

    # VIP 승급 후보 누적 구매액 기준 (초과)
    vip_spend: float = 500.0

    # 마지막 주문 이후 경과일이 이 값을 넘으면 이탈 위험 고객
    churn_days: int = 30

    # 이익률 경고 기준 (%)
    profit_margin_pct: float = 15.0

    # 일일 요약 알림 시각 (시)
    daily_summary_hour: int = 17

    # 피크 시간대 (시작시, 종료시) - 양끝 포함
    peak_hours: Tuple[int, int] = (11, 13)

    # 재고가 저재고 기준 × 이 배수를 넘으면 회전이 느린 상품
    slow_moving_multiplier: int = 3

    def __post_init__(self) -> None:
        # "매출 부진"은 after_hour + 1시부터 23시까지 발생하므로 23시는 허용하지 않음
        if not 0 <= self.sales_behind_after_hour <= 22:
            raise ConfigError(
                f"sales_behind_after_hour must be between 0 and 22, got {self.sales_behind_after_hour}"
            )
        if not 0 <= self.daily_summary_hour <= 23:
            raise ConfigError(f"daily_summary_hour must be between 0 and 23, got {self.daily_summary_hour}")
        start, end = self.peak_hours
        if not (0 <= start <= end <= 23):
            raise ConfigError(f"peak_hours must be an ordered range within 0..23, got {self.peak_hours}")


# ============================================================
# 새로 고침 / 조회 설정
# ============================================================

@dataclass(frozen=True)
class RefreshConfig:
    """주기적 새로 고침과 조회 범위 관련 설정"""

    # 알림 재계산 주기 (초)
    alerts_interval_seconds: int = 120

    # 지표 재조회 주기 (초)
    metrics_interval_seconds: int = 300

    # 한 번의 새로 고침에서 동시에 실행할 최대 조회 수
    max_workers: int = 6

    # 최근 주문 표시 개수
    recent_orders_limit: int = 5

    # 위젯별 최근 항목 표시 개수
    recent_items: int = 3

    # 지출 상위 카테고리 개수
    top_categories: int = 3

    # 인기 상품 표시 개수
    top_products: int = 4

    # 일별 차트 표시 일수
    chart_days: int = 7


@dataclass(frozen=True)
class UIConfig:
    """UI 표시 관련 설정"""

    # 알림 패널에 한 번에 보여줄 최대 알림 수
    max_visible_alerts: int = 10

    # KPI 카드 최소 너비 (픽셀)
    kpi_min_card_width: int = 220

    # 통화 기호 / 코드
    currency_symbol: str = "$"
    currency_code: str = "USD"


@dataclass(frozen=True)
class DashboardConfig:
    """대시보드 전역 설정"""

    alerts: AlertThresholds = field(default_factory=AlertThresholds)
    refresh: RefreshConfig = field(default_factory=RefreshConfig)
    ui: UIConfig = field(default_factory=UIConfig)

    # 매장 현지 시간대 ("오늘" 경계 계산 기준)
    timezone: str = "UTC"


# ============================================================
# Supabase 접속 정보
# ============================================================

@dataclass(frozen=True)
class SupabaseSettings:
    """Supabase 프로젝트 URL, API 키, 기본 매장 ID"""

    url: str
    key: str
    store_id: Optional[str] = None


def load_supabase_settings(
    secrets: Optional[Mapping[str, object]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> SupabaseSettings:
    """
    secrets의 [supabase] 섹션 또는 환경변수에서 접속 정보를 읽습니다.

    우선순위:
    1. secrets["supabase"]의 url / key / store_id
    2. 환경변수 SUPABASE_URL / SUPABASE_KEY / POS_STORE_ID

    Args:
        secrets: Streamlit secrets 같은 매핑 (없으면 환경변수만 사용)
        environ: 환경변수 매핑 (기본값: os.environ)

    Returns:
        SupabaseSettings 인스턴스

    Raises:
        ConfigError: URL 또는 키가 없을 때
    """
    env = os.environ if environ is None else environ

    section: Mapping[str, object] = {}
    if secrets is not None:
        try:
            section = secrets.get("supabase") or {}  # type: ignore[assignment]
        except Exception:
            # secrets.toml이 없으면 환경변수로 대체
            section = {}

    url = str(section.get("url") or env.get("SUPABASE_URL") or "").strip()
    key = str(section.get("key") or env.get("SUPABASE_KEY") or "").strip()
    store_id = section.get("store_id") or env.get("POS_STORE_ID")

    if not url or not key:
        raise ConfigError(
            "Supabase credentials are missing: set [supabase] url/key in secrets "
            "or SUPABASE_URL/SUPABASE_KEY in the environment."
        )

    return SupabaseSettings(
        url=url,
        key=key,
        store_id=str(store_id).strip() if store_id else None,
    )


# ============================================================
# 전역 설정 인스턴스
# ============================================================

# 전역 설정 객체 (불변)
CONFIG = DashboardConfig()
