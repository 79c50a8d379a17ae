"""KPI 렌더링 모듈.

카드 HTML 빌더, 포맷터, 반응형 스타일을 재수출합니다.
"""

from .cards import (
    build_grid,
    build_metric_card,
    build_metric_row,
    build_widget_card,
    business_metric_widgets,
    financial_health_cards,
    render_business_metrics,
    render_widget_cards,
    summary_metric_cards,
)
from .formatters import (
    change_direction,
    escape,
    format_change,
    format_currency,
    format_minutes,
    format_number,
    format_percentage,
    format_value,
    progress_status,
)
from .styles import inject_responsive_styles

__all__ = [
    "build_grid",
    "build_metric_card",
    "build_metric_row",
    "build_widget_card",
    "business_metric_widgets",
    "financial_health_cards",
    "render_business_metrics",
    "render_widget_cards",
    "summary_metric_cards",
    "change_direction",
    "escape",
    "format_change",
    "format_currency",
    "format_minutes",
    "format_number",
    "format_percentage",
    "format_value",
    "progress_status",
    "inject_responsive_styles",
]
