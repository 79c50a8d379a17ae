"""KPI 포맷팅 유틸리티 모듈.

통화, 비율, 숫자, 분 단위 값과 증감 방향 포맷팅 함수를 제공합니다.
"""

from __future__ import annotations

from typing import Optional, Union

import pandas as pd

from pos_dashboard.core.config import CONFIG


def escape(value: object) -> str:
    """HTML 이스케이프 처리를 수행합니다."""
    text = "" if value is None else str(value)
    return (
        text.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def _missing(value: object) -> bool:
    return value is None or (isinstance(value, float) and pd.isna(value))


def format_currency(value: float | int | None, *, symbol: str = CONFIG.ui.currency_symbol) -> str:
    """금액을 "$1,234.50" 형식으로 포맷팅합니다 (음수는 "-$12.00").

    Examples:
        >>> format_currency(1234.5)
        '$1,234.50'
    """
    if _missing(value):
        return "-"
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return "-"
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_percentage(value: float | int | None, *, digits: int = 1) -> str:
    """비율을 "12.5%" 형식으로 포맷팅합니다."""
    if _missing(value):
        return "-"
    try:
        return f"{float(value):.{digits}f}%"
    except (TypeError, ValueError):
        return "-"


def format_number(value: float | int | None) -> str:
    """숫자를 천 단위 구분 기호가 있는 문자열로 포맷팅합니다.

    정수는 그대로, 소수는 소수점 첫째 자리까지 표시합니다.
    """
    if _missing(value):
        return "-"
    try:
        number = float(value)
    except (TypeError, ValueError):
        return "-"
    if number.is_integer():
        return f"{int(number):,}"
    return f"{number:,.1f}"


def format_minutes(value: float | int | None) -> str:
    """분 단위 값을 "15min" 형식으로 포맷팅합니다."""
    if _missing(value):
        return "-"
    try:
        return f"{float(value):.0f}min"
    except (TypeError, ValueError):
        return "-"


def format_value(value: Union[str, float, int, None], fmt: Optional[str] = None) -> str:
    """
    지표 형식(currency / percentage / number / time)에 맞춰 값을 포맷팅합니다.

    문자열 값은 그대로 반환합니다.
    """
    if isinstance(value, str):
        return value
    if fmt == "currency":
        return format_currency(value)
    if fmt == "percentage":
        return format_percentage(value)
    if fmt == "time":
        return format_minutes(value)
    if fmt == "number":
        return format_number(value)
    return "-" if _missing(value) else str(value)


def change_direction(change: float | None) -> str:
    """증감률의 방향: increase / decrease / neutral."""
    if _missing(change) or change == 0:
        return "neutral"
    return "increase" if change > 0 else "decrease"


def format_change(change: float | None) -> str:
    """증감률을 "▲ 12.5%" 형식으로 포맷팅합니다."""
    if _missing(change):
        return ""
    arrow = {"increase": "▲", "decrease": "▼"}.get(change_direction(change), "–")
    return f"{arrow} {abs(float(change)):.1f}%"


def progress_status(progress: float, *, good: float = 100.0, warning: float = 75.0) -> str:
    """달성률로 상태(good / warning / critical)를 정합니다."""
    if progress >= good:
        return "good"
    if progress >= warning:
        return "warning"
    return "critical"


def value_font_size(value: str, *, base_size: float = 1.55, min_size: float = 1.05) -> str:
    """값의 길이에 따라 폰트 크기를 줄입니다 (em 단위)."""
    length = len(str(value))
    if length <= 8:
        return f"{base_size}em"
    if length <= 12:
        return f"{max(min_size, base_size - 0.2)}em"
    return f"{min_size}em"
