"""비즈니스 알림 패널.

요약 카운터, 활성 알림 카드(숨김 버튼 포함), 규칙 on/off 설정을 렌더링합니다.
"""

from __future__ import annotations

from typing import Dict, Optional

import streamlit as st

from pos_dashboard.alerts import AlertBoard, AlertRule, toggle_rule
from pos_dashboard.core.config import CONFIG
from pos_dashboard.domain.models import Alert

from .kpi import build_grid, build_metric_card, escape, inject_responsive_styles

SEVERITY_ICONS = {
    "critical": "🚨",
    "warning": "⚠️",
    "info": "ℹ️",
    "success": "✅",
    "opportunity": "💡",
}

PRIORITY_ORDER = {"high": 0, "medium": 1, "low": 2}


def visible_alerts(board: AlertBoard, limit: Optional[int] = None) -> list[Alert]:
    """
    패널에 표시할 활성 알림 (우선순위 높은 순, 최대 limit개).

    같은 우선순위 안에서는 생성 순서(재고 → 매출 → 고객 → 운영 → 재무)를 유지합니다.
    """
    limit = CONFIG.ui.max_visible_alerts if limit is None else limit
    ordered = sorted(board.active, key=lambda a: PRIORITY_ORDER.get(a.priority, len(PRIORITY_ORDER)))
    return ordered[:limit]


def build_alert_card(alert: Alert) -> str:
    icon = SEVERITY_ICONS.get(alert.severity, "")
    parts = [
        f'<div class="alert-card alert-card--{escape(alert.severity)}">',
        f'<div class="alert-title">{icon} {escape(alert.title)}</div>',
        f"<div>{escape(alert.message)}</div>",
    ]
    if alert.details:
        parts.append(f'<div class="alert-details">{escape(alert.details)}</div>')
    if alert.timestamp is not None:
        parts.append(f'<div class="alert-details">{alert.timestamp:%H:%M}</div>')
    parts.append("</div>")
    return "".join(parts)


def alert_summary_cards(counts: Dict[str, int]) -> list[str]:
    return [
        build_metric_card("Critical", str(counts.get("critical", 0)), compact=True),
        build_metric_card("Warnings", str(counts.get("warning", 0)), compact=True),
        build_metric_card("Opportunities", str(counts.get("opportunity", 0)), compact=True),
        build_metric_card("Total Active", str(counts.get("total", 0)), compact=True),
    ]


def render_alert_panel(board: AlertBoard, *, key_prefix: str = "alert") -> None:
    """
    알림 요약과 활성 알림 목록을 렌더링합니다.

    숨김 버튼을 누르면 board.dismiss() 후 화면을 다시 그립니다.
    """
    inject_responsive_styles()
    st.markdown(
        build_grid(alert_summary_cards(board.counts()), extra_class="kpi-grid--summary"),
        unsafe_allow_html=True,
    )

    alerts = visible_alerts(board)
    if not alerts:
        st.success("✅ All clear - no active alerts right now.")
        return

    hidden = len(board.active) - len(alerts)
    for alert in alerts:
        card_col, button_col = st.columns([6, 1])
        with card_col:
            st.markdown(build_alert_card(alert), unsafe_allow_html=True)
            if alert.action is not None:
                st.caption(f"➡️ {alert.action.label} ({alert.action.target})")
        with button_col:
            if st.button("Dismiss", key=f"{key_prefix}_dismiss_{alert.id}", use_container_width=True):
                if board.dismiss(alert.id):
                    st.rerun()

    if hidden > 0:
        st.caption(f"+{hidden} more alerts not shown")


def render_rule_settings(
    rules: Dict[str, AlertRule],
    *,
    key_prefix: str = "rule",
) -> Dict[str, AlertRule]:
    """
    규칙별 on/off 토글을 렌더링하고 변경된 규칙 테이블을 반환합니다.

    Returns:
        토글 상태가 반영된 규칙 테이블 (변경 없으면 입력 그대로)
    """
    updated = rules
    with st.expander("Alert rules", expanded=False):
        for rule in list(rules.values()):
            enabled = st.checkbox(
                f"{rule.name} ({rule.category})",
                value=rule.enabled,
                key=f"{key_prefix}_{rule.id}",
            )
            if enabled != rule.enabled:
                updated = toggle_rule(updated, rule.id, enabled)
    return updated
