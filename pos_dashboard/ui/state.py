"""Streamlit 세션에 보관하는 UI 상태 (알림 보드, 규칙 테이블, 기록 저장소)."""

from __future__ import annotations

from typing import Callable, Dict, TypeVar

import streamlit as st

from pos_dashboard.alerts import AlertBoard, AlertRule, build_default_rules
from pos_dashboard.core.config import CONFIG

ALERT_BOARD_KEY = "pos_alert_board"
ALERT_RULES_KEY = "pos_alert_rules"
STORE_KEY_PREFIX = "pos_store::"

T = TypeVar("T")


def get_store(key: str, factory: Callable[[], T]) -> T:
    """세션에 key로 보관된 객체를 반환합니다. 처음이면 factory로 만듭니다."""
    session_key = f"{STORE_KEY_PREFIX}{key}"
    if session_key not in st.session_state:
        st.session_state[session_key] = factory()
    return st.session_state[session_key]


def get_alert_board() -> AlertBoard:
    board = st.session_state.get(ALERT_BOARD_KEY)
    if isinstance(board, AlertBoard):
        return board
    board = AlertBoard()
    st.session_state[ALERT_BOARD_KEY] = board
    return board


def get_alert_rules() -> Dict[str, AlertRule]:
    """세션의 알림 규칙 테이블 (없으면 CONFIG.alerts 기본값)."""
    rules = st.session_state.get(ALERT_RULES_KEY)
    if rules is None:
        rules = build_default_rules(CONFIG.alerts)
        st.session_state[ALERT_RULES_KEY] = rules
    return rules


def set_alert_rules(rules: Dict[str, AlertRule]) -> None:
    st.session_state[ALERT_RULES_KEY] = rules
