"""
도메인 예외 → UI 메시지 어댑터

도메인/데이터 계층에서 발생한 예외를 잡아서 Streamlit 메시지로 변환합니다.
도메인 계층은 Streamlit에 의존하지 않습니다.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Generator, Mapping

import streamlit as st

from pos_dashboard.domain.exceptions import (
    AlertRuleError,
    ConfigError,
    DataLoadError,
    ValidationError,
)

logger = logging.getLogger(__name__)

# fetcher 이름 → 토스트에 표시할 영역 이름
FETCH_LABELS = {
    "sales": "sales data",
    "inventory": "inventory data",
    "customers": "customer data",
    "operations": "operational data",
    "laybys": "layby data",
}


@contextmanager
def handle_domain_errors() -> Generator[None, None, None]:
    """
    도메인 예외를 잡아서 Streamlit 에러 메시지로 변환하는 컨텍스트 매니저.

    Examples:
        >>> with handle_domain_errors():
        ...     summary = fetch_expense_summary(client, store_id, now=now)

    Notes:
        - ConfigError: 접속 설정 누락 (에러)
        - DataLoadError: Supabase 조회 실패 (에러)
        - ValidationError: 조회 결과 형태 불일치 (경고)
        - AlertRuleError: 알림 규칙 구성 오류 (에러)
    """
    try:
        yield

    except ConfigError as e:
        st.error(f"❌ Configuration error: {e}")

    except DataLoadError as e:
        st.error(f"❌ Failed to load data: {e}")

    except ValidationError as e:
        st.warning(f"⚠️ Unexpected data shape: {e}")

    except AlertRuleError as e:
        st.error(f"❌ Alert rules are misconfigured: {e}")

    except Exception as e:
        logger.error(f"Unexpected error: {e}", exc_info=True)
        st.error(f"❌ Unexpected error: {type(e).__name__}: {e}")
        st.exception(e)


def notify_fetch_errors(errors: Mapping[str, str]) -> None:
    """실패한 fetcher마다 토스트를 하나씩 표시합니다."""
    for name in errors:
        label = FETCH_LABELS.get(name, name)
        st.toast(f"Failed to load {label}", icon="⚠️")
