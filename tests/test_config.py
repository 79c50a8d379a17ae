"""
설정 로딩 테스트

Supabase 접속 정보의 secrets → 환경변수 우선순위와 누락 처리를 검증합니다.
"""
from __future__ import annotations

import pytest

from pos_dashboard.core.config import CONFIG, AlertThresholds, load_supabase_settings
from pos_dashboard.domain.exceptions import ConfigError


def test_secrets_take_precedence_over_environment():
    secrets = {"supabase": {"url": "https://from-secrets.supabase.co", "key": "secret-key", "store_id": "store-1"}}
    environ = {"SUPABASE_URL": "https://from-env.supabase.co", "SUPABASE_KEY": "env-key"}

    settings = load_supabase_settings(secrets, environ)

    assert settings.url == "https://from-secrets.supabase.co"
    assert settings.key == "secret-key"
    assert settings.store_id == "store-1"


def test_environment_fallback():
    environ = {
        "SUPABASE_URL": " https://from-env.supabase.co ",
        "SUPABASE_KEY": "env-key",
        "POS_STORE_ID": "store-9",
    }

    settings = load_supabase_settings({}, environ)

    assert settings.url == "https://from-env.supabase.co"
    assert settings.store_id == "store-9"


def test_missing_credentials_raise_config_error():
    with pytest.raises(ConfigError):
        load_supabase_settings(None, {})


def test_unreadable_secrets_fall_back_to_environment():
    """secrets.toml이 없을 때 secrets.get()이 예외를 던져도 환경변수를 사용"""

    class BrokenSecrets:
        def get(self, key):
            raise FileNotFoundError("secrets.toml")

    settings = load_supabase_settings(
        BrokenSecrets(), {"SUPABASE_URL": "https://x.supabase.co", "SUPABASE_KEY": "k"}
    )

    assert settings.url == "https://x.supabase.co"
    assert settings.store_id is None


def test_default_thresholds():
    t = AlertThresholds()

    assert t.sales_behind_pct == 30.0
    assert t.sales_behind_after_hour == 16
    assert t.refund_rate_pct == 10.0
    assert t.refund_min_orders == 5
    assert t.profit_margin_pct == 15.0
    assert t.peak_hours == (11, 13)
    assert CONFIG.refresh.alerts_interval_seconds == 120
    assert CONFIG.refresh.metrics_interval_seconds == 300
    assert CONFIG.ui.max_visible_alerts == 10


@pytest.mark.parametrize(
    "changes",
    [
        {"sales_behind_after_hour": 23},
        {"sales_behind_after_hour": -1},
        {"daily_summary_hour": 24},
        {"peak_hours": (13, 11)},
        {"peak_hours": (22, 24)},
    ],
)
def test_thresholds_reject_hours_outside_the_day(changes):
    with pytest.raises(ConfigError):
        AlertThresholds(**changes)
