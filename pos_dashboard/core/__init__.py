"""Core configuration for the POS dashboard."""

from .config import (
    CONFIG,
    AlertThresholds,
    DashboardConfig,
    RefreshConfig,
    SupabaseSettings,
    UIConfig,
    load_supabase_settings,
)

__all__ = [
    "CONFIG",
    "AlertThresholds",
    "DashboardConfig",
    "RefreshConfig",
    "SupabaseSettings",
    "UIConfig",
    "load_supabase_settings",
]
