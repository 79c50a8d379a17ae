"""KPI 카드 반응형 스타일 모듈.

CSS Grid 기반 카드 레이아웃과 상태 배지, 진행 막대, 알림 카드 스타일을 제공합니다.
"""

from __future__ import annotations

import streamlit as st


def inject_responsive_styles() -> None:
    """KPI 카드 공통 CSS를 주입합니다 (매 실행마다 다시 주입)."""

    st.markdown(
        """
        <style>
        :root {
            --kpi-card-border: rgba(49, 51, 63, 0.2);
            --kpi-card-radius: 0.75rem;
            --kpi-good: #16a34a;
            --kpi-warning: #d97706;
            --kpi-critical: #dc2626;
            --kpi-opportunity: #7c3aed;
            --kpi-info: #2563eb;
        }

        .kpi-card-grid {
            display: grid;
            grid-template-columns: repeat(auto-fit, minmax(var(--min-card-width, 220px), 1fr));
            gap: 0.75rem;
            align-items: stretch;
            margin-bottom: 0.75rem;
        }

        .kpi-metric-card,
        .kpi-widget-card {
            border: 1px solid var(--kpi-card-border);
            border-radius: var(--kpi-card-radius);
            padding: 0.8rem 0.95rem;
            background: rgba(250, 250, 251, 0.9);
            display: flex;
            flex-direction: column;
            gap: 0.3rem;
        }

        .kpi-metric-card--compact {
            padding: 0.6rem 0.75rem;
        }

        .kpi-widget-title {
            font-weight: 600;
            font-size: 1rem;
            margin-bottom: 0.25rem;
        }

        .kpi-widget-metric {
            display: flex;
            flex-direction: column;
            gap: 0.2rem;
            padding: 0.35rem 0;
        }

        .kpi-widget-metric + .kpi-widget-metric {
            border-top: 1px dashed var(--kpi-card-border);
        }

        .kpi-widget-metric-head {
            display: flex;
            justify-content: space-between;
            align-items: center;
        }

        .kpi-metric-label {
            font-size: 0.85rem;
            color: rgba(49, 51, 63, 0.75);
        }

        .kpi-metric-value {
            font-size: 1.35rem;
            font-weight: 700;
            white-space: nowrap;
        }

        .kpi-metric-subtitle {
            font-size: 0.78rem;
            color: rgba(49, 51, 63, 0.6);
        }

        .kpi-change {
            font-size: 0.8rem;
            font-weight: 600;
        }

        .kpi-change--increase { color: var(--kpi-good); }
        .kpi-change--decrease { color: var(--kpi-critical); }
        .kpi-change--neutral { color: rgba(49, 51, 63, 0.6); }

        .kpi-status {
            font-size: 0.7rem;
            text-transform: uppercase;
            border: 1px solid currentColor;
            border-radius: 999px;
            padding: 0.05rem 0.45rem;
        }

        .kpi-status--good { color: var(--kpi-good); }
        .kpi-status--warning { color: var(--kpi-warning); }
        .kpi-status--critical { color: var(--kpi-critical); }

        .kpi-progress-label {
            display: flex;
            justify-content: space-between;
            font-size: 0.75rem;
            color: rgba(49, 51, 63, 0.65);
        }

        .kpi-progress {
            height: 0.4rem;
            border-radius: 999px;
            background: rgba(49, 51, 63, 0.1);
            overflow: hidden;
        }

        .kpi-progress-bar {
            height: 100%;
            background: var(--kpi-good);
        }

        .kpi-widget-list {
            margin-top: 0.5rem;
            border-top: 1px solid var(--kpi-card-border);
        }

        .kpi-widget-item {
            display: flex;
            justify-content: space-between;
            gap: 0.5rem;
            padding: 0.3rem 0;
            font-size: 0.85rem;
        }

        .kpi-widget-item-meta {
            font-size: 0.75rem;
            color: rgba(49, 51, 63, 0.6);
        }

        .alert-card {
            border-left: 4px solid var(--kpi-info);
            border-radius: 0.5rem;
            padding: 0.6rem 0.85rem;
            background: rgba(250, 250, 251, 0.9);
        }

        .alert-card--critical { border-left-color: var(--kpi-critical); }
        .alert-card--warning { border-left-color: var(--kpi-warning); }
        .alert-card--success { border-left-color: var(--kpi-good); }
        .alert-card--opportunity { border-left-color: var(--kpi-opportunity); }

        .alert-title { font-weight: 600; }
        .alert-details {
            font-size: 0.8rem;
            color: rgba(49, 51, 63, 0.65);
        }

        @media (max-width: 700px) {
            .kpi-grid--summary {
                grid-template-columns: repeat(auto-fit, minmax(48%, 1fr));
            }

            .kpi-metric-value {
                font-size: 1.1rem;
            }
        }

        @media (prefers-color-scheme: dark) {
            .kpi-metric-card,
            .kpi-widget-card,
            .alert-card {
                background-color: rgba(13, 17, 23, 0.55);
                border-color: rgba(250, 250, 251, 0.15);
            }

            .kpi-metric-label,
            .kpi-metric-subtitle,
            .alert-details {
                color: rgba(250, 250, 251, 0.75);
            }
        }
        </style>
        """,
        unsafe_allow_html=True,
    )
