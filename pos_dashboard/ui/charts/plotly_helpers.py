"""Plotly 차트 헬퍼 함수 모듈.

trace 입력값 정리, 안전한 trace 추가, 공통 레이아웃을 제공합니다.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

import numpy as np
import pandas as pd
import plotly.graph_objects as go

logger = logging.getLogger(__name__)

# 매출/지출/이익 공통 색상
SERIES_COLORS: Dict[str, str] = {
    "sales": "#16a34a",
    "expenses": "#dc2626",
    "profit": "#2563eb",
    "orders": "#7c3aed",
}

PLOTLY_CONFIG = {"displaylogo": False}


def to_plot_list(values: Optional[Iterable]) -> List:
    """
    임의의 iterable 값을 Plotly API용 리스트로 변환합니다.

    NaN은 None으로 바꿔서 x/y 길이가 어긋나지 않게 합니다.
    """
    if values is None:
        return []
    if isinstance(values, (pd.Index, pd.Series)):
        raw = values.tolist()
    elif isinstance(values, np.ndarray):
        raw = values.tolist()
    elif isinstance(values, Iterable) and not isinstance(values, (str, bytes)):
        raw = list(values)
    else:
        raw = [values]
    return [None if (not isinstance(v, str) and pd.isna(v)) else v for v in raw]


def safe_add_bar(
    fig: go.Figure,
    *,
    x: Optional[Iterable],
    y: Optional[Iterable],
    name: str,
    marker_color: Optional[str] = None,
    **kwargs: object,
) -> None:
    """Bar trace를 추가합니다. 값이 비어 있으면 건너뜁니다."""
    xs = to_plot_list(x)
    ys = to_plot_list(y)
    if not xs or not ys:
        logger.debug(f"Skipping empty bar trace: {name}")
        return
    limit = min(len(xs), len(ys))
    fig.add_trace(go.Bar(x=xs[:limit], y=ys[:limit], name=name, marker_color=marker_color, **kwargs))


def safe_add_area(
    fig: go.Figure,
    *,
    x: Optional[Iterable],
    y: Optional[Iterable],
    name: str,
    color: str,
    **kwargs: object,
) -> None:
    """영역(area) trace를 추가합니다. 값이 비어 있으면 건너뜁니다."""
    xs = to_plot_list(x)
    ys = to_plot_list(y)
    if not xs or not ys:
        logger.debug(f"Skipping empty area trace: {name}")
        return
    limit = min(len(xs), len(ys))
    fig.add_trace(
        go.Scatter(
            x=xs[:limit],
            y=ys[:limit],
            name=name,
            mode="lines",
            fill="tozeroy",
            line=dict(color=color, width=2),
            **kwargs,
        )
    )


def apply_common_layout(fig: go.Figure, *, height: int = 320, money_axis: bool = True) -> go.Figure:
    """하단 범례, 여백, 통합 호버 등 공통 레이아웃을 적용합니다."""
    fig.update_layout(
        height=height,
        legend=dict(
            orientation="h",
            x=0,
            xanchor="left",
            y=-0.2,
            yanchor="top",
            bgcolor="rgba(255,255,255,0.6)",
        ),
        margin=dict(l=30, r=20, t=10, b=60),
        hovermode="x unified",
        yaxis=dict(tickprefix="$" if money_axis else "", tickformat=",.0f"),
    )
    return fig
