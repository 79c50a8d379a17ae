"""차트 렌더링 모듈."""

from .plotly_helpers import SERIES_COLORS, apply_common_layout, safe_add_area, safe_add_bar, to_plot_list
from .products import build_top_products_figure, render_top_products
from .sales import build_sales_expenses_figure, render_sales_expenses_chart

__all__ = [
    "SERIES_COLORS",
    "apply_common_layout",
    "safe_add_area",
    "safe_add_bar",
    "to_plot_list",
    "build_top_products_figure",
    "render_top_products",
    "build_sales_expenses_figure",
    "render_sales_expenses_chart",
]
