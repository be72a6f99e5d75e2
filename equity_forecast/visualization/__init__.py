"""Plotting for the study (matplotlib)."""

from __future__ import annotations

from equity_forecast.visualization.plots import plot_acf_pacf, plot_forecast, plot_price_series
from equity_forecast.visualization.plotting_utils import (
    add_confidence_bands,
    add_grid,
    add_legend,
    create_standard_figure,
    format_date_axis,
    save_figure,
)

__all__ = [
    "add_confidence_bands",
    "add_grid",
    "add_legend",
    "create_standard_figure",
    "format_date_axis",
    "plot_acf_pacf",
    "plot_forecast",
    "plot_price_series",
    "save_figure",
]
