"""Study plots: price series, forecasts against the holdout, ACF/PACF."""

from __future__ import annotations

from pathlib import Path

import matplotlib.dates as mdates
import numpy as np
import pandas as pd

from equity_forecast.analysis import compute_acf_pacf
from equity_forecast.constants import (
    ACF_PACF_DEFAULT_LAGS,
    COLOR_ACF,
    COLOR_ACTUAL,
    COLOR_CONFIDENCE,
    COLOR_PACF,
    COLOR_PREDICTION,
    COLOR_SPLIT_LINE,
    COLOR_TEST,
    COLOR_TRAIN,
    FIGURE_SIZE_ACF_PACF,
    FIGURE_SIZE_FORECAST,
    FIGURE_SIZE_SERIES,
    FONTSIZE_AXIS,
    FONTSIZE_TITLE,
    FORECAST_PLOT_CONTEXT,
    LINEWIDTH_BOLD,
    LINEWIDTH_DEFAULT,
    PLOT_ALPHA_DEFAULT,
    PLOT_ALPHA_FILL,
)
from equity_forecast.harness import FamilyEvaluation
from equity_forecast.utils import get_logger
from equity_forecast.visualization.plotting_utils import (
    add_confidence_bands,
    add_grid,
    add_legend,
    create_standard_figure,
    format_date_axis,
    save_figure,
)

logger = get_logger(__name__)


def _split_line(ax, split_date: pd.Timestamp) -> None:
    ax.axvline(
        float(mdates.date2num(split_date.to_pydatetime())),
        color=COLOR_SPLIT_LINE,
        linestyle="--",
        linewidth=LINEWIDTH_BOLD,
        alpha=0.7,
        label=f"Fit/holdout split: {split_date.date()}",
    )


def plot_price_series(
    prices: pd.Series,
    output_path: str | Path,
    *,
    holdout_length: int | None = None,
    ticker: str | None = None,
) -> Path:
    """Plot the price series, coloring the holdout window when given."""
    _, ax = create_standard_figure(figsize=FIGURE_SIZE_SERIES)

    if holdout_length:
        fit, holdout = prices.iloc[:-holdout_length], prices.iloc[-holdout_length:]
        ax.plot(fit.index, fit.values, color=COLOR_TRAIN, linewidth=LINEWIDTH_DEFAULT, label="Fit window")
        ax.plot(
            holdout.index,
            holdout.values,
            color=COLOR_TEST,
            linewidth=LINEWIDTH_DEFAULT,
            label="Holdout",
        )
        _split_line(ax, holdout.index[0])
    else:
        ax.plot(prices.index, prices.values, color=COLOR_TRAIN, linewidth=LINEWIDTH_DEFAULT, label="Price")

    title = f"{ticker} adjusted close" if ticker else "Adjusted close"
    ax.set_title(title, fontsize=FONTSIZE_TITLE, fontweight="bold")
    ax.set_xlabel("Date", fontsize=FONTSIZE_AXIS)
    ax.set_ylabel("Price", fontsize=FONTSIZE_AXIS)
    format_date_axis(ax)
    add_grid(ax)
    add_legend(ax, loc="upper left")
    return save_figure(ax.figure, output_path)


def plot_forecast(
    evaluation: FamilyEvaluation,
    output_path: str | Path,
    *,
    context: int = FORECAST_PLOT_CONTEXT,
) -> Path:
    """Plot one family's price forecast and band against the holdout.

    The last ``context`` observations of the fit window are shown for reference.
    """
    fit = evaluation.split.fit.iloc[-context:]
    holdout = evaluation.split.holdout
    price_forecast = evaluation.price_forecast

    _, ax = create_standard_figure(figsize=FIGURE_SIZE_FORECAST)
    ax.plot(fit.index, fit.values, color=COLOR_TRAIN, linewidth=LINEWIDTH_DEFAULT, label="Fit window")
    ax.plot(
        holdout.index,
        holdout.values,
        color=COLOR_ACTUAL,
        linewidth=LINEWIDTH_BOLD,
        alpha=PLOT_ALPHA_DEFAULT,
        label="Actual",
    )
    ax.plot(
        holdout.index,
        price_forecast.values,
        color=COLOR_PREDICTION,
        linewidth=LINEWIDTH_BOLD,
        linestyle="--",
        label=f"Forecast {evaluation.best_config}",
    )
    if price_forecast.has_interval:
        assert price_forecast.lower is not None and price_forecast.upper is not None
        ax.fill_between(
            holdout.index,
            price_forecast.lower.to_numpy(dtype=float),
            price_forecast.upper.to_numpy(dtype=float),
            color=COLOR_PREDICTION,
            alpha=PLOT_ALPHA_FILL,
            label="95% interval",
        )
    _split_line(ax, holdout.index[0])

    report = evaluation.report
    mape = "undefined" if np.isnan(report.mape) else f"{report.mape:.2f}%"
    ax.set_title(
        f"{evaluation.family}: RMSE={report.rmse:.3f}, MAE={report.mae:.3f}, MAPE={mape}",
        fontsize=FONTSIZE_TITLE,
        fontweight="bold",
    )
    ax.set_xlabel("Date", fontsize=FONTSIZE_AXIS)
    ax.set_ylabel("Price", fontsize=FONTSIZE_AXIS)
    format_date_axis(ax)
    add_grid(ax)
    add_legend(ax, loc="upper left")
    return save_figure(ax.figure, output_path)


def plot_acf_pacf(
    series: pd.Series,
    output_path: str | Path,
    *,
    nlags: int = ACF_PACF_DEFAULT_LAGS,
    title: str | None = None,
) -> Path:
    """Side-by-side ACF and PACF bar plots with the ±1.96/√n band."""
    values = compute_acf_pacf(series, nlags=nlags)
    lags = np.asarray(values["lags"])
    se = 1.0 / np.sqrt(series.dropna().size)

    fig, axes = create_standard_figure(1, 2, figsize=FIGURE_SIZE_ACF_PACF)
    for ax, key, color in ((axes[0], "acf", COLOR_ACF), (axes[1], "pacf", COLOR_PACF)):
        ax.bar(lags, values[key], color=color, width=0.6, alpha=PLOT_ALPHA_DEFAULT)
        add_confidence_bands(ax, se, color=COLOR_CONFIDENCE, label="95% band")
        ax.axhline(0, color="black", linewidth=LINEWIDTH_DEFAULT)
        ax.set_title(key.upper(), fontsize=FONTSIZE_AXIS + 2, fontweight="bold")
        ax.set_xlabel("Lag", fontsize=FONTSIZE_AXIS)
        add_grid(ax)
        add_legend(ax, loc="upper right")

    if title:
        fig.suptitle(title, fontsize=FONTSIZE_TITLE, fontweight="bold")
    fig.tight_layout()
    return save_figure(fig, output_path)


__all__ = ["plot_acf_pacf", "plot_forecast", "plot_price_series"]
