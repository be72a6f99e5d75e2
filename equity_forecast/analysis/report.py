"""Exploratory analysis of a price series before modelling."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd

from equity_forecast.analysis.arch_effect import detect_heteroskedasticity
from equity_forecast.analysis.autocorrelation import compute_acf_pacf, ljung_box_test
from equity_forecast.analysis.stationarity import evaluate_stationarity
from equity_forecast.constants import (
    ACF_PACF_DEFAULT_LAGS,
    EXPLORATORY_REPORT_FILE,
    STATIONARITY_DEFAULT_ALPHA,
)
from equity_forecast.data_preparation import to_log_price, to_log_returns, validate_price_series
from equity_forecast.utils import get_logger, save_json_pretty

logger = get_logger(__name__)


def _describe(series: pd.Series) -> dict[str, Any]:
    return {
        "n_obs": int(series.size),
        "start": series.index[0],
        "end": series.index[-1],
        "mean": float(series.mean()),
        "std": float(series.std()),
        "min": float(series.min()),
        "max": float(series.max()),
        "skew": float(series.skew()),
        "kurtosis": float(series.kurt()),
    }


def run_exploratory_analysis(
    prices: pd.Series,
    *,
    alpha: float = STATIONARITY_DEFAULT_ALPHA,
    nlags: int = ACF_PACF_DEFAULT_LAGS,
) -> dict[str, Any]:
    """Stationarity, autocorrelation and ARCH-effect diagnostics of a price series.

    Log prices and log returns are both tested for stationarity; the
    autocorrelation and ARCH checks run on log returns.

    Args:
        prices: Validated price series.
        alpha: Significance level of the stationarity tests.
        nlags: Maximum ACF/PACF lag.

    Returns:
        JSON-serialisable report dictionary.
    """
    validate_price_series(prices)
    log_price = to_log_price(prices)
    log_returns = to_log_returns(prices)
    logger.info(f"Running exploratory analysis on {len(prices)} prices")

    return {
        "summary": {
            "price": _describe(prices.astype(float)),
            "log_return": _describe(log_returns),
        },
        "stationarity": {
            "log_price": evaluate_stationarity(log_price, alpha=alpha).to_dict(),
            "log_return": evaluate_stationarity(log_returns, alpha=alpha).to_dict(),
        },
        "autocorrelation": {
            "log_return": compute_acf_pacf(log_returns, nlags=nlags),
            "ljung_box": ljung_box_test(log_returns),
        },
        "arch_effect": detect_heteroskedasticity(log_returns),
    }


def save_exploratory_report(
    report: dict[str, Any], output_path: Path | str = EXPLORATORY_REPORT_FILE
) -> Path:
    """Write the exploratory report as pretty JSON and return its path."""
    path = Path(output_path)
    save_json_pretty(report, path)
    logger.info(f"Saved exploratory report: {path}")
    return path


__all__ = ["run_exploratory_analysis", "save_exploratory_report"]
