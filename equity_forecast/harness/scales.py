"""Map forecasts made on a model scale back to the price scale."""

from __future__ import annotations

import numpy as np
import pandas as pd

from equity_forecast.constants import (
    FORECAST_INTERVAL_Z,
    SCALE_LOG_PRICE,
    SCALE_LOG_RETURN,
)
from equity_forecast.data_preparation import from_model_scale
from equity_forecast.harness.types import Forecast


def _series(values: np.ndarray, index: pd.Index, name: str) -> pd.Series:
    return pd.Series(values, index=index, name=name)


def _return_path_bounds(
    forecast: Forecast, last_price: float, z: float
) -> tuple[np.ndarray | None, np.ndarray | None]:
    """Interval bounds of a price path built from cumulated log-returns."""
    if forecast.variance is None:
        return None, None
    cum_mean = np.cumsum(forecast.values)
    cum_std = np.sqrt(np.cumsum(forecast.variance.to_numpy(dtype=float)))
    lower = float(last_price) * np.exp(cum_mean - z * cum_std)
    upper = float(last_price) * np.exp(cum_mean + z * cum_std)
    return lower, upper


def forecast_to_price(
    forecast: Forecast,
    scale: str,
    last_price: float,
    *,
    index: pd.Index | None = None,
    z: float = FORECAST_INTERVAL_Z,
) -> Forecast:
    """Convert a model-scale forecast to a price forecast.

    Log-price bounds are exponentiated. For log-return forecasts the price
    path is ``last_price * exp(cumsum(r))`` and the band comes from the
    cumulative variance of the returns, when the estimator reports one.
    Price-scale forecasts are only relabelled.

    Args:
        forecast: Forecast on the model scale.
        scale: Scale the model was fit on.
        last_price: Last price of the fit window.
        index: Optional index for the result (defaults to the forecast's).
        z: Two-sided normal quantile used for variance-based bands.

    Returns:
        Forecast on the price scale; ``variance`` is kept only for price-scale models.
    """
    idx = forecast.mean.index if index is None else index
    mean = from_model_scale(forecast.values, scale, last_price)

    lower: np.ndarray | None = None
    upper: np.ndarray | None = None
    if scale == SCALE_LOG_RETURN:
        lower, upper = _return_path_bounds(forecast, last_price, z)
    elif forecast.has_interval:
        assert forecast.lower is not None and forecast.upper is not None
        lower = from_model_scale(forecast.lower.to_numpy(dtype=float), scale, last_price)
        upper = from_model_scale(forecast.upper.to_numpy(dtype=float), scale, last_price)
    elif forecast.variance is not None:
        std = np.sqrt(forecast.variance.to_numpy(dtype=float))
        lower = from_model_scale(forecast.values - z * std, scale, last_price)
        upper = from_model_scale(forecast.values + z * std, scale, last_price)

    variance = None
    if scale not in (SCALE_LOG_PRICE, SCALE_LOG_RETURN) and forecast.variance is not None:
        variance = _series(forecast.variance.to_numpy(dtype=float), idx, "variance")

    return Forecast(
        mean=_series(mean, idx, "mean"),
        lower=None if lower is None else _series(lower, idx, "lower"),
        upper=None if upper is None else _series(upper, idx, "upper"),
        variance=variance,
    )


__all__ = ["forecast_to_price"]
