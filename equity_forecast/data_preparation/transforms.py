"""Derived series for modeling and the inverse maps back to prices.

A price series is the single source of truth; log prices and log returns are
pure functions of it. Each model family is fit on one of these scales and its
forecast is mapped back to prices so all families are scored on the same
holdout path.
"""

from __future__ import annotations

import numpy as np
import pandas as pd

from equity_forecast.constants import (
    MODEL_SCALES,
    SCALE_LOG_PRICE,
    SCALE_LOG_RETURN,
    SCALE_PRICE,
)
from equity_forecast.utils import compute_log_returns, validate_series, validate_time_index


def validate_price_series(series: pd.Series, name: str = "price series") -> None:
    """Validate a price series: numeric, no NaN, positive, strictly increasing timestamps.

    Raises:
        TypeError: If the series is not numeric or not indexed by timestamps.
        ValueError: If the series is empty, has NaNs, non-positive prices or
            duplicated / unordered timestamps.
    """
    validate_series(name, series)
    validate_time_index(name, series)
    if (series <= 0).any():
        raise ValueError(f"{name} must contain strictly positive prices.")


def to_log_price(series: pd.Series) -> pd.Series:
    """Return log(price) with the same index."""
    return pd.Series(np.log(series.astype(float).to_numpy()), index=series.index, name="log_price")


def to_log_returns(series: pd.Series) -> pd.Series:
    """Return log(price_t / price_{t-1}); the first timestamp is dropped."""
    return compute_log_returns(series).rename("log_return")


def _check_scale(scale: str) -> None:
    if scale not in MODEL_SCALES:
        raise ValueError(f"Unknown model scale '{scale}'. Expected one of {MODEL_SCALES}.")


def to_model_scale(prices: pd.Series, scale: str) -> pd.Series:
    """Transform a price window into the scale a model family is fit on."""
    _check_scale(scale)
    if scale == SCALE_LOG_PRICE:
        return to_log_price(prices)
    if scale == SCALE_LOG_RETURN:
        return to_log_returns(prices)
    return prices.astype(float)


def from_model_scale(values: np.ndarray, scale: str, last_price: float) -> np.ndarray:
    """Map a forecast path on a model scale back to prices.

    Args:
        values: Forecast path on the model scale (one value per step).
        scale: One of ``price``, ``log_price`` or ``log_return``.
        last_price: Last observed price of the fit window (anchors return paths).

    Returns:
        Price path with the same length as ``values``.
    """
    _check_scale(scale)
    arr = np.asarray(values, dtype=float)
    if scale == SCALE_LOG_PRICE:
        return np.exp(arr)
    if scale == SCALE_LOG_RETURN:
        return float(last_price) * np.exp(np.cumsum(arr))
    return arr.copy()


__all__ = [
    "SCALE_LOG_PRICE",
    "SCALE_LOG_RETURN",
    "SCALE_PRICE",
    "from_model_scale",
    "to_log_price",
    "to_log_returns",
    "to_model_scale",
    "validate_price_series",
]
