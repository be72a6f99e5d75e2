"""Out-of-sample accuracy metrics (ME, RMSE, MAE, MPE, MAPE).

Errors are ``actual - forecast``. Percentage metrics divide by the actual
value and are undefined when any actual is exactly zero.
"""

from __future__ import annotations

import math
from typing import Any

import numpy as np
import pandas as pd

from equity_forecast.constants import PERCENTAGE_METRIC_NAMES
from equity_forecast.exceptions import DivisionByZeroActual
from equity_forecast.harness.types import AccuracyReport, Forecast
from equity_forecast.utils import get_logger

logger = get_logger(__name__)


def _as_array(values: Any, name: str) -> np.ndarray:
    if isinstance(values, Forecast):
        values = values.mean
    if isinstance(values, pd.Series):
        arr = values.to_numpy(dtype=float)
    else:
        arr = np.asarray(values, dtype=float)
    if arr.ndim != 1:
        raise ValueError(f"{name} must be one-dimensional, got shape {arr.shape}")
    return arr


def _prepare(forecast: Any, holdout: Any) -> tuple[np.ndarray, np.ndarray]:
    """Return (actual, predicted) arrays after length and finiteness checks."""
    predicted = _as_array(forecast, "forecast")
    actual = _as_array(holdout, "holdout")
    if len(predicted) != len(actual):
        raise ValueError(
            f"Forecast length {len(predicted)} does not match holdout length {len(actual)}"
        )
    if len(actual) == 0:
        raise ValueError("Cannot compute accuracy on an empty holdout")
    if not (np.all(np.isfinite(actual)) and np.all(np.isfinite(predicted))):
        raise ValueError("Forecast and holdout must contain only finite values")
    return actual, predicted


def _check_nonzero_actuals(actual: np.ndarray) -> None:
    zero_positions = np.flatnonzero(actual == 0.0)
    if zero_positions.size:
        raise DivisionByZeroActual(
            f"Percentage error undefined: actual value is 0 at position(s) "
            f"{zero_positions.tolist()}",
            stage="accuracy",
        )


def mean_error(forecast: Any, holdout: Any) -> float:
    """ME: mean of actual - forecast (positive means the forecast is too low)."""
    actual, predicted = _prepare(forecast, holdout)
    return float(np.mean(actual - predicted))


def mean_absolute_error(forecast: Any, holdout: Any) -> float:
    actual, predicted = _prepare(forecast, holdout)
    return float(np.mean(np.abs(actual - predicted)))


def root_mean_squared_error(forecast: Any, holdout: Any) -> float:
    actual, predicted = _prepare(forecast, holdout)
    return float(np.sqrt(np.mean((actual - predicted) ** 2)))


def mean_percentage_error(forecast: Any, holdout: Any) -> float:
    """MPE in percent: 100 * mean((actual - forecast) / actual).

    Raises:
        DivisionByZeroActual: If any actual value is exactly zero.
    """
    actual, predicted = _prepare(forecast, holdout)
    _check_nonzero_actuals(actual)
    return float(100.0 * np.mean((actual - predicted) / actual))


def mean_absolute_percentage_error(forecast: Any, holdout: Any) -> float:
    """MAPE in percent: 100 * mean(|(actual - forecast) / actual|).

    Raises:
        DivisionByZeroActual: If any actual value is exactly zero.
    """
    actual, predicted = _prepare(forecast, holdout)
    _check_nonzero_actuals(actual)
    return float(100.0 * np.mean(np.abs((actual - predicted) / actual)))


def accuracy(forecast: Any, holdout: Any, *, strict: bool = False) -> AccuracyReport:
    """Compute the five accuracy metrics of a forecast against its holdout.

    Args:
        forecast: Forecast, Series or array of predictions.
        holdout: Actual values, same length as the forecast.
        strict: If True, a zero actual raises ``DivisionByZeroActual``.
            Otherwise MPE and MAPE are reported as NaN and listed in
            ``undefined_metrics``.

    Returns:
        AccuracyReport with me, rmse, mae, mpe, mape and n_obs.

    Raises:
        ValueError: On length mismatch, empty input or non-finite values.
        DivisionByZeroActual: Only with ``strict=True``.
    """
    actual, predicted = _prepare(forecast, holdout)
    errors = actual - predicted

    me = float(np.mean(errors))
    mae = float(np.mean(np.abs(errors)))
    rmse = float(np.sqrt(np.mean(errors**2)))

    undefined: tuple[str, ...] = ()
    try:
        _check_nonzero_actuals(actual)
    except DivisionByZeroActual as exc:
        if strict:
            raise
        logger.warning(f"MPE/MAPE reported as undefined: {exc}")
        mpe = mape = math.nan
        undefined = PERCENTAGE_METRIC_NAMES
    else:
        ratios = errors / actual
        mpe = float(100.0 * np.mean(ratios))
        mape = float(100.0 * np.mean(np.abs(ratios)))

    return AccuracyReport(
        me=me,
        rmse=rmse,
        mae=mae,
        mpe=mpe,
        mape=mape,
        n_obs=int(len(actual)),
        undefined_metrics=undefined,
    )


__all__ = [
    "accuracy",
    "mean_absolute_error",
    "mean_absolute_percentage_error",
    "mean_error",
    "mean_percentage_error",
    "root_mean_squared_error",
]
