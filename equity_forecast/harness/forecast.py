"""Forecast dispatch: project a fitted candidate over the holdout horizon."""

from __future__ import annotations

import numbers

import numpy as np
import pandas as pd

from equity_forecast.exceptions import ForecastFailure
from equity_forecast.harness.types import FitResult, Forecast, ModelEstimator
from equity_forecast.utils import get_logger

logger = get_logger(__name__)


def _validate_handle(fit_result: FitResult) -> None:
    if not isinstance(fit_result, FitResult):
        raise ForecastFailure(
            f"Expected a FitResult, got {type(fit_result).__name__}", stage="forecast"
        )
    if fit_result.model is None:
        raise ForecastFailure(
            "FitResult carries no fitted model", stage="forecast", config=fit_result.config
        )
    if not isinstance(fit_result.estimator, ModelEstimator):
        raise ForecastFailure(
            "FitResult is not bound to an estimator", stage="forecast", config=fit_result.config
        )


def forecast(
    fit_result: FitResult,
    horizon: int,
    *,
    index: pd.Index | None = None,
) -> Forecast:
    """Produce ``horizon`` point forecasts from a fitted candidate.

    The projection is delegated to the estimator that produced ``fit_result``.

    Args:
        fit_result: Output of an estimator's ``fit``.
        horizon: Number of steps ahead; the holdout length.
        index: Optional holdout index used to label the forecast.

    Returns:
        Forecast of length ``horizon``.

    Raises:
        ValueError: If ``horizon`` is not a positive integer or ``index`` has
            the wrong length.
        ForecastFailure: If the handle is invalid, the estimator fails, or the
            projection has the wrong length or non-finite values.
    """
    if isinstance(horizon, bool) or not isinstance(horizon, numbers.Integral) or horizon < 1:
        raise ValueError(f"horizon must be a positive integer, got {horizon!r}")
    horizon = int(horizon)
    if index is not None and len(index) != horizon:
        raise ValueError(f"index length {len(index)} does not match horizon {horizon}")
    _validate_handle(fit_result)

    estimator = fit_result.estimator
    try:
        result = estimator.forecast(fit_result, horizon)
    except ForecastFailure:
        raise
    except Exception as exc:
        raise ForecastFailure(
            f"{estimator.name} forecast failed: {exc}",
            stage="forecast",
            config=fit_result.config,
        ) from exc

    if len(result) != horizon:
        raise ForecastFailure(
            f"{estimator.name} returned {len(result)} steps, expected {horizon}",
            stage="forecast",
            config=fit_result.config,
        )
    if not np.all(np.isfinite(result.values)):
        raise ForecastFailure(
            f"{estimator.name} produced a non-finite projection",
            stage="forecast",
            config=fit_result.config,
        )

    logger.debug("Forecast %d steps with %s %s", horizon, estimator.name, fit_result.config)
    if index is not None:
        return result.with_index(index)
    return result


__all__ = ["forecast"]
