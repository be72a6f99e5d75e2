"""Shared plumbing for the model estimators.

Every estimator fits on a plain float array, turns library errors into
``FitFailure`` / ``ForecastFailure`` with the offending configuration attached,
and returns forecasts on a positional index (the harness relabels them with
holdout dates).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np
import pandas as pd

from equity_forecast.constants import FORECAST_INTERVAL_ALPHA
from equity_forecast.exceptions import FitFailure, ForecastFailure
from equity_forecast.harness.types import FitResult, Forecast
from equity_forecast.utils import get_logger, statsmodels_quiet

logger = get_logger(__name__)


def validate_int_param(name: str, value: Any, minimum: int = 0) -> int:
    """Return ``value`` as int, rejecting bools, non-integers and values below ``minimum``."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise TypeError(f"{name} must be an integer, got {type(value).__name__}")
    if value < minimum:
        raise ValueError(f"{name} must be >= {minimum}, got {value}")
    return int(value)


def series_to_array(series: pd.Series | np.ndarray) -> np.ndarray:
    """Return a finite 1-D float array from a fit window."""
    values = np.asarray(series, dtype=float)
    if values.ndim != 1:
        raise ValueError(f"Fit window must be one-dimensional, got shape {values.shape}")
    if values.size == 0:
        raise ValueError("Fit window is empty")
    if not np.all(np.isfinite(values)):
        raise ValueError("Fit window contains non-finite values")
    return values


def optimizer_converged(results: Any) -> bool:
    """Read the convergence flag statsmodels stores on ML results."""
    retvals = getattr(results, "mle_retvals", None) or {}
    return bool(retvals.get("converged", True))


def state_space_forecast(results: Any, horizon: int) -> Forecast:
    """Mean, confidence bounds and variance from a statsmodels state-space result."""
    prediction = results.get_forecast(steps=horizon)
    mean = np.asarray(prediction.predicted_mean, dtype=float)
    conf_int = np.asarray(prediction.conf_int(alpha=FORECAST_INTERVAL_ALPHA), dtype=float)
    variance = np.asarray(prediction.var_pred_mean, dtype=float)
    return Forecast(
        mean=pd.Series(mean, name="mean"),
        lower=pd.Series(conf_int[:, 0], name="lower"),
        upper=pd.Series(conf_int[:, 1], name="upper"),
        variance=pd.Series(variance, name="variance"),
    )


class BaseEstimator(ABC):
    """Template for a model family estimator.

    Subclasses implement ``_fit`` and ``_forecast``; this class handles input
    checks, warning suppression and error wrapping.
    """

    name: str = "base"
    config_type: type = object

    def __init__(self, maxiter: int) -> None:
        self.maxiter = validate_int_param("maxiter", maxiter, minimum=1)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(maxiter={self.maxiter})"

    @abstractmethod
    def _fit(self, values: np.ndarray, config: Any) -> FitResult:
        """Fit ``config`` on ``values``."""

    @abstractmethod
    def _forecast(self, fit_result: FitResult, horizon: int) -> Forecast:
        """Project ``fit_result`` ``horizon`` steps ahead."""

    def fit(self, series: pd.Series, config: Any) -> FitResult:
        """Fit one candidate configuration.

        Raises:
            TypeError: If ``config`` is not this family's configuration type.
            FitFailure: If the fit raises, diverges or does not converge.
        """
        if not isinstance(config, self.config_type):
            raise TypeError(
                f"{self.name} expects {self.config_type.__name__}, got {type(config).__name__}"
            )
        try:
            values = series_to_array(series)
            with statsmodels_quiet():
                return self._fit(values, config)
        except FitFailure:
            raise
        except Exception as exc:
            raise FitFailure(
                f"Failed to fit {config}: {exc}", stage="fit", config=config
            ) from exc

    def forecast(self, fit_result: FitResult, horizon: int) -> Forecast:
        """Forecast ``horizon`` steps from a fit produced by this estimator.

        Raises:
            ForecastFailure: If the projection cannot be computed.
        """
        if fit_result.estimator is not self:
            raise ForecastFailure(
                f"FitResult was not produced by this {self.name} estimator",
                stage="forecast",
                config=fit_result.config,
            )
        try:
            with statsmodels_quiet():
                return self._forecast(fit_result, horizon)
        except ForecastFailure:
            raise
        except Exception as exc:
            raise ForecastFailure(
                f"Failed to forecast {fit_result.config}: {exc}",
                stage="forecast",
                config=fit_result.config,
            ) from exc

    def _not_converged(self, config: Any) -> FitFailure:
        logger.debug(f"{config} did not converge within {self.maxiter} iterations")
        return FitFailure(
            f"{config} did not converge within {self.maxiter} iterations",
            stage="fit",
            config=config,
        )


__all__ = [
    "BaseEstimator",
    "optimizer_converged",
    "series_to_array",
    "state_space_forecast",
    "validate_int_param",
]
