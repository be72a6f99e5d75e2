"""Fake estimators driving the harness without any statistical library."""

from __future__ import annotations

import time
from typing import Any

import numpy as np
import pandas as pd
import pytest

from equity_forecast.exceptions import FitFailure
from equity_forecast.harness import FitResult, Forecast


class FakeEstimator:
    """Scores each config from a lookup table; configs in ``failing`` raise FitFailure.

    Forecasts repeat the last fitted value plus ``config``-dependent drift.
    """

    name = "fake"

    def __init__(
        self,
        scores: dict[Any, float],
        *,
        failing: set[Any] | None = None,
        delays: dict[Any, float] | None = None,
        forecast_values: np.ndarray | None = None,
        forecast_variance: np.ndarray | None = None,
    ) -> None:
        self.scores = scores
        self.failing = failing or set()
        self.delays = delays or {}
        self.forecast_values = forecast_values
        self.forecast_variance = forecast_variance
        self.fitted: list[Any] = []

    def fit(self, series: pd.Series, config: Any) -> FitResult:
        self.fitted.append(config)
        delay = self.delays.get(config)
        if delay:
            time.sleep(delay)
        if config in self.failing:
            raise FitFailure("engineered failure", stage="fit", config=config)
        return FitResult(
            config=config,
            model={"last": float(series.iloc[-1])},
            aic=self.scores[config],
            bic=self.scores[config] + 1.0,
            residuals=np.zeros(len(series)),
            estimator=self,
            nobs=len(series),
        )

    def forecast(self, fit_result: FitResult, horizon: int) -> Forecast:
        if self.forecast_values is not None:
            values = np.asarray(self.forecast_values[:horizon], dtype=float)
        else:
            values = np.full(horizon, fit_result.model["last"])
        variance = None
        if self.forecast_variance is not None:
            variance = pd.Series(self.forecast_variance[:horizon], dtype=float, name="variance")
        return Forecast(mean=pd.Series(values, name="mean"), variance=variance)


@pytest.fixture
def fake_estimator_cls() -> type[FakeEstimator]:
    return FakeEstimator
