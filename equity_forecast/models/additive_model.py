"""Additive decomposition estimator on prices.

The series is modelled as trend + seasonal + irregular with a statsmodels
``UnobservedComponents`` state-space model. The trend component is one of
local level, random walk with drift or local linear trend; the seasonal
component is stochastic with a period in trading days, or absent.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from statsmodels.tsa.statespace.structural import UnobservedComponents

from equity_forecast.constants import (
    ADDITIVE_FAMILY_NAME,
    ADDITIVE_MAXITER,
    ADDITIVE_TREND_SPECS,
)
from equity_forecast.harness.types import FitResult, Forecast
from equity_forecast.models.base import (
    BaseEstimator,
    optimizer_converged,
    state_space_forecast,
    validate_int_param,
)
from equity_forecast.utils import get_logger

logger = get_logger(__name__)

FittedAdditiveModel = Any


@dataclass(frozen=True)
class AdditiveConfig:
    """Trend kind (0 level, 1 drift, 2 linear trend) and seasonal period (0 = none)."""

    trend: int
    seasonal_period: int

    def __post_init__(self) -> None:
        validate_int_param("trend", self.trend)
        if self.trend not in ADDITIVE_TREND_SPECS:
            raise ValueError(
                f"trend must be one of {sorted(ADDITIVE_TREND_SPECS)}, got {self.trend}"
            )
        validate_int_param("seasonal_period", self.seasonal_period)
        if self.seasonal_period == 1:
            raise ValueError("seasonal_period must be 0 (no seasonality) or >= 2")

    @property
    def level(self) -> str:
        return ADDITIVE_TREND_SPECS[self.trend]

    def as_dict(self) -> dict[str, Any]:
        return {"trend": self.trend, "seasonal_period": self.seasonal_period}

    def __str__(self) -> str:
        seasonal = f", seasonal={self.seasonal_period}" if self.seasonal_period else ""
        return f"Additive({self.level}{seasonal})"


class AdditiveEstimator(BaseEstimator):
    """Fit structural decomposition candidates by maximum likelihood."""

    name = ADDITIVE_FAMILY_NAME
    config_type = AdditiveConfig

    def __init__(self, maxiter: int = ADDITIVE_MAXITER) -> None:
        super().__init__(maxiter)

    def _fit(self, values: np.ndarray, config: AdditiveConfig) -> FitResult:
        if config.seasonal_period and len(values) <= 2 * config.seasonal_period:
            raise ValueError(
                f"{len(values)} observations are too few for seasonal period "
                f"{config.seasonal_period}"
            )
        logger.debug(f"Fitting {config} on {len(values)} observations")
        model = UnobservedComponents(
            values,
            level=config.level,
            seasonal=config.seasonal_period or None,
            stochastic_seasonal=True,
        )
        fitted: FittedAdditiveModel = model.fit(disp=False, maxiter=self.maxiter)
        if not optimizer_converged(fitted):
            raise self._not_converged(config)

        logger.debug(f"{config} fitted - AIC: {fitted.aic:.2f}")
        return FitResult(
            config=config,
            model=fitted,
            aic=float(fitted.aic),
            bic=float(fitted.bic),
            residuals=np.asarray(fitted.resid, dtype=float),
            estimator=self,
            nobs=int(fitted.nobs),
        )

    def _forecast(self, fit_result: FitResult, horizon: int) -> Forecast:
        return state_space_forecast(fit_result.model, horizon)


__all__ = ["AdditiveConfig", "AdditiveEstimator"]
