"""ARIMA(p, d, q) estimator on log prices (statsmodels SARIMAX)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
from statsmodels.tsa.statespace.sarimax import SARIMAX

from equity_forecast.constants import ARIMA_FAMILY_NAME, ARIMA_MAXITER
from equity_forecast.harness.types import FitResult, Forecast
from equity_forecast.models.base import (
    BaseEstimator,
    optimizer_converged,
    state_space_forecast,
    validate_int_param,
)
from equity_forecast.utils import get_logger

logger = get_logger(__name__)

# Type alias for fitted ARIMA model (SARIMAXResults)
FittedARIMAModel = Any


@dataclass(frozen=True)
class ArimaConfig:
    """ARIMA order: AR lags ``p``, differences ``d``, MA lags ``q``."""

    p: int
    d: int
    q: int

    def __post_init__(self) -> None:
        for field_name in ("p", "d", "q"):
            validate_int_param(field_name, getattr(self, field_name))

    @property
    def order(self) -> tuple[int, int, int]:
        return (self.p, self.d, self.q)

    def as_dict(self) -> dict[str, int]:
        return {"p": self.p, "d": self.d, "q": self.q}

    def __str__(self) -> str:
        return f"ARIMA({self.p},{self.d},{self.q})"


class ArimaEstimator(BaseEstimator):
    """Fit ARIMA candidates with SARIMAX (no seasonal part) by maximum likelihood."""

    name = ARIMA_FAMILY_NAME
    config_type = ArimaConfig

    def __init__(self, maxiter: int = ARIMA_MAXITER) -> None:
        super().__init__(maxiter)

    def _fit(self, values: np.ndarray, config: ArimaConfig) -> FitResult:
        logger.debug(f"Fitting {config} on {len(values)} observations")
        model = SARIMAX(
            values,
            order=config.order,
            seasonal_order=(0, 0, 0, 0),
        )
        # disp=False suppresses the L-BFGS-B iteration output
        fitted: FittedARIMAModel = model.fit(disp=False, maxiter=self.maxiter)
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


__all__ = ["ArimaConfig", "ArimaEstimator"]
