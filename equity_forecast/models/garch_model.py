"""GARCH(p, q) estimator on log returns (``arch`` package).

Returns are multiplied by ``GARCH_RETURN_SCALE`` before fitting, since the
arch optimiser is poorly conditioned on raw daily returns. Forecast means
and variances are divided back to the log-return scale.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from arch import arch_model
import numpy as np
import pandas as pd

from equity_forecast.constants import (
    FORECAST_INTERVAL_Z,
    GARCH_DISTRIBUTION,
    GARCH_FAMILY_NAME,
    GARCH_MAXITER,
    GARCH_MEAN_MODEL,
    GARCH_RETURN_SCALE,
)
from equity_forecast.harness.types import FitResult, Forecast
from equity_forecast.models.base import BaseEstimator, validate_int_param
from equity_forecast.utils import get_logger

logger = get_logger(__name__)

# Type alias for fitted arch results (ARCHModelResult)
FittedGARCHModel = Any


@dataclass(frozen=True)
class GarchConfig:
    """GARCH orders: ``p`` ARCH lags (>= 1) and ``q`` lagged variances (>= 0)."""

    p: int
    q: int

    def __post_init__(self) -> None:
        validate_int_param("p", self.p, minimum=1)
        validate_int_param("q", self.q, minimum=0)

    def as_dict(self) -> dict[str, int]:
        return {"p": self.p, "q": self.q}

    def __str__(self) -> str:
        return f"GARCH({self.p},{self.q})"


class GarchEstimator(BaseEstimator):
    """Constant-mean GARCH(p, q) with normal innovations."""

    name = GARCH_FAMILY_NAME
    config_type = GarchConfig

    def __init__(
        self,
        maxiter: int = GARCH_MAXITER,
        *,
        return_scale: float = GARCH_RETURN_SCALE,
        mean: str = GARCH_MEAN_MODEL,
        dist: str = GARCH_DISTRIBUTION,
    ) -> None:
        super().__init__(maxiter)
        if return_scale <= 0:
            raise ValueError(f"return_scale must be positive, got {return_scale}")
        self.return_scale = float(return_scale)
        self.mean = mean
        self.dist = dist

    def _fit(self, values: np.ndarray, config: GarchConfig) -> FitResult:
        logger.debug(f"Fitting {config} on {len(values)} returns")
        scaled = values * self.return_scale
        model = arch_model(
            scaled,
            mean=self.mean,
            vol="GARCH",
            p=config.p,
            q=config.q,
            dist=self.dist,
            rescale=False,
        )
        fitted: FittedGARCHModel = model.fit(
            disp="off",
            show_warning=False,
            options={"maxiter": self.maxiter},
        )
        if fitted.convergence_flag != 0:
            raise self._not_converged(config)

        logger.debug(f"{config} fitted - AIC: {fitted.aic:.2f}")
        return FitResult(
            config=config,
            model=fitted,
            aic=float(fitted.aic),
            bic=float(fitted.bic),
            residuals=np.asarray(fitted.resid, dtype=float) / self.return_scale,
            estimator=self,
            nobs=int(fitted.nobs),
        )

    def _forecast(self, fit_result: FitResult, horizon: int) -> Forecast:
        prediction = fit_result.model.forecast(horizon=horizon, reindex=False)
        mean = prediction.mean.iloc[-1].to_numpy(dtype=float) / self.return_scale
        variance = prediction.variance.iloc[-1].to_numpy(dtype=float) / self.return_scale**2
        std = np.sqrt(variance)
        return Forecast(
            mean=pd.Series(mean, name="mean"),
            lower=pd.Series(mean - FORECAST_INTERVAL_Z * std, name="lower"),
            upper=pd.Series(mean + FORECAST_INTERVAL_Z * std, name="upper"),
            variance=pd.Series(variance, name="variance"),
        )


__all__ = ["GarchConfig", "GarchEstimator"]
