"""Value types flowing through the evaluation harness."""

from __future__ import annotations

from dataclasses import dataclass, field
import math
from typing import Any, Hashable, Iterator, NamedTuple, Protocol, runtime_checkable

import numpy as np
import pandas as pd

CandidateConfig = Hashable


class Split(NamedTuple):
    """Contiguous fit window followed by the holdout window."""

    fit: pd.Series
    holdout: pd.Series


@dataclass(frozen=True)
class FitResult:
    """Outcome of fitting one configuration to a fit window.

    ``model`` is the estimator's own fitted handle; only ``estimator`` knows
    how to project it forward.
    """

    config: Any
    model: Any
    aic: float
    bic: float
    residuals: np.ndarray
    estimator: "ModelEstimator"
    nobs: int = 0
    converged: bool = True


@dataclass(frozen=True)
class Forecast:
    """Point forecast path with optional interval bounds and per-step variance."""

    mean: pd.Series
    lower: pd.Series | None = None
    upper: pd.Series | None = None
    variance: pd.Series | None = None

    def __len__(self) -> int:
        return len(self.mean)

    @property
    def values(self) -> np.ndarray:
        return self.mean.to_numpy(dtype=float)

    @property
    def has_interval(self) -> bool:
        return self.lower is not None and self.upper is not None

    def with_index(self, index: pd.Index) -> "Forecast":
        """Return a copy whose components are re-labelled with ``index``."""
        if len(index) != len(self.mean):
            raise ValueError(
                f"Index length {len(index)} does not match forecast length {len(self.mean)}"
            )

        def _relabel(s: pd.Series | None) -> pd.Series | None:
            if s is None:
                return None
            return pd.Series(s.to_numpy(dtype=float), index=index, name=s.name)

        mean = _relabel(self.mean)
        assert mean is not None
        return Forecast(
            mean=mean,
            lower=_relabel(self.lower),
            upper=_relabel(self.upper),
            variance=_relabel(self.variance),
        )

    def to_frame(self) -> pd.DataFrame:
        """Return the forecast as a DataFrame (mean, lower, upper, variance)."""
        data: dict[str, pd.Series] = {"mean": self.mean}
        if self.lower is not None:
            data["lower"] = self.lower
        if self.upper is not None:
            data["upper"] = self.upper
        if self.variance is not None:
            data["variance"] = self.variance
        return pd.DataFrame(data)


@dataclass(frozen=True)
class AccuracyReport:
    """Out-of-sample accuracy of one forecast against its holdout."""

    me: float
    rmse: float
    mae: float
    mpe: float
    mape: float
    n_obs: int
    undefined_metrics: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "me": self.me,
            "rmse": self.rmse,
            "mae": self.mae,
            "mpe": self.mpe,
            "mape": self.mape,
            "n_obs": self.n_obs,
            "undefined_metrics": list(self.undefined_metrics),
        }

    def is_defined(self, metric: str) -> bool:
        return not math.isnan(float(getattr(self, metric)))


@dataclass
class GridSearchResult:
    """Selected configuration plus the full score table of a grid search.

    Iterating yields ``(best_config, best_fit, score_table)``.
    """

    best_config: Any
    best_fit: FitResult
    score_table: dict[Any, float]
    failures: dict[Any, str] = field(default_factory=dict)

    def __iter__(self) -> Iterator[Any]:
        return iter((self.best_config, self.best_fit, self.score_table))

    @property
    def best_score(self) -> float:
        return self.score_table[self.best_config]

    @property
    def n_candidates(self) -> int:
        return len(self.score_table)

    @property
    def n_failed(self) -> int:
        return len(self.failures)


@runtime_checkable
class ModelEstimator(Protocol):
    """External estimator for one model family."""

    name: str

    def fit(self, series: pd.Series, config: Any) -> FitResult:
        """Fit ``config`` on ``series``; raise ``FitFailure`` on failure."""
        ...

    def forecast(self, fit_result: FitResult, horizon: int) -> Forecast:
        """Project ``fit_result`` forward ``horizon`` steps; raise ``ForecastFailure`` on failure."""
        ...


__all__ = [
    "AccuracyReport",
    "CandidateConfig",
    "FitResult",
    "Forecast",
    "GridSearchResult",
    "ModelEstimator",
    "Split",
]
