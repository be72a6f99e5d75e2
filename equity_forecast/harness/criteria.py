"""Information-criterion extractors used to rank grid candidates."""

from __future__ import annotations

from typing import Callable

from equity_forecast.constants import SUPPORTED_CRITERIA
from equity_forecast.harness.types import FitResult

CriterionFn = Callable[[FitResult], float]


def aic_criterion(fit_result: FitResult) -> float:
    """Akaike information criterion of a fit (lower is better)."""
    return float(fit_result.aic)


def bic_criterion(fit_result: FitResult) -> float:
    """Bayesian information criterion of a fit (lower is better)."""
    return float(fit_result.bic)


_CRITERIA: dict[str, CriterionFn] = {
    "aic": aic_criterion,
    "bic": bic_criterion,
}


def get_criterion(name: str) -> CriterionFn:
    """Return the criterion extractor registered under ``name`` ("aic" or "bic")."""
    key = name.lower()
    if key not in _CRITERIA:
        raise ValueError(f"Unsupported criterion '{name}'. Expected one of {SUPPORTED_CRITERIA}.")
    return _CRITERIA[key]


__all__ = ["CriterionFn", "aic_criterion", "bic_criterion", "get_criterion"]
