"""Stationarity checks for time series (ADF + KPSS).

This module provides small, focused helpers to:
- run ADF and KPSS on a pandas Series
- combine results into a single verdict
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, Literal, TypedDict
import warnings

import numpy as np
import pandas as pd
from statsmodels.tools.sm_exceptions import InterpolationWarning
from statsmodels.tsa.stattools import adfuller, kpss

from equity_forecast.constants import ADF_AUTOLAG_DEFAULT, STATIONARITY_DEFAULT_ALPHA
from equity_forecast.utils import get_logger, validate_series

logger = get_logger(__name__)


class StationarityTestResult(TypedDict):
    """Typed structure for a single stationarity test result."""

    statistic: float
    p_value: float
    lags: int | None
    nobs: int | None
    critical_values: dict[str, float] | None


@dataclass(frozen=True)
class StationarityReport:
    """Combined ADF + KPSS stationarity report."""

    stationary: bool
    alpha: float
    adf: StationarityTestResult
    kpss: StationarityTestResult

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _convert_test_result(
    stat: float,
    pval: float,
    lags: int | None,
    nobs: int | None,
    crit: dict[str, float] | None,
) -> StationarityTestResult:
    """Convert raw test outputs to a StationarityTestResult mapping."""
    return {
        "statistic": float(stat),
        "p_value": float(pval),
        "lags": int(lags) if lags is not None else None,
        "nobs": int(nobs) if nobs is not None else None,
        "critical_values": (
            {str(k): float(v) for k, v in crit.items()} if crit is not None else None
        ),
    }


def _clean(series: pd.Series) -> pd.Series:
    s = series.astype(float).dropna()
    validate_series("series", s)
    return s


def adf_test(series: pd.Series, *, autolag: str = ADF_AUTOLAG_DEFAULT) -> StationarityTestResult:
    """Run the Augmented Dickey-Fuller test (null: unit root).

    The lag order in the result is the one selected by ``autolag`` for this series.
    """
    s = _clean(series)
    result = adfuller(s, autolag=autolag)
    # adfstat, pvalue, usedlag, nobs, criticalvalues[, icbest]
    stat, pval, lags, nobs, crit = result[0], result[1], result[2], result[3], result[4]
    lags_int = int(lags) if isinstance(lags, (int, np.integer)) else None
    nobs_int = int(nobs) if isinstance(nobs, (int, np.integer)) else None
    crit_dict = {str(k): float(v) for k, v in crit.items()} if isinstance(crit, dict) else None
    return _convert_test_result(float(stat), float(pval), lags_int, nobs_int, crit_dict)


def kpss_test(
    series: pd.Series,
    *,
    regression: Literal["c", "ct"] = "c",
) -> StationarityTestResult:
    """Run the KPSS test (null: level or trend stationarity).

    statsmodels only tabulates p-values in [0.01, 0.1]; values outside are
    clipped to the table bounds.
    """
    s = _clean(series)
    with warnings.catch_warnings():
        warnings.filterwarnings("ignore", category=InterpolationWarning)
        stat, pval, lags, crit = kpss(s, regression=regression, nlags="auto")
    return _convert_test_result(stat, pval, lags, s.size, crit)


def _determine_stationarity(
    adf_res: StationarityTestResult,
    kpss_res: StationarityTestResult,
    alpha: float,
) -> bool:
    """ADF rejects a unit root AND KPSS does not reject stationarity."""
    adf_rejects_unit_root = adf_res["p_value"] < alpha
    kpss_p = kpss_res["p_value"]
    kpss_accepts_stationarity = np.isnan(kpss_p) or kpss_p > alpha
    return bool(adf_rejects_unit_root and kpss_accepts_stationarity)


def evaluate_stationarity(
    series: pd.Series,
    *,
    alpha: float = STATIONARITY_DEFAULT_ALPHA,
) -> StationarityReport:
    """Combine ADF and KPSS into a single verdict.

    Args:
        series: Input time series.
        alpha: Significance level in (0, 1).

    Returns:
        StationarityReport with combined verdict and test results.

    Raises:
        ValueError: If alpha is not in (0, 1).
    """
    if not 0 < alpha < 1:
        raise ValueError(f"alpha must be in (0, 1), got {alpha}")

    adf_res = adf_test(series)
    kpss_res = kpss_test(series)
    stationary = _determine_stationarity(adf_res, kpss_res, alpha)
    logger.info(
        "Stationarity of %s: %s (ADF p=%.4f, KPSS p=%.4f)",
        series.name or "series",
        stationary,
        adf_res["p_value"],
        kpss_res["p_value"],
    )
    return StationarityReport(
        stationary=stationary,
        alpha=float(alpha),
        adf=adf_res,
        kpss=kpss_res,
    )


__all__ = [
    "StationarityReport",
    "StationarityTestResult",
    "adf_test",
    "evaluate_stationarity",
    "kpss_test",
]
