"""Autocorrelation structure of a series: ACF, PACF and Ljung-Box Q tests."""

from __future__ import annotations

from typing import Any, Sequence

import numpy as np
import pandas as pd
from statsmodels.stats.diagnostic import acorr_ljungbox
from statsmodels.tsa.stattools import acf, pacf

from equity_forecast.constants import (
    ACF_PACF_DEFAULT_LAGS,
    ACF_PACF_MIN_LAGS,
    ACF_Z_CONF,
    LJUNG_BOX_LAGS_DEFAULT,
)
from equity_forecast.utils import get_logger, validate_series

logger = get_logger(__name__)


def effective_lags(n_obs: int, nlags: int = ACF_PACF_DEFAULT_LAGS) -> int:
    """Clip ``nlags`` to what PACF supports for ``n_obs`` observations (< n/2)."""
    max_lags = max(ACF_PACF_MIN_LAGS, n_obs // 2 - 1)
    return max(ACF_PACF_MIN_LAGS, min(nlags, max_lags))


def compute_acf_pacf(
    series: pd.Series,
    nlags: int = ACF_PACF_DEFAULT_LAGS,
) -> dict[str, Any]:
    """Sample ACF and PACF for lags 1..nlags with the ±z/√n band.

    Args:
        series: Input series (NaNs are dropped).
        nlags: Requested maximum lag; clipped for short series.

    Returns:
        Dict with lags, acf, pacf, confidence band and the significant lags.
    """
    s = series.astype(float).dropna()
    validate_series("series", s)
    lags = effective_lags(len(s), nlags)

    acf_values = np.asarray(acf(s, nlags=lags, fft=True), dtype=float)[1:]
    pacf_values = np.asarray(pacf(s, nlags=lags, method="ywm"), dtype=float)[1:]
    conf = ACF_Z_CONF / np.sqrt(len(s))
    lag_index = np.arange(1, lags + 1)

    return {
        "nlags": int(lags),
        "lags": lag_index.tolist(),
        "acf": acf_values.tolist(),
        "pacf": pacf_values.tolist(),
        "confidence": float(conf),
        "significant_acf_lags": lag_index[np.abs(acf_values) > conf].tolist(),
        "significant_pacf_lags": lag_index[np.abs(pacf_values) > conf].tolist(),
    }


def ljung_box_test(
    series: pd.Series,
    lags: Sequence[int] = LJUNG_BOX_LAGS_DEFAULT,
) -> dict[str, dict[str, float]]:
    """Ljung-Box Q statistic and p-value at each requested lag.

    Lags not smaller than the sample size are skipped.

    Returns:
        Mapping ``"lag_k"`` -> {"statistic", "p_value"}.
    """
    s = series.astype(float).dropna()
    validate_series("series", s)
    usable = [int(lag) for lag in lags if 0 < int(lag) < len(s)]
    if not usable:
        logger.warning(f"No Ljung-Box lag below sample size {len(s)}; skipping test")
        return {}

    table = acorr_ljungbox(s, lags=usable, return_df=True)
    return {
        f"lag_{lag}": {
            "statistic": float(table.loc[lag, "lb_stat"]),
            "p_value": float(table.loc[lag, "lb_pvalue"]),
        }
        for lag in usable
    }


__all__ = ["compute_acf_pacf", "effective_lags", "ljung_box_test"]
