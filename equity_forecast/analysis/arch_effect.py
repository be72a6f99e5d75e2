"""Detection of conditional heteroskedasticity (ARCH effect) in returns.

Methodology:
1. Demean the returns to get residuals εt
2. Engle's ARCH-LM test: regress εt² on its own lags, LM = n·R² ~ χ²(lags)
3. Inspect the autocorrelation of εt² against the ±1.96/√n band

A significant structure in squared residuals indicates that a GARCH model
is relevant.
"""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd
from statsmodels.regression.linear_model import OLS
from statsmodels.tools.tools import add_constant
from statsmodels.tsa.stattools import acf
from statsmodels.tsa.tsatools import lagmat

from equity_forecast.constants import (
    ACF_Z_CONF,
    ARCH_LM_DEFAULT_ALPHA,
    ARCH_LM_LAGS_DEFAULT,
    SQUARED_ACF_LAGS_DEFAULT,
)
from equity_forecast.utils import chi2_sf, compute_residuals, get_logger

logger = get_logger(__name__)


def compute_arch_lm_test(
    residuals: np.ndarray | pd.Series, lags: int = ARCH_LM_LAGS_DEFAULT
) -> dict[str, float]:
    """Engle's ARCH-LM test on a residual series.

    Args:
        residuals: Residuals εt (NaNs are dropped).
        lags: Number of lagged squared residuals in the regression.

    Returns:
        Dict with lm_stat, p_value and df; NaN statistics when the sample
        is not longer than ``lags``.
    """
    if lags < 1:
        raise ValueError(f"lags must be >= 1, got {lags}")
    e2 = np.asarray(residuals, dtype=float) ** 2
    e2 = e2[np.isfinite(e2)]
    if e2.size <= lags + 1:
        return {"lm_stat": float("nan"), "p_value": float("nan"), "df": float(lags)}

    # Trimmed lag matrix: row t holds ε²(t-1) .. ε²(t-lags)
    lagged, current = lagmat(e2, maxlag=lags, trim="both", original="sep")
    ols = OLS(current[:, 0], add_constant(lagged, has_constant="add")).fit()
    r2 = float(ols.rsquared) if np.isfinite(ols.rsquared) else 0.0
    lm = ols.nobs * max(0.0, r2)
    return {"lm_stat": float(lm), "p_value": chi2_sf(lm, lags), "df": float(lags)}


def compute_squared_acf(
    residuals: np.ndarray | pd.Series, nlags: int = SQUARED_ACF_LAGS_DEFAULT
) -> np.ndarray:
    """ACF(ε²) for lags 1..nlags."""
    e2 = np.asarray(residuals, dtype=float) ** 2
    e2 = e2[np.isfinite(e2)]
    nlags = min(nlags, e2.size - 1)
    if nlags < 1:
        return np.array([])
    return np.asarray(acf(e2, nlags=nlags, fft=True), dtype=float)[1:]


def detect_heteroskedasticity(
    returns: pd.Series,
    *,
    lags: int = ARCH_LM_LAGS_DEFAULT,
    acf_lags: int = SQUARED_ACF_LAGS_DEFAULT,
    alpha: float = ARCH_LM_DEFAULT_ALPHA,
) -> dict[str, Any]:
    """Run the ARCH-LM test and the squared-residual ACF check on returns.

    Args:
        returns: Log-return series.
        lags: Lags for the ARCH-LM regression.
        acf_lags: Maximum lag of the squared-residual ACF.
        alpha: Significance level of the ARCH-LM test.

    Returns:
        Dict summarizing test statistics and boolean flags.
    """
    values = returns.astype(float).dropna().to_numpy()
    residuals = compute_residuals(values, np.full(values.size, values.mean()))

    lm = compute_arch_lm_test(residuals, lags=lags)
    arch_present = bool(np.isfinite(lm["p_value"]) and lm["p_value"] < alpha)

    acf_squared = compute_squared_acf(residuals, nlags=acf_lags)
    significance = ACF_Z_CONF / np.sqrt(residuals.size) if residuals.size else 0.0
    acf_significant = bool(np.any(np.abs(acf_squared) > significance))

    logger.info(
        "ARCH-LM(%d): stat=%.3f p=%.4f -> ARCH effect %s",
        lags,
        lm["lm_stat"],
        lm["p_value"],
        "present" if arch_present else "not detected",
    )
    return {
        "arch_lm": lm,
        "arch_effect_present": arch_present,
        "acf_squared": acf_squared.tolist(),
        "acf_significance_level": float(significance),
        "acf_significant": acf_significant,
    }


__all__ = ["compute_arch_lm_test", "compute_squared_acf", "detect_heteroskedasticity"]
