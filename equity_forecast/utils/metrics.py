"""Statistical utilities shared by the analysis and evaluation modules.

Provides the chi-square survival function used by the LM tests, residual
computation, and log-return computation for a single price series.
"""

from __future__ import annotations

from typing import Iterable, cast

import numpy as np
import pandas as pd
from scipy.stats import chi2

__all__ = [
    "chi2_sf",
    "compute_log_returns",
    "compute_residuals",
]


def chi2_sf(x: float, df: int) -> float:
    """Chi-square survival function P[X >= x].

    Args:
        x: Test statistic value.
        df: Degrees of freedom.

    Returns:
        P-value, or NaN when the statistic itself is NaN.
    """
    if not np.isfinite(x):
        return float("nan")
    return float(chi2.sf(x, df))


def compute_log_returns(prices: pd.Series) -> pd.Series:
    """Compute log(price_t / price_{t-1}) for a single price series.

    The first observation (which has no predecessor) is dropped; invalid
    ratios (non-positive or infinite) are dropped as well.

    Args:
        prices: Price series sorted by time.

    Returns:
        Log returns indexed by the later timestamp of each pair.
    """
    x = prices.astype(float)
    ratio = x / x.shift(1)
    ratio = ratio.replace([np.inf, -np.inf], np.nan)
    ratio = ratio.mask(ratio <= 0)
    with np.errstate(divide="ignore", invalid="ignore"):
        log_returns = cast(pd.Series, np.log(ratio))
    return log_returns.dropna()


def compute_residuals(
    y_true: np.ndarray | pd.Series | Iterable[float],
    y_pred: np.ndarray | pd.Series | Iterable[float],
) -> np.ndarray:
    """Return residuals y_true - y_pred as numpy array.

    Examples:
        >>> compute_residuals([1.0, 2.0, 3.0], [1.1, 1.9, 3.2])
        array([-0.1,  0.1, -0.2])
    """
    yt = np.asarray(y_true, dtype=float)
    yp = np.asarray(y_pred, dtype=float)
    return yt - yp
