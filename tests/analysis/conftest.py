"""Synthetic series with known autocorrelation and volatility structure."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest


def _index(n: int) -> pd.DatetimeIndex:
    return pd.bdate_range("2018-01-01", periods=n, name="date")


@pytest.fixture
def white_noise() -> pd.Series:
    rng = np.random.default_rng(0)
    return pd.Series(rng.standard_normal(500), index=_index(500), name="noise")


@pytest.fixture
def random_walk() -> pd.Series:
    rng = np.random.default_rng(1)
    return pd.Series(np.cumsum(rng.standard_normal(500)), index=_index(500), name="walk")


@pytest.fixture
def ar1_series() -> pd.Series:
    rng = np.random.default_rng(2)
    eps = rng.standard_normal(500)
    x = np.zeros(500)
    for t in range(1, 500):
        x[t] = 0.8 * x[t - 1] + eps[t]
    return pd.Series(x, index=_index(500), name="ar1")


@pytest.fixture
def arch_returns() -> pd.Series:
    """ARCH(1) returns with a strong volatility feedback."""
    rng = np.random.default_rng(3)
    n = 2000
    r = np.zeros(n)
    for t in range(1, n):
        sigma2 = 1e-4 + 0.7 * r[t - 1] ** 2
        r[t] = np.sqrt(sigma2) * rng.standard_normal()
    return pd.Series(r, index=_index(n), name="log_return")
