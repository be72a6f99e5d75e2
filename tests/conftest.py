"""Pytest configuration for equity_forecast tests.

This file runs BEFORE any test imports, allowing us to mock
dependencies before they are imported by the modules under test.
"""

from __future__ import annotations

import sys
from unittest.mock import MagicMock

# Mock the network price source BEFORE any module imports it
sys.modules["yfinance"] = MagicMock()
# Use real scientific stack (pandas, scipy, statsmodels, arch) for numeric tests.
import matplotlib

matplotlib.use("Agg")  # Non-interactive backend for tests

import numpy as np
import pandas as pd
import pytest


def make_price_series(n: int = 300, *, seed: int = 7, start: str = "2019-01-01") -> pd.Series:
    """Geometric random walk on business days with mild volatility clustering."""
    rng = np.random.default_rng(seed)
    sigma = np.empty(n)
    returns = np.empty(n)
    sigma[0] = 0.01
    returns[0] = 0.0
    for t in range(1, n):
        sigma[t] = np.sqrt(1e-5 + 0.1 * returns[t - 1] ** 2 + 0.85 * sigma[t - 1] ** 2)
        returns[t] = 0.0003 + sigma[t] * rng.standard_normal()
    prices = 100.0 * np.exp(np.cumsum(returns))
    index = pd.bdate_range(start, periods=n, name="date")
    return pd.Series(prices, index=index, name="adj_close")


@pytest.fixture
def price_series() -> pd.Series:
    return make_price_series()


@pytest.fixture
def short_price_series() -> pd.Series:
    return make_price_series(n=120, seed=11)
