"""Model estimators, candidate configurations and grids for the three families."""

from __future__ import annotations

from equity_forecast.models.additive_model import AdditiveConfig, AdditiveEstimator
from equity_forecast.models.arima_model import ArimaConfig, ArimaEstimator
from equity_forecast.models.base import BaseEstimator
from equity_forecast.models.families import (
    additive_family,
    arima_family,
    default_families,
    garch_family,
)
from equity_forecast.models.garch_model import GarchConfig, GarchEstimator
from equity_forecast.models.grids import additive_grid, arima_grid, garch_grid

__all__ = [
    "BaseEstimator",
    # ARIMA
    "ArimaConfig",
    "ArimaEstimator",
    "arima_grid",
    "arima_family",
    # GARCH
    "GarchConfig",
    "GarchEstimator",
    "garch_grid",
    "garch_family",
    # Additive decomposition
    "AdditiveConfig",
    "AdditiveEstimator",
    "additive_grid",
    "additive_family",
    "default_families",
]
