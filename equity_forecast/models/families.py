"""Default model families compared by the study."""

from __future__ import annotations

from equity_forecast.constants import (
    ADDITIVE_FAMILY_NAME,
    ADDITIVE_SCALE,
    ARIMA_FAMILY_NAME,
    ARIMA_SCALE,
    GARCH_FAMILY_NAME,
    GARCH_SCALE,
)
from equity_forecast.harness.pipeline import ModelFamily
from equity_forecast.models.additive_model import AdditiveEstimator
from equity_forecast.models.arima_model import ArimaEstimator
from equity_forecast.models.garch_model import GarchEstimator
from equity_forecast.models.grids import additive_grid, arima_grid, garch_grid


def arima_family() -> ModelFamily:
    """ARIMA(p, 1, q) on log prices, p and q in 0..6."""
    return ModelFamily(
        name=ARIMA_FAMILY_NAME,
        estimator=ArimaEstimator(),
        grid=arima_grid(),
        scale=ARIMA_SCALE,
    )


def garch_family() -> ModelFamily:
    """Constant-mean GARCH(p, q) on log returns, p and q in 1..3."""
    return ModelFamily(
        name=GARCH_FAMILY_NAME,
        estimator=GarchEstimator(),
        grid=garch_grid(),
        scale=GARCH_SCALE,
    )


def additive_family() -> ModelFamily:
    """Structural trend + seasonal decomposition on prices."""
    return ModelFamily(
        name=ADDITIVE_FAMILY_NAME,
        estimator=AdditiveEstimator(),
        grid=additive_grid(),
        scale=ADDITIVE_SCALE,
    )


_FAMILY_BUILDERS = {
    ARIMA_FAMILY_NAME: arima_family,
    GARCH_FAMILY_NAME: garch_family,
    ADDITIVE_FAMILY_NAME: additive_family,
}


def default_families(names: list[str] | None = None) -> list[ModelFamily]:
    """Build the requested families (all three by default), in the given order.

    Raises:
        ValueError: If a name is not a known family.
    """
    selected = list(_FAMILY_BUILDERS) if names is None else names
    unknown = [name for name in selected if name not in _FAMILY_BUILDERS]
    if unknown:
        raise ValueError(f"Unknown model families {unknown}. Expected {list(_FAMILY_BUILDERS)}.")
    return [_FAMILY_BUILDERS[name]() for name in selected]


__all__ = ["additive_family", "arima_family", "default_families", "garch_family"]
