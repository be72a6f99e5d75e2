"""Candidate grids for each family, enumerated in canonical row-major order.

The first parameter is the outer loop: ``arima_grid`` yields (0,1,0),
(0,1,1), ..., (0,1,6), (1,1,0), ... so ties are broken towards lower AR
orders first.
"""

from __future__ import annotations

from itertools import product
from typing import Iterable

from equity_forecast.constants import (
    ADDITIVE_SEASONAL_VALUES,
    ADDITIVE_TREND_VALUES,
    ARIMA_D_VALUES,
    ARIMA_P_VALUES,
    ARIMA_Q_VALUES,
    GARCH_P_VALUES,
    GARCH_Q_VALUES,
)
from equity_forecast.models.additive_model import AdditiveConfig
from equity_forecast.models.arima_model import ArimaConfig
from equity_forecast.models.garch_model import GarchConfig


def arima_grid(
    p_values: Iterable[int] = ARIMA_P_VALUES,
    d_values: Iterable[int] = ARIMA_D_VALUES,
    q_values: Iterable[int] = ARIMA_Q_VALUES,
) -> tuple[ArimaConfig, ...]:
    return tuple(
        ArimaConfig(p=p, d=d, q=q) for p, d, q in product(p_values, d_values, q_values)
    )


def garch_grid(
    p_values: Iterable[int] = GARCH_P_VALUES,
    q_values: Iterable[int] = GARCH_Q_VALUES,
) -> tuple[GarchConfig, ...]:
    return tuple(GarchConfig(p=p, q=q) for p, q in product(p_values, q_values))


def additive_grid(
    trend_values: Iterable[int] = ADDITIVE_TREND_VALUES,
    seasonal_values: Iterable[int] = ADDITIVE_SEASONAL_VALUES,
) -> tuple[AdditiveConfig, ...]:
    return tuple(
        AdditiveConfig(trend=trend, seasonal_period=period)
        for trend, period in product(trend_values, seasonal_values)
    )


__all__ = ["additive_grid", "arima_grid", "garch_grid"]
