"""Derived series (log prices, log returns) and price validation."""

from __future__ import annotations

from equity_forecast.data_preparation.transforms import (
    from_model_scale,
    to_log_price,
    to_log_returns,
    to_model_scale,
    validate_price_series,
)

__all__ = [
    "from_model_scale",
    "to_log_price",
    "to_log_returns",
    "to_model_scale",
    "validate_price_series",
]
