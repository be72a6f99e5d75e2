"""Price source: adjusted close history from yfinance."""

from __future__ import annotations

from equity_forecast.data_fetching.download import (
    default_cache_file,
    download_price_history,
    get_date_range,
    load_price_series,
)

__all__ = [
    "default_cache_file",
    "download_price_history",
    "get_date_range",
    "load_price_series",
]
