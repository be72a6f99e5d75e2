"""Single-stock forecasting study: exploratory diagnostics and model comparison.

Import from specific subpackages, e.g.:

    from equity_forecast.harness import split, grid_search, forecast, accuracy
    from equity_forecast.models import ArimaEstimator, arima_grid

"""

from __future__ import annotations

__all__: list[str] = []
