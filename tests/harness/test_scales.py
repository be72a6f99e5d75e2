"""Tests for mapping model-scale forecasts back to prices."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from equity_forecast.constants import FORECAST_INTERVAL_Z
from equity_forecast.harness import Forecast, forecast_to_price

INDEX = pd.bdate_range("2023-06-01", periods=2)


def _fc(mean, lower=None, upper=None, variance=None) -> Forecast:
    def _s(values):
        return None if values is None else pd.Series(values, index=INDEX, dtype=float)

    return Forecast(mean=_s(mean), lower=_s(lower), upper=_s(upper), variance=_s(variance))


class TestLogPrice:
    def test_exponentiates_mean_and_bounds(self) -> None:
        fc = _fc([np.log(100.0), np.log(110.0)], lower=[np.log(90.0), np.log(95.0)],
                 upper=[np.log(110.0), np.log(125.0)], variance=[0.01, 0.02])

        result = forecast_to_price(fc, "log_price", last_price=99.0)

        np.testing.assert_allclose(result.values, [100.0, 110.0])
        np.testing.assert_allclose(result.lower.to_numpy(), [90.0, 95.0])
        np.testing.assert_allclose(result.upper.to_numpy(), [110.0, 125.0])
        assert result.variance is None

    def test_bounds_from_variance_when_no_interval(self) -> None:
        fc = _fc([0.0, 0.0], variance=[0.04, 0.04])

        result = forecast_to_price(fc, "log_price", last_price=1.0)

        np.testing.assert_allclose(result.lower.to_numpy(), np.exp(-FORECAST_INTERVAL_Z * 0.2))
        np.testing.assert_allclose(result.upper.to_numpy(), np.exp(FORECAST_INTERVAL_Z * 0.2))


class TestLogReturn:
    def test_compounds_from_last_price(self) -> None:
        fc = _fc([0.01, 0.02], variance=[1e-4, 1e-4])

        result = forecast_to_price(fc, "log_return", last_price=100.0, z=2.0)

        np.testing.assert_allclose(result.values, [100.0 * np.exp(0.01), 100.0 * np.exp(0.03)])
        expected_lower = 100.0 * np.exp(np.array([0.01, 0.03]) - 2.0 * np.sqrt([1e-4, 2e-4]))
        np.testing.assert_allclose(result.lower.to_numpy(), expected_lower)
        assert result.upper.iloc[1] > result.values[1] > result.lower.iloc[1]
        assert result.variance is None

    def test_zero_returns_give_flat_path(self) -> None:
        result = forecast_to_price(_fc([0.0, 0.0]), "log_return", last_price=42.0)
        np.testing.assert_allclose(result.values, [42.0, 42.0])
        assert not result.has_interval


class TestPrice:
    def test_relabels_and_keeps_variance(self) -> None:
        fc = Forecast(
            mean=pd.Series([5.0, 6.0]),
            lower=pd.Series([4.0, 4.5]),
            upper=pd.Series([6.0, 7.5]),
            variance=pd.Series([0.25, 0.5]),
        )

        result = forecast_to_price(fc, "price", last_price=5.0, index=INDEX)

        assert result.mean.index.equals(INDEX)
        assert result.values.tolist() == [5.0, 6.0]
        assert result.lower.tolist() == [4.0, 4.5]
        assert result.variance.tolist() == [0.25, 0.5]


def test_unknown_scale() -> None:
    with pytest.raises(ValueError, match="Unknown model scale"):
        forecast_to_price(_fc([1.0, 2.0]), "sqrt_price", last_price=1.0)
