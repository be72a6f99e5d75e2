"""Tests for price validation and the model-scale transforms."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from equity_forecast.data_preparation import (
    from_model_scale,
    to_log_price,
    to_log_returns,
    to_model_scale,
    validate_price_series,
)


@pytest.fixture
def prices() -> pd.Series:
    return pd.Series(
        [100.0, 110.0, 99.0, 120.0],
        index=pd.bdate_range("2020-01-06", periods=4, name="date"),
        name="adj_close",
    )


class TestValidatePriceSeries:
    def test_valid(self, prices) -> None:
        validate_price_series(prices)

    def test_non_positive(self, prices) -> None:
        prices.iloc[1] = 0.0
        with pytest.raises(ValueError, match="strictly positive"):
            validate_price_series(prices)

    def test_nan(self, prices) -> None:
        prices.iloc[1] = np.nan
        with pytest.raises(ValueError, match="NaN"):
            validate_price_series(prices)

    def test_unordered_index(self, prices) -> None:
        with pytest.raises(ValueError, match="increasing"):
            validate_price_series(prices.iloc[::-1])

    def test_duplicate_timestamps(self, prices) -> None:
        dup = pd.concat([prices, prices.iloc[[-1]]])
        with pytest.raises(ValueError, match="duplicate"):
            validate_price_series(dup)

    def test_not_time_indexed(self) -> None:
        with pytest.raises(TypeError, match="DatetimeIndex"):
            validate_price_series(pd.Series([1.0, 2.0]))

    def test_non_numeric(self, prices) -> None:
        with pytest.raises(TypeError, match="numeric"):
            validate_price_series(prices.astype(str))


class TestTransforms:
    def test_log_price(self, prices) -> None:
        result = to_log_price(prices)
        assert result.name == "log_price"
        assert result.index.equals(prices.index)
        np.testing.assert_allclose(np.exp(result), prices)

    def test_log_returns_drop_first(self, prices) -> None:
        result = to_log_returns(prices)
        assert result.name == "log_return"
        assert result.index.equals(prices.index[1:])
        np.testing.assert_allclose(result.iloc[0], np.log(1.1))

    @pytest.mark.parametrize("scale", ["price", "log_price", "log_return"])
    def test_scale_round_trip_on_holdout_path(self, prices, scale) -> None:
        # transform the full path, then rebuild the tail from the last fit price
        scaled = to_model_scale(prices, scale).to_numpy()
        tail = scaled[-2:]
        rebuilt = from_model_scale(tail, scale, last_price=prices.iloc[1])
        np.testing.assert_allclose(rebuilt, prices.iloc[-2:].to_numpy())

    def test_price_scale_copies(self, prices) -> None:
        values = prices.to_numpy()
        result = from_model_scale(values, "price", last_price=1.0)
        result[0] = -1.0
        assert values[0] == 100.0

    def test_unknown_scale(self, prices) -> None:
        with pytest.raises(ValueError, match="Unknown model scale"):
            to_model_scale(prices, "returns")
        with pytest.raises(ValueError, match="Unknown model scale"):
            from_model_scale(np.ones(2), "returns", last_price=1.0)
