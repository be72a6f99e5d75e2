"""Tests for out-of-sample accuracy metrics."""

from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from equity_forecast.exceptions import DivisionByZeroActual
from equity_forecast.harness import (
    AccuracyReport,
    Forecast,
    accuracy,
    mean_absolute_error,
    mean_absolute_percentage_error,
    mean_error,
    mean_percentage_error,
    root_mean_squared_error,
)

HOLDOUT = [100.0, 110.0, 105.0]
FORECAST = [90.0, 120.0, 100.0]


class TestAccuracyScenario:
    def test_concrete_values(self) -> None:
        report = accuracy(FORECAST, HOLDOUT)

        # errors = holdout - forecast = [10, -10, 5]
        assert report.me == pytest.approx(5.0 / 3.0)
        assert report.mae == pytest.approx(25.0 / 3.0)
        assert report.rmse == pytest.approx(math.sqrt(225.0 / 3.0))
        assert report.mpe == pytest.approx(100.0 * np.mean([0.1, -10.0 / 110.0, 5.0 / 105.0]))
        assert report.mpe == pytest.approx(1.89, abs=0.005)
        assert report.mape == pytest.approx(8.28, abs=0.005)
        assert report.n_obs == 3
        assert report.undefined_metrics == ()

    def test_accepts_forecast_and_series(self) -> None:
        index = pd.bdate_range("2024-01-01", periods=3)
        fc = Forecast(mean=pd.Series(FORECAST, index=index))
        report = accuracy(fc, pd.Series(HOLDOUT, index=index))
        assert report.me == pytest.approx(5.0 / 3.0)

    def test_perfect_forecast_is_all_zero(self) -> None:
        report = accuracy(HOLDOUT, HOLDOUT)
        assert (report.me, report.rmse, report.mae, report.mpe, report.mape) == (
            0.0,
            0.0,
            0.0,
            0.0,
            0.0,
        )

    def test_standalone_metrics_match_report(self) -> None:
        report = accuracy(FORECAST, HOLDOUT)
        assert mean_error(FORECAST, HOLDOUT) == pytest.approx(report.me)
        assert mean_absolute_error(FORECAST, HOLDOUT) == pytest.approx(report.mae)
        assert root_mean_squared_error(FORECAST, HOLDOUT) == pytest.approx(report.rmse)
        assert mean_percentage_error(FORECAST, HOLDOUT) == pytest.approx(report.mpe)
        assert mean_absolute_percentage_error(FORECAST, HOLDOUT) == pytest.approx(report.mape)


class TestZeroActual:
    def test_percentage_metrics_undefined_by_default(self) -> None:
        report = accuracy([1.0, 1.0, 1.0], [0.0, 2.0, 1.0])

        assert report.me == pytest.approx(0.0)
        assert report.mae == pytest.approx(2.0 / 3.0)
        assert report.rmse == pytest.approx(math.sqrt(2.0 / 3.0))
        assert math.isnan(report.mpe)
        assert math.isnan(report.mape)
        assert report.undefined_metrics == ("mpe", "mape")
        assert not report.is_defined("mape")
        assert report.is_defined("rmse")

    def test_strict_raises(self) -> None:
        with pytest.raises(DivisionByZeroActual) as exc_info:
            accuracy([1.0, 1.0], [0.0, 2.0], strict=True)
        assert exc_info.value.stage == "accuracy"

    def test_standalone_percentage_metrics_raise(self) -> None:
        with pytest.raises(DivisionByZeroActual):
            mean_percentage_error([1.0, 1.0], [0.0, 2.0])
        with pytest.raises(DivisionByZeroActual):
            mean_absolute_percentage_error([1.0, 1.0], [2.0, 0.0])

    def test_zero_actual_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            mean_percentage_error([1.0], [0.0])


class TestValidation:
    def test_length_mismatch(self) -> None:
        with pytest.raises(ValueError, match="does not match"):
            accuracy([1.0, 2.0], [1.0, 2.0, 3.0])

    def test_empty(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            accuracy([], [])

    def test_non_finite(self) -> None:
        with pytest.raises(ValueError, match="finite"):
            accuracy([1.0, np.nan], [1.0, 2.0])


def test_report_to_dict() -> None:
    report = AccuracyReport(me=1.0, rmse=2.0, mae=1.5, mpe=0.1, mape=0.2, n_obs=4)
    assert report.to_dict() == {
        "me": 1.0,
        "rmse": 2.0,
        "mae": 1.5,
        "mpe": 0.1,
        "mape": 0.2,
        "n_obs": 4,
        "undefined_metrics": [],
    }
