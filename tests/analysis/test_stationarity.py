"""Tests for ADF/KPSS stationarity checks."""

from __future__ import annotations

import numpy as np
import pandas as pd
import pytest

from equity_forecast.analysis import (
    StationarityReport,
    adf_test,
    evaluate_stationarity,
    kpss_test,
)
from equity_forecast.analysis.stationarity import _determine_stationarity


def _result(p_value: float) -> dict:
    return {"statistic": 0.0, "p_value": p_value, "lags": 1, "nobs": 100, "critical_values": None}


class TestTests:
    def test_adf_result_fields(self, white_noise) -> None:
        result = adf_test(white_noise)
        assert set(result) == {"statistic", "p_value", "lags", "nobs", "critical_values"}
        assert result["p_value"] < 0.01
        assert set(result["critical_values"]) == {"1%", "5%", "10%"}

    def test_kpss_rejects_random_walk(self, random_walk) -> None:
        result = kpss_test(random_walk)
        assert result["p_value"] <= 0.05
        assert result["nobs"] == 500

    def test_drops_nans(self, white_noise) -> None:
        series = white_noise.copy()
        series.iloc[:5] = np.nan
        assert adf_test(series)["nobs"] < 500

    def test_empty_series(self) -> None:
        with pytest.raises(ValueError, match="empty"):
            adf_test(pd.Series([], dtype=float))


class TestVerdict:
    @pytest.mark.parametrize(
        ("adf_p", "kpss_p", "expected"),
        [
            (0.01, 0.10, True),
            (0.20, 0.10, False),
            (0.01, 0.01, False),
            (0.01, float("nan"), True),
        ],
    )
    def test_combination(self, adf_p, kpss_p, expected) -> None:
        assert _determine_stationarity(_result(adf_p), _result(kpss_p), 0.05) is expected

    def test_white_noise_is_stationary(self, white_noise) -> None:
        report = evaluate_stationarity(white_noise)
        assert isinstance(report, StationarityReport)
        assert report.stationary is True

    def test_random_walk_is_not_stationary(self, random_walk) -> None:
        assert evaluate_stationarity(random_walk).stationary is False

    def test_to_dict(self, white_noise) -> None:
        payload = evaluate_stationarity(white_noise, alpha=0.1).to_dict()
        assert payload["alpha"] == 0.1
        assert set(payload) == {"stationary", "alpha", "adf", "kpss"}

    @pytest.mark.parametrize("alpha", [0.0, 1.0, -0.5])
    def test_invalid_alpha(self, white_noise, alpha) -> None:
        with pytest.raises(ValueError, match="alpha"):
            evaluate_stationarity(white_noise, alpha=alpha)
