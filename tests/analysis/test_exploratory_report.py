"""Tests for the exploratory report on a price series."""

from __future__ import annotations

import json

import pytest

from equity_forecast.analysis import run_exploratory_analysis, save_exploratory_report


def test_report_sections(price_series) -> None:
    report = run_exploratory_analysis(price_series, nlags=10)

    assert set(report) == {"summary", "stationarity", "autocorrelation", "arch_effect"}
    assert report["summary"]["price"]["n_obs"] == len(price_series)
    assert report["summary"]["log_return"]["n_obs"] == len(price_series) - 1
    assert set(report["stationarity"]) == {"log_price", "log_return"}
    assert isinstance(report["stationarity"]["log_return"]["stationary"], bool)
    assert report["autocorrelation"]["log_return"]["nlags"] == 10
    assert "lag_10" in report["autocorrelation"]["ljung_box"]
    assert "arch_lm" in report["arch_effect"]


def test_rejects_invalid_prices(price_series) -> None:
    prices = price_series.copy()
    prices.iloc[3] = -1.0
    with pytest.raises(ValueError, match="positive"):
        run_exploratory_analysis(prices)


def test_save_report(short_price_series, tmp_path) -> None:
    report = run_exploratory_analysis(short_price_series)
    path = save_exploratory_report(report, tmp_path / "analysis" / "report.json")

    assert path.exists()
    with open(path) as f:
        loaded = json.load(f)
    assert loaded["summary"]["price"]["start"] == short_price_series.index[0].strftime("%Y-%m-%d")
    assert isinstance(loaded["arch_effect"]["arch_effect_present"], bool)
