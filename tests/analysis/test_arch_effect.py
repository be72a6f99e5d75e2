"""Tests for ARCH-effect detection on returns."""

from __future__ import annotations

import math

import numpy as np
import pytest
from statsmodels.stats.diagnostic import het_arch

from equity_forecast.analysis import (
    compute_arch_lm_test,
    compute_squared_acf,
    detect_heteroskedasticity,
)


class TestArchLm:
    def test_detects_arch(self, arch_returns) -> None:
        result = compute_arch_lm_test(arch_returns.to_numpy(), lags=5)
        assert result["df"] == 5.0
        assert result["lm_stat"] > 0
        assert result["p_value"] < 0.001

    def test_white_noise_statistic_is_moderate(self, white_noise) -> None:
        result = compute_arch_lm_test(white_noise, lags=5)
        assert 0.0 <= result["lm_stat"] < 30.0
        assert 0.0 <= result["p_value"] <= 1.0

    def test_matches_statsmodels_het_arch(self, white_noise) -> None:
        values = white_noise.to_numpy()
        expected_lm, expected_p, _, _ = het_arch(values, nlags=4)

        result = compute_arch_lm_test(values, lags=4)

        assert result["lm_stat"] == pytest.approx(expected_lm, rel=1e-8)
        assert result["p_value"] == pytest.approx(expected_p, rel=1e-6)

    def test_constant_squared_residuals(self) -> None:
        result = compute_arch_lm_test(np.full(50, 1.0), lags=2)
        assert result["lm_stat"] == 0.0
        assert result["p_value"] == pytest.approx(1.0)

    def test_too_short(self) -> None:
        result = compute_arch_lm_test(np.array([0.1, -0.2, 0.3]), lags=5)
        assert math.isnan(result["lm_stat"])
        assert math.isnan(result["p_value"])

    def test_invalid_lags(self) -> None:
        with pytest.raises(ValueError, match="lags"):
            compute_arch_lm_test(np.ones(10), lags=0)


def test_squared_acf_lengths(arch_returns) -> None:
    assert len(compute_squared_acf(arch_returns, nlags=7)) == 7
    assert len(compute_squared_acf(np.array([0.5]), nlags=7)) == 0


class TestDetectHeteroskedasticity:
    def test_arch_returns(self, arch_returns) -> None:
        result = detect_heteroskedasticity(arch_returns)
        assert result["arch_effect_present"] is True
        assert result["acf_significant"] is True
        assert result["acf_squared"][0] > result["acf_significance_level"]

    def test_report_keys(self, white_noise) -> None:
        result = detect_heteroskedasticity(white_noise, lags=3, acf_lags=4)
        assert set(result) == {
            "arch_lm",
            "arch_effect_present",
            "acf_squared",
            "acf_significance_level",
            "acf_significant",
        }
        assert len(result["acf_squared"]) == 4
        assert result["arch_lm"]["df"] == 3.0
