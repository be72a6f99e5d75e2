"""Exploratory diagnostics: stationarity, autocorrelation and ARCH effect."""

from __future__ import annotations

from equity_forecast.analysis.arch_effect import (
    compute_arch_lm_test,
    compute_squared_acf,
    detect_heteroskedasticity,
)
from equity_forecast.analysis.autocorrelation import (
    compute_acf_pacf,
    effective_lags,
    ljung_box_test,
)
from equity_forecast.analysis.report import run_exploratory_analysis, save_exploratory_report
from equity_forecast.analysis.stationarity import (
    StationarityReport,
    adf_test,
    evaluate_stationarity,
    kpss_test,
)

__all__ = [
    "StationarityReport",
    "adf_test",
    "kpss_test",
    "evaluate_stationarity",
    "compute_acf_pacf",
    "effective_lags",
    "ljung_box_test",
    "compute_arch_lm_test",
    "compute_squared_acf",
    "detect_heteroskedasticity",
    "run_exploratory_analysis",
    "save_exploratory_report",
]
