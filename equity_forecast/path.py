"""File and directory paths for the equity forecasting study."""

from __future__ import annotations

from pathlib import Path

# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent

# ============================================================================
# BASE DIRECTORIES
# ============================================================================

DATA_DIR = PROJECT_ROOT / "data"
RESULTS_DIR = PROJECT_ROOT / "results"
PLOTS_DIR = PROJECT_ROOT / "plots"

# ============================================================================
# DATA - File paths
# ============================================================================

# Cached download of the adjusted close series (file name formatted with ticker)
PRICE_CACHE_TEMPLATE = str(DATA_DIR / "{ticker}_adj_close.csv")

# ============================================================================
# RESULTS - Organized by pipeline step
# ============================================================================

ANALYSIS_RESULTS_DIR = RESULTS_DIR / "analysis"
EXPLORATORY_REPORT_FILE = ANALYSIS_RESULTS_DIR / "exploratory_report.json"

EVALUATION_RESULTS_DIR = RESULTS_DIR / "evaluation"
EVALUATION_SUMMARY_FILE = EVALUATION_RESULTS_DIR / "summary.json"
COMPARISON_TABLE_FILE = EVALUATION_RESULTS_DIR / "comparison.csv"
# Template for per-family score tables; formatted with the family name
SCORE_TABLE_TEMPLATE = str(EVALUATION_RESULTS_DIR / "score_table_{family}.csv")
# Template for per-family forecasts; formatted with the family name
FORECAST_TABLE_TEMPLATE = str(EVALUATION_RESULTS_DIR / "forecast_{family}.csv")

# ============================================================================
# PLOTS
# ============================================================================

PRICE_SERIES_PLOT = PLOTS_DIR / "price_series.png"
RETURNS_ACF_PACF_PLOT = PLOTS_DIR / "returns_acf_pacf.png"
SQUARED_RETURNS_ACF_PACF_PLOT = PLOTS_DIR / "squared_returns_acf_pacf.png"
# Template for forecast-vs-actual plots; formatted with the family name
FORECAST_PLOT_TEMPLATE = str(PLOTS_DIR / "forecast_{family}.png")
