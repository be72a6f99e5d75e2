"""Constants for the equity forecasting study."""

from __future__ import annotations

from datetime import datetime

# Re-export all paths from path.py for convenience
from equity_forecast.path import (  # noqa: F401
    COMPARISON_TABLE_FILE,
    EVALUATION_RESULTS_DIR,
    EVALUATION_SUMMARY_FILE,
    EXPLORATORY_REPORT_FILE,
    FORECAST_PLOT_TEMPLATE,
    FORECAST_TABLE_TEMPLATE,
    PLOTS_DIR,
    PRICE_CACHE_TEMPLATE,
    PRICE_SERIES_PLOT,
    RETURNS_ACF_PACF_PLOT,
    SCORE_TABLE_TEMPLATE,
    SQUARED_RETURNS_ACF_PACF_PLOT,
)

# ============================================================================
# DATA PIPELINE CONSTANTS
# ============================================================================

DEFAULT_TICKER: str = "AAPL"
DATA_FETCH_START_DATE = datetime(2016, 1, 1)
DATA_FETCH_END_DATE = datetime(2021, 1, 1)
# Calendar days a cached series may start after the window start (or end before
# the window end) and still count as covering it: weekends and market holidays
CACHE_EDGE_TOLERANCE_DAYS: int = 7

# Column name constants for data fetching and processing
YF_CLOSE_COLUMN: str = "Close"
YF_ADJ_CLOSE_COLUMN: str = "Adj Close"
NORMALIZED_DATE_COLUMN: str = "date"
NORMALIZED_ADJ_CLOSE_COLUMN: str = "adj_close"

# Model scales: the transform applied to prices before fitting
SCALE_PRICE: str = "price"
SCALE_LOG_PRICE: str = "log_price"
SCALE_LOG_RETURN: str = "log_return"
MODEL_SCALES: tuple[str, ...] = (SCALE_PRICE, SCALE_LOG_PRICE, SCALE_LOG_RETURN)

# ============================================================================
# EVALUATION HARNESS
# ============================================================================

# Last N trading days withheld from fitting
HOLDOUT_LENGTH_DEFAULT: int = 100
# Information criterion used to rank grid candidates ("aic" or "bic")
SELECTION_CRITERION_DEFAULT: str = "aic"
SUPPORTED_CRITERIA: tuple[str, ...] = ("aic", "bic")
GRID_SEARCH_N_JOBS_DEFAULT: int = 1
GRID_SEARCH_PROGRESS_INTERVAL: int = 10
# Two-sided z-value for 95% forecast intervals
FORECAST_INTERVAL_Z: float = 1.959963984540054
FORECAST_INTERVAL_ALPHA: float = 0.05

# Accuracy metric names, in report order
ACCURACY_METRIC_NAMES: tuple[str, ...] = ("me", "rmse", "mae", "mpe", "mape")
PERCENTAGE_METRIC_NAMES: tuple[str, ...] = ("mpe", "mape")

# ============================================================================
# MODEL PARAMETERS & GRIDS
# ============================================================================

# Model family names
ARIMA_FAMILY_NAME: str = "arima"
GARCH_FAMILY_NAME: str = "garch"
ADDITIVE_FAMILY_NAME: str = "additive"

# ARIMA grid on log prices: p, q in 0..6 with one difference
ARIMA_P_VALUES: tuple[int, ...] = tuple(range(7))
ARIMA_D_VALUES: tuple[int, ...] = (1,)
ARIMA_Q_VALUES: tuple[int, ...] = tuple(range(7))
ARIMA_MAXITER: int = 200
ARIMA_SCALE: str = SCALE_LOG_PRICE

# GARCH grid on log returns: p, q in 1..3
GARCH_P_VALUES: tuple[int, ...] = (1, 2, 3)
GARCH_Q_VALUES: tuple[int, ...] = (1, 2, 3)
GARCH_MAXITER: int = 500
# arch optimisers behave best on percentage returns
GARCH_RETURN_SCALE: float = 100.0
GARCH_MEAN_MODEL: str = "Constant"
GARCH_DISTRIBUTION: str = "normal"
GARCH_SCALE: str = SCALE_LOG_RETURN

# Additive structural model on prices
# trend: 0 = local level, 1 = random walk with drift, 2 = local linear trend
ADDITIVE_TREND_VALUES: tuple[int, ...] = (0, 1, 2)
ADDITIVE_TREND_SPECS: dict[int, str] = {
    0: "llevel",
    1: "rwdrift",
    2: "lltrend",
}
# seasonal period in trading days (0 = no seasonal component, 5 = week, 21 = month)
ADDITIVE_SEASONAL_VALUES: tuple[int, ...] = (0, 5, 21)
ADDITIVE_MAXITER: int = 200
ADDITIVE_SCALE: str = SCALE_PRICE

# ============================================================================
# EXPLORATORY ANALYSIS
# ============================================================================

STATIONARITY_DEFAULT_ALPHA: float = 0.05
ADF_AUTOLAG_DEFAULT: str = "AIC"
ACF_PACF_DEFAULT_LAGS: int = 30
ACF_PACF_MIN_LAGS: int = 1
LJUNG_BOX_LAGS_DEFAULT: tuple[int, ...] = (10, 20)
ARCH_LM_LAGS_DEFAULT: int = 5
ARCH_LM_DEFAULT_ALPHA: float = 0.05
SQUARED_ACF_LAGS_DEFAULT: int = 20
ACF_Z_CONF: float = 1.96

# ============================================================================
# VISUALIZATION CONSTANTS
# ============================================================================

# Plot styling defaults
PLOT_ALPHA_DEFAULT: float = 0.8
PLOT_ALPHA_LIGHT: float = 0.3
PLOT_ALPHA_FILL: float = 0.2
PLOT_DPI: int = 150
# Color constants for plots
COLOR_TRAIN: str = "#2E86AB"
COLOR_TEST: str = "#A23B72"
COLOR_ACTUAL: str = "#2E86AB"
COLOR_PREDICTION: str = "#F18F01"
COLOR_SPLIT_LINE: str = "red"
COLOR_CONFIDENCE: str = "red"
COLOR_ACF: str = "#1f77b4"
COLOR_PACF: str = "#ff7f0e"
# Figure size constants
FIGURE_SIZE_ACF_PACF: tuple[int, int] = (14, 4)
FIGURE_SIZE_SERIES: tuple[int, int] = (14, 6)
FIGURE_SIZE_FORECAST: tuple[int, int] = (12, 6)
# Font size constants
FONTSIZE_AXIS: int = 10
FONTSIZE_TITLE: int = 14
# Line width constants
LINEWIDTH_DEFAULT: float = 0.8
LINEWIDTH_BOLD: float = 1.5
# Number of fit-window observations shown before the holdout in forecast plots
FORECAST_PLOT_CONTEXT: int = 250
