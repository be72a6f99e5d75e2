"""Utility functions for validation, I/O, metrics and logging.

This package provides modular utilities organized by functionality:
- validation: DataFrame, file, series and time-index validation
- io: CSV loading, JSON read/write
- metrics: Log returns, residuals, chi-square p-values
- logging_utils: Series summaries and plot saving
- statsmodels_utils: Warning suppression around statsmodels fits
"""

from __future__ import annotations

from equity_forecast.config_logging import get_logger

# I/O utilities
from equity_forecast.utils.io import (
    ensure_output_dir,
    load_dataframe,
    save_json_pretty,
    to_json_compatible,
)

# Logging utilities
from equity_forecast.utils.logging_utils import log_series_summary, save_plot

# Metrics utilities
from equity_forecast.utils.metrics import chi2_sf, compute_log_returns, compute_residuals

# Statsmodels utilities
from equity_forecast.utils.statsmodels_utils import (
    statsmodels_quiet,
    suppress_statsmodels_warnings,
)

# Validation utilities
from equity_forecast.utils.validation import (
    validate_dataframe_not_empty,
    validate_file_exists,
    validate_required_columns,
    validate_series,
    validate_time_index,
)

__all__ = [
    "get_logger",
    # Validation
    "validate_dataframe_not_empty",
    "validate_file_exists",
    "validate_required_columns",
    "validate_series",
    "validate_time_index",
    # I/O
    "ensure_output_dir",
    "load_dataframe",
    "save_json_pretty",
    "to_json_compatible",
    # Metrics
    "chi2_sf",
    "compute_log_returns",
    "compute_residuals",
    # Logging
    "log_series_summary",
    "save_plot",
    # Statsmodels
    "statsmodels_quiet",
    "suppress_statsmodels_warnings",
]
