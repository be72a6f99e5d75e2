"""Logging utilities for the project.

Provides functions for logging series summaries and saving plots.
"""

from __future__ import annotations

import logging
from pathlib import Path

import pandas as pd

from equity_forecast.config_logging import get_logger
from equity_forecast.utils.io import ensure_output_dir

__all__ = [
    "log_series_summary",
    "save_plot",
]


def _log_date_range_from_index(
    series: pd.Series, label: str, logger_instance: logging.Logger
) -> None:
    """Log date range from datetime index."""
    if not isinstance(series.index, pd.DatetimeIndex) or series.empty:
        return
    start_date = series.index.min()
    end_date = series.index.max()
    logger_instance.info(f"{label} period: {start_date.date()} → {end_date.date()}")


def _log_series_statistics(series: pd.Series, label: str, logger_instance: logging.Logger) -> None:
    """Log basic statistics for a series."""
    logger_instance.info(
        f"{label} statistics - Mean: {series.mean():.6f}, "
        f"Std: {series.std():.6f}, "
        f"Min: {series.min():.6f}, "
        f"Max: {series.max():.6f}"
    )


def log_series_summary(
    fit_series: pd.Series,
    holdout_series: pd.Series,
    *,
    logger_instance: logging.Logger | None = None,
) -> None:
    """Log summary statistics for the fit and holdout windows.

    Args:
        fit_series: Fit window with datetime index.
        holdout_series: Holdout window with datetime index.
        logger_instance: Optional logger instance. If None, uses get_logger().
    """
    if logger_instance is None:
        logger_instance = get_logger(__name__)

    logger_instance.info(f"Fit window: {len(fit_series)} observations")
    _log_date_range_from_index(fit_series, "Fit", logger_instance)

    logger_instance.info(f"Holdout window: {len(holdout_series)} observations")
    _log_date_range_from_index(holdout_series, "Holdout", logger_instance)

    _log_series_statistics(fit_series, "Fit", logger_instance)


def save_plot(
    output_path: Path | str,
    *,
    dpi: int = 300,
    bbox_inches: str = "tight",
    close_after: bool = True,
) -> None:
    """Save the current matplotlib plot to file.

    Args:
        output_path: Path to save the plot.
        dpi: Resolution in dots per inch. Default is 300.
        bbox_inches: Bounding box mode passed to savefig. Default is 'tight'.
        close_after: If True, close the plot after saving. Default is True.
    """
    import matplotlib.pyplot as plt

    path_obj = Path(output_path)
    ensure_output_dir(path_obj)

    plt.savefig(path_obj, dpi=dpi, bbox_inches=bbox_inches)

    logger = get_logger(__name__)
    logger.info(f"Plot saved to {path_obj}")

    if close_after:
        plt.close()
