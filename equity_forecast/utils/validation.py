"""Validation utilities for DataFrames, files, and series.

This module provides validation functions for:
- DataFrame validation (non-empty, required columns)
- File existence validation
- Numeric series validation
- Time index validation (strictly increasing, no duplicates)
"""

from __future__ import annotations

from pathlib import Path

import pandas as pd

__all__ = [
    "validate_dataframe_not_empty",
    "validate_required_columns",
    "validate_file_exists",
    "validate_series",
    "validate_time_index",
]


def validate_file_exists(file_path: Path, file_name: str | None = None) -> None:
    """Validate that a file exists.

    Args:
        file_path: Path to the file to check.
        file_name: Optional name of the file for error message.
            If None, uses the file path.

    Raises:
        FileNotFoundError: If file doesn't exist.
    """
    if not file_path.exists():
        if file_name is None:
            file_name = str(file_path)
        msg = f"{file_name} not found: {file_path}"
        raise FileNotFoundError(msg)


def validate_dataframe_not_empty(df: pd.DataFrame, name: str = "DataFrame") -> None:
    """Validate that DataFrame is not empty.

    Args:
        df: DataFrame to validate.
        name: Name of the DataFrame for error messages. Default is 'DataFrame'.

    Raises:
        ValueError: If DataFrame is empty.
    """
    if df.empty:
        msg = f"{name} DataFrame is empty"
        raise ValueError(msg)


def validate_required_columns(
    df: pd.DataFrame,
    required_columns: set[str] | list[str],
    df_name: str = "DataFrame",
) -> None:
    """Validate that DataFrame contains required columns.

    Args:
        df: DataFrame to validate.
        required_columns: Set or list of required column names.
        df_name: Name of the DataFrame for error messages. Default is 'DataFrame'.

    Raises:
        KeyError: If any required column is missing.
    """
    required_set = set(required_columns)
    missing_columns = required_set - set(df.columns)
    if missing_columns:
        msg = f"Missing required columns in {df_name}: {sorted(missing_columns)}"
        raise KeyError(msg)


def validate_series(name: str, s: pd.Series) -> None:
    """Validate that a pandas Series meets requirements for time series modeling.

    Args:
        name: Name of the series (used in error messages).
        s: Series to validate.

    Raises:
        ValueError: If series is empty or contains NaN values.
        TypeError: If series is not numeric.
    """
    if s.empty:
        raise ValueError(f"{name} is empty.")
    if not pd.api.types.is_numeric_dtype(s):
        raise TypeError(f"{name} must be numeric.")
    if s.isna().any():
        raise ValueError(f"{name} contains NaNs; fill or drop them before calling.")


def validate_time_index(name: str, s: pd.Series) -> None:
    """Validate that a series is indexed by strictly increasing, unique timestamps.

    Args:
        name: Name of the series (used in error messages).
        s: Series to validate.

    Raises:
        TypeError: If the index is not a DatetimeIndex.
        ValueError: If timestamps are duplicated or not strictly increasing.
    """
    if not isinstance(s.index, pd.DatetimeIndex):
        raise TypeError(f"{name} must be indexed by a DatetimeIndex.")
    if s.index.has_duplicates:
        duplicates = s.index[s.index.duplicated()].unique()
        raise ValueError(f"{name} has duplicate timestamps: {list(duplicates[:5])}")
    if not s.index.is_monotonic_increasing:
        raise ValueError(f"{name} timestamps must be strictly increasing.")
