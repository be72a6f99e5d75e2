"""I/O utilities for loading and saving data files.

This module provides functions for:
- Loading DataFrames from CSV with validation
- NaN-safe JSON writing
- File system utilities (ensure directories exist)
"""

from __future__ import annotations

import json
import math
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from equity_forecast.utils.validation import (
    validate_dataframe_not_empty,
    validate_file_exists,
    validate_required_columns,
)

__all__ = [
    "ensure_output_dir",
    "load_dataframe",
    "save_json_pretty",
    "to_json_compatible",
]


def ensure_output_dir(path: Path) -> None:
    """Ensure parent directory exists for a given path.

    Creates parent directories if they don't exist. Useful for ensuring
    output directories exist before saving files.

    Args:
        path: File path whose parent directory should be created.
    """
    path.parent.mkdir(parents=True, exist_ok=True)


def load_dataframe(
    path: Path | str,
    *,
    date_columns: list[str] | None = None,
    required_columns: list[str] | set[str] | None = None,
    validate_not_empty: bool = True,
    sort_by: list[str] | None = None,
) -> pd.DataFrame:
    """Load a CSV file with date parsing, validation and sorting.

    Args:
        path: CSV file path.
        date_columns: Columns to convert to datetime64 type.
        required_columns: Columns that must exist (raises KeyError if missing).
        validate_not_empty: If True, raise ValueError if DataFrame is empty.
        sort_by: Columns to sort by after loading (e.g., ["date"]).

    Returns:
        Loaded and validated DataFrame.

    Raises:
        FileNotFoundError: If file doesn't exist.
        KeyError: If required columns are missing.
        ValueError: If DataFrame is empty and validate_not_empty=True.
    """
    path_obj = Path(path)
    validate_file_exists(path_obj, "Data file")

    try:
        df = pd.read_csv(path_obj)
    except pd.errors.EmptyDataError as e:
        raise ValueError(f"Dataset is empty: {path_obj}") from e

    for col in date_columns or []:
        if col in df.columns:
            df[col] = pd.to_datetime(df[col])

    if required_columns is not None:
        validate_required_columns(df, required_columns, df_name=path_obj.name)
    if validate_not_empty:
        validate_dataframe_not_empty(df, f"Data from {path_obj.name}")
    if sort_by is not None:
        df = df.sort_values(sort_by).reset_index(drop=True)
    return df


def to_json_compatible(value: Any) -> Any:
    """Recursively convert numpy/pandas values into plain JSON types.

    Non-finite floats become None so the output stays valid JSON.
    """
    if isinstance(value, dict):
        return {str(k): to_json_compatible(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_compatible(v) for v in value]
    if isinstance(value, np.ndarray):
        return [to_json_compatible(v) for v in value.tolist()]
    if isinstance(value, pd.Timestamp):
        return value.strftime("%Y-%m-%d")
    if isinstance(value, (np.bool_, bool)):
        return bool(value)
    if isinstance(value, (np.integer, int)):
        return int(value)
    if isinstance(value, (np.floating, float)):
        as_float = float(value)
        return as_float if math.isfinite(as_float) else None
    return value


def save_json_pretty(
    data: dict | list,
    output_path: Path | str,
    *,
    indent: int = 2,
    sort_keys: bool = False,
) -> None:
    """Save JSON with pretty formatting and automatic directory creation.

    Args:
        data: Dictionary or list to save as JSON.
        output_path: Path to save JSON file.
        indent: Indentation level for pretty printing.
        sort_keys: If True, sort dictionary keys alphabetically.

    Examples:
        Save metrics:
        >>> save_json_pretty(
        ...     {"mae": 0.123, "rmse": 0.456},
        ...     "results/metrics.json"
        ... )
    """
    path_obj = Path(output_path)
    ensure_output_dir(path_obj)
    with open(path_obj, "w") as f:
        json.dump(to_json_compatible(data), f, indent=indent, sort_keys=sort_keys)
