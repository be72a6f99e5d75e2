"""Temporal fit/holdout split."""

from __future__ import annotations

import numbers

import pandas as pd

from equity_forecast.exceptions import InvalidSplit
from equity_forecast.harness.types import Split
from equity_forecast.utils import get_logger

logger = get_logger(__name__)


def split(series: pd.Series, holdout_length: int) -> Split:
    """Split ``series`` into a fit window and the last ``holdout_length`` observations.

    Order is preserved and nothing is shuffled: every fit timestamp precedes
    every holdout timestamp.

    Args:
        series: Ordered series to split.
        holdout_length: Number of trailing observations to withhold.

    Returns:
        ``Split(fit, holdout)``; unpacks as ``fit, holdout = split(...)``.

    Raises:
        InvalidSplit: If ``holdout_length`` is not an integer in ``(0, len(series))``.
    """
    if isinstance(holdout_length, bool) or not isinstance(holdout_length, numbers.Integral):
        raise InvalidSplit(
            f"holdout_length must be an integer, got {type(holdout_length).__name__}",
            stage="split",
        )
    holdout_length = int(holdout_length)
    n = len(series)
    if holdout_length <= 0 or holdout_length >= n:
        raise InvalidSplit(
            f"holdout_length must be in (0, {n}) for a series of length {n}, got {holdout_length}",
            stage="split",
        )

    cut = n - holdout_length
    fit = series.iloc[:cut].copy()
    holdout = series.iloc[cut:].copy()
    logger.debug("Split %d observations into fit=%d / holdout=%d", n, len(fit), len(holdout))
    return Split(fit=fit, holdout=holdout)


__all__ = ["split"]
