"""Statsmodels utilities for the model estimators.

Provides a context manager that silences the frequent, uninformative warnings
statsmodels emits while fitting state-space models on business-day series
(missing index frequency, convergence chatter). Convergence problems the
estimators care about are checked explicitly on the fitted results.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator
import warnings

from statsmodels.tools.sm_exceptions import ConvergenceWarning, ValueWarning

__all__ = ["suppress_statsmodels_warnings", "statsmodels_quiet"]


def suppress_statsmodels_warnings() -> None:
    """Suppress common statsmodels warnings for state-space models.

    Warning categories suppressed:
        - UserWarning from statsmodels module
        - No supported index available warnings
        - Date index has been provided warnings
        - Frequency information warnings

    Notes:
        - This function modifies the global warnings filter
        - Use ``statsmodels_quiet()`` to scope the filters to a block
    """
    warnings.filterwarnings("ignore", category=UserWarning, module="statsmodels")
    warnings.filterwarnings("ignore", message=".*No supported index is available.*")
    warnings.filterwarnings("ignore", message=".*date index has been provided.*")
    warnings.filterwarnings("ignore", message=".*frequency information.*")


@contextmanager
def statsmodels_quiet() -> Iterator[None]:
    """Scope ``suppress_statsmodels_warnings`` plus convergence chatter to a block."""
    with warnings.catch_warnings():
        suppress_statsmodels_warnings()
        warnings.simplefilter("ignore", category=ConvergenceWarning)
        warnings.simplefilter("ignore", category=ValueWarning)
        warnings.simplefilter("ignore", category=RuntimeWarning)
        yield
