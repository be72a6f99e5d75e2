"""Error kinds raised by the data loading and evaluation pipeline."""

from __future__ import annotations

from typing import Any


class HarnessError(Exception):
    """Base class for project errors carrying pipeline stage and config context."""

    def __init__(
        self,
        message: str,
        *,
        stage: str | None = None,
        config: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.stage = stage
        self.config = config

    def __str__(self) -> str:
        base = super().__str__()
        context = []
        if self.stage is not None:
            context.append(f"stage={self.stage}")
        if self.config is not None:
            context.append(f"config={self.config}")
        if not context:
            return base
        return f"{base} [{', '.join(context)}]"


class DataUnavailable(HarnessError, RuntimeError):
    """The price source could not supply the requested series."""


class InvalidSplit(HarnessError, ValueError):
    """The holdout length is not strictly between 0 and the series length."""


class FitFailure(HarnessError, RuntimeError):
    """One candidate configuration could not be fitted (non-convergence, timeout, ...)."""


class NoViableConfig(HarnessError, RuntimeError):
    """Every candidate of a grid search failed to fit."""


class ForecastFailure(HarnessError, RuntimeError):
    """A fitted model could not project forward over the requested horizon."""


class DivisionByZeroActual(HarnessError, ValueError):
    """A percentage metric was requested while an actual value is exactly zero."""


__all__ = [
    "HarnessError",
    "DataUnavailable",
    "InvalidSplit",
    "FitFailure",
    "NoViableConfig",
    "ForecastFailure",
    "DivisionByZeroActual",
]
