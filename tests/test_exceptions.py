"""Tests for the project error hierarchy."""

from __future__ import annotations

import pytest

from equity_forecast.exceptions import (
    DataUnavailable,
    DivisionByZeroActual,
    FitFailure,
    ForecastFailure,
    HarnessError,
    InvalidSplit,
    NoViableConfig,
)


@pytest.mark.parametrize(
    ("error_cls", "builtin"),
    [
        (DataUnavailable, RuntimeError),
        (InvalidSplit, ValueError),
        (FitFailure, RuntimeError),
        (NoViableConfig, RuntimeError),
        (ForecastFailure, RuntimeError),
        (DivisionByZeroActual, ValueError),
    ],
)
def test_hierarchy(error_cls, builtin) -> None:
    err = error_cls("boom")
    assert isinstance(err, HarnessError)
    assert isinstance(err, builtin)


def test_context_in_message() -> None:
    err = FitFailure("did not converge", stage="fit", config=(1, 1, 0))
    assert err.stage == "fit"
    assert err.config == (1, 1, 0)
    assert str(err) == "did not converge [stage=fit, config=(1, 1, 0)]"


def test_message_without_context() -> None:
    assert str(NoViableConfig("nothing fitted")) == "nothing fitted"
