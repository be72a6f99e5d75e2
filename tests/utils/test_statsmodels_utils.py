"""Tests for statsmodels warning suppression."""

from __future__ import annotations

import warnings

from statsmodels.tools.sm_exceptions import ConvergenceWarning

from equity_forecast.utils import statsmodels_quiet, suppress_statsmodels_warnings


class TestStatsmodelsQuiet:
    def test_silences_convergence_warnings(self) -> None:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            with statsmodels_quiet():
                warnings.warn("optimizer stalled", ConvergenceWarning, stacklevel=1)
                warnings.warn("overflow in exp", RuntimeWarning, stacklevel=1)
        assert caught == []

    def test_silences_frequency_messages(self) -> None:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            with statsmodels_quiet():
                warnings.warn("No frequency information was provided", UserWarning, stacklevel=1)
        assert caught == []

    def test_filters_restored_after_block(self) -> None:
        before = list(warnings.filters)
        with statsmodels_quiet():
            pass
        assert list(warnings.filters) == before

    def test_other_warnings_pass_through(self) -> None:
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            with statsmodels_quiet():
                warnings.warn("something else", DeprecationWarning, stacklevel=1)
        assert len(caught) == 1


def test_suppress_statsmodels_warnings_adds_filters() -> None:
    with warnings.catch_warnings():
        before = len(warnings.filters)
        suppress_statsmodels_warnings()
        assert len(warnings.filters) > before
