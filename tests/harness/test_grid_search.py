"""Tests for the generic information-criterion grid search."""

from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from equity_forecast.exceptions import NoViableConfig
from equity_forecast.harness import (
    FitResult,
    bic_criterion,
    get_criterion,
    grid_search,
)

GRID_2X2 = [(0, 0), (0, 1), (1, 0), (1, 1)]


@pytest.fixture
def fit_range() -> pd.Series:
    return pd.Series(np.linspace(1.0, 2.0, 30), index=pd.bdate_range("2021-01-01", periods=30))


class TestSelection:
    def test_tie_breaks_on_first_canonical_config(self, fit_range, fake_estimator_cls) -> None:
        scores = dict(zip(GRID_2X2, [5.0, 3.0, 4.0, 3.0]))
        est = fake_estimator_cls(scores)

        best_config, best_fit, score_table = grid_search(fit_range, GRID_2X2, est.fit)

        assert best_config == (0, 1)
        assert best_fit.config == (0, 1)
        assert list(score_table) == GRID_2X2
        assert score_table == scores

    def test_every_config_is_fit_once_in_order(self, fit_range, fake_estimator_cls) -> None:
        est = fake_estimator_cls(dict(zip(GRID_2X2, [1.0, 2.0, 3.0, 4.0])))
        grid_search(fit_range, GRID_2X2, est.fit)
        assert est.fitted == GRID_2X2

    def test_custom_criterion(self, fit_range, fake_estimator_cls) -> None:
        est = fake_estimator_cls(dict(zip(GRID_2X2, [5.0, 3.0, 4.0, 3.0])))

        result = grid_search(
            fit_range, GRID_2X2, est.fit, lambda fr: -fr.aic
        )

        assert result.best_config == (0, 0)
        assert result.best_score == -5.0

    def test_bic_criterion(self, fit_range, fake_estimator_cls) -> None:
        est = fake_estimator_cls(dict(zip(GRID_2X2, [5.0, 3.0, 2.0, 3.0])))
        result = grid_search(fit_range, GRID_2X2, est.fit, bic_criterion)
        assert result.best_config == (1, 0)
        assert result.best_score == 3.0

    def test_get_criterion(self) -> None:
        assert get_criterion("AIC").__name__ == "aic_criterion"
        assert get_criterion("bic") is bic_criterion
        with pytest.raises(ValueError, match="Unsupported criterion"):
            get_criterion("hqic")


class TestFailures:
    def test_failed_candidates_score_infinity(self, fit_range, fake_estimator_cls) -> None:
        est = fake_estimator_cls(
            dict(zip(GRID_2X2, [5.0, 1.0, 4.0, 3.0])), failing={(0, 1)}
        )

        result = grid_search(fit_range, GRID_2X2, est.fit)

        assert result.best_config == (1, 1)
        assert math.isinf(result.score_table[(0, 1)])
        assert result.n_failed == 1
        assert "engineered failure" in result.failures[(0, 1)]

    def test_non_finite_criterion_is_a_failure(self, fit_range, fake_estimator_cls) -> None:
        est = fake_estimator_cls({"a": float("nan"), "b": 2.0, "c": float("-inf")})

        result = grid_search(fit_range, ["a", "b", "c"], est.fit)

        assert result.best_config == "b"
        assert math.isinf(result.score_table["a"]) and result.score_table["a"] > 0
        assert math.isinf(result.score_table["c"]) and result.score_table["c"] > 0
        assert set(result.failures) == {"a", "c"}

    def test_all_failing_raises_no_viable_config(self, fit_range, fake_estimator_cls) -> None:
        est = fake_estimator_cls({}, failing=set(GRID_2X2))

        with pytest.raises(NoViableConfig) as exc_info:
            grid_search(fit_range, GRID_2X2, est.fit)

        assert exc_info.value.stage == "grid_search"
        assert est.fitted == GRID_2X2

    def test_unexpected_errors_propagate(self, fit_range) -> None:
        def broken_fit(series: pd.Series, config: object) -> FitResult:
            raise TypeError("bug in fit function")

        with pytest.raises(TypeError, match="bug in fit function"):
            grid_search(fit_range, GRID_2X2, broken_fit)

    def test_timeout_counts_as_failure(self, fit_range, fake_estimator_cls) -> None:
        est = fake_estimator_cls(
            dict(zip(GRID_2X2, [1.0, 2.0, 3.0, 4.0])), delays={(0, 0): 1.0}
        )

        result = grid_search(fit_range, GRID_2X2, est.fit, timeout=0.2)

        assert result.best_config == (0, 1)
        assert math.isinf(result.score_table[(0, 0)])
        assert "timed out" in result.failures[(0, 0)]


class TestValidation:
    def test_empty_grid(self, fit_range, fake_estimator_cls) -> None:
        with pytest.raises(ValueError, match="empty"):
            grid_search(fit_range, [], fake_estimator_cls({}).fit)

    def test_duplicate_configs(self, fit_range, fake_estimator_cls) -> None:
        est = fake_estimator_cls({(0, 0): 1.0})
        with pytest.raises(ValueError, match="duplicate"):
            grid_search(fit_range, [(0, 0), (0, 0)], est.fit)

    @pytest.mark.parametrize("kwargs", [{"n_jobs": 0}, {"timeout": 0.0}, {"timeout": -1.0}])
    def test_invalid_options(self, fit_range, fake_estimator_cls, kwargs) -> None:
        est = fake_estimator_cls({(0, 0): 1.0})
        with pytest.raises(ValueError):
            grid_search(fit_range, [(0, 0)], est.fit, **kwargs)

    def test_accepts_generator_grid(self, fit_range, fake_estimator_cls) -> None:
        est = fake_estimator_cls({i: float(10 - i) for i in range(5)})
        result = grid_search(fit_range, (i for i in range(5)), est.fit)
        assert result.best_config == 4
        assert result.n_candidates == 5


class TestParallel:
    def test_parallel_matches_sequential(self, fit_range, fake_estimator_cls) -> None:
        scores = dict(zip(GRID_2X2, [5.0, 3.0, 4.0, 3.0]))
        # the first tied config finishes last
        delays = {(0, 1): 0.2}

        sequential = grid_search(fit_range, GRID_2X2, fake_estimator_cls(scores).fit)
        parallel = grid_search(
            fit_range,
            GRID_2X2,
            fake_estimator_cls(scores, delays=delays).fit,
            n_jobs=4,
        )

        assert parallel.best_config == sequential.best_config == (0, 1)
        assert list(parallel.score_table) == list(sequential.score_table)
        assert parallel.score_table == sequential.score_table

    def test_parallel_with_timeout(self, fit_range, fake_estimator_cls) -> None:
        est = fake_estimator_cls(
            dict(zip(GRID_2X2, [1.0, 2.0, 3.0, 4.0])), delays={(0, 0): 1.0}
        )

        result = grid_search(fit_range, GRID_2X2, est.fit, n_jobs=2, timeout=0.2)

        assert result.best_config == (0, 1)
        assert result.n_failed == 1
