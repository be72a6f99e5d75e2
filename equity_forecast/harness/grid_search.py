"""Exhaustive grid search over candidate configurations by information criterion.

One routine serves every model family: the family supplies the fit function
and the criterion extractor, the search enumerates the grid in its canonical
order, records one score per candidate and returns the argmin.

Failed candidates (``FitFailure``, non-finite criterion, timeout) score
``+inf`` and never abort the search. Ties keep the first candidate in
canonical order, also when fits run on worker threads.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor, as_completed
import math
import threading
from typing import Any, Callable, Iterable

import pandas as pd

from equity_forecast.constants import GRID_SEARCH_PROGRESS_INTERVAL
from equity_forecast.exceptions import FitFailure, NoViableConfig
from equity_forecast.harness.criteria import CriterionFn, aic_criterion
from equity_forecast.harness.types import FitResult, GridSearchResult
from equity_forecast.utils import get_logger

logger = get_logger(__name__)

FitFn = Callable[[pd.Series, Any], FitResult]

# (fit_result or None, score, error message or None)
_Outcome = tuple[FitResult | None, float, str | None]


def _run_with_timeout(func: Callable[[], FitResult], timeout: float | None, config: Any) -> FitResult:
    """Run ``func`` in a single-use daemon thread and give up after ``timeout`` seconds.

    The abandoned thread is left to finish on its own; estimator iteration
    caps bound how long that takes.
    """
    if timeout is None:
        return func()

    outcome: dict[str, Any] = {}

    def _target() -> None:
        try:
            outcome["value"] = func()
        except BaseException as exc:  # re-raised in the calling thread
            outcome["error"] = exc

    worker = threading.Thread(target=_target, name=f"fit-{config}", daemon=True)
    worker.start()
    worker.join(timeout)
    if worker.is_alive():
        raise FitFailure(f"Fit timed out after {timeout:.1f}s", stage="fit", config=config)
    if "error" in outcome:
        raise outcome["error"]
    return outcome["value"]


def _evaluate_candidate(
    fit_range: pd.Series,
    config: Any,
    fit_fn: FitFn,
    criterion_fn: CriterionFn,
    timeout: float | None,
) -> _Outcome:
    """Fit one configuration and score it.

    Returns:
        Tuple of (fit result or None, score, error message or None).
    """
    try:
        fit_result = _run_with_timeout(lambda: fit_fn(fit_range, config), timeout, config)
    except FitFailure as exc:
        logger.debug("Candidate %s failed: %s", config, exc)
        return None, math.inf, str(exc)

    score = float(criterion_fn(fit_result))
    if not math.isfinite(score):
        msg = f"Non-finite criterion value {score}"
        logger.debug("Candidate %s rejected: %s", config, msg)
        return None, math.inf, msg
    return fit_result, score, None


def _evaluate_sequential(
    fit_range: pd.Series,
    configs: list[Any],
    fit_fn: FitFn,
    criterion_fn: CriterionFn,
    timeout: float | None,
) -> list[_Outcome]:
    """Evaluate candidates one after another in canonical order."""
    outcomes: list[_Outcome] = []
    for idx, config in enumerate(configs, 1):
        outcomes.append(_evaluate_candidate(fit_range, config, fit_fn, criterion_fn, timeout))
        if idx % GRID_SEARCH_PROGRESS_INTERVAL == 0:
            logger.info(f"Progress: {idx}/{len(configs)} candidates evaluated")
    return outcomes


def _evaluate_parallel(
    fit_range: pd.Series,
    configs: list[Any],
    fit_fn: FitFn,
    criterion_fn: CriterionFn,
    timeout: float | None,
    n_jobs: int,
) -> list[_Outcome]:
    """Evaluate candidates on worker threads; outcomes come back in canonical order."""
    outcomes: list[_Outcome | None] = [None] * len(configs)
    completed = 0
    with ThreadPoolExecutor(max_workers=n_jobs) as executor:
        future_to_position = {
            executor.submit(
                _evaluate_candidate, fit_range, config, fit_fn, criterion_fn, timeout
            ): position
            for position, config in enumerate(configs)
        }
        for future in as_completed(future_to_position):
            outcomes[future_to_position[future]] = future.result()
            completed += 1
            if completed % GRID_SEARCH_PROGRESS_INTERVAL == 0:
                logger.info(f"Progress: {completed}/{len(configs)} candidates evaluated")
    return [outcome for outcome in outcomes if outcome is not None]


def _validate_grid(configs: list[Any]) -> None:
    if not configs:
        raise ValueError("config_grid is empty; nothing to search.")
    seen: set[Any] = set()
    for config in configs:
        if config in seen:
            raise ValueError(f"config_grid contains duplicate configuration {config}")
        seen.add(config)


def grid_search(
    fit_range: pd.Series,
    config_grid: Iterable[Any],
    fit_fn: FitFn,
    criterion_fn: CriterionFn = aic_criterion,
    *,
    n_jobs: int = 1,
    timeout: float | None = None,
) -> GridSearchResult:
    """Fit every configuration of ``config_grid`` and select the criterion argmin.

    Args:
        fit_range: Series the candidates are fitted on (read-only, shared).
        config_grid: Finite iterable of hashable configurations; its iteration
            order is the canonical order used for tie-breaking.
        fit_fn: ``fit_fn(fit_range, config) -> FitResult``; raises ``FitFailure``
            for a candidate that cannot be fitted.
        criterion_fn: Extracts the score (lower is better) from a FitResult.
        n_jobs: Number of worker threads; 1 evaluates sequentially.
        timeout: Optional wall-clock limit per candidate in seconds; exceeding
            it counts as a ``FitFailure``.

    Returns:
        GridSearchResult with best config, its fit, the score table (``inf``
        for failed candidates) and the failure messages.

    Raises:
        ValueError: If the grid is empty, has duplicates, or n_jobs < 1.
        NoViableConfig: If every candidate failed.
    """
    configs = list(config_grid)
    _validate_grid(configs)
    if n_jobs < 1:
        raise ValueError(f"n_jobs must be >= 1, got {n_jobs}")
    if timeout is not None and timeout <= 0:
        raise ValueError(f"timeout must be positive, got {timeout}")

    logger.info(
        "Grid search over %d candidates on %d observations (n_jobs=%d)",
        len(configs),
        len(fit_range),
        n_jobs,
    )
    if n_jobs == 1:
        outcomes = _evaluate_sequential(fit_range, configs, fit_fn, criterion_fn, timeout)
    else:
        outcomes = _evaluate_parallel(fit_range, configs, fit_fn, criterion_fn, timeout, n_jobs)

    score_table: dict[Any, float] = {}
    failures: dict[Any, str] = {}
    best_config: Any = None
    best_fit: FitResult | None = None
    best_score = math.inf
    for config, (fit_result, score, error) in zip(configs, outcomes, strict=True):
        score_table[config] = score
        if error is not None:
            failures[config] = error
            continue
        # strict comparison keeps the first candidate among equal scores
        if score < best_score:
            best_config, best_fit, best_score = config, fit_result, score

    if best_fit is None:
        raise NoViableConfig(
            f"All {len(configs)} candidates failed to fit", stage="grid_search"
        )

    if failures:
        logger.warning("%d/%d candidates failed and were excluded", len(failures), len(configs))
    logger.info("Selected %s with criterion %.4f", best_config, best_score)
    return GridSearchResult(
        best_config=best_config,
        best_fit=best_fit,
        score_table=score_table,
        failures=failures,
    )


__all__ = ["FitFn", "grid_search"]
