"""End-to-end evaluation of model families on one price series.

Each family is run through split -> grid search -> forecast -> accuracy with
explicit inputs and outputs. Families are independent: a family whose search
or forecast fails is reported as failed and the others still run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence

import numpy as np
import pandas as pd

from equity_forecast.constants import (
    ACCURACY_METRIC_NAMES,
    GRID_SEARCH_N_JOBS_DEFAULT,
    SELECTION_CRITERION_DEFAULT,
)
from equity_forecast.data_preparation import to_model_scale
from equity_forecast.exceptions import ForecastFailure, NoViableConfig
from equity_forecast.harness.criteria import get_criterion
from equity_forecast.harness.forecast import forecast
from equity_forecast.harness.grid_search import grid_search
from equity_forecast.harness.metrics import accuracy
from equity_forecast.harness.scales import forecast_to_price
from equity_forecast.harness.split import split
from equity_forecast.harness.types import (
    AccuracyReport,
    Forecast,
    GridSearchResult,
    ModelEstimator,
    Split,
)
from equity_forecast.utils import get_logger, log_series_summary

logger = get_logger(__name__)


@dataclass(frozen=True)
class ModelFamily:
    """One model family: its estimator, candidate grid and fitting scale."""

    name: str
    estimator: ModelEstimator
    grid: tuple[Any, ...]
    scale: str


@dataclass(frozen=True)
class FamilyEvaluation:
    """Everything produced by evaluating one family."""

    family: str
    scale: str
    split: Split
    search: GridSearchResult
    model_forecast: Forecast
    price_forecast: Forecast
    report: AccuracyReport

    @property
    def best_config(self) -> Any:
        return self.search.best_config


@dataclass(frozen=True)
class FamilyOutcome:
    """Evaluation of one family, or the error that stopped it."""

    family: str
    evaluation: FamilyEvaluation | None = None
    error: NoViableConfig | ForecastFailure | None = None

    @property
    def succeeded(self) -> bool:
        return self.evaluation is not None

    @property
    def stage(self) -> str | None:
        return None if self.error is None else self.error.stage


def evaluate_family(
    prices: pd.Series,
    holdout_length: int,
    family: ModelFamily,
    *,
    criterion: str = SELECTION_CRITERION_DEFAULT,
    n_jobs: int = GRID_SEARCH_N_JOBS_DEFAULT,
    timeout: float | None = None,
    strict_accuracy: bool = False,
) -> FamilyEvaluation:
    """Select, forecast and score one model family on the price holdout.

    The price series is split first; only the fit window is transformed to
    the family's scale, so nothing from the holdout reaches the estimator.

    Args:
        prices: Validated price series.
        holdout_length: Number of trailing observations withheld.
        family: Family to evaluate.
        criterion: Selection criterion name ("aic" or "bic").
        n_jobs: Worker threads for the grid search.
        timeout: Optional per-candidate fit timeout in seconds.
        strict_accuracy: Raise instead of reporting undefined percentage metrics.

    Returns:
        FamilyEvaluation with the search result, both forecasts and the report.

    Raises:
        InvalidSplit: If the holdout length is invalid.
        NoViableConfig: If no candidate of the grid could be fitted.
        ForecastFailure: If the selected model cannot forecast the holdout.
    """
    parts = split(prices, holdout_length)
    fit_scaled = to_model_scale(parts.fit, family.scale)
    criterion_fn = get_criterion(criterion)

    logger.info(
        f"Evaluating {family.name} on {family.scale} "
        f"({len(family.grid)} candidates, criterion={criterion})"
    )
    search = grid_search(
        fit_scaled,
        family.grid,
        family.estimator.fit,
        criterion_fn,
        n_jobs=n_jobs,
        timeout=timeout,
    )

    horizon = len(parts.holdout)
    model_forecast = forecast(search.best_fit, horizon, index=parts.holdout.index)
    last_price = float(parts.fit.iloc[-1])
    price_forecast = forecast_to_price(model_forecast, family.scale, last_price)
    components = [
        part
        for part in (price_forecast.mean, price_forecast.lower, price_forecast.upper)
        if part is not None
    ]
    if not all(np.all(np.isfinite(part.to_numpy(dtype=float))) for part in components):
        raise ForecastFailure(
            f"{family.name} forecast or its interval overflows on the price scale",
            stage="forecast",
            config=search.best_config,
        )

    report = accuracy(price_forecast, parts.holdout, strict=strict_accuracy)
    logger.info(
        f"{family.name} best={search.best_config} "
        f"RMSE={report.rmse:.4f} MAE={report.mae:.4f} MAPE={report.mape:.4f}"
    )
    return FamilyEvaluation(
        family=family.name,
        scale=family.scale,
        split=parts,
        search=search,
        model_forecast=model_forecast,
        price_forecast=price_forecast,
        report=report,
    )


def evaluate_families(
    prices: pd.Series,
    holdout_length: int,
    families: Iterable[ModelFamily],
    **kwargs: Any,
) -> list[FamilyOutcome]:
    """Evaluate several families on the same split.

    ``NoViableConfig`` and ``ForecastFailure`` only fail their own family.
    ``InvalidSplit`` is raised before any family runs.

    Args:
        prices: Validated price series.
        holdout_length: Number of trailing observations withheld.
        families: Families to evaluate, in report order.
        **kwargs: Forwarded to :func:`evaluate_family`.

    Returns:
        One FamilyOutcome per family, in input order.
    """
    parts = split(prices, holdout_length)
    log_series_summary(parts.fit, parts.holdout, logger_instance=logger)

    outcomes: list[FamilyOutcome] = []
    for family in families:
        try:
            evaluation = evaluate_family(prices, holdout_length, family, **kwargs)
        except (NoViableConfig, ForecastFailure) as exc:
            logger.error(f"{family.name} evaluation failed: {exc}")
            outcomes.append(FamilyOutcome(family=family.name, error=exc))
            continue
        outcomes.append(FamilyOutcome(family=family.name, evaluation=evaluation))
    return outcomes


def comparison_table(outcomes: Sequence[FamilyOutcome]) -> pd.DataFrame:
    """Side-by-side accuracy of every family, indexed by family name.

    Failed families keep a row with NaN metrics, their error and stage.
    """
    rows: list[dict[str, Any]] = []
    for outcome in outcomes:
        row: dict[str, Any] = {"family": outcome.family}
        evaluation = outcome.evaluation
        if evaluation is not None:
            row["status"] = "ok"
            row["scale"] = evaluation.scale
            row["best_config"] = str(evaluation.best_config)
            row["criterion"] = evaluation.search.best_score
            row.update({name: getattr(evaluation.report, name) for name in ACCURACY_METRIC_NAMES})
            row["n_obs"] = evaluation.report.n_obs
            row["error"] = None
        else:
            row["status"] = "failed"
            row["scale"] = None
            row["best_config"] = None
            row["criterion"] = np.nan
            row.update({name: np.nan for name in ACCURACY_METRIC_NAMES})
            row["n_obs"] = 0
            row["error"] = f"{outcome.stage}: {outcome.error}"
        rows.append(row)
    return pd.DataFrame(rows).set_index("family")


__all__ = [
    "FamilyEvaluation",
    "FamilyOutcome",
    "ModelFamily",
    "comparison_table",
    "evaluate_families",
    "evaluate_family",
]
