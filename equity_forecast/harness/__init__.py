"""Model-agnostic evaluation harness: split, grid search, forecast, accuracy."""

from __future__ import annotations

from equity_forecast.harness.criteria import aic_criterion, bic_criterion, get_criterion
from equity_forecast.harness.forecast import forecast
from equity_forecast.harness.grid_search import grid_search
from equity_forecast.harness.metrics import (
    accuracy,
    mean_absolute_error,
    mean_absolute_percentage_error,
    mean_error,
    mean_percentage_error,
    root_mean_squared_error,
)
from equity_forecast.harness.pipeline import (
    FamilyEvaluation,
    FamilyOutcome,
    ModelFamily,
    comparison_table,
    evaluate_families,
    evaluate_family,
)
from equity_forecast.harness.results import (
    build_evaluation_summary,
    forecast_to_dataframe,
    save_evaluation_results,
    score_table_to_dataframe,
)
from equity_forecast.harness.scales import forecast_to_price
from equity_forecast.harness.split import split
from equity_forecast.harness.types import (
    AccuracyReport,
    CandidateConfig,
    FitResult,
    Forecast,
    GridSearchResult,
    ModelEstimator,
    Split,
)

__all__ = [
    # Types
    "AccuracyReport",
    "CandidateConfig",
    "FitResult",
    "Forecast",
    "GridSearchResult",
    "ModelEstimator",
    "Split",
    # Core operations
    "split",
    "grid_search",
    "forecast",
    "accuracy",
    # Criteria
    "aic_criterion",
    "bic_criterion",
    "get_criterion",
    # Metrics
    "mean_error",
    "mean_absolute_error",
    "root_mean_squared_error",
    "mean_percentage_error",
    "mean_absolute_percentage_error",
    # Pipeline
    "ModelFamily",
    "FamilyEvaluation",
    "FamilyOutcome",
    "evaluate_family",
    "evaluate_families",
    "comparison_table",
    "forecast_to_price",
    # Results
    "build_evaluation_summary",
    "forecast_to_dataframe",
    "save_evaluation_results",
    "score_table_to_dataframe",
]
