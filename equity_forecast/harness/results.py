"""Tabulate and persist evaluation results."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

import numpy as np
import pandas as pd

from equity_forecast.constants import (
    COMPARISON_TABLE_FILE,
    EVALUATION_RESULTS_DIR,
    EVALUATION_SUMMARY_FILE,
    FORECAST_TABLE_TEMPLATE,
    SCORE_TABLE_TEMPLATE,
)
from equity_forecast.harness.pipeline import FamilyEvaluation, FamilyOutcome, comparison_table
from equity_forecast.harness.types import GridSearchResult
from equity_forecast.utils import ensure_output_dir, get_logger, save_json_pretty

logger = get_logger(__name__)


def _config_params(config: Any) -> dict[str, Any]:
    as_dict = getattr(config, "as_dict", None)
    if callable(as_dict):
        return dict(as_dict())
    return {}


def score_table_to_dataframe(result: GridSearchResult) -> pd.DataFrame:
    """Convert a grid search score table to a DataFrame in canonical order.

    Configuration fields are flattened into ``param_*`` columns when the
    configuration exposes ``as_dict()``. Failed candidates keep their ``inf``
    score, no rank and their error message.

    Returns:
        DataFrame with columns: score, rank, selected, error, param_*, config.
    """
    rows: list[dict[str, Any]] = []
    for config, score in result.score_table.items():
        row: dict[str, Any] = {
            "config": str(config),
            "score": float(score),
            "selected": config == result.best_config,
            "error": result.failures.get(config),
        }
        row.update({f"param_{k}": v for k, v in _config_params(config).items()})
        rows.append(row)

    df = pd.DataFrame(rows)
    finite_scores = df["score"].where(np.isfinite(df["score"]))
    df["rank"] = finite_scores.rank(method="first").astype("Int64")

    front = ["score", "rank", "selected", "error"]
    param_cols = [c for c in df.columns if c.startswith("param_")]
    other_cols = [c for c in df.columns if c not in front + param_cols]
    return df.loc[:, front + param_cols + other_cols]


def forecast_to_dataframe(evaluation: FamilyEvaluation) -> pd.DataFrame:
    """Holdout prices next to the price-scale forecast of one family."""
    df = evaluation.price_forecast.to_frame()
    df.insert(0, "actual", evaluation.split.holdout.to_numpy(dtype=float))
    df["error"] = df["actual"] - df["mean"]
    df.index.name = "date"
    return df


def _evaluation_summary(evaluation: FamilyEvaluation) -> dict[str, Any]:
    search = evaluation.search
    return {
        "status": "ok",
        "scale": evaluation.scale,
        "best_config": str(search.best_config),
        "best_params": _config_params(search.best_config),
        "criterion_value": search.best_score,
        "n_candidates": search.n_candidates,
        "n_failed": search.n_failed,
        "fit_start": evaluation.split.fit.index[0],
        "fit_end": evaluation.split.fit.index[-1],
        "holdout_start": evaluation.split.holdout.index[0],
        "holdout_end": evaluation.split.holdout.index[-1],
        "accuracy": evaluation.report.to_dict(),
    }


def build_evaluation_summary(
    outcomes: Sequence[FamilyOutcome],
    *,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Build a JSON-serialisable summary of all family outcomes."""
    families: dict[str, Any] = {}
    for outcome in outcomes:
        if outcome.evaluation is not None:
            families[outcome.family] = _evaluation_summary(outcome.evaluation)
        else:
            families[outcome.family] = {
                "status": "failed",
                "stage": outcome.stage,
                "error": str(outcome.error),
            }
    summary: dict[str, Any] = dict(metadata or {})
    summary["families"] = families
    return summary


def save_evaluation_results(
    outcomes: Sequence[FamilyOutcome],
    *,
    output_dir: Path | None = None,
    metadata: dict[str, Any] | None = None,
) -> dict[str, Path]:
    """Save the comparison table, per-family tables and a JSON summary.

    Args:
        outcomes: Outcomes returned by ``evaluate_families``.
        output_dir: Target directory. Defaults to the evaluation results directory.
        metadata: Extra run information stored at the top of the summary.

    Returns:
        Mapping of artefact name to written path.
    """
    if output_dir is None:
        comparison_path = COMPARISON_TABLE_FILE
        summary_path = EVALUATION_SUMMARY_FILE
        target_dir = EVALUATION_RESULTS_DIR
    else:
        target_dir = Path(output_dir)
        comparison_path = target_dir / COMPARISON_TABLE_FILE.name
        summary_path = target_dir / EVALUATION_SUMMARY_FILE.name

    written: dict[str, Path] = {}
    ensure_output_dir(comparison_path)
    comparison_table(outcomes).to_csv(comparison_path)
    written["comparison"] = comparison_path

    for outcome in outcomes:
        if outcome.evaluation is None:
            continue
        score_path = target_dir / Path(SCORE_TABLE_TEMPLATE.format(family=outcome.family)).name
        score_table_to_dataframe(outcome.evaluation.search).to_csv(score_path, index=False)
        written[f"scores_{outcome.family}"] = score_path

        forecast_path = target_dir / Path(FORECAST_TABLE_TEMPLATE.format(family=outcome.family)).name
        forecast_to_dataframe(outcome.evaluation).to_csv(forecast_path)
        written[f"forecast_{outcome.family}"] = forecast_path

    save_json_pretty(build_evaluation_summary(outcomes, metadata=metadata), summary_path)
    written["summary"] = summary_path

    logger.info(f"Saved evaluation results for {len(outcomes)} families to {target_dir}")
    return written


__all__ = [
    "build_evaluation_summary",
    "forecast_to_dataframe",
    "save_evaluation_results",
    "score_table_to_dataframe",
]
