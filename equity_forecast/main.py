"""CLI entry point: load prices, run diagnostics, compare the model families.

Usage::

    python -m equity_forecast.main --ticker AAPL --holdout 100
"""

from __future__ import annotations

import argparse
from datetime import datetime
from pathlib import Path
import sys
from typing import Any, Sequence

# Add project root to Python path for direct execution
_script_dir = Path(__file__).parent
_project_root = _script_dir.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

from equity_forecast.analysis import run_exploratory_analysis, save_exploratory_report
from equity_forecast.config_logging import setup_logging
from equity_forecast.constants import (
    ADDITIVE_FAMILY_NAME,
    ARIMA_FAMILY_NAME,
    DATA_FETCH_END_DATE,
    DATA_FETCH_START_DATE,
    DEFAULT_TICKER,
    EXPLORATORY_REPORT_FILE,
    FORECAST_PLOT_TEMPLATE,
    GARCH_FAMILY_NAME,
    GRID_SEARCH_N_JOBS_DEFAULT,
    HOLDOUT_LENGTH_DEFAULT,
    PLOTS_DIR,
    PRICE_SERIES_PLOT,
    RETURNS_ACF_PACF_PLOT,
    SELECTION_CRITERION_DEFAULT,
    SQUARED_RETURNS_ACF_PACF_PLOT,
    SUPPORTED_CRITERIA,
)
from equity_forecast.data_fetching import default_cache_file, load_price_series
from equity_forecast.data_preparation import to_log_returns
from equity_forecast.exceptions import DataUnavailable
from equity_forecast.harness import (
    FamilyOutcome,
    comparison_table,
    evaluate_families,
    save_evaluation_results,
)
from equity_forecast.models import default_families
from equity_forecast.utils import get_logger
from equity_forecast.visualization import plot_acf_pacf, plot_forecast, plot_price_series

logger = get_logger(__name__)

_FAMILY_CHOICES = (ARIMA_FAMILY_NAME, GARCH_FAMILY_NAME, ADDITIVE_FAMILY_NAME)


def _parse_date(value: str) -> datetime:
    try:
        return datetime.strptime(value, "%Y-%m-%d")
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Expected a YYYY-MM-DD date, got {value!r}") from exc


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments.

    Returns:
        Parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Compare ARIMA, GARCH and additive forecasts of a stock's adjusted close"
    )
    parser.add_argument("--ticker", default=DEFAULT_TICKER, help="Ticker symbol")
    parser.add_argument(
        "--start",
        type=_parse_date,
        default=DATA_FETCH_START_DATE,
        help="First date of the download window (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--end",
        type=_parse_date,
        default=DATA_FETCH_END_DATE,
        help="End of the download window, exclusive (YYYY-MM-DD)",
    )
    parser.add_argument(
        "--holdout",
        type=int,
        default=HOLDOUT_LENGTH_DEFAULT,
        help="Number of trailing trading days withheld for evaluation",
    )
    parser.add_argument(
        "--criterion",
        choices=SUPPORTED_CRITERIA,
        default=SELECTION_CRITERION_DEFAULT,
        help="Information criterion used to select each family's configuration",
    )
    parser.add_argument(
        "--families",
        nargs="+",
        choices=_FAMILY_CHOICES,
        default=list(_FAMILY_CHOICES),
        help="Model families to evaluate",
    )
    parser.add_argument(
        "--n-jobs",
        type=int,
        default=GRID_SEARCH_N_JOBS_DEFAULT,
        help="Worker threads per grid search",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Wall-clock limit per candidate fit in seconds",
    )
    parser.add_argument(
        "--cache-file",
        type=Path,
        default=None,
        help="CSV cache of the price series (defaults to data/<TICKER>_adj_close.csv)",
    )
    parser.add_argument("--refresh", action="store_true", help="Ignore the cache and download again")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=None,
        help="Directory for results and plots (defaults to results/ and plots/)",
    )
    parser.add_argument("--no-plots", action="store_true", help="Skip plot generation")
    parser.add_argument(
        "--strict-accuracy",
        action="store_true",
        help="Fail instead of reporting undefined percentage metrics",
    )
    parser.add_argument("--log-level", default="INFO", help="Logging level")
    return parser.parse_args(argv)


def _generate_plots(
    prices: Any,
    outcomes: list[FamilyOutcome],
    args: argparse.Namespace,
) -> None:
    if args.output_dir is None:
        price_plot = PRICE_SERIES_PLOT
        returns_plot = RETURNS_ACF_PACF_PLOT
        squared_plot = SQUARED_RETURNS_ACF_PACF_PLOT
        plots_dir = PLOTS_DIR
    else:
        plots_dir = args.output_dir / "plots"
        price_plot = plots_dir / PRICE_SERIES_PLOT.name
        returns_plot = plots_dir / RETURNS_ACF_PACF_PLOT.name
        squared_plot = plots_dir / SQUARED_RETURNS_ACF_PACF_PLOT.name

    returns = to_log_returns(prices)
    plot_price_series(prices, price_plot, holdout_length=args.holdout, ticker=args.ticker)
    plot_acf_pacf(returns, returns_plot, title=f"{args.ticker} log returns")
    plot_acf_pacf(returns**2, squared_plot, title=f"{args.ticker} squared log returns")

    for outcome in outcomes:
        if outcome.evaluation is None:
            continue
        name = Path(FORECAST_PLOT_TEMPLATE.format(family=outcome.family)).name
        plot_forecast(outcome.evaluation, plots_dir / name)


def run(args: argparse.Namespace) -> list[FamilyOutcome]:
    """Run the full study for parsed arguments and return the family outcomes."""
    cache_file = args.cache_file if args.cache_file is not None else default_cache_file(args.ticker)
    prices = load_price_series(
        args.ticker, args.start, args.end, cache_file=cache_file, refresh=args.refresh
    )

    logger.info("Running exploratory analysis…")
    report = run_exploratory_analysis(prices)
    report_path = (
        EXPLORATORY_REPORT_FILE
        if args.output_dir is None
        else args.output_dir / EXPLORATORY_REPORT_FILE.name
    )
    save_exploratory_report(report, report_path)

    logger.info("Evaluating model families: %s", ", ".join(args.families))
    outcomes = evaluate_families(
        prices,
        args.holdout,
        default_families(args.families),
        criterion=args.criterion,
        n_jobs=args.n_jobs,
        timeout=args.timeout,
        strict_accuracy=args.strict_accuracy,
    )

    metadata = {
        "ticker": args.ticker,
        "start": args.start.strftime("%Y-%m-%d"),
        "end": args.end.strftime("%Y-%m-%d"),
        "holdout_length": args.holdout,
        "criterion": args.criterion,
        "n_obs": len(prices),
    }
    save_evaluation_results(outcomes, output_dir=args.output_dir, metadata=metadata)

    if not args.no_plots:
        _generate_plots(prices, outcomes, args)

    logger.info("Comparison:\n%s", comparison_table(outcomes).to_string())
    return outcomes


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI function. Returns 0 when at least one family was evaluated."""
    args = parse_args(argv)
    setup_logging(args.log_level)

    logger.info("=" * 60)
    logger.info("EQUITY FORECAST STUDY - %s", args.ticker)
    logger.info("=" * 60)

    try:
        outcomes = run(args)
    except DataUnavailable as e:
        logger.error(f"✗ Price data unavailable: {e}")
        raise

    n_ok = sum(outcome.succeeded for outcome in outcomes)
    logger.info("=" * 60)
    logger.info("Study complete: %d/%d families evaluated", n_ok, len(outcomes))
    logger.info("=" * 60)
    return 0 if n_ok else 1


if __name__ == "__main__":
    sys.exit(main())
