"""Download functions for fetching adjusted close prices from yfinance."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

import pandas as pd
import yfinance as yf

from equity_forecast.constants import (
    CACHE_EDGE_TOLERANCE_DAYS,
    DATA_FETCH_END_DATE,
    DATA_FETCH_START_DATE,
    NORMALIZED_ADJ_CLOSE_COLUMN,
    NORMALIZED_DATE_COLUMN,
    PRICE_CACHE_TEMPLATE,
    YF_ADJ_CLOSE_COLUMN,
    YF_CLOSE_COLUMN,
)
from equity_forecast.data_preparation import validate_price_series
from equity_forecast.exceptions import DataUnavailable
from equity_forecast.utils import ensure_output_dir, get_logger, load_dataframe

logger = get_logger(__name__)


def get_date_range() -> tuple[datetime, datetime]:
    """Return the configured historical download window."""
    return DATA_FETCH_START_DATE, DATA_FETCH_END_DATE


def default_cache_file(ticker: str) -> Path:
    """Return the CSV cache path used for ``ticker``."""
    return Path(PRICE_CACHE_TEMPLATE.format(ticker=ticker.strip().upper()))


def _validate_ticker_input(ticker: str) -> None:
    """Validate ticker symbol input.

    Raises:
        ValueError: If ticker is empty or only whitespace.
    """
    if not ticker or not ticker.strip():
        raise ValueError("Ticker symbol must be a non-empty string")


def _validate_date_range(start_date: datetime, end_date: datetime) -> None:
    """Validate the date range for download.

    Raises:
        ValueError: If start_date >= end_date.
    """
    if start_date >= end_date:
        msg = f"Invalid date range: start_date {start_date} >= end_date {end_date}"
        raise ValueError(msg)


def _download_yfinance_data(
    ticker: str,
    start_date: datetime,
    end_date: datetime,
) -> pd.DataFrame:
    """Download raw data from yfinance with a clear fallback.

    Tries ``yf.download`` first. If the result is empty or raises, falls back
    to ``Ticker.history``. Always exposes a ``date`` column regardless of
    index name.

    Returns:
        DataFrame with dividend/split adjusted OHLCV data and a date column.
    """
    hist: pd.DataFrame
    try:
        hist = yf.download(
            ticker, start=start_date, end=end_date, progress=False, auto_adjust=True
        )
        if hist is None or getattr(hist, "empty", True):
            raise ValueError("yf.download returned empty data")
    except Exception as exc:
        logger.debug("yf.download failed for %s (%s); falling back to Ticker.history", ticker, exc)
        yf_ticker = yf.Ticker(ticker)
        hist = yf_ticker.history(start=start_date, end=end_date, actions=False, auto_adjust=True)

    if hist is None or not isinstance(hist, pd.DataFrame):
        return pd.DataFrame()

    hist = hist.copy()

    # Handle MultiIndex columns from yf.download() (e.g., ('Close', 'AAPL'))
    if isinstance(hist.columns, pd.MultiIndex):
        hist.columns = hist.columns.get_level_values(0)

    if NORMALIZED_DATE_COLUMN not in hist.columns:
        hist[NORMALIZED_DATE_COLUMN] = hist.index
    return hist.reset_index(drop=True)


def _select_adjusted_close(hist: pd.DataFrame) -> pd.Series:
    """Return the adjusted close column from a yfinance frame.

    With ``auto_adjust=True`` yfinance reports adjusted prices as ``Close``;
    older payloads expose a separate ``Adj Close`` column which wins when present.
    """
    if YF_ADJ_CLOSE_COLUMN in hist.columns:
        column = YF_ADJ_CLOSE_COLUMN
    elif YF_CLOSE_COLUMN in hist.columns:
        column = YF_CLOSE_COLUMN
    else:
        raise KeyError(f"No close column in downloaded data: {list(hist.columns)}")

    dates = pd.to_datetime(hist[NORMALIZED_DATE_COLUMN])
    if getattr(dates.dt, "tz", None) is not None:
        dates = dates.dt.tz_localize(None)
    series = pd.Series(
        pd.to_numeric(hist[column], errors="coerce").to_numpy(dtype=float),
        index=pd.DatetimeIndex(dates.dt.normalize(), name=NORMALIZED_DATE_COLUMN),
        name=NORMALIZED_ADJ_CLOSE_COLUMN,
    )
    series = series.dropna()
    series = series[~series.index.duplicated(keep="last")]
    return series.sort_index()


def download_price_history(
    ticker: str,
    start_date: datetime,
    end_date: datetime,
) -> pd.DataFrame:
    """Download and validate raw price history for ``ticker``.

    Raises:
        DataUnavailable: If inputs are invalid, the download fails, or the data
            does not overlap the requested window.
    """
    try:
        _validate_ticker_input(ticker)
        _validate_date_range(start_date, end_date)
    except ValueError as exc:
        raise DataUnavailable(str(exc), stage="download") from exc

    try:
        hist = _download_yfinance_data(ticker, start_date, end_date)
    except Exception as exc:
        logger.error("Error downloading data for ticker %s: %s", ticker, exc)
        raise DataUnavailable(f"Download failed for {ticker}: {exc}", stage="download") from exc

    if hist.empty:
        raise DataUnavailable(f"Empty data received for ticker {ticker}", stage="download")

    dates = pd.to_datetime(hist[NORMALIZED_DATE_COLUMN])
    if getattr(dates.dt, "tz", None) is not None:
        dates = dates.dt.tz_localize(None)
    if dates.min() > pd.Timestamp(end_date) or dates.max() < pd.Timestamp(start_date):
        raise DataUnavailable(
            f"Data for ticker {ticker} outside requested range: [{dates.min()}, {dates.max()}]",
            stage="download",
        )

    logger.info(
        "Downloaded %d rows of data for %s between %s and %s",
        len(hist),
        ticker,
        start_date.date(),
        end_date.date(),
    )
    return hist


def _read_cached_series(cache_file: Path) -> pd.Series:
    """Read a cached adjusted close series written by ``_write_cached_series``."""
    df = load_dataframe(
        cache_file,
        date_columns=[NORMALIZED_DATE_COLUMN],
        required_columns=[NORMALIZED_DATE_COLUMN, NORMALIZED_ADJ_CLOSE_COLUMN],
        sort_by=[NORMALIZED_DATE_COLUMN],
    )
    return pd.Series(
        df[NORMALIZED_ADJ_CLOSE_COLUMN].astype(float).to_numpy(),
        index=pd.DatetimeIndex(df[NORMALIZED_DATE_COLUMN], name=NORMALIZED_DATE_COLUMN),
        name=NORMALIZED_ADJ_CLOSE_COLUMN,
    )


def _slice_cached_window(
    series: pd.Series, start_date: datetime, end_date: datetime
) -> pd.Series | None:
    """Return the part of a cached series inside [start_date, end_date).

    Returns None when the cache does not span the window, so the caller
    downloads it again.
    """
    if series.empty:
        return None
    tolerance = pd.Timedelta(days=CACHE_EDGE_TOLERANCE_DAYS)
    start = pd.Timestamp(start_date)
    end = pd.Timestamp(end_date)
    if series.index[0] > start + tolerance or series.index[-1] < end - tolerance:
        return None
    return series[(series.index >= start) & (series.index < end)]


def _write_cached_series(series: pd.Series, cache_file: Path) -> None:
    """Persist an adjusted close series as a two-column CSV."""
    ensure_output_dir(cache_file)
    frame = series.rename(NORMALIZED_ADJ_CLOSE_COLUMN).to_frame()
    frame.index.name = NORMALIZED_DATE_COLUMN
    frame.to_csv(cache_file)
    logger.info("Cached %d prices to %s", len(series), cache_file)


def load_price_series(
    ticker: str,
    start_date: datetime | None = None,
    end_date: datetime | None = None,
    *,
    cache_file: Path | str | None = None,
    refresh: bool = False,
) -> pd.Series:
    """Return the daily adjusted close series for ``ticker``.

    Reads ``cache_file`` when it exists and spans the requested window (unless
    ``refresh``), slicing it to ``[start_date, end_date)``. Otherwise downloads
    from yfinance and overwrites the cache.

    Args:
        ticker: Ticker symbol.
        start_date: Window start; defaults to the configured start date.
        end_date: Window end; defaults to the configured end date.
        cache_file: CSV cache path; ``None`` disables caching.
        refresh: Ignore an existing cache and download again.

    Returns:
        Validated price series with a strictly increasing DatetimeIndex.

    Raises:
        DataUnavailable: If the series cannot be obtained or fails validation.
    """
    default_start, default_end = get_date_range()
    start = start_date or default_start
    end = end_date or default_end
    cache_path = Path(cache_file) if cache_file is not None else None

    series = None
    if cache_path is not None and cache_path.exists() and not refresh:
        logger.info("Loading cached prices for %s from %s", ticker, cache_path)
        try:
            cached = _read_cached_series(cache_path)
        except (KeyError, ValueError) as exc:
            raise DataUnavailable(f"Unreadable price cache {cache_path}: {exc}", stage="load") from exc
        series = _slice_cached_window(cached, start, end)
        if series is None:
            logger.info(
                "Cache %s does not cover %s -> %s, downloading again",
                cache_path,
                start.date(),
                end.date(),
            )

    if series is None:
        hist = download_price_history(ticker, start, end)
        try:
            series = _select_adjusted_close(hist)
        except KeyError as exc:
            raise DataUnavailable(str(exc), stage="download") from exc
        if cache_path is not None:
            _write_cached_series(series, cache_path)

    try:
        validate_price_series(series)
    except (TypeError, ValueError) as exc:
        raise DataUnavailable(f"Invalid price series for {ticker}: {exc}", stage="load") from exc

    logger.info(
        "Loaded %d adjusted closes for %s (%s → %s)",
        len(series),
        ticker,
        series.index[0].date(),
        series.index[-1].date(),
    )
    return series
