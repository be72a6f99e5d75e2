"""Common plotting helpers shared by the study plots.

Figures are created through pyplot and always closed after saving so that
batch runs do not accumulate open figures.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any, Literal, cast

import matplotlib.dates as mdates
import matplotlib.pyplot as plt

from equity_forecast.constants import ACF_Z_CONF, PLOT_ALPHA_LIGHT, PLOT_DPI
from equity_forecast.utils import get_logger, save_plot

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.figure import Figure

logger = get_logger(__name__)
_DATE_AXIS_ROTATION = 45


def create_standard_figure(
    n_rows: int = 1,
    n_cols: int = 1,
    figsize: tuple[float, float] | None = None,
) -> tuple[Figure, Any]:
    """Create a pyplot figure and its axes (a single Axes or an array)."""
    if figsize is not None:
        fig, axes = plt.subplots(n_rows, n_cols, figsize=figsize)
    else:
        fig, axes = plt.subplots(n_rows, n_cols)
    return fig, axes


def save_figure(
    fig: Figure,
    output_path: str | Path,
    *,
    dpi: int = PLOT_DPI,
) -> Path:
    """Save ``fig`` with tight bounding box and close it.

    Returns:
        The written path.
    """
    plt.figure(fig.number)
    save_plot(output_path, dpi=dpi, bbox_inches="tight", close_after=True)
    return Path(output_path)


def format_date_axis(
    ax: Axes,
    *,
    rotation: float = _DATE_AXIS_ROTATION,
    ha: str = "right",
) -> None:
    """Concise auto-located date ticks, rotated for readability."""
    locator = mdates.AutoDateLocator()
    ax.xaxis.set_major_locator(locator)
    ax.xaxis.set_major_formatter(mdates.ConciseDateFormatter(locator))
    for label in ax.xaxis.get_majorticklabels():
        label.set_rotation(rotation)
        label.set_horizontalalignment(cast(Literal["left", "center", "right"], ha))


def add_confidence_bands(
    ax: Axes,
    se: float,
    z_score: float = ACF_Z_CONF,
    *,
    color: str = "red",
    linestyle: str = "--",
    linewidth: float = 1.0,
    label: str | None = None,
) -> None:
    """Horizontal bands at ±z_score * se."""
    ax.axhline(z_score * se, color=color, linestyle=linestyle, linewidth=linewidth, label=label)
    ax.axhline(-z_score * se, color=color, linestyle=linestyle, linewidth=linewidth)


def add_grid(ax: Axes, *, alpha: float = PLOT_ALPHA_LIGHT, linestyle: str = "--", **kwargs: Any) -> None:
    ax.grid(True, alpha=alpha, linestyle=linestyle, **kwargs)


def add_legend(
    ax: Axes,
    *,
    loc: str = "best",
    framealpha: float = 0.9,
    fontsize: int | str = 9,
    **kwargs: Any,
) -> None:
    ax.legend(loc=loc, framealpha=framealpha, fontsize=fontsize, **kwargs)


__all__ = [
    "add_confidence_bands",
    "add_grid",
    "add_legend",
    "create_standard_figure",
    "format_date_axis",
    "save_figure",
]
