"""Building blocks for drawing simulation results on matplotlib axes."""

from __future__ import annotations

import math
import random
from collections.abc import Sequence
from typing import TYPE_CHECKING, Any

from .stats import normal_inv_cdf, standard_deviation

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.container import BarContainer

_BLACK = "#000000"
_RED = "#FF0000"
_BLUE = "#0492C2"
_ORANGE = "#FF8243"
_SECONDARY_ALPHA = 0.75


def alpha_hex(hex_color: str, alpha: float) -> str:
    """Turn ``#RRGGBB`` and an opacity in [0, 1] into ``#AARRGGBB``.

    ``AA`` is the transparency, so an opacity of 1 gives ``00``. The
    opacity is clamped to [0, 1].
    """
    if not (hex_color.startswith("#") and len(hex_color) == 7):
        raise ValueError("Expected format: #RRGGBB.")
    transparency = 1.0 - min(max(alpha, 0.0), 1.0)
    alpha_byte = int(math.floor(transparency * 255.0 + 0.5))
    return f"#{alpha_byte:02X}{hex_color[1:]}"


def _mpl_color(color: str) -> Any:
    """Convert an ``#AARRGGBB`` colour into an RGBA tuple matplotlib accepts."""
    if color.startswith("#") and len(color) == 9:
        transparency = int(color[1:3], 16) / 255.0
        red, green, blue = (int(color[i:i + 2], 16) / 255.0 for i in (3, 5, 7))
        return (red, green, blue, 1.0 - transparency)
    return color


def _label(caption: str | None) -> str:
    return caption if caption else "_nolegend_"


def histogram_params(data: Sequence[float]) -> tuple[list[float], list[int]]:
    """Return bin edges and bin counts for ``data``.

    The bin width follows Scott's rule, rounded to a "nice" value of
    1, 2, 3, 5 or 10 times a power of ten.
    """
    if not data:
        raise ValueError("cannot build a histogram of no data")

    n = len(data)
    sigma = standard_deviation(data)
    raw_bin_width = 3.5 * sigma / n ** (1.0 / 3.0)
    if not (raw_bin_width > 0.0 and math.isfinite(raw_bin_width)):
        raise ValueError("data has no spread to build a histogram from")

    pow_of_ten = 10.0 ** math.floor(math.log10(raw_bin_width))
    rel_size = raw_bin_width / pow_of_ten
    if rel_size < 1.5:
        bin_width = 1.0 * pow_of_ten
    elif rel_size < 2.5:
        bin_width = 2.0 * pow_of_ten
    elif rel_size < 4.0:
        bin_width = 3.0 * pow_of_ten
    elif rel_size < 7.5:
        bin_width = 5.0 * pow_of_ten
    else:
        bin_width = 10.0 * pow_of_ten

    low, high = min(data), max(data)
    left_edge = math.floor(low / bin_width) * bin_width
    bin_count = max(0, math.ceil((high - left_edge) / bin_width))
    right_edge = left_edge + bin_count * bin_width

    bin_edges = [left_edge + i * bin_width for i in range(bin_count + 1)]
    frequencies = [0] * bin_count
    for value in data:
        if left_edge <= value <= right_edge:
            index = math.floor((value - left_edge) / bin_width)
            if 0 <= index < bin_count:
                frequencies[index] += 1

    return bin_edges, frequencies


def histogram_plot(ax: Axes, sample: Sequence[float]) -> BarContainer:
    """Draw a histogram of ``sample`` on ``ax`` and return its bars."""
    bin_edges, frequencies = histogram_params(sample)
    widths = [right - left for left, right in zip(bin_edges, bin_edges[1:])]
    return ax.bar(
        bin_edges[:-1],
        frequencies,
        width=widths,
        align="edge",
        color=_BLUE,
        edgecolor=_BLACK,
        label="_nolegend_",
    )


def normal_distribution_qq(ax: Axes, x: Sequence[float], mean: float, stddev: float) -> None:
    """Draw a normal Q-Q plot of ``x`` next to one of a random normal sample."""
    n = len(x)
    if n == 0:
        return
    if n == 1:
        raise ValueError("a Q-Q plot needs at least two observations")

    start = 1.0 / n
    end = 1.0 - 1.0 / n
    quantile_step = (end - start) / (n - 1)

    quantile_vals = []
    random_sample = []
    for i in range(n):
        p = start + i * quantile_step
        random_sample.append(random.gauss(0.0, 1.0) * stddev + mean)
        quantile_vals.append(normal_inv_cdf(p, mean, stddev))

    sorted_x = sorted(x)
    sorted_samples = sorted(random_sample)

    x_extreme = [quantile_vals[0], quantile_vals[-1]]
    y_extreme = [sorted_x[0], sorted_x[-1]]
    y_extreme_2 = [sorted_samples[0], sorted_samples[-1]]

    ax.plot(x_extreme, y_extreme, color=_BLUE, linestyle="--", linewidth=1.5,
            label="Real sample")
    ax.plot(quantile_vals, sorted_x, color=_BLUE, linestyle="none", marker="o",
            markersize=4.0, label="_nolegend_")

    ax.plot(quantile_vals, sorted_samples, color=_ORANGE, linestyle="none", marker="o",
            markersize=4.0, label="_nolegend_")
    ax.plot(x_extreme, y_extreme_2, color=_ORANGE, linestyle="--", linewidth=1.5,
            label="Random sample")


def stem_segments(x: Sequence[float], y: Sequence[float]) -> tuple[list[float], list[float]]:
    """Return line coordinates drawing a stem from 0 to each ``(x, y)``.

    Stems are separated by NaN breaks.
    """
    x_segments: list[float] = []
    y_segments: list[float] = []
    for x_i, y_i in zip(x, y):
        x_segments.extend((x_i, x_i, math.nan))
        y_segments.extend((0.0, y_i, math.nan))
    return x_segments, y_segments


def stem_plot(
    ax: Axes,
    x: Sequence[float],
    y: Sequence[float],
    color: str | None = None,
    caption: str | None = None,
) -> None:
    """Draw a stem plot of ``y`` against ``x``."""
    col = color or _BLACK
    x_segments, y_segments = stem_segments(x, y)
    ax.plot(x_segments, y_segments, color=col, label="_nolegend_")
    ax.plot(x, y, color=col, linestyle="none", marker="o", label=_label(caption))
    ax.tick_params(axis="y", labelcolor=col)


def time_series_plot(ax: Axes, y: Sequence[float]) -> None:
    """Draw ``y`` against the time steps 0, 1, 2, ..."""
    ax.plot(list(range(len(y))), y)


def _re_scaled(ax: Axes, y1: Sequence[float], y2: Sequence[float]) -> tuple[list[float], Axes]:
    """Map ``y2`` onto the range of ``y1`` and add a secondary axis for ``y2``."""
    if len(y1) != len(y2):
        raise ValueError("both series must have the same length")
    if not y1:
        raise ValueError("cannot rescale empty series")

    y1_min, y1_max = min(y1), max(y1)
    y2_min, y2_max = min(y2), max(y2)
    y2_range = y2_max - y2_min
    if y2_range == 0.0:
        raise ValueError("the second series is constant and cannot be rescaled")
    scale_factor = (y1_max - y1_min) / y2_range

    y2_scaled = [(value - y2_min) * scale_factor + y1_min for value in y2]

    margin = 0.05
    c1 = 1.0 - margin / 2.0
    c2 = 1.0 + margin / 2.0
    ax.set_ylim(y1_min * c1, y1_max * c2)

    secondary = ax.twinx()
    secondary.set_ylim(y2_min, y2_max)
    return y2_scaled, secondary


def compare_ts_plot(
    ax: Axes,
    x: Sequence[float],
    y1: Sequence[float],
    y2: Sequence[float],
    color1: str | None = None,
    caption1: str | None = None,
    color2: str | None = None,
    caption2: str | None = None,
) -> Axes:
    """Draw two time series of different units on one axes.

    ``y2`` is rescaled onto the range of ``y1``; the returned secondary
    axis carries ``y2``'s own scale.
    """
    col1 = color1 or _BLACK
    col2 = color2 or _RED

    ax.plot(x, y1, color=col1, linestyle="-", linewidth=2.0, label=_label(caption1))
    ax.tick_params(axis="y", labelcolor=col1)

    faded_col2 = _mpl_color(alpha_hex(col2, _SECONDARY_ALPHA))
    y2_scaled, secondary = _re_scaled(ax, y1, y2)
    ax.plot(x, y2_scaled, color=faded_col2, linestyle="-", linewidth=1.5,
            label=_label(caption2))
    secondary.tick_params(axis="y", labelcolor=col2)
    return secondary


def compare_stem_plot(
    ax: Axes,
    x: Sequence[float],
    y1: Sequence[float],
    y2: Sequence[float],
    color1: str | None = None,
    caption1: str | None = None,
    color2: str | None = None,
    caption2: str | None = None,
) -> Axes:
    """Draw two stem plots of different units on one axes.

    ``y2`` is rescaled onto the range of ``y1``; the returned secondary
    axis carries ``y2``'s own scale.
    """
    col1 = color1 or _BLACK
    col2 = color2 or _RED

    x_segments, y_segments = stem_segments(x, y1)
    ax.plot(x_segments, y_segments, color=col1, label="_nolegend_")
    ax.plot(x, y1, color=col1, linestyle="none", marker="o", label=_label(caption1))
    ax.tick_params(axis="y", labelcolor=col1)

    y2_scaled, secondary = _re_scaled(ax, y1, y2)
    x_segments, y_segments = stem_segments(x, y2_scaled)
    faded_col2 = _mpl_color(alpha_hex(col2, _SECONDARY_ALPHA))
    ax.plot(x_segments, y_segments, color=faded_col2, label="_nolegend_")
    ax.plot(x, y2_scaled, color=faded_col2, linestyle="none", marker="o",
            label=_label(caption2))
    secondary.tick_params(axis="y", labelcolor=col2)
    return secondary