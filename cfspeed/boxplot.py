"""Text box plots for summarising a series of speed measurements."""

from __future__ import annotations

import logging
import math

PLOT_WIDTH = 80

_log = logging.getLogger(__name__)


def _axis_labels(minima: float, maxima: float) -> str:
    middle = (minima + maxima) / 2.0
    return f"{minima:<10.2f}{middle:^{PLOT_WIDTH - 20}.2f}{maxima:>10.2f}"


def _segment(char: str, span: float, scale: float) -> str:
    width = span * scale
    if math.isnan(width) or width <= 0:
        return ""
    return char * int(width)


def render_plot(minima: float, q1: float, median: float, q3: float, maxima: float) -> str:
    """Render a two-line box plot: the box itself and an axis with labels."""
    value_range = maxima - minima
    quartiles = (q1 - minima, median - q1, q3 - median, maxima - q3)
    scale = PLOT_WIDTH / value_range if value_range != 0 else math.inf

    plot = "".join(
        (
            "|",
            _segment("-", quartiles[0], scale),
            _segment("=", quartiles[1], scale),
            ":",
            _segment("=", quartiles[2], scale),
            _segment("-", quartiles[3], scale),
            "|",
            "\n",
            _axis_labels(minima, maxima),
        )
    )

    _log.debug("fn input: %s, %s, %s, %s, %s", minima, q1, median, q3, maxima)
    _log.debug("quartiles: %s, %s, %s, %s", *quartiles)
    _log.debug("value range: %s", value_range)
    _log.debug("len of the plot: %d", len(plot))
    return plot