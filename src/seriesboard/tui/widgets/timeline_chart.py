"""
Timeline Chart Widget

Plots the merged chart points of all active series with textual-plotext.
Each series is drawn as a line broken at every point where it has no
measurement, with a dot per measurement sized after the selection.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field

from textual.app import ComposeResult
from textual.widget import Widget
from textual_plotext import PlotextPlot

from seriesboard.core.render import PRIMARY_RADIUS, render_hint
from seriesboard.core.selection import SelectionController
from seriesboard.core.timeline import ChartPoint, chart_key
from seriesboard.models import DEFAULT_SERIES_COLOR, Series

logger = logging.getLogger(__name__)

# Dot markers by radius; unselected dots are hollow
FILLED_MARKERS = {PRIMARY_RADIUS: "◉"}
FILLED_MARKER = "●"
HOLLOW_MARKER = "∘"

# Maximum number of x-axis labels
MAX_TICKS = 6


def hex_to_rgb(color: str) -> tuple[int, int, int]:
    """Convert ``#rrggbb`` (or ``#rgb``) to an RGB tuple for plotext.

    Raises:
        ValueError: If the color is not a hex color
    """
    value = color.strip().lstrip("#")
    if len(value) == 3:
        value = "".join(c * 2 for c in value)
    if len(value) != 6:
        raise ValueError(f"Invalid hex color: {color!r}")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


def chart_color(color: str) -> tuple[int, int, int]:
    """Get the plot color of a series. Colors that are not hex fall back to the default."""
    try:
        return hex_to_rgb(color)
    except ValueError:
        logger.debug("Unsupported series color %r, using %s", color, DEFAULT_SERIES_COLOR)
        return hex_to_rgb(DEFAULT_SERIES_COLOR)


@dataclass(frozen=True)
class Dot:
    """One measurement marker."""

    x: int
    y: float
    marker: str


@dataclass(frozen=True)
class Trace:
    """Drawable form of one active series.

    Attributes:
        rank: Rank of the series
        label: Legend label
        color: Line and dot color
        segments: Runs of consecutive chart points that carry a value
        dots: Markers for every present value
    """

    rank: int
    label: str
    color: tuple[int, int, int]
    segments: list[tuple[list[int], list[float]]] = field(default_factory=list)
    dots: list[Dot] = field(default_factory=list)


def build_traces(
    points: Sequence[ChartPoint],
    series_by_rank: Mapping[int, Series],
    selection: SelectionController,
) -> list[Trace]:
    """Turn chart points into per-series traces.

    Points are placed at their index on the x-axis. A missing value ends the
    current segment; it is never plotted as zero.
    """
    traces: list[Trace] = []
    for rank in sorted(series_by_rank):
        series = series_by_rank[rank]
        segments: list[tuple[list[int], list[float]]] = []
        dots: list[Dot] = []
        xs: list[int] = []
        ys: list[float] = []
        for x, point in enumerate(points):
            value = point.value(rank)
            if value is None:
                if xs:
                    segments.append((xs, ys))
                    xs, ys = [], []
                continue
            xs.append(x)
            ys.append(value)
            hint = render_hint(point, rank, selection)
            if hint.filled:
                marker = FILLED_MARKERS.get(hint.radius, FILLED_MARKER)
            else:
                marker = HOLLOW_MARKER
            dots.append(Dot(x=x, y=value, marker=marker))
        if xs:
            segments.append((xs, ys))
        traces.append(
            Trace(
                rank=rank,
                label=f"{chart_key(rank)}: {series.name}",
                color=chart_color(series.display_color),
                segments=segments,
                dots=dots,
            )
        )
    return traces


def tick_positions(count: int, max_ticks: int = MAX_TICKS) -> list[int]:
    """Pick evenly spread indices for x-axis labels."""
    if count <= 0:
        return []
    if count <= max_ticks:
        return list(range(count))
    step = (count - 1) / (max_ticks - 1)
    return sorted({round(i * step) for i in range(max_ticks)})


class TimelineChart(Widget):
    """Chart of the merged timeline."""

    DEFAULT_CSS = """
    TimelineChart {
        height: 16;
    }
    """

    def __init__(
        self,
        *,
        name: str | None = None,
        id: str | None = None,
        classes: str | None = None,
    ) -> None:
        super().__init__(name=name, id=id, classes=classes)
        self._plot: PlotextPlot | None = None
        self._traces: list[Trace] = []

    @property
    def traces(self) -> list[Trace]:
        """Get the traces currently drawn."""
        return list(self._traces)

    def compose(self) -> ComposeResult:
        """Compose the widget layout."""
        self._plot = PlotextPlot()
        yield self._plot

    def show(
        self,
        points: Sequence[ChartPoint],
        series_by_rank: Mapping[int, Series],
        selection: SelectionController,
    ) -> None:
        """Redraw the chart.

        Args:
            points: Merged chart points ascending by instant
            series_by_rank: Active series keyed by rank
            selection: Current selection, for dot styling
        """
        self._traces = build_traces(points, series_by_rank, selection)
        if self._plot is None:
            return

        plt = self._plot.plt
        plt.clear_figure()
        if not points:
            plt.title("No measurements")
            self._plot.refresh()
            return

        for trace in self._traces:
            labelled = False
            for xs, ys in trace.segments:
                plt.plot(xs, ys, color=trace.color, label=None if labelled else trace.label)
                labelled = True
            by_marker: dict[str, tuple[list[int], list[float]]] = {}
            for dot in trace.dots:
                xs, ys = by_marker.setdefault(dot.marker, ([], []))
                xs.append(dot.x)
                ys.append(dot.y)
            for marker, (xs, ys) in by_marker.items():
                plt.scatter(xs, ys, color=trace.color, marker=marker)

        ticks = tick_positions(len(points))
        plt.xticks(ticks, [points[i].label for i in ticks])
        self._plot.refresh()
