"""Tests for TUI widgets."""

from __future__ import annotations

import pytest

from seriesboard.core.selection import SelectionController
from seriesboard.core.timeline import merge_chart
from seriesboard.models import DEFAULT_SERIES_COLOR
from seriesboard.tui.screens.dashboard import EMPTY_CELL, format_cell
from seriesboard.tui.widgets.timeline_chart import (
    FILLED_MARKER,
    HOLLOW_MARKER,
    TimelineChart,
    build_traces,
    chart_color,
    hex_to_rgb,
    tick_positions,
)


class TestHexToRgb:
    """Tests for hex_to_rgb."""

    def test_long_form(self) -> None:
        assert hex_to_rgb("#61dafb") == (0x61, 0xDA, 0xFB)

    def test_short_form(self) -> None:
        assert hex_to_rgb("#f00") == (255, 0, 0)

    @pytest.mark.parametrize("value", ["", "#12345", "blue"])
    def test_invalid(self, value: str) -> None:
        with pytest.raises(ValueError):
            hex_to_rgb(value)


class TestChartColor:
    """Tests for chart_color."""

    def test_hex_color(self) -> None:
        assert chart_color("#ff0000") == (255, 0, 0)

    @pytest.mark.parametrize("value", ["red", "rgb(1, 2, 3)", "#zzzzzz", ""])
    def test_unsupported_color_uses_default(self, value: str) -> None:
        assert chart_color(value) == hex_to_rgb(DEFAULT_SERIES_COLOR)


class TestBuildTraces:
    """Tests for build_traces."""

    def test_gaps_split_segments(self, sample_measurements, temperature, humidity) -> None:
        """Test that a missing value breaks the line instead of dropping to zero."""
        points = merge_chart([1, 2], sample_measurements)
        traces = build_traces(points, {1: temperature, 2: humidity}, SelectionController())

        first, second = traces
        assert first.label == "s1: Temperature"
        assert first.color == (255, 0, 0)
        assert first.segments == [([0], [20.5]), ([2], [21.0])]
        assert second.segments == [([0, 1], [40.0, 45.0])]
        assert all(y != 0 for _, ys in first.segments for y in ys)

    def test_dot_markers_follow_selection(self, sample_measurements, temperature, humidity) -> None:
        """Test that primary, selected and plain dots get distinct markers."""
        points = merge_chart([1, 2], sample_measurements)
        selection = SelectionController()
        selection.click(sample_measurements[1][0])
        selection.click(sample_measurements[2][0], accumulate=True)

        first, second = build_traces(points, {1: temperature, 2: humidity}, selection)

        assert [dot.marker for dot in first.dots] == [FILLED_MARKER, HOLLOW_MARKER]
        assert second.dots[0].marker not in (FILLED_MARKER, HOLLOW_MARKER)
        assert second.dots[1].marker == HOLLOW_MARKER

    def test_named_color_does_not_break_traces(self, sample_measurements, temperature) -> None:
        """Test that a series color the chart cannot parse is drawn in the default color."""
        named = temperature.model_copy(update={"color": "red"})
        points = merge_chart([1], sample_measurements)

        (trace,) = build_traces(points, {1: named}, SelectionController())

        assert trace.color == hex_to_rgb(DEFAULT_SERIES_COLOR)
        assert len(trace.dots) == 2

    def test_no_points(self, temperature) -> None:
        traces = build_traces([], {1: temperature}, SelectionController())
        assert traces[0].segments == []
        assert traces[0].dots == []


class TestTickPositions:
    """Tests for tick_positions."""

    def test_few_points_all_labelled(self) -> None:
        assert tick_positions(3) == [0, 1, 2]

    def test_many_points_spread(self) -> None:
        ticks = tick_positions(100, max_ticks=6)
        assert ticks[0] == 0
        assert ticks[-1] == 99
        assert len(ticks) == 6

    def test_empty(self) -> None:
        assert tick_positions(0) == []


class TestTimelineChart:
    """Tests for TimelineChart widget."""

    def test_show_before_mount_keeps_traces(self, sample_measurements, temperature) -> None:
        chart = TimelineChart(id="chart")
        chart.show(merge_chart([1], sample_measurements), {1: temperature}, SelectionController())
        assert len(chart.traces) == 1


class TestFormatCell:
    """Tests for measurement table cells."""

    def test_empty_cell(self) -> None:
        assert format_cell(None, False, False) == EMPTY_CELL

    def test_selection_markup(self, make_measurement) -> None:
        m = make_measurement(1, 1, 2.5, "2024-01-10T08:00:00")
        assert format_cell(m, False, False) == "2.5"
        assert format_cell(m, True, False) == "[reverse]2.5[/]"
        assert format_cell(m, True, True) == "[bold reverse]2.5[/]"
