"""Tests for time filter resolution."""

from __future__ import annotations

import pytest

from seriesboard.core.time_filter import FilterMode, TimeFilter, resolve_bounds
from seriesboard.exceptions import ValidationError


class TestResolveBounds:
    """Tests for resolve_bounds."""

    def test_date_mode_covers_whole_days(self) -> None:
        """Test that date edges expand to the start and end of the day."""
        assert resolve_bounds(FilterMode.DATE, "2024-01-10", "2024-01-12") == (
            "2024-01-10T00:00:00",
            "2024-01-12T23:59:59",
        )

    def test_same_day_includes_the_full_day(self) -> None:
        """Test that from == to in date mode spans one whole day."""
        assert resolve_bounds(FilterMode.DATE, "2024-01-10", "2024-01-10") == (
            "2024-01-10T00:00:00",
            "2024-01-10T23:59:59",
        )

    def test_datetime_mode_appends_seconds(self) -> None:
        """Test that minute-precision inputs get ':00' appended."""
        assert resolve_bounds(FilterMode.DATETIME, "2024-01-10T08:30", "2024-01-10T09:45") == (
            "2024-01-10T08:30:00",
            "2024-01-10T09:45:00",
        )

    def test_datetime_mode_keeps_seconds(self) -> None:
        """Test that second-precision inputs pass through."""
        assert resolve_bounds(FilterMode.DATETIME, "2024-01-10T08:30:15", "") == ("2024-01-10T08:30:15", None)

    def test_datetime_mode_accepts_space_separator(self) -> None:
        """Test that a space between date and time is accepted."""
        assert resolve_bounds(FilterMode.DATETIME, "2024-01-10 08:30", "") == ("2024-01-10T08:30:00", None)

    def test_empty_inputs_are_unbounded(self) -> None:
        """Test that empty or blank edges resolve to None."""
        assert resolve_bounds(FilterMode.DATE, "", "  ") == (None, None)
        assert resolve_bounds(FilterMode.DATETIME, "", "") == (None, None)

    def test_one_sided_bound(self) -> None:
        """Test that only the given edge is bounded."""
        assert resolve_bounds(FilterMode.DATE, "", "2024-01-10") == (None, "2024-01-10T23:59:59")

    @pytest.mark.parametrize(
        ("mode", "value"),
        [
            (FilterMode.DATE, "10.01.2024"),
            (FilterMode.DATE, "2024-13-01"),
            (FilterMode.DATETIME, "2024-01-10"),
            (FilterMode.DATETIME, "yesterday"),
        ],
    )
    def test_malformed_input_raises(self, mode: FilterMode, value: str) -> None:
        """Test that input not matching the mode is rejected."""
        with pytest.raises(ValidationError):
            resolve_bounds(mode, value, "")


class TestTimeFilter:
    """Tests for the TimeFilter holder."""

    def test_defaults_to_unbounded_date_mode(self) -> None:
        """Test default filter state."""
        time_filter = TimeFilter()
        assert time_filter.mode is FilterMode.DATE
        assert time_filter.bounds() == (None, None)

    def test_mode_switch_keeps_inputs(self) -> None:
        """Test that switching the mode only changes how inputs are read."""
        time_filter = TimeFilter(mode=FilterMode.DATETIME, from_input="2024-01-10T08:00", to_input="")
        time_filter.mode = FilterMode.DATE
        assert time_filter.from_input == "2024-01-10T08:00"
        with pytest.raises(ValidationError):
            time_filter.bounds()
