"""
Time filter resolution.

Turns the filter mode and the two raw edge inputs into the inclusive ISO
bounds sent with measurement fetches. Filtering itself happens server-side.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from enum import Enum

from seriesboard.exceptions import ValidationError
from seriesboard.utils.timestamp import normalize_input_timestamp

_DAY_START = "T00:00:00"
_DAY_END = "T23:59:59"


class FilterMode(Enum):
    """How the filter edges are interpreted.

    - date: calendar days, the end day is included in full
    - datetime: exact date-times with minute or second precision
    """

    DATE = "date"
    DATETIME = "datetime"


def _resolve_edge(mode: FilterMode, value: str, end_of_day: bool) -> str | None:
    text = (value or "").strip()
    if not text:
        return None

    if mode is FilterMode.DATETIME:
        try:
            return normalize_input_timestamp(text)
        except ValueError as e:
            raise ValidationError(f"Invalid date-time filter {text!r}. Expected YYYY-MM-DDTHH:MM[:SS].") from e

    try:
        day = date.fromisoformat(text)
    except ValueError as e:
        raise ValidationError(f"Invalid date filter {text!r}. Expected YYYY-MM-DD.") from e
    return day.isoformat() + (_DAY_END if end_of_day else _DAY_START)


def resolve_bounds(mode: FilterMode, from_input: str, to_input: str) -> tuple[str | None, str | None]:
    """Resolve filter inputs into ``(ts_from, ts_to)``.

    Args:
        mode: Filter mode
        from_input: Raw lower edge, may be empty
        to_input: Raw upper edge, may be empty

    Returns:
        Tuple of inclusive bounds, each None when its input is empty

    Raises:
        ValidationError: If a non-empty input does not match the mode

    Examples:
        >>> resolve_bounds(FilterMode.DATE, "2024-01-10", "2024-01-10")
        ('2024-01-10T00:00:00', '2024-01-10T23:59:59')
        >>> resolve_bounds(FilterMode.DATETIME, "2024-01-10T08:30", "")
        ('2024-01-10T08:30:00', None)
    """
    return _resolve_edge(mode, from_input, False), _resolve_edge(mode, to_input, True)


@dataclass
class TimeFilter:
    """Current filter inputs.

    Changing ``mode`` never rewrites ``from_input`` or ``to_input``; they are
    only read differently on the next fetch.
    """

    mode: FilterMode = FilterMode.DATE
    from_input: str = ""
    to_input: str = ""

    def bounds(self) -> tuple[str | None, str | None]:
        """Resolve the current inputs. See ``resolve_bounds``."""
        return resolve_bounds(self.mode, self.from_input, self.to_input)
