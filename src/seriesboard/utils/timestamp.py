"""Timestamp parsing and formatting utilities.

Timestamps cross the API boundary as ISO 8601 strings with second precision and
no required zone suffix. Parsing functions raise ValueError for invalid input.
"""

from __future__ import annotations

from datetime import datetime, timezone

_INPUT_FORMAT = "%Y-%m-%dT%H:%M:%S"


def parse_to_datetime(ts_value: str | datetime) -> datetime:
    """Parse an ISO 8601 timestamp to an aware datetime.

    Args:
        ts_value: ISO 8601 string or datetime. Naive values are read as UTC.

    Returns:
        Timezone-aware datetime.

    Raises:
        ValueError: If input is None, empty string, or invalid format.
    """
    if ts_value is None:
        raise ValueError("Timestamp cannot be None")

    if isinstance(ts_value, datetime):
        if ts_value.tzinfo is None:
            return ts_value.replace(tzinfo=timezone.utc)
        return ts_value

    if isinstance(ts_value, str):
        ts_str = ts_value.strip()
        if not ts_str:
            raise ValueError("Timestamp string cannot be empty")

        # Handle ISO 8601 format with 'Z' suffix
        if ts_str.endswith("Z"):
            ts_str = ts_str[:-1] + "+00:00"

        try:
            parsed = datetime.fromisoformat(ts_str)
        except ValueError as exc:
            raise ValueError(f"Invalid timestamp format: {ts_value!r}. Expected ISO 8601 string.") from exc

        if parsed.tzinfo is None:
            return parsed.replace(tzinfo=timezone.utc)
        return parsed

    raise ValueError(f"Unsupported timestamp type: {type(ts_value)}. Expected datetime or ISO 8601 string.")


def normalize_input_timestamp(value: str) -> str:
    """Normalize an operator-entered date-time to ``YYYY-MM-DDTHH:MM:SS``.

    Accepts ``T`` or a space between date and time. Seconds are appended as
    ``:00`` when only hours and minutes were given.

    Raises:
        ValueError: If the value is empty or not a valid date-time.
    """
    text = value.strip().replace(" ", "T", 1)
    if not text:
        raise ValueError("Timestamp cannot be empty")
    if len(text) == 16:
        text += ":00"
    try:
        datetime.strptime(text, _INPUT_FORMAT)
    except ValueError as exc:
        raise ValueError(f"Invalid date-time: {value!r}. Expected YYYY-MM-DDTHH:MM[:SS].") from exc
    return text


def format_local_now(now: datetime | None = None) -> str:
    """Format the current local time without a zone offset."""
    return (now or datetime.now()).strftime(_INPUT_FORMAT)


def _as_local(ts: str) -> datetime:
    parsed = datetime.fromisoformat(ts.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        return parsed.astimezone()
    return parsed


def to_input_value(ts: str) -> str:
    """Render a stored timestamp as an editable local ``YYYY-MM-DDTHH:MM:SS`` value."""
    return _as_local(ts).strftime(_INPUT_FORMAT)


def format_full(ts: str) -> str:
    """Render a timestamp for the measurement table."""
    return _as_local(ts).strftime("%Y-%m-%d %H:%M:%S")


def format_time_label(ts: str) -> str:
    """Render a short ``HH:MM`` chart label."""
    return _as_local(ts).strftime("%H:%M")
