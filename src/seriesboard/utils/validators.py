"""Input validators for operator-entered values.

Every function raises ``ValidationError`` so callers can report the problem
without touching the network or local state.
"""

from __future__ import annotations

import math
import re

from seriesboard.exceptions import ValidationError
from seriesboard.models import Series

__all__ = [
    "parse_number",
    "validate_value_in_range",
    "validate_series_fields",
    "validate_color",
    "validate_password_change",
]

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


def parse_number(text: str | float | int, field: str = "Value") -> float:
    """Parse a finite number from an input field.

    Args:
        text: Raw input (string or number)
        field: Field label for error messages

    Raises:
        ValidationError: If the input is empty or not a finite number

    Examples:
        >>> parse_number("21.5")
        21.5
        >>> parse_number("abc")  # Raises ValidationError
    """
    if isinstance(text, (int, float)) and not isinstance(text, bool):
        number = float(text)
    else:
        raw = str(text).strip().replace(",", ".")
        if not raw:
            raise ValidationError(f"{field} must be a number.")
        try:
            number = float(raw)
        except ValueError as exc:
            raise ValidationError(f"{field} must be a number.") from exc
    if not math.isfinite(number):
        raise ValidationError(f"{field} must be a finite number.")
    return number


def validate_value_in_range(value: float, series: Series) -> None:
    """Check that a measurement value lies within the bounds of its series.

    Raises:
        ValidationError: If value is outside ``[min_value, max_value]``
    """
    if not series.contains(value):
        raise ValidationError(f"Value must be within {series.min_value:g} - {series.max_value:g}.")


def validate_series_fields(name: str, min_input: str | float, max_input: str | float) -> tuple[str, float, float]:
    """Validate series form fields.

    Returns:
        Tuple of (trimmed name, min_value, max_value)

    Raises:
        ValidationError: If name is empty, bounds are not numbers, or min > max
    """
    trimmed = (name or "").strip()
    if not trimmed:
        raise ValidationError("Series name cannot be empty.")
    min_value = parse_number(min_input, "Min")
    max_value = parse_number(max_input, "Max")
    if min_value > max_value:
        raise ValidationError("Min cannot be greater than max.")
    return trimmed, min_value, max_value


def validate_color(color: str | None) -> str | None:
    """Validate an optional series color.

    Returns:
        The trimmed color, or None when left empty

    Raises:
        ValidationError: If the color is not ``#rgb`` or ``#rrggbb``

    Examples:
        >>> validate_color(" #FF7F50 ")
        '#FF7F50'
        >>> validate_color("red")  # Raises ValidationError
    """
    trimmed = (color or "").strip()
    if not trimmed:
        return None
    if not _HEX_COLOR.match(trimmed):
        raise ValidationError("Color must be a hex color like #ff7f50.")
    return trimmed


def validate_password_change(old_password: str, new_password: str) -> None:
    """Require both passwords of a password change.

    Raises:
        ValidationError: If either password is empty
    """
    if not old_password or not new_password:
        raise ValidationError("Both the current and the new password are required.")
