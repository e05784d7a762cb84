"""
Series model.

A series is a named, range-bounded category of numeric measurements.
"""

from pydantic import BaseModel, Field, model_validator

# Color used by the chart when a series carries none
DEFAULT_SERIES_COLOR = "#61dafb"


class Series(BaseModel):
    """Series definition as returned by the measurement API."""

    id: int = Field(..., description="Server-assigned identifier")
    name: str = Field(..., min_length=1, description="Display name")
    min_value: float = Field(..., description="Lowest valid measurement value")
    max_value: float = Field(..., description="Highest valid measurement value")
    color: str | None = Field(default=None, description="Display color hint")
    icon: str | None = Field(default=None, description="Opaque icon name, passed through on update")

    @model_validator(mode="after")
    def _check_bounds(self) -> "Series":
        if self.min_value > self.max_value:
            raise ValueError("min_value must not be greater than max_value")
        return self

    @property
    def display_color(self) -> str:
        """Color to draw this series with."""
        return self.color or DEFAULT_SERIES_COLOR

    def contains(self, value: float) -> bool:
        """Check whether a value lies within ``[min_value, max_value]``."""
        return self.min_value <= value <= self.max_value

    def __str__(self) -> str:
        return f"{self.name} (min {self.min_value:g} / max {self.max_value:g})"
