"""
Measurement model.

One timestamped numeric value belonging to exactly one series.
"""

import datetime

from pydantic import BaseModel, Field

from seriesboard.utils.timestamp import parse_to_datetime


class Measurement(BaseModel):
    """Measurement as returned by the measurement API.

    ``timestamp`` is kept as the string the server sent so it can be sent back
    unchanged; ``instant`` gives the parsed value used for ordering and joins.
    """

    id: int = Field(..., description="Server-assigned identifier")
    series_id: int = Field(..., description="Owning series identifier")
    value: float = Field(..., description="Measured value")
    timestamp: str = Field(..., description="ISO 8601 timestamp, second precision")

    @property
    def instant(self) -> datetime.datetime:
        """Timestamp parsed to an aware datetime (naive values are read as UTC)."""
        return parse_to_datetime(self.timestamp)

    def __str__(self) -> str:
        return f"Measurement(id={self.id}, series_id={self.series_id}, value={self.value}, timestamp={self.timestamp})"
