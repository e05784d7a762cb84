"""
seriesboard data models package.

This package contains the data models exchanged with the measurement API.
"""

from seriesboard.models.measurement import Measurement
from seriesboard.models.series import DEFAULT_SERIES_COLOR, Series

__all__ = ["DEFAULT_SERIES_COLOR", "Measurement", "Series"]
