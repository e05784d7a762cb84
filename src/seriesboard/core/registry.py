"""
Series registry.

Holds the fetched series definitions, the active (displayed) set in rank
order, and the selected series targeted by the add and edit-series forms.
"""

from __future__ import annotations

from collections.abc import Iterable

from seriesboard.exceptions import SeriesNotFoundError
from seriesboard.models import Series


class SeriesRegistry:
    """Series definitions plus active set and selected series."""

    def __init__(self) -> None:
        self._series: list[Series] = []
        self._active_ids: list[int] = []
        self.selected_series_id: int | None = None

    @property
    def series(self) -> list[Series]:
        """Get all known series in server order."""
        return list(self._series)

    @property
    def active_ids(self) -> list[int]:
        """Get the active series ids in rank order."""
        return list(self._active_ids)

    @property
    def selected_series(self) -> Series | None:
        """Get the selected series, if any."""
        if self.selected_series_id is None:
            return None
        return self.find(self.selected_series_id)

    def find(self, series_id: int) -> Series | None:
        """Look up a series by id."""
        for series in self._series:
            if series.id == series_id:
                return series
        return None

    def get(self, series_id: int) -> Series:
        """Look up a series by id.

        Raises:
            SeriesNotFoundError: If no series has this id
        """
        series = self.find(series_id)
        if series is None:
            raise SeriesNotFoundError(f"Series not found: {series_id}")
        return series

    def rank(self, series_id: int) -> int | None:
        """Get the 1-based rank of an active series, None if inactive."""
        try:
            return self._active_ids.index(series_id) + 1
        except ValueError:
            return None

    def rank_map(self) -> dict[int, int]:
        """Map active series ids to their ranks."""
        return {series_id: idx + 1 for idx, series_id in enumerate(self._active_ids)}

    def series_for_rank(self, rank: int) -> Series | None:
        """Get the active series at a rank."""
        if 1 <= rank <= len(self._active_ids):
            return self.find(self._active_ids[rank - 1])
        return None

    def is_active(self, series_id: int) -> bool:
        return series_id in self._active_ids

    def replace_all(self, series: Iterable[Series]) -> None:
        """Replace the series list after a fetch.

        On the first load every series becomes active. Active ids and the
        selected series that no longer exist are dropped; the selection falls
        back to the first series.
        """
        self._series = list(series)
        known = {s.id for s in self._series}
        if not self._active_ids:
            self._active_ids = [s.id for s in self._series]
        else:
            self._active_ids = [sid for sid in self._active_ids if sid in known]
        if self.selected_series_id not in known:
            self.selected_series_id = self._series[0].id if self._series else None

    def set_active(self, series_ids: Iterable[int]) -> None:
        """Set the active set, keeping the given order and dropping unknown or repeated ids."""
        known = {s.id for s in self._series}
        active: list[int] = []
        for series_id in series_ids:
            if series_id in known and series_id not in active:
                active.append(series_id)
        self._active_ids = active

    def toggle_active(self, series_id: int) -> bool:
        """Toggle a series in the active set. Activated series go last.

        Returns:
            True if the series is active afterwards
        """
        if series_id in self._active_ids:
            self._active_ids.remove(series_id)
            return False
        self.get(series_id)
        self._active_ids.append(series_id)
        return True

    def select(self, series_id: int | None) -> None:
        """Select the series targeted by the add and edit-series forms."""
        if series_id is not None:
            self.get(series_id)
        self.selected_series_id = series_id

    def add(self, series: Series) -> None:
        """Add a created series; it becomes selected and active."""
        self._series.append(series)
        self.selected_series_id = series.id
        if series.id not in self._active_ids:
            self._active_ids.append(series.id)

    def replace(self, series: Series) -> None:
        """Replace an updated series in place."""
        self._series = [series if s.id == series.id else s for s in self._series]

    def remove(self, series_id: int) -> None:
        """Remove a deleted series from the list and the active set.

        If it was selected, the first remaining series is selected, or none.
        """
        self._series = [s for s in self._series if s.id != series_id]
        self._active_ids = [sid for sid in self._active_ids if sid != series_id]
        if self.selected_series_id == series_id:
            self.selected_series_id = self._series[0].id if self._series else None
