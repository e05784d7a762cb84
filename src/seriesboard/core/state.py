"""
Dashboard state.

The single owner of the per-series measurement cache and the selection. Table
and chart are derived from it on demand and never stored.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

from seriesboard.core.registry import SeriesRegistry
from seriesboard.core.selection import SelectionController
from seriesboard.core.time_filter import TimeFilter
from seriesboard.core.timeline import Timeline, merge, sort_measurements
from seriesboard.models import Measurement


@dataclass
class DashboardState:
    """Everything the dashboard shows, owned by one ``Dashboard``.

    Attributes:
        registry: Series definitions, active set and selected series
        cache: Per-series measurement lists sorted by timestamp
        selection: Selection and edit state
        time_filter: Current filter inputs
        error: Banner message of the last failure, None when clear
    """

    registry: SeriesRegistry = field(default_factory=SeriesRegistry)
    cache: dict[int, list[Measurement]] = field(default_factory=dict)
    selection: SelectionController = field(default_factory=SelectionController)
    time_filter: TimeFilter = field(default_factory=TimeFilter)
    error: str | None = None
    loading_series: bool = False
    loading_measurements: bool = False

    @property
    def privileged(self) -> bool:
        return self.selection.privileged

    def timeline(self) -> Timeline:
        """Merge the active series of the cache."""
        return merge(self.registry.active_ids, self.cache)

    def find_measurement(self, measurement_id: int) -> Measurement | None:
        for measurements in self.cache.values():
            for m in measurements:
                if m.id == measurement_id:
                    return m
        return None

    def replace_cache(self, cache: dict[int, list[Measurement]]) -> None:
        """Swap in a freshly fetched cache. The selection does not survive."""
        self.cache = cache
        self.selection.reset()

    def insert_measurement(self, measurement: Measurement) -> None:
        """Add a measurement to its series list, keeping the list sorted."""
        current = self.cache.get(measurement.series_id, [])
        self.cache[measurement.series_id] = sort_measurements([*current, measurement])

    def replace_measurement(self, measurement: Measurement) -> None:
        """Replace a measurement in its series list (append if missing), keeping the list sorted."""
        current = list(self.cache.get(measurement.series_id, []))
        for idx, m in enumerate(current):
            if m.id == measurement.id:
                current[idx] = measurement
                break
        else:
            current.append(measurement)
        self.cache[measurement.series_id] = sort_measurements(current)

    def remove_measurements(self, measurement_ids: Iterable[int]) -> None:
        """Remove measurements from every series list."""
        removed = set(measurement_ids)
        self.cache = {
            series_id: [m for m in measurements if m.id not in removed]
            for series_id, measurements in self.cache.items()
        }

    def drop_series(self, series_id: int) -> list[int]:
        """Remove a series' cache entry.

        Returns:
            Ids of the measurements that were dropped with it
        """
        dropped = self.cache.pop(series_id, [])
        return [m.id for m in dropped]
