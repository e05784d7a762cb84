"""
Timeline merging.

Joins the per-series measurement lists of the active series onto one
timeline ordered by instant. Two projections share the same join:

- table rows, keyed by series id, with an explicit ``None`` for every active
  series that has no measurement at that instant
- chart points, keyed by rank, where a missing series contributes no key at
  all so the plotted line breaks instead of dropping to zero

Only exact instant equality joins measurements across series. The merge is
pure: the same cache and active set always give the same rows.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from datetime import datetime

from seriesboard.models import Measurement
from seriesboard.utils.timestamp import format_time_label


def chart_key(rank: int) -> str:
    """Short chart/table label of a rank, e.g. ``s1``."""
    return f"s{rank}"


@dataclass(frozen=True)
class TableRow:
    """One distinct instant of the merged table."""

    timestamp: str
    instant: datetime
    cells: dict[int, Measurement | None] = field(default_factory=dict)

    def get(self, series_id: int) -> Measurement | None:
        return self.cells.get(series_id)

    def measurements(self) -> list[Measurement]:
        """Present measurements in active-series order."""
        return [m for m in self.cells.values() if m is not None]


@dataclass(frozen=True)
class ChartPoint:
    """One distinct instant of the merged chart."""

    timestamp: str
    instant: datetime
    label: str
    values: dict[int, float] = field(default_factory=dict)
    measurement_ids: dict[int, int] = field(default_factory=dict)

    def value(self, rank: int) -> float | None:
        return self.values.get(rank)


@dataclass(frozen=True)
class Timeline:
    """Both projections of one merge."""

    active_ids: tuple[int, ...]
    rows: list[TableRow]
    points: list[ChartPoint]

    def __len__(self) -> int:
        return len(self.rows)


def _join(
    active_ids: Sequence[int],
    cache: Mapping[int, Sequence[Measurement]],
) -> list[tuple[datetime, str, dict[int, Measurement]]]:
    """Group measurements by instant, then sort the distinct instants once."""
    slots: dict[datetime, tuple[str, dict[int, Measurement]]] = {}
    for series_id in active_ids:
        for m in cache.get(series_id, ()):
            instant = m.instant
            slot = slots.get(instant)
            if slot is None:
                slot = (m.timestamp, {})
                slots[instant] = slot
            # A later duplicate within the same series takes the cell
            slot[1][series_id] = m
    return [(instant, *slots[instant]) for instant in sorted(slots)]


def merge_table(active_ids: Sequence[int], cache: Mapping[int, Sequence[Measurement]]) -> list[TableRow]:
    """Build the table projection.

    Args:
        active_ids: Active series ids in rank order
        cache: Per-series measurement lists, each sorted by timestamp

    Returns:
        Rows ascending by instant, one per distinct instant
    """
    return merge(active_ids, cache).rows


def merge_chart(active_ids: Sequence[int], cache: Mapping[int, Sequence[Measurement]]) -> list[ChartPoint]:
    """Build the chart projection, keyed by rank instead of series id."""
    return merge(active_ids, cache).points


def merge(active_ids: Sequence[int], cache: Mapping[int, Sequence[Measurement]]) -> Timeline:
    """Build both projections from a single join."""
    ranks = {series_id: idx + 1 for idx, series_id in enumerate(active_ids)}
    rows: list[TableRow] = []
    points: list[ChartPoint] = []
    for instant, timestamp, by_series in _join(active_ids, cache):
        rows.append(
            TableRow(
                timestamp=timestamp,
                instant=instant,
                cells={series_id: by_series.get(series_id) for series_id in active_ids},
            )
        )
        points.append(
            ChartPoint(
                timestamp=timestamp,
                instant=instant,
                label=format_time_label(timestamp),
                values={ranks[sid]: m.value for sid, m in by_series.items()},
                measurement_ids={ranks[sid]: m.id for sid, m in by_series.items()},
            )
        )
    return Timeline(active_ids=tuple(active_ids), rows=rows, points=points)


def sort_measurements(measurements: Sequence[Measurement]) -> list[Measurement]:
    """Sort a per-series list ascending by instant; equal instants keep their order."""
    return sorted(measurements, key=lambda m: m.instant)
