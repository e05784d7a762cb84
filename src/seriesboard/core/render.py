"""Chart dot styling derived from the selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from seriesboard.core.selection import SelectionController
    from seriesboard.core.timeline import ChartPoint

PRIMARY_RADIUS = 6
SELECTED_RADIUS = 4
DEFAULT_RADIUS = 3


@dataclass(frozen=True)
class DotHint:
    """How to draw one chart dot."""

    radius: int
    filled: bool


def render_hint(point: ChartPoint, rank: int, selection: SelectionController) -> DotHint:
    """Derive the dot style of one series at one chart point.

    No value means no dot. The primary measurement gets the largest dot,
    selected ones a medium dot; only selected or primary dots are filled.
    """
    measurement_id = point.measurement_ids.get(rank)
    if point.values.get(rank) is None or measurement_id is None:
        return DotHint(radius=0, filled=False)

    is_primary = measurement_id == selection.primary
    is_selected = selection.is_selected(measurement_id)
    if is_primary:
        radius = PRIMARY_RADIUS
    elif is_selected:
        radius = SELECTED_RADIUS
    else:
        radius = DEFAULT_RADIUS
    return DotHint(radius=radius, filled=is_primary or is_selected)
