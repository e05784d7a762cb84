"""
seriesboard dashboard core.

Time alignment, selection and mutation logic behind the measurement dashboard,
independent of any user interface.
"""

from seriesboard.core.access import DataAccess
from seriesboard.core.dashboard import Dashboard
from seriesboard.core.mutations import ConfirmCallback, MutationCoordinator
from seriesboard.core.registry import SeriesRegistry
from seriesboard.core.render import DotHint, render_hint
from seriesboard.core.selection import EditForm, SelectionController, SelectionPhase
from seriesboard.core.state import DashboardState
from seriesboard.core.time_filter import FilterMode, TimeFilter, resolve_bounds
from seriesboard.core.timeline import ChartPoint, TableRow, Timeline, chart_key, merge, merge_chart, merge_table

__all__ = [
    "ChartPoint",
    "ConfirmCallback",
    "Dashboard",
    "DashboardState",
    "DataAccess",
    "DotHint",
    "EditForm",
    "FilterMode",
    "MutationCoordinator",
    "SelectionController",
    "SelectionPhase",
    "SeriesRegistry",
    "TableRow",
    "TimeFilter",
    "Timeline",
    "chart_key",
    "merge",
    "merge_chart",
    "merge_table",
    "render_hint",
    "resolve_bounds",
]
