"""
seriesboard TUI Widgets

Custom widgets for the dashboard screen.
"""

from .timeline_chart import Dot, TimelineChart, Trace, build_traces, hex_to_rgb

__all__ = [
    "Dot",
    "TimelineChart",
    "Trace",
    "build_traces",
    "hex_to_rgb",
]
