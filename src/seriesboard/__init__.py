"""
seriesboard - Multi-series measurement dashboard client.

Fetches measurements of several bounded series from the measurement API,
aligns them on one timeline for table and chart display, and lets a logged-in
operator add, edit and delete them.

Examples:
    >>> from seriesboard import ApiClient, AsyncApiClient, Dashboard
    >>> access = AsyncApiClient(ApiClient("http://127.0.0.1:8000"))
    >>> dashboard = Dashboard(access, confirm=ask_operator, privileged=access.is_authenticated)
    >>> await dashboard.load_series()
    >>> dashboard.state.timeline().rows
"""

from seriesboard.client import ApiClient, AsyncApiClient
from seriesboard.core import Dashboard, DashboardState, FilterMode
from seriesboard.models import Measurement, Series

__version__ = "0.1.0"
__all__ = [
    "ApiClient",
    "AsyncApiClient",
    "Dashboard",
    "DashboardState",
    "FilterMode",
    "Measurement",
    "Series",
]
