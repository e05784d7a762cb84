"""
HTTP access to the measurement API.

``ApiClient`` is the blocking ``requests`` client; ``AsyncApiClient`` adapts it
to the async data-access protocol used by the dashboard core.
"""

from seriesboard.client._async import AsyncApiClient
from seriesboard.client._http import ApiClient
from seriesboard.client._token import TokenStore

__all__ = ["ApiClient", "AsyncApiClient", "TokenStore"]
