"""Async adapter over the blocking API client.

Each call runs the blocking request in a worker thread and resumes on the
event loop, so the dashboard core only ever sees coroutines.
"""

from __future__ import annotations

import asyncio

from seriesboard.client._http import ApiClient
from seriesboard.models import Measurement, Series


class AsyncApiClient:
    """Implements the dashboard ``DataAccess`` protocol on top of ``ApiClient``."""

    def __init__(self, client: ApiClient) -> None:
        self._client = client

    @property
    def client(self) -> ApiClient:
        """Get the wrapped blocking client."""
        return self._client

    @property
    def is_authenticated(self) -> bool:
        """Whether a bearer token is held."""
        return self._client.is_authenticated

    async def login(self, username: str, password: str) -> str:
        return await asyncio.to_thread(self._client.login, username, password)

    def logout(self) -> None:
        self._client.logout()

    async def change_password(self, old_password: str, new_password: str) -> None:
        await asyncio.to_thread(self._client.change_password, old_password, new_password)

    async def list_series(self, limit: int = 200, offset: int = 0) -> list[Series]:
        return await asyncio.to_thread(self._client.list_series, limit, offset)

    async def create_series(
        self,
        name: str,
        min_value: float,
        max_value: float,
        color: str | None = None,
        icon: str | None = None,
    ) -> Series:
        return await asyncio.to_thread(self._client.create_series, name, min_value, max_value, color, icon)

    async def update_series(
        self,
        series_id: int,
        name: str,
        min_value: float,
        max_value: float,
        color: str | None = None,
        icon: str | None = None,
    ) -> Series:
        return await asyncio.to_thread(self._client.update_series, series_id, name, min_value, max_value, color, icon)

    async def delete_series(self, series_id: int) -> None:
        await asyncio.to_thread(self._client.delete_series, series_id)

    async def list_measurements(
        self,
        series_id: int,
        ts_from: str | None = None,
        ts_to: str | None = None,
        limit: int = 500,
        offset: int = 0,
    ) -> list[Measurement]:
        return await asyncio.to_thread(self._client.list_measurements, series_id, ts_from, ts_to, limit, offset)

    async def create_measurement(self, series_id: int, value: float, timestamp: str) -> Measurement:
        return await asyncio.to_thread(self._client.create_measurement, series_id, value, timestamp)

    async def update_measurement(self, measurement_id: int, series_id: int, value: float, timestamp: str) -> Measurement:
        return await asyncio.to_thread(self._client.update_measurement, measurement_id, series_id, value, timestamp)

    async def delete_measurement(self, measurement_id: int) -> None:
        await asyncio.to_thread(self._client.delete_measurement, measurement_id)
