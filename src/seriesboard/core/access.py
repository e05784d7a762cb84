"""Data-access contract consumed by the dashboard core."""

from __future__ import annotations

from typing import Protocol

from seriesboard.models import Measurement, Series


class DataAccess(Protocol):
    """Async collaborator that talks to the measurement API.

    Every call may raise ``seriesboard.exceptions.ApiError``. Authentication is
    the implementation's concern; a missing or rejected credential is just
    another failed call.
    """

    async def list_series(self, limit: int = 200, offset: int = 0) -> list[Series]: ...

    async def create_series(
        self,
        name: str,
        min_value: float,
        max_value: float,
        color: str | None = None,
        icon: str | None = None,
    ) -> Series: ...

    async def update_series(
        self,
        series_id: int,
        name: str,
        min_value: float,
        max_value: float,
        color: str | None = None,
        icon: str | None = None,
    ) -> Series: ...

    async def delete_series(self, series_id: int) -> None: ...

    async def list_measurements(
        self,
        series_id: int,
        ts_from: str | None = None,
        ts_to: str | None = None,
        limit: int = 500,
        offset: int = 0,
    ) -> list[Measurement]: ...

    async def create_measurement(self, series_id: int, value: float, timestamp: str) -> Measurement: ...

    async def update_measurement(self, measurement_id: int, series_id: int, value: float, timestamp: str) -> Measurement: ...

    async def delete_measurement(self, measurement_id: int) -> None: ...

    async def change_password(self, old_password: str, new_password: str) -> None: ...
