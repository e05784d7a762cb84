"""
Pytest configuration and shared fixtures.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from unittest.mock import AsyncMock

import pytest

from seriesboard import config
from seriesboard.config import ClientSettings
from seriesboard.exceptions import ApiError
from seriesboard.models import Measurement, Series


@pytest.fixture(autouse=True)
def clean_env_for_tests(monkeypatch, tmp_path):
    """Clean environment variables for test isolation.

    Points the data directory at a temporary directory so no test reads or
    writes a real login token, and drops the cached settings.
    """
    for name in (
        "SERIESBOARD_API_URL",
        "SERIESBOARD_TIMEOUT",
        "SERIESBOARD_SERIES_LIMIT",
        "SERIESBOARD_MEASUREMENT_LIMIT",
        "SERIESBOARD_READ_ONLY",
        "XDG_DATA_HOME",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SERIESBOARD_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setattr(config, "_settings", None)


class FakeAccess:
    """In-memory stand-in for the measurement API.

    Records every call. Failures are injected per method (``errors``), per
    series for measurement fetches (``fetch_errors``) and per measurement for
    deletes (``delete_errors``). Mutations change the stored data. While ``gate`` is set, measurement fetches
    wait on it after taking their snapshot of ``measurements``.
    """

    def __init__(self, series: list[Series] | None = None, measurements: dict[int, list[Measurement]] | None = None) -> None:
        self.series = list(series or [])
        self.measurements = {sid: list(ms) for sid, ms in (measurements or {}).items()}
        self.calls: list[tuple] = []
        self.errors: dict[str, ApiError] = {}
        self.fetch_errors: dict[int, ApiError] = {}
        self.delete_errors: dict[int, ApiError] = {}
        self.gate: asyncio.Event | None = None
        self._next_id = 1000
        self.is_authenticated = False

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, *args))
        if name in self.errors:
            raise self.errors[name]

    def calls_to(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]

    def _new_id(self) -> int:
        self._next_id += 1
        return self._next_id

    async def login(self, username: str, password: str) -> str:
        self._record("login", username, password)
        self.is_authenticated = True
        return "token"

    def logout(self) -> None:
        self.is_authenticated = False

    async def change_password(self, old_password: str, new_password: str) -> None:
        self._record("change_password", old_password, new_password)

    async def list_series(self, limit: int = 200, offset: int = 0) -> list[Series]:
        self._record("list_series", limit, offset)
        return list(self.series)

    async def create_series(self, name, min_value, max_value, color=None, icon=None) -> Series:
        self._record("create_series", name, min_value, max_value, color, icon)
        series = Series(id=self._new_id(), name=name, min_value=min_value, max_value=max_value, color=color, icon=icon)
        self.series.append(series)
        return series

    async def update_series(self, series_id, name, min_value, max_value, color=None, icon=None) -> Series:
        self._record("update_series", series_id, name, min_value, max_value, color, icon)
        return Series(id=series_id, name=name, min_value=min_value, max_value=max_value, color=color, icon=icon)

    async def delete_series(self, series_id: int) -> None:
        self._record("delete_series", series_id)
        self.series = [s for s in self.series if s.id != series_id]
        self.measurements.pop(series_id, None)

    async def list_measurements(self, series_id, ts_from=None, ts_to=None, limit=500, offset=0) -> list[Measurement]:
        self._record("list_measurements", series_id, ts_from, ts_to, limit, offset)
        snapshot = list(self.measurements.get(series_id, []))
        gate = self.gate
        if gate is not None:
            await gate.wait()
        if series_id in self.fetch_errors:
            raise self.fetch_errors[series_id]
        return snapshot

    async def create_measurement(self, series_id: int, value: float, timestamp: str) -> Measurement:
        self._record("create_measurement", series_id, value, timestamp)
        measurement = Measurement(id=self._new_id(), series_id=series_id, value=value, timestamp=timestamp)
        self.measurements.setdefault(series_id, []).append(measurement)
        return measurement

    async def update_measurement(self, measurement_id: int, series_id: int, value: float, timestamp: str) -> Measurement:
        self._record("update_measurement", measurement_id, series_id, value, timestamp)
        updated = Measurement(id=measurement_id, series_id=series_id, value=value, timestamp=timestamp)
        stored = self.measurements.get(series_id, [])
        self.measurements[series_id] = [updated if m.id == measurement_id else m for m in stored]
        return updated

    async def delete_measurement(self, measurement_id: int) -> None:
        self._record("delete_measurement", measurement_id)
        if measurement_id in self.delete_errors:
            raise self.delete_errors[measurement_id]
        for series_id, measurements in self.measurements.items():
            self.measurements[series_id] = [m for m in measurements if m.id != measurement_id]


@pytest.fixture
def make_measurement() -> Callable[..., Measurement]:
    """Factory for measurements."""

    def _make(id: int, series_id: int, value: float, timestamp: str) -> Measurement:
        return Measurement(id=id, series_id=series_id, value=value, timestamp=timestamp)

    return _make


@pytest.fixture
def temperature() -> Series:
    return Series(id=1, name="Temperature", min_value=-20, max_value=50, color="#ff0000")


@pytest.fixture
def humidity() -> Series:
    return Series(id=2, name="Humidity", min_value=0, max_value=100)


@pytest.fixture
def sample_measurements(make_measurement) -> dict[int, list[Measurement]]:
    """Two series sharing one instant, each with one instant of its own."""
    return {
        1: [
            make_measurement(10, 1, 20.5, "2024-01-10T08:00:00"),
            make_measurement(11, 1, 21.0, "2024-01-10T09:00:00"),
        ],
        2: [
            make_measurement(20, 2, 40.0, "2024-01-10T08:00:00"),
            make_measurement(21, 2, 45.0, "2024-01-10T08:30:00"),
        ],
    }


@pytest.fixture
def fake_access(temperature, humidity, sample_measurements) -> FakeAccess:
    return FakeAccess([temperature, humidity], sample_measurements)


@pytest.fixture
def confirm() -> AsyncMock:
    """Confirmation callback that always accepts."""
    return AsyncMock(return_value=True)


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(api_url="http://api.test", series_limit=200, measurement_limit=500)
