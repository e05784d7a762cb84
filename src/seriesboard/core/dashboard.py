"""
Dashboard controller.

Owns one ``DashboardState`` and runs the fetches that fill it. Fetches may
overlap; every batch is tagged with a generation number when it is issued
and its result is applied only if no newer batch was issued meanwhile. The
per-series fetches of one batch are awaited together so the cache is swapped
once, never series by series.
"""

from __future__ import annotations

import asyncio
from collections.abc import Iterable

from seriesboard.config import ClientSettings, get_settings
from seriesboard.core.access import DataAccess
from seriesboard.core.mutations import ConfirmCallback, MutationCoordinator
from seriesboard.core.state import DashboardState
from seriesboard.core.time_filter import FilterMode
from seriesboard.core.timeline import ChartPoint, TableRow, sort_measurements
from seriesboard.exceptions import ApiError, FetchError, ValidationError
from seriesboard.logger import logger
from seriesboard.models import Measurement


class Dashboard:
    """Fetch orchestration and interaction entry points for one dashboard view.

    Args:
        access: Data-access collaborator
        confirm: Asks the operator to confirm destructive actions
        privileged: Whether the viewer may edit
        settings: Fetch sizes; defaults to ``get_settings()``
    """

    def __init__(
        self,
        access: DataAccess,
        confirm: ConfirmCallback,
        privileged: bool = False,
        settings: ClientSettings | None = None,
    ) -> None:
        self._access = access
        self._settings = settings or get_settings()
        self.state = DashboardState()
        self.state.selection.set_privileged(privileged)
        self.mutations = MutationCoordinator(self.state, access, confirm, on_commit=self.invalidate)
        self._series_generation = 0
        self._measurement_generation = 0
        # Generations reached by invalidate(); a batch made stale by one is fetched again
        self._series_invalidated = -1
        self._measurement_invalidated = -1

    @property
    def generation(self) -> int:
        """Generation of the newest measurement batch issued."""
        return self._measurement_generation

    def set_privileged(self, privileged: bool) -> None:
        """Switch between the read-only and the editing view (login/logout)."""
        self.state.selection.set_privileged(privileged)

    def invalidate(self) -> None:
        """Mark every fetch in flight as stale after a local change committed.

        A batch issued before a mutation would otherwise bring back deleted
        ids or drop created ones. Such a batch is discarded and issued again.
        """
        self._series_generation += 1
        self._series_invalidated = self._series_generation
        self._measurement_generation += 1
        self._measurement_invalidated = self._measurement_generation

    # ===== FETCHING =====

    def _report(self, error: FetchError, cause: object) -> None:
        """Show a fetch failure in the banner."""
        self.state.error = str(error)
        logger.warning("%s (%s)", error, cause)

    async def load_series(self) -> bool:
        """Fetch the series list, then the measurements of the active series.

        Returns:
            True if the series list was applied
        """
        self._series_generation += 1
        generation = self._series_generation
        self.state.loading_series = True
        try:
            series = await self._access.list_series(limit=self._settings.series_limit, offset=0)
        except ApiError as e:
            if generation != self._series_generation:
                if self._series_generation == self._series_invalidated:
                    return await self.load_series()
                logger.debug("Discarding stale series list failure: %s", e)
                return False
            self.state.loading_series = False
            self._report(FetchError("Could not load the series list."), e)
            return False

        if generation != self._series_generation:
            if self._series_generation == self._series_invalidated:
                logger.debug("Refetching series list issued before a local change")
                return await self.load_series()
            logger.debug("Discarding stale series list (generation %d)", generation)
            return False

        self.state.loading_series = False
        self.state.error = None
        self.state.registry.replace_all(series)
        logger.debug("Loaded %d series", len(series))
        await self.refresh_measurements()
        return True

    async def _fetch_series_measurements(self, series_id: int, ts_from: str | None, ts_to: str | None) -> list[Measurement]:
        measurements = await self._access.list_measurements(
            series_id,
            ts_from=ts_from,
            ts_to=ts_to,
            limit=self._settings.measurement_limit,
            offset=0,
        )
        return sort_measurements(measurements)

    async def refresh_measurements(self) -> bool:
        """Refetch the measurements of every active series as one batch.

        The cache is replaced (and the selection reset) only when the whole
        batch is back and still current. A batch made stale by a committed
        mutation is fetched again rather than dropped. Series whose fetch
        failed keep their last known measurements and the failure goes to the
        banner.

        Returns:
            True if this batch was applied, False if it was stale or invalid
        """
        self._measurement_generation += 1
        generation = self._measurement_generation
        active = self.state.registry.active_ids

        try:
            ts_from, ts_to = self.state.time_filter.bounds()
        except ValidationError as e:
            self.state.loading_measurements = False
            self.state.error = str(e)
            return False

        if not active:
            self.state.loading_measurements = False
            self.state.replace_cache({})
            return True

        self.state.loading_measurements = True
        results = await asyncio.gather(
            *(self._fetch_series_measurements(sid, ts_from, ts_to) for sid in active),
            return_exceptions=True,
        )

        if generation != self._measurement_generation:
            if self._measurement_generation == self._measurement_invalidated:
                logger.debug("Refetching measurement batch %d issued before a local change", generation)
                return await self.refresh_measurements()
            logger.debug("Discarding stale measurement batch (generation %d, current %d)", generation, self._measurement_generation)
            return False

        self.state.loading_measurements = False
        next_cache: dict[int, list[Measurement]] = {}
        failed: list[int] = []
        for series_id, result in zip(active, results, strict=True):
            if isinstance(result, ApiError):
                failed.append(series_id)
                next_cache[series_id] = self.state.cache.get(series_id, [])
            elif isinstance(result, BaseException):
                raise result
            else:
                next_cache[series_id] = result

        self.state.replace_cache(next_cache)
        if failed:
            self._report(FetchError("Could not load measurements."), ", ".join(str(sid) for sid in failed))
        else:
            self.state.error = None
        return True

    async def set_active(self, series_ids: Iterable[int]) -> bool:
        """Replace the active set and refetch."""
        self.state.registry.set_active(series_ids)
        return await self.refresh_measurements()

    async def toggle_series(self, series_id: int) -> bool:
        """Toggle one series in the active set and refetch."""
        self.state.registry.toggle_active(series_id)
        return await self.refresh_measurements()

    async def set_filter(
        self,
        mode: FilterMode | None = None,
        from_input: str | None = None,
        to_input: str | None = None,
    ) -> bool:
        """Change any of the filter inputs and refetch.

        Switching the mode leaves the inputs as typed.
        """
        time_filter = self.state.time_filter
        if mode is not None:
            time_filter.mode = mode
        if from_input is not None:
            time_filter.from_input = from_input
        if to_input is not None:
            time_filter.to_input = to_input
        return await self.refresh_measurements()

    # ===== INTERACTION =====

    def click_cell(self, row: TableRow, series_id: int, accumulate: bool = False) -> bool:
        """Handle a click on a table cell. Empty cells do nothing."""
        measurement = row.get(series_id)
        if measurement is None:
            return False
        self.state.registry.select(measurement.series_id)
        return self.state.selection.click(measurement, accumulate=accumulate)

    def click_point(self, point: ChartPoint, rank: int, accumulate: bool = False) -> bool:
        """Handle a click on a chart dot, mapped back through its measurement id."""
        measurement_id = point.measurement_ids.get(rank)
        if measurement_id is None:
            return False
        measurement = self.state.find_measurement(measurement_id)
        if measurement is None:
            return False
        self.state.registry.select(measurement.series_id)
        return self.state.selection.click(measurement, accumulate=accumulate)

    def cycle_edit(self, row: TableRow) -> Measurement | None:
        """Open the next measurement of a row in the edit form."""
        target = self.state.selection.cycle_edit(row.measurements())
        if target is not None:
            self.state.registry.select(target.series_id)
        return target
