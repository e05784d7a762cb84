"""
Mutation coordination.

Validates operator input, calls the data-access collaborator and reconciles
the dashboard state with the server's answer. Local state is only touched
after the server confirmed a change; a rejected call leaves it exactly as it
was. Without privilege every operation is a no-op.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Awaitable, Callable, Iterator
from datetime import datetime

from seriesboard.core.access import DataAccess
from seriesboard.core.state import DashboardState
from seriesboard.exceptions import ApiError, MutationError, ValidationError
from seriesboard.logger import logger
from seriesboard.models import Measurement, Series
from seriesboard.utils.timestamp import format_local_now, normalize_input_timestamp
from seriesboard.utils.validators import (
    parse_number,
    validate_color,
    validate_password_change,
    validate_series_fields,
    validate_value_in_range,
)

ConfirmCallback = Callable[[str], Awaitable[bool]]
CommitCallback = Callable[[], None]


def _mutation_error(error: ApiError, fallback: str) -> MutationError:
    """Prefer the server's detail message over the generic one."""
    return MutationError(error.detail or fallback, detail=error.detail)


def _resolve_timestamp(text: str) -> str:
    try:
        return normalize_input_timestamp(text)
    except ValueError as e:
        raise ValidationError("Invalid measurement time. Expected YYYY-MM-DDTHH:MM[:SS].") from e


def _kept_timestamp(stored: str) -> str:
    """Normalize a stored timestamp sent back unchanged. Zoned or fractional values pass through as the server sent them."""
    try:
        return normalize_input_timestamp(stored)
    except ValueError:
        return stored


class MutationCoordinator:
    """Create, update and delete series and measurements.

    Args:
        state: Dashboard state to reconcile
        access: Data-access collaborator
        confirm: Asks the operator to confirm a destructive action
        on_commit: Called after every change the server confirmed
    """

    def __init__(
        self,
        state: DashboardState,
        access: DataAccess,
        confirm: ConfirmCallback,
        on_commit: CommitCallback | None = None,
    ) -> None:
        self._state = state
        self._access = access
        self._confirm = confirm
        self._on_commit = on_commit

    def _committed(self) -> None:
        if self._on_commit is not None:
            self._on_commit()

    @contextlib.contextmanager
    def _reporting(self) -> Iterator[None]:
        """Clear the banner, and set it again if the operation fails."""
        self._state.error = None
        try:
            yield
        except (ValidationError, MutationError) as e:
            self._state.error = str(e)
            raise

    # ===== MEASUREMENTS =====

    async def create_measurement(
        self,
        value_input: str | float,
        *,
        series_id: int | None = None,
        use_now: bool = True,
        timestamp_input: str = "",
        now: datetime | None = None,
    ) -> Measurement | None:
        """Add a measurement to a series (the selected series by default).

        Args:
            value_input: Raw value input
            series_id: Target series; defaults to the registry's selected series
            use_now: Stamp with the current local time instead of ``timestamp_input``
            timestamp_input: Operator-entered time, used when ``use_now`` is False
            now: Clock override for "now"

        Returns:
            The created measurement, or None without privilege

        Raises:
            ValidationError: Before any network call, for bad input
            MutationError: If the server rejects the measurement
        """
        if not self._state.privileged:
            return None

        with self._reporting():
            target_id = series_id if series_id is not None else self._state.registry.selected_series_id
            if target_id is None:
                raise ValidationError("Select a series.")
            series = self._state.registry.find(target_id)
            if series is None:
                raise ValidationError("Series not found.")

            value = parse_number(value_input)
            validate_value_in_range(value, series)

            if use_now:
                timestamp = format_local_now(now)
            else:
                if not (timestamp_input or "").strip():
                    raise ValidationError("Enter the measurement time.")
                timestamp = _resolve_timestamp(timestamp_input)

            try:
                created = await self._access.create_measurement(series.id, value, timestamp)
            except ApiError as e:
                raise _mutation_error(e, "Could not add the measurement.") from e

            self._state.insert_measurement(created)
            self._committed()
            logger.info("Created measurement %s in series %s", created.id, created.series_id)
            return created

    async def update_measurement(self, value_input: str | float, timestamp_input: str = "") -> Measurement | None:
        """Save the edit form of the measurement being edited.

        An empty ``timestamp_input`` keeps the original timestamp. On success
        the updated measurement becomes the sole selection and the form closes.

        Raises:
            ValidationError: Before any network call, for bad input
            MutationError: If the server rejects the update
        """
        editing = self._state.selection.editing
        if not self._state.privileged or editing is None:
            return None

        with self._reporting():
            series = self._state.registry.find(editing.series_id)
            if series is None:
                raise ValidationError("Series not found.")

            value = parse_number(value_input)
            validate_value_in_range(value, series)

            if (timestamp_input or "").strip():
                timestamp = _resolve_timestamp(timestamp_input)
            else:
                timestamp = _kept_timestamp(editing.timestamp)

            try:
                updated = await self._access.update_measurement(editing.id, editing.series_id, value, timestamp)
            except ApiError as e:
                raise _mutation_error(e, "Could not update the measurement.") from e

            self._state.replace_measurement(updated)
            self._state.selection.replace_with(updated)
            self._committed()
            logger.info("Updated measurement %s", updated.id)
            return updated

    async def delete_measurement(self, measurement: Measurement) -> list[int]:
        """Delete a measurement, or the whole selection it belongs to.

        When the measurement is part of a selection of more than one id, every
        selected measurement is deleted after a single confirmation.

        Returns:
            Ids the server confirmed as deleted (empty if declined or unprivileged)

        Raises:
            MutationError: If the server rejected any deletion
        """
        if not self._state.privileged:
            return []

        selected = self._state.selection.ids
        if len(selected) > 1 and measurement.id in selected:
            return await self._delete_batch(list(selected))

        if not await self._confirm("Delete this measurement?"):
            return []

        with self._reporting():
            try:
                await self._access.delete_measurement(measurement.id)
            except ApiError as e:
                raise _mutation_error(e, "Could not delete the measurement.") from e

            self._state.remove_measurements([measurement.id])
            self._state.selection.remove([measurement.id])
            self._committed()
            logger.info("Deleted measurement %s", measurement.id)
            return [measurement.id]

    async def _delete_batch(self, measurement_ids: list[int]) -> list[int]:
        if not await self._confirm(f"Delete {len(measurement_ids)} selected measurements?"):
            return []

        with self._reporting():
            results = await asyncio.gather(
                *(self._access.delete_measurement(mid) for mid in measurement_ids),
                return_exceptions=True,
            )
            deleted: list[int] = []
            failed: list[int] = []
            unexpected: BaseException | None = None
            for mid, result in zip(measurement_ids, results, strict=True):
                if isinstance(result, BaseException):
                    failed.append(mid)
                    if not isinstance(result, ApiError) and unexpected is None:
                        unexpected = result
                else:
                    deleted.append(mid)

            # Only ids the server confirmed leave the cache
            self._state.remove_measurements(deleted)
            if failed:
                self._state.selection.remove(deleted)
            else:
                self._state.selection.reset()
            if deleted:
                self._committed()
            logger.info("Deleted %d of %d selected measurements", len(deleted), len(measurement_ids))

            if unexpected is not None:
                raise unexpected
            if failed:
                raise MutationError(f"Could not delete {len(failed)} of {len(measurement_ids)} measurements.")
            return deleted

    # ===== SERIES =====

    async def create_series(
        self,
        name: str,
        min_input: str | float,
        max_input: str | float,
        color: str | None = None,
        icon: str | None = None,
    ) -> Series | None:
        """Create a series. It becomes the selected series and joins the active set.

        Raises:
            ValidationError: Before any network call, for bad input
            MutationError: If the server rejects the series
        """
        if not self._state.privileged:
            return None

        with self._reporting():
            clean_name, min_value, max_value = validate_series_fields(name, min_input, max_input)
            clean_color = validate_color(color)
            try:
                created = await self._access.create_series(clean_name, min_value, max_value, clean_color, icon)
            except ApiError as e:
                raise _mutation_error(e, "Could not create the series.") from e

            self._state.registry.add(created)
            self._state.cache.setdefault(created.id, [])
            self._committed()
            logger.info("Created series %s (%s)", created.id, created.name)
            return created

    async def update_series(
        self,
        series_id: int,
        name: str,
        min_input: str | float,
        max_input: str | float,
        color: str | None = None,
        icon: str | None = None,
    ) -> Series | None:
        """Replace name, bounds and color of a series. Color and icon default to the current ones.

        Raises:
            ValidationError: Before any network call, for bad input
            MutationError: If the server rejects the update
        """
        if not self._state.privileged:
            return None

        with self._reporting():
            current = self._state.registry.find(series_id)
            if current is None:
                raise ValidationError("Series not found.")
            clean_name, min_value, max_value = validate_series_fields(name, min_input, max_input)
            if color is None or color == current.color:
                color = current.color
            else:
                color = validate_color(color) or current.color
            try:
                updated = await self._access.update_series(
                    series_id,
                    clean_name,
                    min_value,
                    max_value,
                    color,
                    icon if icon is not None else current.icon,
                )
            except ApiError as e:
                raise _mutation_error(e, "Could not update the series.") from e

            self._state.registry.replace(updated)
            self._committed()
            logger.info("Updated series %s", updated.id)
            return updated

    async def delete_series(self, series_id: int) -> bool:
        """Delete a series and drop its measurements from local state.

        Returns:
            True if the series was deleted

        Raises:
            ValidationError: If the series is unknown
            MutationError: If the server rejects the deletion
        """
        if not self._state.privileged:
            return False

        with self._reporting():
            series = self._state.registry.find(series_id)
            if series is None:
                raise ValidationError("Series not found.")

        if not await self._confirm(f'Delete series "{series.name}"?'):
            return False

        with self._reporting():
            try:
                await self._access.delete_series(series_id)
            except ApiError as e:
                raise _mutation_error(e, "Could not delete the series.") from e

            dropped = self._state.drop_series(series_id)
            self._state.selection.remove(dropped)
            self._state.registry.remove(series_id)
            self._committed()
            logger.info("Deleted series %s", series_id)
            return True

    # ===== ACCOUNT =====

    async def change_password(self, old_password: str, new_password: str) -> bool:
        """Change the operator's password.

        Raises:
            ValidationError: If either password is empty
            MutationError: If the server rejects the change
        """
        if not self._state.privileged:
            return False

        with self._reporting():
            validate_password_change(old_password, new_password)
            try:
                await self._access.change_password(old_password, new_password)
            except ApiError as e:
                raise _mutation_error(e, "Could not change the password.") from e
            logger.info("Password changed")
            return True
