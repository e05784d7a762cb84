"""
Selection state machine.

Tracks which measurements are selected in the merged view and which one is
open in the edit form. The same state drives table highlighting, chart dots
and the edit panel.

Phases:
- IDLE: nothing selected
- SELECTED: one or more ids selected, one of them primary
- EDITING: the primary measurement is open in the edit form (privileged only)
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from enum import Enum

from seriesboard.logger import logger
from seriesboard.models import Measurement
from seriesboard.utils.timestamp import to_input_value


class SelectionPhase(Enum):
    """Selection phase."""

    IDLE = "idle"
    SELECTED = "selected"
    EDITING = "editing"


@dataclass
class EditForm:
    """Raw edit-form inputs for the measurement being edited."""

    value: str
    timestamp: str

    @classmethod
    def for_measurement(cls, measurement: Measurement) -> EditForm:
        return cls(value=f"{measurement.value:g}", timestamp=to_input_value(measurement.timestamp))


class SelectionController:
    """Selection and edit state of the merged measurement view.

    ``primary`` is always one of ``ids`` when set. ``editing`` is only ever set
    for a privileged viewer and always equals the primary measurement.
    """

    def __init__(self, privileged: bool = False) -> None:
        self._privileged = privileged
        self._ids: list[int] = []
        self._primary: int | None = None
        self._editing: Measurement | None = None
        self.form: EditForm | None = None

    @property
    def privileged(self) -> bool:
        return self._privileged

    @property
    def ids(self) -> tuple[int, ...]:
        """Selected measurement ids in selection order."""
        return tuple(self._ids)

    @property
    def primary(self) -> int | None:
        return self._primary

    @property
    def editing(self) -> Measurement | None:
        """Measurement open in the edit form."""
        return self._editing

    @property
    def phase(self) -> SelectionPhase:
        if self._editing is not None:
            return SelectionPhase.EDITING
        if self._ids:
            return SelectionPhase.SELECTED
        return SelectionPhase.IDLE

    def is_selected(self, measurement_id: int | None) -> bool:
        return measurement_id is not None and measurement_id in self._ids

    def set_privileged(self, privileged: bool) -> None:
        """Change the viewer's privilege. Losing it closes the edit form."""
        self._privileged = privileged
        if not privileged:
            self._close_edit()

    def click(self, measurement: Measurement | None, accumulate: bool = False) -> bool:
        """Handle a click on a table cell or chart dot.

        A plain click replaces the selection; an accumulating click adds to it
        and never removes. Either way the clicked measurement becomes primary
        and, for a privileged viewer, opens in the edit form.

        Returns:
            False if there was no measurement under the click (nothing changes)
        """
        if measurement is None:
            return False

        if accumulate:
            if measurement.id not in self._ids:
                self._ids.append(measurement.id)
        else:
            self._ids = [measurement.id]
        self._primary = measurement.id

        if self._privileged:
            self._open_edit(measurement)
        else:
            self._close_edit()
        return True

    def cycle_edit(self, row_measurements: Sequence[Measurement]) -> Measurement | None:
        """Move the edit form through the measurements of one table row.

        If the edited measurement is in the row, the next one (wrapping) is
        opened, otherwise the first. The target becomes the sole selection.

        Args:
            row_measurements: Present measurements of the row in active-series order

        Returns:
            The measurement now being edited, or None if nothing changed
        """
        if not self._privileged or not row_measurements:
            return None

        current = -1
        if self._editing is not None:
            for idx, m in enumerate(row_measurements):
                if m.id == self._editing.id:
                    current = idx
                    break
        target = row_measurements[(current + 1) % len(row_measurements)] if current != -1 else row_measurements[0]

        self._ids = [target.id]
        self._primary = target.id
        self._open_edit(target)
        return target

    def remove(self, measurement_ids: Iterable[int]) -> None:
        """Drop deleted measurements from the selection.

        If the primary or edited measurement is among them, the whole
        selection returns to IDLE.
        """
        removed = set(measurement_ids)
        if not removed:
            return
        if self._primary in removed or (self._editing is not None and self._editing.id in removed):
            self.reset()
            return
        self._ids = [mid for mid in self._ids if mid not in removed]

    def replace_with(self, updated: Measurement) -> None:
        """Make an updated measurement the sole selection and close the edit form."""
        self._ids = [updated.id]
        self._primary = updated.id
        self._close_edit()

    def cancel_edit(self) -> None:
        """Close the edit form, keeping the selection."""
        self._close_edit()

    def reset(self) -> None:
        """Return to IDLE."""
        self._ids = []
        self._primary = None
        self._close_edit()

    def _open_edit(self, measurement: Measurement) -> None:
        self._editing = measurement
        self.form = EditForm.for_measurement(measurement)
        logger.debug("Editing measurement %s", measurement.id)

    def _close_edit(self) -> None:
        self._editing = None
        self.form = None
