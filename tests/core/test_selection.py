"""Tests for the selection state machine."""

from __future__ import annotations

import pytest

from seriesboard.core.selection import SelectionController, SelectionPhase


@pytest.fixture
def m(make_measurement):
    """Three measurements of one row plus one elsewhere."""
    return [
        make_measurement(1, 1, 10.0, "2024-01-10T08:00:00"),
        make_measurement(2, 2, 20.0, "2024-01-10T08:00:00"),
        make_measurement(3, 3, 30.0, "2024-01-10T08:00:00"),
        make_measurement(4, 1, 11.0, "2024-01-10T09:00:00"),
    ]


class TestClick:
    """Tests for click handling."""

    def test_plain_click_replaces_selection(self, m) -> None:
        """Test that a plain click leaves exactly the clicked id selected."""
        selection = SelectionController()
        selection.click(m[0])
        selection.click(m[1])
        assert selection.ids == (2,)
        assert selection.primary == 2
        assert selection.phase is SelectionPhase.SELECTED

    def test_accumulating_click_adds(self, m) -> None:
        """Test that an accumulating click adds without removing."""
        selection = SelectionController()
        selection.click(m[0])
        selection.click(m[1], accumulate=True)
        selection.click(m[0], accumulate=True)
        assert selection.ids == (1, 2)
        assert selection.primary == 1

    def test_click_on_nothing_is_noop(self, m) -> None:
        """Test that an empty cell leaves the state unchanged."""
        selection = SelectionController()
        selection.click(m[0])
        assert selection.click(None) is False
        assert selection.ids == (1,)

    def test_unprivileged_click_never_edits(self, m) -> None:
        """Test that read-only viewers only select."""
        selection = SelectionController(privileged=False)
        selection.click(m[0])
        assert selection.editing is None
        assert selection.form is None

    def test_privileged_click_opens_edit(self, m) -> None:
        """Test that privileged viewers get the edit form."""
        selection = SelectionController(privileged=True)
        selection.click(m[0])
        assert selection.phase is SelectionPhase.EDITING
        assert selection.editing.id == 1
        assert selection.form.value == "10"
        assert selection.form.timestamp.startswith("2024-01-10T")

    def test_losing_privilege_closes_edit(self, m) -> None:
        """Test that logout closes the edit form but keeps the selection."""
        selection = SelectionController(privileged=True)
        selection.click(m[0])
        selection.set_privileged(False)
        assert selection.editing is None
        assert selection.ids == (1,)


class TestCycleEdit:
    """Tests for cycling the edit form through a row."""

    def test_starts_with_first(self, m) -> None:
        """Test that cycling without an edited row member opens the first."""
        selection = SelectionController(privileged=True)
        selection.click(m[3])
        assert selection.cycle_edit(m[:3]).id == 1
        assert selection.ids == (1,)

    def test_advances_and_wraps(self, m) -> None:
        """Test that cycling moves to the next measurement and wraps around."""
        selection = SelectionController(privileged=True)
        selection.click(m[1])
        assert selection.cycle_edit(m[:3]).id == 3
        assert selection.cycle_edit(m[:3]).id == 1
        assert selection.primary == 1
        assert selection.editing.id == 1

    def test_requires_privilege(self, m) -> None:
        """Test that read-only viewers cannot cycle."""
        selection = SelectionController()
        assert selection.cycle_edit(m[:3]) is None
        assert selection.phase is SelectionPhase.IDLE

    def test_empty_row(self) -> None:
        selection = SelectionController(privileged=True)
        assert selection.cycle_edit([]) is None


class TestRemoval:
    """Tests for reconciling deletions."""

    def test_removing_primary_resets(self, m) -> None:
        """Test that deleting the primary measurement returns to IDLE."""
        selection = SelectionController(privileged=True)
        selection.click(m[0])
        selection.click(m[1], accumulate=True)
        selection.remove([2])
        assert selection.phase is SelectionPhase.IDLE
        assert selection.ids == ()

    def test_removing_others_keeps_primary(self, m) -> None:
        """Test that deleting non-primary ids only filters them out."""
        selection = SelectionController()
        selection.click(m[0])
        selection.click(m[1], accumulate=True)
        selection.click(m[2], accumulate=True)
        selection.remove([1, 99])
        assert selection.ids == (2, 3)
        assert selection.primary == 3

    def test_replace_with_closes_edit(self, m, make_measurement) -> None:
        """Test that a saved measurement becomes the sole selection."""
        selection = SelectionController(privileged=True)
        selection.click(m[0])
        selection.click(m[1], accumulate=True)
        selection.replace_with(make_measurement(2, 2, 25.0, "2024-01-10T08:00:00"))
        assert selection.ids == (2,)
        assert selection.primary == 2
        assert selection.editing is None

    def test_cancel_edit_keeps_selection(self, m) -> None:
        selection = SelectionController(privileged=True)
        selection.click(m[0])
        selection.cancel_edit()
        assert selection.phase is SelectionPhase.SELECTED
        assert selection.ids == (1,)
