"""
Confirm Screen

Yes/no dialog shown before destructive actions.
"""

from __future__ import annotations

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.screen import ModalScreen
from textual.widgets import Button, Static


class ConfirmScreen(ModalScreen[bool]):
    """Modal asking the operator to confirm an action. Dismisses with True or False."""

    BINDINGS = [
        Binding("y", "confirm", "Yes", show=True),
        Binding("n", "cancel", "No", show=True),
        Binding("escape", "cancel", "Cancel", show=False),
    ]

    DEFAULT_CSS = """
    ConfirmScreen {
        align: center middle;
    }

    ConfirmScreen > Container {
        width: 50;
        height: auto;
        background: $surface;
        border: solid $error;
        padding: 1 2;
    }

    ConfirmScreen Horizontal {
        height: auto;
        margin-top: 1;
    }
    """

    def __init__(self, message: str) -> None:
        super().__init__()
        self._message = message

    @property
    def message(self) -> str:
        return self._message

    def compose(self) -> ComposeResult:
        """Compose the dialog."""
        yield Container(
            Static(self._message),
            Horizontal(
                Button("Yes", variant="error", id="confirm-yes"),
                Button("No", id="confirm-no"),
            ),
        )

    @on(Button.Pressed, "#confirm-yes")
    def action_confirm(self) -> None:
        self.dismiss(True)

    @on(Button.Pressed, "#confirm-no")
    def action_cancel(self) -> None:
        self.dismiss(False)
