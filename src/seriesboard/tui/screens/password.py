"""
Password Screen

Form for changing the operator's password.
"""

from __future__ import annotations

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static


class PasswordScreen(ModalScreen[tuple[str, str] | None]):
    """Modal password form. Dismisses with ``(old_password, new_password)`` or None.

    Empty fields are passed through; the dashboard core rejects them.
    """

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    DEFAULT_CSS = """
    PasswordScreen {
        align: center middle;
    }

    PasswordScreen > Container {
        width: 44;
        height: auto;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the password form."""
        yield Container(
            Static("Change password", classes="section-title"),
            Input(placeholder="Current password", password=True, id="password-old"),
            Input(placeholder="New password", password=True, id="password-new"),
            Button("Change password", variant="primary", id="password-submit"),
        )

    @on(Input.Submitted)
    @on(Button.Pressed, "#password-submit")
    def submit(self) -> None:
        old_password = self.query_one("#password-old", Input).value
        new_password = self.query_one("#password-new", Input).value
        self.dismiss((old_password, new_password))

    def action_cancel(self) -> None:
        self.dismiss(None)
