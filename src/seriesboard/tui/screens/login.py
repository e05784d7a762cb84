"""
Login Screen

Asks for the operator's credentials.
"""

from __future__ import annotations

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static


class LoginScreen(ModalScreen[tuple[str, str] | None]):
    """Modal login form. Dismisses with ``(username, password)`` or None."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    DEFAULT_CSS = """
    LoginScreen {
        align: center middle;
    }

    LoginScreen > Container {
        width: 40;
        height: auto;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }
    """

    def __init__(self, username: str = "admin") -> None:
        super().__init__()
        self._username = username

    def compose(self) -> ComposeResult:
        """Compose the login form."""
        yield Container(
            Static("Log in", classes="section-title"),
            Input(value=self._username, placeholder="Username", id="login-username"),
            Input(placeholder="Password", password=True, id="login-password"),
            Button("Log in", variant="primary", id="login-submit"),
        )

    def on_mount(self) -> None:
        self.query_one("#login-password", Input).focus()

    @on(Input.Submitted)
    @on(Button.Pressed, "#login-submit")
    def submit(self) -> None:
        username = self.query_one("#login-username", Input).value.strip()
        password = self.query_one("#login-password", Input).value
        if not username or not password:
            self.notify("Enter username and password", severity="warning")
            return
        self.dismiss((username, password))

    def action_cancel(self) -> None:
        self.dismiss(None)
