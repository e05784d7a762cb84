"""
seriesboard TUI Application

Main application class for the terminal-based dashboard.
"""

from __future__ import annotations

from textual.app import App
from textual.binding import Binding
from textual.theme import Theme

from seriesboard.client import ApiClient, AsyncApiClient
from seriesboard.config import ClientSettings, get_settings, is_read_only

# Dark theme matching the web dashboard palette
SERIESBOARD_THEME = Theme(
    name="seriesboard",
    primary="#61DAFB",
    secondary="#8B8B8B",
    accent="#FF7F50",
    foreground="#FFFFFF",
    background="#1A1A1A",
    surface="#1F1F1F",
    panel="#2A2A2A",
    success="#388E3C",
    error="#C84C3C",
    warning="#D4864E",
)


class SeriesboardTUIApp(App[None]):
    """seriesboard Terminal UI Application.

    A terminal-based dashboard for viewing and editing measurements.
    """

    TITLE = "Measurement Dashboard"

    CSS = """
    .main-container {
        height: 1fr;
    }

    .side-panel {
        width: 40;
        padding: 0 1;
    }

    .center-panel {
        width: 1fr;
    }

    .section-title {
        text-style: bold;
        margin-top: 1;
    }

    .banner {
        color: $error;
        height: auto;
        padding: 0 1;
    }

    .mode-line {
        color: $text-muted;
        height: auto;
        padding: 0 1;
    }

    #chart {
        height: 16;
    }

    #measurements-table {
        height: 1fr;
    }

    #series-table {
        height: 12;
    }
    """

    BINDINGS = [
        Binding("q", "quit", "Quit", show=True),
        Binding("question_mark", "help", "Help", show=True),
    ]

    def __init__(self, api_url: str | None = None, settings: ClientSettings | None = None) -> None:
        """Initialize the TUI application.

        Args:
            api_url: Base URL of the measurement API. Defaults to the configured one.
            settings: Client settings. Defaults to environment-based settings.
        """
        super().__init__()
        self._settings = settings or get_settings()
        self._api_url = api_url or self._settings.api_url
        self._access: AsyncApiClient | None = None

        self.register_theme(SERIESBOARD_THEME)
        self.theme = "seriesboard"

    @property
    def api_url(self) -> str:
        """Get the API base URL."""
        return self._api_url

    @property
    def settings(self) -> ClientSettings:
        return self._settings

    @property
    def access(self) -> AsyncApiClient:
        """Get or create the API access instance."""
        if self._access is None:
            self._access = AsyncApiClient(ApiClient(self._api_url, timeout=self._settings.timeout))
        return self._access

    @property
    def privileged(self) -> bool:
        """Whether the operator may edit (logged in and not read-only)."""
        return self.access.is_authenticated and not is_read_only()

    def on_mount(self) -> None:
        """Handle mount event - push the dashboard screen."""
        from seriesboard.tui.screens import DashboardScreen

        self.push_screen(DashboardScreen())

    async def action_quit(self) -> None:
        """Quit the application."""
        self.exit()

    def action_help(self) -> None:
        """Show help screen."""
        from seriesboard.tui.screens import HelpScreen

        self.push_screen(HelpScreen())
