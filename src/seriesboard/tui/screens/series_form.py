"""
Series Form Screen

Create or edit a series definition.
"""

from __future__ import annotations

from dataclasses import dataclass

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import ModalScreen
from textual.widgets import Button, Input, Static

from seriesboard.models import Series

# Default color offered for new series
NEW_SERIES_COLOR = "#ff7f50"


@dataclass(frozen=True)
class SeriesFormResult:
    """Raw form inputs; validated by the dashboard core."""

    name: str
    min_input: str
    max_input: str
    color: str | None


class SeriesFormScreen(ModalScreen[SeriesFormResult | None]):
    """Modal series form. Pre-filled from ``series`` when editing."""

    BINDINGS = [
        Binding("escape", "cancel", "Cancel", show=True),
    ]

    DEFAULT_CSS = """
    SeriesFormScreen {
        align: center middle;
    }

    SeriesFormScreen > Container {
        width: 50;
        height: auto;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }
    """

    def __init__(self, series: Series | None = None) -> None:
        super().__init__()
        self._series = series

    @property
    def is_edit(self) -> bool:
        return self._series is not None

    def compose(self) -> ComposeResult:
        """Compose the series form."""
        series = self._series
        title = f"Edit series {series.name}" if series else "New series"
        yield Container(
            Static(title, classes="section-title"),
            Input(value=series.name if series else "", placeholder="Name", id="series-name"),
            Input(value=f"{series.min_value:g}" if series else "", placeholder="Min", id="series-min"),
            Input(value=f"{series.max_value:g}" if series else "", placeholder="Max", id="series-max"),
            Input(value=series.display_color if series else NEW_SERIES_COLOR, placeholder="Color (#rrggbb)", id="series-color"),
            Button("Save" if series else "Add series", variant="primary", id="series-submit"),
        )

    @on(Input.Submitted)
    @on(Button.Pressed, "#series-submit")
    def submit(self) -> None:
        color = self.query_one("#series-color", Input).value.strip()
        self.dismiss(
            SeriesFormResult(
                name=self.query_one("#series-name", Input).value,
                min_input=self.query_one("#series-min", Input).value,
                max_input=self.query_one("#series-max", Input).value,
                color=color or None,
            )
        )

    def action_cancel(self) -> None:
        self.dismiss(None)
