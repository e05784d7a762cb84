"""
Help Screen

Displays keybinding help and usage information.
"""

from __future__ import annotations

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container, VerticalScroll
from textual.screen import ModalScreen
from textual.widgets import Static

HELP_TEXT = """\
[bold]Measurement Dashboard - Keyboard Shortcuts[/bold]

[bold underline]Global[/bold underline]
  [cyan]q[/]           Quit application
  [cyan]?[/]           Show this help
  [cyan]r[/]           Reload series and measurements
  [cyan]l[/]           Log in / log out

[bold underline]Series list[/bold underline]
  [cyan]Enter[/]       Make series the target of add / edit series
  [cyan]t[/]           Show / hide series in chart and table

[bold underline]Measurement table[/bold underline]
  [cyan]Enter[/]       Select measurement (opens edit form when logged in)
  [cyan]Space[/]       Add measurement to the selection
  [cyan]c[/]           Cycle edit form through the row's measurements
  [cyan]d[/]           Delete measurement (all selected if it is selected)
  [cyan]Esc[/]         Close the edit form

[bold underline]Filter[/bold underline]
  [cyan]m[/]           Switch date / date-time filter mode
  [cyan]f[/]           Focus the filter inputs

[bold underline]Editing (logged in)[/bold underline]
  [cyan]a[/]           Focus the add measurement form
  [cyan]n[/]           New series
  [cyan]e[/]           Edit selected series
  [cyan]x[/]           Delete selected series
  [cyan]p[/]           Change password

Press [cyan]Esc[/] or [cyan]?[/] to close this help.
"""


class HelpScreen(ModalScreen[None]):
    """Modal screen displaying help information."""

    BINDINGS = [
        Binding("escape", "dismiss", "Close", show=True),
        Binding("question_mark", "dismiss", "Close", show=False),
    ]

    DEFAULT_CSS = """
    HelpScreen {
        align: center middle;
    }

    HelpScreen > Container {
        width: 64;
        height: auto;
        max-height: 80%;
        background: $surface;
        border: solid $primary;
        padding: 1 2;
    }

    HelpScreen Static {
        width: 100%;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the help screen."""
        yield Container(
            VerticalScroll(
                Static(HELP_TEXT),
            ),
        )

    async def action_dismiss(self, result: None = None) -> None:
        """Dismiss the help screen."""
        self.dismiss(result)
