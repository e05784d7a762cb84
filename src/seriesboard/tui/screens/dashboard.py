"""
Dashboard Screen

Series list, time filter, merged chart and measurement table, plus the add
and edit forms. All state lives in a ``Dashboard``; this screen only forwards
keys and redraws.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable
from typing import TYPE_CHECKING

from textual import on
from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Horizontal, Vertical
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Input, Static

from seriesboard.core import Dashboard, FilterMode, TableRow, chart_key
from seriesboard.exceptions import ApiError, MutationError, ValidationError
from seriesboard.models import Measurement
from seriesboard.tui.screens.confirm import ConfirmScreen
from seriesboard.tui.screens.login import LoginScreen
from seriesboard.tui.screens.password import PasswordScreen
from seriesboard.tui.screens.series_form import SeriesFormScreen
from seriesboard.tui.widgets import TimelineChart
from seriesboard.utils.timestamp import format_full

if TYPE_CHECKING:
    from seriesboard.tui.app import SeriesboardTUIApp

logger = logging.getLogger(__name__)

EMPTY_CELL = "–"


def format_cell(measurement: Measurement | None, selected: bool, primary: bool) -> str:
    """Render one measurement table cell with selection markup."""
    if measurement is None:
        return EMPTY_CELL
    text = f"{measurement.value:g}"
    if primary:
        return f"[bold reverse]{text}[/]"
    if selected:
        return f"[reverse]{text}[/]"
    return text


class DashboardScreen(Screen[None]):
    """Main dashboard screen."""

    BINDINGS = [
        Binding("r", "reload", "Reload", show=True),
        Binding("t", "toggle_series", "Show/Hide", show=True),
        Binding("m", "toggle_mode", "Filter mode", show=True),
        Binding("space", "accumulate", "Add to selection", show=False),
        Binding("c", "cycle_edit", "Cycle edit", show=True),
        Binding("d", "delete_measurement", "Delete", show=True),
        Binding("escape", "cancel_edit", "Cancel edit", show=False),
        Binding("f", "focus_filter", "Filter", show=False),
        Binding("a", "focus_add", "Add", show=False),
        Binding("n", "new_series", "New series", show=False),
        Binding("e", "edit_series", "Edit series", show=False),
        Binding("x", "delete_series", "Delete series", show=False),
        Binding("l", "toggle_login", "Login", show=True),
        Binding("p", "change_password", "Password", show=False),
    ]

    def __init__(self) -> None:
        super().__init__()
        self._dashboard: Dashboard | None = None
        self._rows: list[TableRow] = []
        self._form_for: int | None = None

    @property
    def tui_app(self) -> SeriesboardTUIApp:
        """Get the typed app instance."""
        from seriesboard.tui.app import SeriesboardTUIApp

        assert isinstance(self.app, SeriesboardTUIApp)
        return self.app

    @property
    def dashboard(self) -> Dashboard:
        """Get the dashboard controller, creating it on first use."""
        if self._dashboard is None:
            self._dashboard = Dashboard(
                self.tui_app.access,
                self._confirm,
                privileged=self.tui_app.privileged,
                settings=self.tui_app.settings,
            )
        return self._dashboard

    def compose(self) -> ComposeResult:
        """Compose the screen layout."""
        yield Header()
        yield Static(id="banner", classes="banner")
        yield Horizontal(
            Vertical(
                Static("Series", classes="section-title"),
                DataTable(id="series-table", cursor_type="row"),
                Static("Filter", classes="section-title"),
                Static(id="filter-mode", classes="mode-line"),
                Input(placeholder="From", id="filter-from"),
                Input(placeholder="To", id="filter-to"),
                classes="side-panel",
            ),
            Vertical(
                TimelineChart(id="chart"),
                DataTable(id="measurements-table", cursor_type="cell"),
                classes="center-panel",
            ),
            Vertical(
                Static("Add measurement", classes="section-title"),
                Static(id="add-target", classes="mode-line"),
                Input(placeholder="Value", id="new-value"),
                Input(placeholder="Time (empty = now)", id="new-timestamp"),
                Static("Edit measurement", classes="section-title"),
                Static(id="edit-target", classes="mode-line"),
                Input(placeholder="Value", id="edit-value"),
                Input(placeholder="Time (empty = keep)", id="edit-timestamp"),
                Static(id="account", classes="mode-line"),
                classes="side-panel",
            ),
            classes="main-container",
        )
        yield Footer()

    def on_mount(self) -> None:
        """Handle mount event - load series and measurements."""
        table = self.query_one("#series-table", DataTable)
        table.add_column("On", key="active")
        table.add_column("Key", key="rank")
        table.add_column("Name", key="name")
        table.add_column("Range", key="range")
        self._refresh_view()
        self.query_one("#measurements-table", DataTable).focus()
        self.action_reload()

    # ===== WORKERS =====

    def _run(self, operation: Awaitable[object]) -> None:
        """Run a dashboard operation in a worker and redraw when it ends."""
        self.run_worker(self._guarded(operation), group="dashboard")

    async def _guarded(self, operation: Awaitable[object]) -> None:
        try:
            await operation
        except (ValidationError, MutationError) as e:
            self.notify(str(e), severity="error")
        finally:
            self._refresh_view()

    async def _confirm(self, message: str) -> bool:
        """Ask the operator to confirm a destructive action."""
        return bool(await self.app.push_screen_wait(ConfirmScreen(message)))

    def _require_privilege(self) -> bool:
        if self.dashboard.state.privileged:
            return True
        self.notify("Log in to edit", severity="warning")
        return False

    # ===== RENDERING =====

    def _refresh_view(self) -> None:
        """Redraw everything from the dashboard state."""
        state = self.dashboard.state
        self.query_one("#banner", Static).update(state.error or "")
        self._render_series_table()
        self._render_filter()
        self._render_timeline()
        self._render_forms()

    def _render_series_table(self) -> None:
        table = self.query_one("#series-table", DataTable)
        registry = self.dashboard.state.registry
        cursor_row = table.cursor_row
        table.clear()
        for series in registry.series:
            rank = registry.rank(series.id)
            name = f"[bold]{series.name}[/]" if series.id == registry.selected_series_id else series.name
            table.add_row(
                "[green]●[/]" if rank is not None else "[dim]○[/]",
                chart_key(rank) if rank is not None else "",
                name,
                f"{series.min_value:g}–{series.max_value:g}",
                key=str(series.id),
            )
        if table.row_count:
            table.move_cursor(row=min(cursor_row, table.row_count - 1))

    def _render_filter(self) -> None:
        state = self.dashboard.state
        mode = state.time_filter.mode
        hint = "YYYY-MM-DD" if mode is FilterMode.DATE else "YYYY-MM-DDTHH:MM"
        loading = " [yellow]loading…[/]" if state.loading_series or state.loading_measurements else ""
        self.query_one("#filter-mode", Static).update(f"Mode: {mode.value} ({hint}){loading}")

    def _render_timeline(self) -> None:
        state = self.dashboard.state
        registry = state.registry
        selection = state.selection
        timeline = state.timeline()
        self._rows = timeline.rows

        series_by_rank = {}
        for rank in range(1, len(timeline.active_ids) + 1):
            series = registry.series_for_rank(rank)
            if series is not None:
                series_by_rank[rank] = series
        self.query_one("#chart", TimelineChart).show(timeline.points, series_by_rank, selection)

        table = self.query_one("#measurements-table", DataTable)
        cursor = table.cursor_coordinate
        table.clear(columns=True)
        table.add_column("Time", key="time")
        for rank, series in series_by_rank.items():
            table.add_column(f"{chart_key(rank)}: {series.name}", key=str(series.id))
        for idx, row in enumerate(timeline.rows):
            cells = [format_full(row.timestamp)]
            for series_id in timeline.active_ids:
                m = row.get(series_id)
                mid = m.id if m is not None else None
                cells.append(format_cell(m, selection.is_selected(mid), mid is not None and mid == selection.primary))
            table.add_row(*cells, key=str(idx))
        if table.row_count:
            table.move_cursor(
                row=min(cursor.row, table.row_count - 1),
                column=min(cursor.column, len(table.columns) - 1),
            )

    def _render_forms(self) -> None:
        state = self.dashboard.state
        privileged = state.privileged
        target = state.registry.selected_series
        if not privileged:
            add_text = "Log in to add measurements"
        elif target is None:
            add_text = "No series selected"
        else:
            add_text = f"Into {target.name} ({target.min_value:g}–{target.max_value:g})"
        self.query_one("#add-target", Static).update(add_text)
        for input_id in ("#new-value", "#new-timestamp"):
            self.query_one(input_id, Input).disabled = not privileged or target is None

        editing = state.selection.editing
        form = state.selection.form
        value_input = self.query_one("#edit-value", Input)
        timestamp_input = self.query_one("#edit-timestamp", Input)
        editing_id = editing.id if editing is not None else None
        if editing_id != self._form_for:
            self._form_for = editing_id
            value_input.value = form.value if form is not None else ""
            timestamp_input.value = form.timestamp if form is not None else ""
        value_input.disabled = editing is None
        timestamp_input.disabled = editing is None
        if editing is None:
            edit_text = "Select a measurement" if privileged else "Read-only"
        else:
            series = state.registry.find(editing.series_id)
            edit_text = f"#{editing.id} in {series.name if series else editing.series_id}"
        self.query_one("#edit-target", Static).update(edit_text)

        account = "[green]Logged in[/]" if privileged else "[dim]Read-only[/]"
        self.query_one("#account", Static).update(account)

    # ===== CURSOR HELPERS =====

    def _cursor_cell(self) -> tuple[TableRow, int] | None:
        """Get the table row and series id under the measurement table cursor."""
        table = self.query_one("#measurements-table", DataTable)
        coordinate = table.cursor_coordinate
        active_ids = self.dashboard.state.registry.active_ids
        if not 0 <= coordinate.row < len(self._rows) or not 1 <= coordinate.column <= len(active_ids):
            return None
        return self._rows[coordinate.row], active_ids[coordinate.column - 1]

    def _cursor_series_id(self) -> int | None:
        table = self.query_one("#series-table", DataTable)
        series = self.dashboard.state.registry.series
        if not 0 <= table.cursor_row < len(series):
            return None
        return series[table.cursor_row].id

    # ===== EVENTS =====

    @on(DataTable.CellSelected, "#measurements-table")
    def on_cell_selected(self, event: DataTable.CellSelected) -> None:
        """Select the measurement under the cursor."""
        self._click(accumulate=False)

    @on(DataTable.RowSelected, "#series-table")
    def on_series_selected(self, event: DataTable.RowSelected) -> None:
        """Make the series the target of the add and edit-series forms."""
        series_id = self._cursor_series_id()
        if series_id is not None:
            self.dashboard.state.registry.select(series_id)
            self._refresh_view()

    @on(Input.Submitted, "#filter-from, #filter-to")
    def on_filter_submitted(self) -> None:
        self._run(
            self.dashboard.set_filter(
                from_input=self.query_one("#filter-from", Input).value,
                to_input=self.query_one("#filter-to", Input).value,
            )
        )

    @on(Input.Submitted, "#new-value, #new-timestamp")
    def on_add_submitted(self) -> None:
        value = self.query_one("#new-value", Input).value
        timestamp = self.query_one("#new-timestamp", Input).value
        self._run(self._add_measurement(value, timestamp))

    @on(Input.Submitted, "#edit-value, #edit-timestamp")
    def on_edit_submitted(self) -> None:
        value = self.query_one("#edit-value", Input).value
        timestamp = self.query_one("#edit-timestamp", Input).value
        self._run(self.dashboard.mutations.update_measurement(value, timestamp))

    async def _add_measurement(self, value: str, timestamp: str) -> None:
        created = await self.dashboard.mutations.create_measurement(
            value,
            use_now=not timestamp.strip(),
            timestamp_input=timestamp,
        )
        if created is not None:
            self.query_one("#new-value", Input).value = ""
            self.query_one("#new-timestamp", Input).value = ""

    def _click(self, accumulate: bool) -> None:
        cell = self._cursor_cell()
        if cell is None:
            return
        row, series_id = cell
        if self.dashboard.click_cell(row, series_id, accumulate=accumulate):
            self._refresh_view()

    # ===== ACTIONS =====

    def action_reload(self) -> None:
        """Reload series and measurements."""
        self._run(self.dashboard.load_series())

    def action_toggle_series(self) -> None:
        """Show or hide the series under the series table cursor."""
        series_id = self._cursor_series_id()
        if series_id is not None:
            self._run(self.dashboard.toggle_series(series_id))

    def action_toggle_mode(self) -> None:
        """Switch between date and date-time filtering."""
        mode = self.dashboard.state.time_filter.mode
        next_mode = FilterMode.DATETIME if mode is FilterMode.DATE else FilterMode.DATE
        self._run(self.dashboard.set_filter(mode=next_mode))

    def action_accumulate(self) -> None:
        """Add the measurement under the cursor to the selection."""
        self._click(accumulate=True)

    def action_cycle_edit(self) -> None:
        """Open the next measurement of the cursor row in the edit form."""
        if not self._require_privilege():
            return
        cell = self._cursor_cell()
        if cell is None:
            return
        if self.dashboard.cycle_edit(cell[0]) is not None:
            self._refresh_view()

    def action_delete_measurement(self) -> None:
        """Delete the measurement under the cursor, or the selection it is part of."""
        if not self._require_privilege():
            return
        cell = self._cursor_cell()
        measurement = cell[0].get(cell[1]) if cell is not None else None
        if measurement is None:
            self.notify("No measurement under the cursor", severity="warning")
            return
        self._run(self.dashboard.mutations.delete_measurement(measurement))

    def action_cancel_edit(self) -> None:
        """Close the edit form."""
        self.dashboard.state.selection.cancel_edit()
        self._refresh_view()

    def action_focus_filter(self) -> None:
        self.query_one("#filter-from", Input).focus()

    def action_focus_add(self) -> None:
        self.query_one("#new-value", Input).focus()

    def action_new_series(self) -> None:
        """Create a series."""
        if self._require_privilege():
            self._run(self._series_form(None))

    def action_edit_series(self) -> None:
        """Edit the selected series."""
        if not self._require_privilege():
            return
        series_id = self.dashboard.state.registry.selected_series_id
        if series_id is None:
            self.notify("No series selected", severity="warning")
            return
        self._run(self._series_form(series_id))

    async def _series_form(self, series_id: int | None) -> None:
        registry = self.dashboard.state.registry
        series = registry.find(series_id) if series_id is not None else None
        result = await self.app.push_screen_wait(SeriesFormScreen(series))
        if result is None:
            return
        mutations = self.dashboard.mutations
        if series is None:
            created = await mutations.create_series(result.name, result.min_input, result.max_input, result.color)
            if created is not None:
                self.notify(f"Created series {created.name}")
        else:
            await mutations.update_series(series.id, result.name, result.min_input, result.max_input, result.color)

    def action_delete_series(self) -> None:
        """Delete the selected series."""
        if not self._require_privilege():
            return
        series_id = self.dashboard.state.registry.selected_series_id
        if series_id is None:
            self.notify("No series selected", severity="warning")
            return
        self._run(self.dashboard.mutations.delete_series(series_id))

    def action_toggle_login(self) -> None:
        """Log in, or log out when logged in."""
        access = self.tui_app.access
        if access.is_authenticated:
            access.logout()
            self.dashboard.set_privileged(False)
            self.notify("Logged out")
            self._refresh_view()
            return
        self._run(self._login())

    async def _login(self) -> None:
        credentials = await self.app.push_screen_wait(LoginScreen())
        if credentials is None:
            return
        username, password = credentials
        try:
            await self.tui_app.access.login(username, password)
        except ApiError as e:
            logger.warning("Login failed: %s", e)
            self.notify(e.detail or "Login failed", severity="error")
            return
        self.dashboard.set_privileged(self.tui_app.privileged)
        if self.dashboard.state.privileged:
            self.notify(f"Logged in as {username}")
        else:
            self.notify("Logged in; editing is disabled in read-only mode", severity="warning")

    def action_change_password(self) -> None:
        """Change the operator's password."""
        if self._require_privilege():
            self._run(self._change_password())

    async def _change_password(self) -> None:
        passwords = await self.app.push_screen_wait(PasswordScreen())
        if passwords is None:
            return
        if await self.dashboard.mutations.change_password(*passwords):
            self.notify("Password changed")
