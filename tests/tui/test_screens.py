"""Tests for TUI screens."""

from __future__ import annotations

import pytest
from textual.widgets import DataTable, Static

from seriesboard.exceptions import ApiError
from seriesboard.tui.app import SeriesboardTUIApp
from seriesboard.tui.screens import ConfirmScreen, DashboardScreen, HelpScreen


@pytest.fixture
def app(fake_access, settings):
    """Create app backed by the in-memory API."""
    tui_app = SeriesboardTUIApp(settings=settings)
    tui_app._access = fake_access
    return tui_app


async def _loaded(app: SeriesboardTUIApp, pilot) -> DashboardScreen:
    await pilot.pause()
    await app.workers.wait_for_complete()
    await pilot.pause()
    assert isinstance(app.screen, DashboardScreen)
    return app.screen


class TestDashboardScreen:
    """Tests for DashboardScreen."""

    @pytest.mark.asyncio
    async def test_dashboard_displays_merged_table(self, app: SeriesboardTUIApp) -> None:
        """Test that the table shows one row per instant and one column per series."""
        async with app.run_test(size=(160, 50)) as pilot:
            screen = await _loaded(app, pilot)
            table = screen.query_one("#measurements-table", DataTable)
            assert table.row_count == 3
            assert len(table.columns) == 3
            assert screen.query_one("#series-table", DataTable).row_count == 2

    @pytest.mark.asyncio
    async def test_fetch_failure_shows_banner(self, app: SeriesboardTUIApp, fake_access) -> None:
        fake_access.errors["list_series"] = ApiError("down")
        async with app.run_test(size=(160, 50)) as pilot:
            screen = await _loaded(app, pilot)
            assert screen.dashboard.state.error == "Could not load the series list."
            assert screen.query_one("#banner", Static) is not None

    @pytest.mark.asyncio
    async def test_enter_selects_measurement(self, app: SeriesboardTUIApp) -> None:
        """Test that Enter on a cell selects its measurement."""
        async with app.run_test(size=(160, 50)) as pilot:
            screen = await _loaded(app, pilot)
            screen.query_one("#measurements-table", DataTable).focus()
            await pilot.press("right", "enter")
            await pilot.pause()
            assert screen.dashboard.state.selection.ids == (10,)
            await pilot.press("right", "space")
            await pilot.pause()
            assert screen.dashboard.state.selection.ids == (10, 20)

    @pytest.mark.asyncio
    async def test_delete_requires_login(self, app: SeriesboardTUIApp, fake_access) -> None:
        async with app.run_test(size=(160, 50)) as pilot:
            screen = await _loaded(app, pilot)
            screen.query_one("#measurements-table", DataTable).focus()
            await pilot.press("right", "d")
            await pilot.pause()
            assert fake_access.calls_to("delete_measurement") == []
            assert not isinstance(app.screen, ConfirmScreen)

    @pytest.mark.asyncio
    async def test_delete_asks_for_confirmation(self, app: SeriesboardTUIApp, fake_access) -> None:
        """Test that a logged-in delete goes through the confirm dialog."""
        fake_access.is_authenticated = True
        async with app.run_test(size=(160, 50)) as pilot:
            screen = await _loaded(app, pilot)
            screen.query_one("#measurements-table", DataTable).focus()
            await pilot.press("right", "d")
            await pilot.pause()
            assert isinstance(app.screen, ConfirmScreen)

            await pilot.press("y")
            await app.workers.wait_for_complete()
            await pilot.pause()

            assert fake_access.calls_to("delete_measurement") == [("delete_measurement", 10)]
            assert [m.id for m in screen.dashboard.state.cache[1]] == [11]

    @pytest.mark.asyncio
    async def test_toggle_series_hides_column(self, app: SeriesboardTUIApp) -> None:
        async with app.run_test(size=(160, 50)) as pilot:
            screen = await _loaded(app, pilot)
            screen.query_one("#series-table", DataTable).focus()
            await pilot.press("t")
            await app.workers.wait_for_complete()
            await pilot.pause()
            assert screen.dashboard.state.registry.active_ids == [2]
            assert len(screen.query_one("#measurements-table", DataTable).columns) == 2

    @pytest.mark.asyncio
    async def test_help_screen_opens(self, app: SeriesboardTUIApp) -> None:
        """Test that help screen opens with action_help."""
        async with app.run_test(size=(160, 50)) as pilot:
            await _loaded(app, pilot)
            app.action_help()
            await pilot.pause()
            assert isinstance(app.screen, HelpScreen)
