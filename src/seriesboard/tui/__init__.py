"""
seriesboard Terminal UI Dashboard

A terminal-based dashboard using the Textual framework for viewing and editing
measurements of several series on one timeline.
"""

from __future__ import annotations


def run_tui(api_url: str | None = None) -> None:
    """Run the seriesboard TUI application.

    Args:
        api_url: Base URL of the measurement API. Defaults to SERIESBOARD_API_URL.
    """
    from textual.logging import TextualHandler

    from seriesboard.logger import use_handler
    from seriesboard.tui.app import SeriesboardTUIApp

    use_handler(TextualHandler())
    app = SeriesboardTUIApp(api_url=api_url)
    app.run()


__all__ = ["run_tui"]
