"""
seriesboard TUI Screens

Screen classes for the dashboard and its dialogs.
"""

from .confirm import ConfirmScreen
from .dashboard import DashboardScreen
from .help import HelpScreen
from .login import LoginScreen
from .password import PasswordScreen
from .series_form import SeriesFormResult, SeriesFormScreen

__all__ = [
    "ConfirmScreen",
    "DashboardScreen",
    "HelpScreen",
    "LoginScreen",
    "PasswordScreen",
    "SeriesFormResult",
    "SeriesFormScreen",
]
