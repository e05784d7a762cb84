#!/usr/bin/env python3
"""
seriesboard CLI tool

Command line interface for the terminal dashboard and account management
"""

from __future__ import annotations

import argparse
import getpass
import logging
import sys

from seriesboard.client import ApiClient
from seriesboard.config import get_settings, get_token_path
from seriesboard.exceptions import ApiError, ValidationError
from seriesboard.logger import setup_logger
from seriesboard.utils.validators import validate_password_change


def _make_client(api_url: str | None) -> ApiClient:
    settings = get_settings()
    return ApiClient(api_url or settings.api_url, timeout=settings.timeout)


def _fail(message: str) -> None:
    print(f"Error: {message}")
    sys.exit(1)


def run_tui(api_url: str | None = None) -> None:
    """
    Start TUI dashboard

    Args:
        api_url: Base URL of the measurement API. Defaults to SERIESBOARD_API_URL.
    """
    url = api_url or get_settings().api_url
    print("Starting seriesboard TUI...")
    print(f"API: {url}")

    from seriesboard.tui import run_tui as _run_tui

    _run_tui(api_url=url)


def run_login(api_url: str | None, username: str, password: str | None = None) -> None:
    """
    Log in and store the access token

    Args:
        api_url: Base URL of the measurement API
        username: Account name
        password: Password. Prompted for when omitted.
    """
    if password is None:
        password = getpass.getpass("Password: ")
    client = _make_client(api_url)
    try:
        client.login(username, password)
    except ApiError as e:
        _fail(e.detail or str(e))
    print(f"Logged in as {username}")
    print(f"Token stored in {get_token_path()}")


def run_logout() -> None:
    """
    Forget the stored access token
    """
    _make_client(None).logout()
    print("Logged out")


def run_passwd(api_url: str | None = None) -> None:
    """
    Change the password of the logged-in account

    Args:
        api_url: Base URL of the measurement API
    """
    client = _make_client(api_url)
    if not client.is_authenticated:
        _fail("Not logged in. Run 'seriesboard login' first.")
    old_password = getpass.getpass("Current password: ")
    new_password = getpass.getpass("New password: ")
    try:
        validate_password_change(old_password, new_password)
        client.change_password(old_password, new_password)
    except ValidationError as e:
        _fail(str(e))
    except ApiError as e:
        _fail(e.detail or str(e))
    print("Password changed")


def run_series(api_url: str | None = None) -> None:
    """
    Print the series list

    Args:
        api_url: Base URL of the measurement API
    """
    client = _make_client(api_url)
    try:
        series_list = client.list_series(limit=get_settings().series_limit)
    except ApiError as e:
        _fail(e.detail or str(e))
        return
    if not series_list:
        print("No series")
        return
    for series in series_list:
        print(f"{series.id:>5}  {series.name}  [{series.min_value:g}, {series.max_value:g}]  {series.display_color}")


def main() -> None:
    """
    CLI main entry point
    """
    parser = argparse.ArgumentParser(description="seriesboard measurement dashboard")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Subcommands")

    tui_parser = subparsers.add_parser("tui", help="Start terminal UI dashboard")
    tui_parser.add_argument("--api-url", default=None, help="API base URL (default: SERIESBOARD_API_URL)")

    login_parser = subparsers.add_parser("login", help="Log in and store the access token")
    login_parser.add_argument("username", help="Account name")
    login_parser.add_argument("--api-url", default=None, help="API base URL (default: SERIESBOARD_API_URL)")

    subparsers.add_parser("logout", help="Forget the stored access token")

    passwd_parser = subparsers.add_parser("passwd", help="Change password")
    passwd_parser.add_argument("--api-url", default=None, help="API base URL (default: SERIESBOARD_API_URL)")

    series_parser = subparsers.add_parser("series", help="List series")
    series_parser.add_argument("--api-url", default=None, help="API base URL (default: SERIESBOARD_API_URL)")

    args = parser.parse_args()
    setup_logger(logging.DEBUG if args.verbose else logging.INFO)

    if args.command == "login":
        run_login(args.api_url, args.username)
    elif args.command == "logout":
        run_logout()
    elif args.command == "passwd":
        run_passwd(api_url=args.api_url)
    elif args.command == "series":
        run_series(api_url=args.api_url)
    elif args.command == "tui":
        run_tui(api_url=args.api_url)
    else:
        run_tui()


if __name__ == "__main__":
    main()
