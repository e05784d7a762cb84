"""File-backed storage for the bearer token."""

from __future__ import annotations

import contextlib
import os
from pathlib import Path

from seriesboard.config import get_token_path


class TokenStore:
    """Keeps the bearer token between sessions.

    The token is written with owner-only permissions. No other data is persisted.
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path or get_token_path()

    @property
    def path(self) -> Path:
        """Get the token file path."""
        return self._path

    def load(self) -> str | None:
        """Return the stored token, or None if there is none."""
        try:
            token = self._path.read_text(encoding="utf-8").strip()
        except FileNotFoundError:
            return None
        return token or None

    def save(self, token: str) -> None:
        """Store a token, replacing any previous one."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        fd = os.open(self._path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(token)

    def clear(self) -> None:
        """Remove the stored token."""
        with contextlib.suppress(FileNotFoundError):
            self._path.unlink()
