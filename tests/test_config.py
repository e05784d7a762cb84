"""Tests for configuration handling."""

from __future__ import annotations

from pathlib import Path

import pytest

from seriesboard.config import ClientSettings, get_data_dir, get_settings, get_token_path, is_read_only


class TestClientSettings:
    """Tests for ClientSettings."""

    def test_defaults(self) -> None:
        settings = ClientSettings.from_env()
        assert settings.api_url == "http://127.0.0.1:8000"
        assert settings.series_limit == 200
        assert settings.measurement_limit == 500
        assert settings.timeout == 30.0

    def test_from_env(self, monkeypatch) -> None:
        monkeypatch.setenv("SERIESBOARD_API_URL", "http://example.test/api")
        monkeypatch.setenv("SERIESBOARD_TIMEOUT", "5")
        monkeypatch.setenv("SERIESBOARD_SERIES_LIMIT", "10")
        monkeypatch.setenv("SERIESBOARD_MEASUREMENT_LIMIT", "20")
        settings = ClientSettings.from_env()
        assert settings.api_url == "http://example.test/api"
        assert settings.timeout == 5.0
        assert settings.series_limit == 10
        assert settings.measurement_limit == 20

    def test_get_settings_is_cached(self, monkeypatch) -> None:
        first = get_settings()
        monkeypatch.setenv("SERIESBOARD_API_URL", "http://other.test")
        assert get_settings() is first


class TestDataDir:
    """Tests for data directory resolution."""

    def test_explicit_data_dir(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.setenv("SERIESBOARD_DATA_DIR", str(tmp_path))
        assert get_data_dir() == tmp_path.resolve()
        assert get_token_path() == tmp_path.resolve() / "token"

    def test_xdg_data_home(self, monkeypatch, tmp_path: Path) -> None:
        monkeypatch.delenv("SERIESBOARD_DATA_DIR")
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        assert get_data_dir() == tmp_path / "seriesboard"

    def test_home_fallback(self, monkeypatch) -> None:
        monkeypatch.delenv("SERIESBOARD_DATA_DIR")
        assert get_data_dir() == Path.home() / ".local" / "share" / "seriesboard"

    @pytest.mark.parametrize("path", ["/", "/etc", "/usr/"])
    def test_system_directories_are_rejected(self, monkeypatch, path: str) -> None:
        monkeypatch.setenv("SERIESBOARD_DATA_DIR", path)
        with pytest.raises(ValueError):
            get_data_dir()


class TestReadOnly:
    """Tests for read-only mode."""

    def test_read_only(self, monkeypatch) -> None:
        assert is_read_only() is False
        monkeypatch.setenv("SERIESBOARD_READ_ONLY", "1")
        assert is_read_only() is True
