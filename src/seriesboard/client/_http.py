"""Blocking HTTP client for the measurement API."""

from __future__ import annotations

from typing import Any

import requests

from seriesboard.client._token import TokenStore
from seriesboard.exceptions import ApiError
from seriesboard.logger import logger
from seriesboard.models import Measurement, Series

# Default timeout for HTTP requests in seconds
_DEFAULT_TIMEOUT = 30.0


def _extract_detail(response: requests.Response | None) -> str | None:
    """Get the ``detail`` field from an error response body, if any."""
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("detail") is not None:
        detail = body["detail"]
        return detail if isinstance(detail, str) else str(detail)
    return None


def _items(data: Any) -> list[dict[str, Any]]:
    """Accept both a bare list and a ``{"items": [...]}`` page."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        return data.get("items") or []
    return []


class ApiClient:
    """HTTP client for communicating with the measurement API."""

    def __init__(
        self,
        base_url: str,
        token_store: TokenStore | None = None,
        timeout: float = _DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize API client.

        Args:
            base_url: Base URL of the API server (e.g., "http://127.0.0.1:8000")
            token_store: Where the bearer token is kept. Defaults to the data directory.
            timeout: Request timeout in seconds
        """
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout
        self._token_store = token_store or TokenStore()
        self._token: str | None = self._token_store.load()

    @property
    def token(self) -> str | None:
        """Get the bearer token currently attached to requests."""
        return self._token

    @property
    def is_authenticated(self) -> bool:
        """Whether a bearer token is held."""
        return self._token is not None

    def _request(self, method: str, path: str, *, auth: bool = True, **kwargs: Any) -> requests.Response:
        """Send a request and translate failures into ``ApiError``.

        Raises:
            ApiError: On transport failure or a non-2xx response
        """
        headers = dict(kwargs.pop("headers", None) or {})
        if auth and self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        try:
            response = self.session.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                timeout=self.timeout,
                **kwargs,
            )
            response.raise_for_status()
        except requests.HTTPError as e:
            detail = _extract_detail(e.response)
            status = e.response.status_code if e.response is not None else None
            logger.debug("%s %s failed with %s: %s", method, path, status, detail)
            raise ApiError(detail or f"Request failed: {method} {path}", detail=detail, status_code=status) from e
        except requests.RequestException as e:
            logger.debug("%s %s failed: %s", method, path, e)
            raise ApiError(f"Request failed: {method} {path}") from e
        return response

    # ===== AUTH =====

    def login(self, username: str, password: str) -> str:
        """Log in and store the returned bearer token.

        Returns:
            The access token
        """
        response = self._request(
            "POST",
            "/auth/login",
            auth=False,
            data={"username": username, "password": password},
        )
        token = response.json()["access_token"]
        self._token = token
        self._token_store.save(token)
        return token

    def logout(self) -> None:
        """Forget the held bearer token."""
        self._token = None
        self._token_store.clear()

    def change_password(self, old_password: str, new_password: str) -> None:
        """Change the password of the logged-in user."""
        self._request(
            "POST",
            "/auth/change-password",
            json={"old_password": old_password, "new_password": new_password},
        )

    # ===== SERIES =====

    def list_series(self, limit: int = 200, offset: int = 0) -> list[Series]:
        """List series definitions."""
        response = self._request("GET", "/series", params={"limit": limit, "offset": offset})
        return [Series.model_validate(item) for item in _items(response.json())]

    def create_series(
        self,
        name: str,
        min_value: float,
        max_value: float,
        color: str | None = None,
        icon: str | None = None,
    ) -> Series:
        """Create a series."""
        payload: dict[str, Any] = {"name": name, "min_value": min_value, "max_value": max_value}
        if color is not None:
            payload["color"] = color
        if icon is not None:
            payload["icon"] = icon
        response = self._request("POST", "/series", json=payload)
        return Series.model_validate(response.json())

    def update_series(
        self,
        series_id: int,
        name: str,
        min_value: float,
        max_value: float,
        color: str | None = None,
        icon: str | None = None,
    ) -> Series:
        """Replace name, bounds, color and icon of a series."""
        payload: dict[str, Any] = {"name": name, "min_value": min_value, "max_value": max_value}
        if color is not None:
            payload["color"] = color
        if icon is not None:
            payload["icon"] = icon
        response = self._request("PUT", f"/series/{series_id}", json=payload)
        return Series.model_validate(response.json())

    def delete_series(self, series_id: int) -> None:
        """Delete a series. The server removes its measurements."""
        self._request("DELETE", f"/series/{series_id}")

    # ===== MEASUREMENTS =====

    def list_measurements(
        self,
        series_id: int,
        ts_from: str | None = None,
        ts_to: str | None = None,
        limit: int = 500,
        offset: int = 0,
    ) -> list[Measurement]:
        """List measurements of one series, optionally bounded in time (inclusive)."""
        params: dict[str, Any] = {"series_id": series_id, "limit": limit, "offset": offset}
        if ts_from:
            params["ts_from"] = ts_from
        if ts_to:
            params["ts_to"] = ts_to
        response = self._request("GET", "/measurements", params=params)
        return [Measurement.model_validate(item) for item in _items(response.json())]

    def create_measurement(self, series_id: int, value: float, timestamp: str) -> Measurement:
        """Create a measurement."""
        response = self._request(
            "POST",
            "/measurements",
            json={"series_id": series_id, "value": value, "timestamp": timestamp},
        )
        return Measurement.model_validate(response.json())

    def update_measurement(self, measurement_id: int, series_id: int, value: float, timestamp: str) -> Measurement:
        """Replace value and timestamp of a measurement."""
        response = self._request(
            "PUT",
            f"/measurements/{measurement_id}",
            json={"series_id": series_id, "value": value, "timestamp": timestamp},
        )
        return Measurement.model_validate(response.json())

    def delete_measurement(self, measurement_id: int) -> None:
        """Delete a measurement."""
        self._request("DELETE", f"/measurements/{measurement_id}")
