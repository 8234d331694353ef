"""HTTP client for the Inspector API."""

from __future__ import annotations

from typing import Any

import httpx


class ApiError(Exception):
    """Non-2xx response. Carries the server's error message when it sent one."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        super().__init__(f"{status_code}: {message}")


class ApiClient:
    """HTTP client for the Inspector API."""

    def __init__(self, api_url: str, transport: httpx.BaseTransport | None = None):
        self.api_url = api_url.rstrip("/")
        self.client = httpx.Client(base_url=self.api_url, timeout=30.0, transport=transport)

    def _check(self, res: httpx.Response) -> Any:
        if res.is_success:
            return res.json()
        try:
            message = res.json().get("error") or res.text
        except ValueError:
            message = res.text
        raise ApiError(res.status_code, message)

    def get(self, path: str, params: dict | None = None) -> Any:
        """Make GET request."""
        return self._check(self.client.get(path, params=params or {}))

    def post(self, path: str, data: dict) -> Any:
        """Make POST request."""
        return self._check(self.client.post(path, json=data))

    def save_component(
        self,
        code: str,
        properties: dict | None = None,
        title: str | None = None,
        description: str | None = None,
    ) -> dict:
        """
        Save a component.

        Returns {"id": "...", "code": "...", "url": "...", "shareUrl": "..."}
        """
        body: dict[str, Any] = {"code": code, "properties": properties or {}}
        if title is not None:
            body["title"] = title
        if description is not None:
            body["description"] = description
        return self.post("/api/components/save", body)

    def load_component(self, component_id: str) -> dict:
        return self.get(f"/api/components/{component_id}")

    def list_components(self, page: int = 1, limit: int = 10) -> dict:
        return self.get("/api/components", {"page": page, "limit": limit})

    def close(self):
        """Close client."""
        self.client.close()
