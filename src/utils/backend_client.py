"""HTTP client the Gradio UI uses to talk to the Chronicles backend."""
from __future__ import annotations

import logging
from urllib.parse import quote
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)


class BackendError(RuntimeError):
    """The backend could not be reached or answered ``success: false``."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class BackendClient:
    """Thin wrapper over the backend's JSON routes."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: float = 60.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        if base_url is None:
            from config import settings
            base_url = settings.BACKEND_URL
        self._http = httpx.Client(base_url=base_url.rstrip("/"), timeout=timeout, transport=transport)

    def list_modes(self) -> List[Dict[str, str]]:
        return self._request("GET", "/api/modes")["modes"]

    def start_story(self, user_id: str, context: str, mode: str) -> Dict[str, Any]:
        return self._request(
            "POST", "/api/start-story",
            json={"userId": user_id, "context": context, "mode": mode},
        )

    def continue_story(self, user_id: str, user_message: str) -> Dict[str, Any]:
        return self._request(
            "POST", "/api/continue-story",
            json={"userId": user_id, "userMessage": user_message},
        )

    def get_session(self, user_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/api/session/{quote(user_id, safe='')}")

    # ── internals ─────────────────────────────────────────
    def _request(self, method: str, path: str, **kwargs: Any) -> Dict[str, Any]:
        try:
            resp = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.error("Backend unreachable (%s %s): %s", method, path, exc)
            raise BackendError(f"Connection error: {exc}") from exc

        try:
            data = resp.json()
        except ValueError:
            raise BackendError(f"HTTP error! status: {resp.status_code}", resp.status_code)

        if resp.is_error or not data.get("success"):
            raise BackendError(data.get("error") or f"HTTP error! status: {resp.status_code}", resp.status_code)
        return data
