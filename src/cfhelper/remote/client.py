"""Read-only HTTP client for the Codeforces JSON API."""

from __future__ import annotations

import logging
from typing import Any, Mapping

import httpx

from .errors import NetworkError, RemoteStatusError

LOGGER = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://codeforces.com/api"
TIMEOUT_SECONDS = 30.0
HEADERS = {"User-Agent": "cfhelper (+https://codeforces.com)", "Accept": "application/json"}


class CodeforcesClient:
    """Fetch problem and submission data from the Codeforces API.

    Each call either returns the ``result`` member of the response or raises
    ``NetworkError``/``RemoteStatusError``. Nothing is retried.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        timeout: float = TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._http = httpx.Client(
            base_url=base_url.rstrip("/") + "/",
            timeout=timeout,
            headers=HEADERS,
            transport=transport,
        )

    def __enter__(self) -> "CodeforcesClient":
        return self

    def __exit__(self, *_: object) -> None:
        self.close()

    def close(self) -> None:
        self._http.close()

    def fetch_problemset(self) -> list[dict[str, Any]]:
        """Return the raw entries of ``result.problems`` from ``problemset.problems``.

        Raises:
            NetworkError: On transport failures or malformed payloads.
            RemoteStatusError: When the API reports a non-OK status.
        """
        result = self._call("problemset.problems")
        problems = result.get("problems") if isinstance(result, dict) else None
        if not isinstance(problems, list):
            raise NetworkError("problemset.problems returned no problem list")
        return problems

    def fetch_user_status(
        self, handle: str, *, start: int = 1, count: int | None = None
    ) -> list[dict[str, Any]]:
        """Return the raw submissions of ``handle`` from ``user.status``.

        Args:
            handle: Codeforces handle.
            start: 1-based index of the first submission to return.
            count: Number of submissions to return; all when omitted.

        Raises:
            NetworkError: On transport failures or malformed payloads.
            RemoteStatusError: When the API reports a non-OK status (unknown handle).
        """
        params: dict[str, Any] = {"handle": handle, "from": start}
        if count is not None:
            params["count"] = count
        result = self._call("user.status", params)
        if not isinstance(result, list):
            raise NetworkError("user.status returned no submission list")
        return result

    def _call(self, method: str, params: Mapping[str, Any] | None = None) -> Any:
        LOGGER.debug("GET %s params=%s", method, dict(params or {}))
        try:
            response = self._http.get(method, params=params)
        except httpx.HTTPError as exc:
            raise NetworkError(f"{method}: {exc}") from exc

        # Codeforces reports failures as JSON with an HTTP 4xx code, so the body
        # is parsed before the status code is considered.
        try:
            payload = response.json()
        except ValueError as exc:
            raise NetworkError(
                f"{method}: unreadable response (HTTP {response.status_code})"
            ) from exc

        if not isinstance(payload, dict):
            raise NetworkError(f"{method}: unexpected payload type {type(payload).__name__}")
        if payload.get("status") != "OK":
            comment = payload.get("comment") or f"HTTP {response.status_code}"
            raise RemoteStatusError(method, str(comment))
        return payload.get("result")


__all__ = ["CodeforcesClient", "DEFAULT_BASE_URL", "TIMEOUT_SECONDS"]
