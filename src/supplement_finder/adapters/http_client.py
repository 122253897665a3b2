"""Generic JSON HTTP client with unified error normalization."""

import json
from dataclasses import dataclass
from typing import Protocol

import httpx

_NETWORK_ERROR_TEXT = "Network Error"


class HttpError(Exception):
    """Raised when a request fails, carrying the HTTP status and status text."""

    def __init__(self, message: str, status: int, status_text: str) -> None:
        super().__init__(message)
        self.status = status
        self.status_text = status_text


class TransportError(HttpError):
    """Raised for network or body-decoding failures (status is always 0)."""

    def __init__(self, message: str) -> None:
        super().__init__(message or "Unknown error occurred", 0, _NETWORK_ERROR_TEXT)


class HttpClient(Protocol):
    """Interface for JSON-over-HTTP requests."""

    async def get(
        self,
        url: str,
        params: dict[str, object] | None = None,
        headers: dict[str, str] | None = None,
    ) -> object:
        """Send a GET request and return the decoded JSON body."""

    async def post(
        self,
        url: str,
        body: object,
        params: dict[str, object] | None = None,
        headers: dict[str, str] | None = None,
    ) -> object:
        """Send a JSON POST request and return the decoded JSON body."""


@dataclass
class HttpxHttpClient(HttpClient):
    """HTTPX-backed JSON client."""

    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, timeout_seconds: float | None = None, user_agent: str | None = None
    ) -> "HttpxHttpClient":
        """Create a client with a managed httpx session."""
        headers = {"User-Agent": user_agent} if user_agent else None
        return cls(
            http_client=httpx.AsyncClient(timeout=timeout_seconds, headers=headers)
        )

    async def get(
        self,
        url: str,
        params: dict[str, object] | None = None,
        headers: dict[str, str] | None = None,
    ) -> object:
        """Send a GET request."""
        return await self._send("GET", url, params=params, headers=headers)

    async def post(
        self,
        url: str,
        body: object,
        params: dict[str, object] | None = None,
        headers: dict[str, str] | None = None,
    ) -> object:
        """Send a POST request with a JSON body."""
        merged_headers = {"Content-Type": "application/json", **(headers or {})}
        return await self._send(
            "POST",
            url,
            params=params,
            headers=merged_headers,
            content=json.dumps(body).encode(),
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _send(
        self,
        method: str,
        url: str,
        *,
        params: dict[str, object] | None,
        headers: dict[str, str] | None,
        content: bytes | None = None,
    ) -> object:
        try:
            response = await self.http_client.request(
                method, url, params=params, headers=headers, content=content
            )
        except httpx.HTTPError as exc:
            raise TransportError(str(exc)) from exc

        if not response.is_success:
            raise HttpError(
                f"HTTP error! {response.status_code}: {response.reason_phrase}",
                response.status_code,
                response.reason_phrase,
            )

        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(str(exc)) from exc
