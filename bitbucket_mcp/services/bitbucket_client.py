"""
Services - Bitbucket Client

Thin async wrapper over the Bitbucket Cloud REST API (v2.0).
"""

import logging
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

import httpx

from bitbucket_mcp.config import get_settings
from bitbucket_mcp.exceptions import (
    AuthenticationError,
    BitbucketApiError,
    NotFoundError,
)

logger = logging.getLogger(__name__)


def escape_bbql(value: str) -> str:
    """Escape a user string for use inside a quoted BBQL literal."""
    return str(value).replace("\\", "\\\\").replace('"', '\\"')


def api_path(*segments: Any) -> str:
    """
    Join path segments into an API path, percent-encoding each one.

    Slashes inside a segment are encoded, so caller-supplied slugs and IDs
    cannot add path components. "." and ".." are rejected outright.

    Example:
        api_path("repositories", "myteam", "api") == "/repositories/myteam/api"
    """
    parts = []
    for segment in segments:
        value = str(segment)
        if value in ("", ".", ".."):
            raise ValueError(f"Invalid path segment: {value!r}")
        parts.append(quote(value, safe=""))
    return "/" + "/".join(parts)


def next_cursor(page: Dict[str, Any]) -> Optional[str]:
    """
    Extract the cursor for the following page of a paginated response.

    Bitbucket returns the full URL of the next page; the cursor is its
    `page` query parameter, handed back to the caller as-is.
    """
    next_url = page.get("next")
    if not next_url:
        return None
    return httpx.URL(next_url).params.get("page")


class BitbucketClient:
    """Issues authenticated GET requests against Bitbucket Cloud."""

    def __init__(self, settings=None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings or get_settings()
        self.base_url = self.settings.bitbucket.base_url.rstrip("/")
        self.timeout = self.settings.bitbucket.timeout_seconds
        self.transport = transport

    @property
    def auth(self) -> Optional[Tuple[str, str]]:
        """Basic auth credentials, if configured."""
        username = self.settings.bitbucket.username
        password = self.settings.bitbucket.app_password
        if username and password:
            return (username, password)
        return None

    async def get(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        GET a Bitbucket API path and return the decoded JSON body.

        Args:
            path: API path relative to the base URL, e.g. "/workspaces/myteam"
            params: Query parameters; None values are dropped

        Returns:
            Decoded JSON response

        Raises:
            AuthenticationError: 401 or 403 response
            NotFoundError: 404 response
            BitbucketApiError: Any other error status or transport failure
        """
        response = await self._request(path, params)
        return response.json()

    async def get_text(
        self,
        path: str,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        """GET a path that returns raw content, such as a file under /src."""
        response = await self._request(path, params)
        return response.text

    async def _request(
        self,
        path: str,
        params: Optional[Dict[str, Any]],
    ) -> httpx.Response:
        url = f"{self.base_url}/{path.lstrip('/')}"
        query = {k: v for k, v in (params or {}).items() if v is not None}
        logger.debug(f"GET {url} params={query}")

        async with httpx.AsyncClient(
            auth=self.auth,
            timeout=self.timeout,
            transport=self.transport,
        ) as client:
            try:
                response = await client.get(url, params=query)
                response.raise_for_status()
            except httpx.HTTPStatusError as e:
                raise self._map_status_error(e, path) from e
            except httpx.RequestError as e:
                raise BitbucketApiError(
                    f"Could not reach Bitbucket: {e}",
                    context={"path": path},
                ) from e

            return response

    def _map_status_error(
        self,
        error: httpx.HTTPStatusError,
        path: str,
    ) -> BitbucketApiError:
        """Translate an HTTP error status into the exception hierarchy."""
        status = error.response.status_code
        detail = self._error_detail(error.response)
        context = {"path": path, "status_code": status}

        if status in (401, 403):
            return AuthenticationError(detail, status_code=status, context=context)
        if status == 404:
            return NotFoundError(detail, status_code=status, context=context)
        return BitbucketApiError(detail, status_code=status, context=context)

    @staticmethod
    def _error_detail(response: httpx.Response) -> str:
        """Pull the error message out of a Bitbucket error body."""
        try:
            body = response.json()
        except ValueError:
            return response.text or response.reason_phrase
        error = body.get("error") if isinstance(body, dict) else None
        if isinstance(error, dict) and error.get("message"):
            return error["message"]
        return response.reason_phrase or f"HTTP {response.status_code}"
