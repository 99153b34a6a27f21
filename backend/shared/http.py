"""
HTTP client for the donation backend.

All endpoints are same-origin JSON. Failures are normalized into
BackendError so feature modules only ever deal with one exception type
at the network boundary.
"""

import logging
from typing import Any, Optional

import httpx

from .config import get_settings
from .exceptions import BackendError

logger = logging.getLogger(__name__)


def bearer(subject_id: str) -> dict[str, str]:
    """Authorization header carrying the caller's subject ID."""
    return {"Authorization": f"Bearer {subject_id}"}


def _extract_message(response: httpx.Response) -> Optional[str]:
    """Pull the backend's ``message`` field out of an error body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


class BackendClient:
    """
    Thin async JSON client over httpx.

    A fresh AsyncClient is opened per call; pass ``transport`` to route
    calls somewhere other than the network (httpx.MockTransport in tests,
    httpx.ASGITransport for the in-process reference backend).
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self._base_url = base_url or settings.api_base_url
        self._timeout = timeout if timeout is not None else settings.request_timeout
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    async def request(
        self,
        method: str,
        path: str,
        *,
        fallback_message: str,
        json: Optional[dict[str, Any]] = None,
        headers: Optional[dict[str, str]] = None,
    ) -> dict[str, Any]:
        """
        Send a JSON request and return the decoded success body.

        Args:
            method: HTTP method
            path: Endpoint path relative to the base URL
            fallback_message: Message used when the backend supplies none
            json: Optional request body
            headers: Extra headers (e.g. Authorization)

        Returns:
            Decoded JSON object, or an empty dict for empty/non-object bodies

        Raises:
            BackendError: On transport failure or non-2xx response
        """
        request_headers = {"Content-Type": "application/json"}
        if headers:
            request_headers.update(headers)

        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    path,
                    json=json,
                    headers=request_headers,
                )
        except httpx.HTTPError as e:
            logger.warning(f"{method} {path} failed: {e}")
            raise BackendError(fallback_message) from e

        if not response.is_success:
            backend_message = _extract_message(response)
            logger.warning(
                f"{method} {path} returned {response.status_code}: "
                f"{backend_message or '<no message>'}"
            )
            raise BackendError(
                backend_message or fallback_message,
                status_code=response.status_code,
                backend_message=backend_message,
            )

        try:
            body = response.json()
        except ValueError:
            return {}
        return body if isinstance(body, dict) else {}
