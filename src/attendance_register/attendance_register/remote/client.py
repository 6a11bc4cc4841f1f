from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

from ..core.constants import DEFAULT_SYNC_TIMEOUT_SECONDS
from ..core.exceptions import RemoteProtocolError, RemoteUnavailableError
from ..document.model import Document

logger = logging.getLogger(__name__)


class RemoteDocumentClient:
    """Pull/push the whole Document against a spreadsheet script endpoint.

    The endpoint is a last-writer-wins document store: a push replaces
    everything it holds, a pull returns everything. There is no partial sync.
    """

    def __init__(
        self,
        *,
        timeout: float = DEFAULT_SYNC_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        # Script endpoints answer through a redirect to the content host.
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            follow_redirects=True,
            transport=transport,
        )

    async def pull(self, endpoint: str) -> Document:
        try:
            response = await self._client.get(endpoint)
        except httpx.HTTPError as e:
            logger.error("Error fetching from remote store: %s", e)
            raise RemoteUnavailableError(f"Network error: {e}", endpoint=endpoint) from e

        envelope = self._decode(response, endpoint)
        data = envelope.get("data")
        if not isinstance(data, dict):
            raise RemoteProtocolError("Remote response has no data", endpoint=endpoint)

        try:
            return Document.from_dict(data)
        except (AttributeError, KeyError, TypeError, ValueError) as e:
            # Wrong JSON shapes surface as any of these while decoding.
            logger.error("Malformed document from remote store: %s", e)
            raise RemoteProtocolError(f"Malformed document: {e}", endpoint=endpoint) from e

    async def push(self, endpoint: str, document: Document) -> None:
        payload = {"action": "save", **document.to_dict()}
        try:
            response = await self._client.post(endpoint, json=payload)
        except httpx.HTTPError as e:
            logger.error("Error saving to remote store: %s", e)
            raise RemoteUnavailableError(f"Network error: {e}", endpoint=endpoint) from e

        envelope = self._decode(response, endpoint)
        if envelope.get("status") != "success":
            raise RemoteProtocolError(
                envelope.get("message") or "Unknown error saving to cloud",
                endpoint=endpoint,
            )

    async def aclose(self) -> None:
        await self._client.aclose()

    @staticmethod
    def _decode(response: httpx.Response, endpoint: str) -> dict[str, Any]:
        if response.is_error:
            logger.error("Remote store answered HTTP %s", response.status_code)
            raise RemoteUnavailableError(
                f"Network response was not ok (HTTP {response.status_code})",
                endpoint=endpoint,
            )

        try:
            envelope = response.json()
        except ValueError as e:
            raise RemoteProtocolError("Remote response is not valid JSON", endpoint=endpoint) from e

        if not isinstance(envelope, dict):
            raise RemoteProtocolError("Remote response is not an object", endpoint=endpoint)
        if envelope.get("status") == "error":
            message = envelope.get("message") or "Remote store reported an error"
            logger.error("Remote store error: %s", message)
            raise RemoteProtocolError(message, endpoint=endpoint)
        return envelope
