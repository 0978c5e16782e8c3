"""Completion relay handler.

Pure pass-through: the inbound JSON body goes to the upstream completion
endpoint with a bearer credential added, and the upstream status and body
come back unchanged. No validation, no rate limiting.
"""

import logging
from typing import Any

import httpx

from challenge_solver.config import settings
from challenge_solver.dto import ErrorResponse

logger = logging.getLogger(__name__)

RELAY_ERROR_MESSAGE = "Failed to process chat completion"


class RelayHandler:
    """Forwards chat-completion bodies upstream.

    Example:
        ```python
        handler = RelayHandler(client=httpx.AsyncClient())
        status_code, body = await handler.forward({"model": "...", "messages": [...]})
        ```
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        upstream_url: str | None = None,
        auth_token: str | None = None,
    ) -> None:
        """Initialize the relay handler.

        Args:
            client: The httpx client used for upstream calls (required).
            upstream_url: Completion endpoint URL. Defaults to settings.
            auth_token: Bearer credential injected upstream. Defaults to settings.
        """
        self._client = client
        self._upstream_url = upstream_url or settings.upstream_completion_url
        self._auth_token = auth_token or settings.auth_token

    @property
    def upstream_url(self) -> str:
        return self._upstream_url

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._auth_token:
            headers["Authorization"] = f"Bearer {self._auth_token}"
        return headers

    async def forward(self, body: Any) -> tuple[int, Any]:
        """Relay ``body`` upstream.

        Returns:
            ``(status_code, payload)`` from upstream, or
            ``(500, {"error": ...})`` when the exchange itself fails
        """
        try:
            response = await self._client.post(self._upstream_url, json=body, headers=self._headers())
            payload = response.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error("Error in chat completion relay: %s", e)
            return 500, ErrorResponse(error=RELAY_ERROR_MESSAGE).model_dump()

        return response.status_code, payload
