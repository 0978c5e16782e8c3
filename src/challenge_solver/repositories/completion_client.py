"""Completion endpoint client.

Talks to the relay (or any endpoint accepting ``{model, messages}``) and
returns the first choice's text. Satisfies the CompletionProvider protocol.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx
from pydantic import ValidationError

from challenge_solver.config import settings
from challenge_solver.dto import ChatCompletionRequest, ChatCompletionResponse
from challenge_solver.exceptions import CompletionResponseError
from challenge_solver.utils.retry import BackoffPolicy, with_retry

from .http_base import HttpRepository

logger = logging.getLogger(__name__)


class CompletionClient(HttpRepository):
    """Chat-completion client with retry.

    Example:
        ```python
        completion = CompletionClient.create()
        reply = await completion.complete([{"role": "user", "content": "Hola"}])
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        model: str | None = None,
        client: httpx.AsyncClient | None = None,
        auth_token: str | None = None,
        max_attempts: int | None = None,
        backoff: BackoffPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        token = auth_token or settings.auth_token
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        super().__init__(client=client, headers=headers)
        self._base_url = (base_url or settings.completion_base_url).rstrip("/")
        self._model = model or settings.completion_model
        self._max_attempts = max_attempts or settings.max_retries
        self._backoff = backoff or BackoffPolicy.from_settings()
        self._sleep = sleep

    @classmethod
    def create(cls, client: httpx.AsyncClient | None = None) -> "CompletionClient":
        """Factory method to create CompletionClient with defaults."""
        return cls(client=client)

    async def complete(self, messages: list[dict[str, str]]) -> str:
        """Send ``messages`` and return the first choice's content.

        Raises:
            FetchError: If the endpoint keeps failing after all retries
            CompletionResponseError: If the payload has no message content
        """
        body = ChatCompletionRequest(model=self._model, messages=messages).model_dump()
        payload = await with_retry(
            lambda: self._post_json(f"{self._base_url}/chat_completion", body),
            max_attempts=self._max_attempts,
            backoff=self._backoff,
            sleep=self._sleep,
        )

        try:
            response = ChatCompletionResponse.model_validate(payload)
        except ValidationError as e:
            raise CompletionResponseError(f"Unexpected completion payload: {e}") from e

        content = response.choices[0].message.content.strip()
        logger.debug("Model raw reply: %s", content)
        return content
