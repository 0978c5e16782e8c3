"""Challenge service client."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

import httpx
from pydantic import ValidationError

from challenge_solver.config import settings
from challenge_solver.dto import ChallengeResponse, SolutionResponse, SubmitAnswerRequest
from challenge_solver.entities import Challenge, SubmissionResult
from challenge_solver.exceptions import FetchError
from challenge_solver.utils.retry import BackoffPolicy, with_retry

from .http_base import HttpRepository

logger = logging.getLogger(__name__)

ZERO_ANSWER_MESSAGE = "La solución no puede ser cero"
CHALLENGE_MODES = ("start", "test")


class ChallengeClient(HttpRepository):
    """Fetches problems from the challenge service and submits answers.

    Example:
        ```python
        challenges = ChallengeClient.create()
        challenge = await challenges.fetch_challenge()
        result = await challenges.submit_answer(challenge.id, 6.0)
        ```
    """

    def __init__(
        self,
        base_url: str | None = None,
        client: httpx.AsyncClient | None = None,
        auth_token: str | None = None,
        reject_zero_answers: bool | None = None,
        max_attempts: int | None = None,
        backoff: BackoffPolicy | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        """Initialize the challenge client.

        Args:
            base_url: Challenge service root URL. Defaults to settings.
            client: Shared httpx client. Created lazily if None.
            auth_token: Bearer credential. Defaults to settings.auth_token.
            reject_zero_answers: Refuse to submit 0 without calling the service.
            max_attempts: Attempts for submissions. Defaults to settings.
            backoff: Delay policy between attempts. Defaults to settings.
            sleep: Awaitable sleep (injected by tests).
        """
        token = auth_token or settings.auth_token
        headers = {"Content-Type": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"

        super().__init__(client=client, headers=headers)
        self._base_url = (base_url or settings.challenge_base_url).rstrip("/")
        self._reject_zero = (
            settings.reject_zero_answers if reject_zero_answers is None else reject_zero_answers
        )
        self._max_attempts = max_attempts or settings.max_retries
        self._backoff = backoff or BackoffPolicy.from_settings()
        self._sleep = sleep

    @classmethod
    def create(cls, client: httpx.AsyncClient | None = None) -> "ChallengeClient":
        """Factory method to create ChallengeClient with defaults."""
        return cls(client=client)

    async def fetch_challenge(self, mode: str = "start") -> Challenge:
        """Fetch a new challenge.

        Args:
            mode: "start" for a scored challenge, "test" for one carrying its solution

        Returns:
            The fetched Challenge

        Raises:
            ValueError: If mode is unknown
            FetchError: If the request fails or the payload is malformed
        """
        if mode not in CHALLENGE_MODES:
            raise ValueError(f"mode must be one of {CHALLENGE_MODES}, got {mode!r}")

        payload = await self._get_json(f"{self._base_url}/challenge/{mode}")
        try:
            response = ChallengeResponse.model_validate(payload)
        except ValidationError as e:
            raise FetchError(f"Malformed challenge payload: {e}") from e

        logger.info("Fetched challenge %s", response.id)
        return Challenge(id=response.id, problem=response.problem, solution=response.solution)

    async def submit_answer(self, problem_id: str, value: float) -> SubmissionResult:
        """Submit ``value`` as the answer to ``problem_id``.

        A zero answer short-circuits to a failed result without any network
        call when zero answers are rejected.

        Raises:
            FetchError: If the submission keeps failing after all retries
        """
        if self._reject_zero and value == 0:
            logger.warning("Refusing to submit a zero answer for %s", problem_id)
            return SubmissionResult(success=False, message=ZERO_ANSWER_MESSAGE)

        body = SubmitAnswerRequest(problem_id=problem_id, answer=value).model_dump()
        payload = await with_retry(
            lambda: self._post_json(f"{self._base_url}/challenge/solution", body),
            max_attempts=self._max_attempts,
            backoff=self._backoff,
            sleep=self._sleep,
        )

        try:
            response = SolutionResponse.model_validate(payload)
        except ValidationError as e:
            raise FetchError(f"Malformed submission response: {e}") from e

        logger.info("Submission for %s: success=%s %s", problem_id, response.success, response.message)
        return SubmissionResult(success=response.success, message=response.message)
