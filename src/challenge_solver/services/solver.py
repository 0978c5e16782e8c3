"""End-to-end orchestration: reference data, challenge, answer, submission."""

import logging
from dataclasses import dataclass

from challenge_solver.entities import Answer, Challenge, SubmissionResult
from challenge_solver.exceptions import ChallengeSolverError, PreconditionError
from challenge_solver.repositories import ChallengeClient

from .interpretation import InterpretationService
from .reference_data import ReferenceDataService

logger = logging.getLogger(__name__)

NULL_ANSWER_MESSAGE = "No hay datos suficientes para determinar una solución"


@dataclass(frozen=True)
class SolveOutcome:
    """Everything produced by one solve run."""

    challenge: Challenge
    answer: Answer
    submission: SubmissionResult | None = None


class ChallengeSolver:
    """Runs one challenge through the whole pipeline.

    Example:
        ```python
        solver = ChallengeSolver.create()
        outcome = await solver.solve()
        print(outcome.answer.answer, outcome.submission)
        ```
    """

    def __init__(
        self,
        reference_data: ReferenceDataService,
        challenges: ChallengeClient,
        interpreter: InterpretationService,
    ) -> None:
        self._reference_data = reference_data
        self._challenges = challenges
        self._interpreter = interpreter

    @classmethod
    def create(cls) -> "ChallengeSolver":
        """Factory method wiring every collaborator from settings."""
        return cls(
            reference_data=ReferenceDataService.create(),
            challenges=ChallengeClient.create(),
            interpreter=InterpretationService.create(),
        )

    async def submit(self, answer: Answer) -> SubmissionResult:
        """Submit ``answer``; a null answer fails locally without a network call."""
        if answer.answer is None:
            logger.warning("Not submitting null answer for %s", answer.problem_id)
            return SubmissionResult(success=False, message=NULL_ANSWER_MESSAGE)
        return await self._challenges.submit_answer(answer.problem_id, answer.answer)

    async def solve(self, submit: bool = True, mode: str = "start", concurrent: bool = True) -> SolveOutcome:
        """Load reference data, fetch a challenge, interpret it and optionally submit.

        Args:
            submit: Send the answer back to the challenge service
            mode: Challenge mode ("start" or "test")
            concurrent: Load the reference datasets concurrently

        Raises:
            PreconditionError: If a reference dataset came back empty
            ChallengeSolverError: If any step fails
        """
        try:
            reference = await self._reference_data.load(concurrent=concurrent)
            if not reference.is_complete:
                raise PreconditionError("Reference data is incomplete, not fetching a challenge")

            challenge = await self._challenges.fetch_challenge(mode)
            answer = await self._interpreter.interpret(challenge, reference)
        except ChallengeSolverError as e:
            logger.error("Solve run failed: %s", e)
            raise

        submission = await self.submit(answer) if submit else None
        return SolveOutcome(challenge=challenge, answer=answer, submission=submission)

    async def close(self) -> None:
        await self._reference_data.close()
        await self._challenges.close()
