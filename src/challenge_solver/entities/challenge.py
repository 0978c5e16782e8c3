"""Challenge, answer and submission entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Challenge:
    """A problem fetched from the challenge service.

    Attributes:
        id: Problem identifier, echoed back on submission
        problem: Natural-language problem text
        solution: Reference solution, only present on test challenges
    """

    id: str
    problem: str
    solution: float | None = None


@dataclass(frozen=True)
class Answer:
    """Interpreted solution to a challenge.

    Attributes:
        problem_id: Identifier of the challenge this answers
        answer: Value rounded to 10 decimals, or None when the data was insufficient
        reasoning: Free-text explanation returned by the model
    """

    problem_id: str
    answer: float | None
    reasoning: str | None = None


@dataclass(frozen=True)
class SubmissionResult:
    """Outcome of submitting an answer."""

    success: bool
    message: str
