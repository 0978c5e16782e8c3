"""Custom exceptions for challenge_solver."""


class ChallengeSolverError(Exception):
    """Base exception for all challenge_solver errors"""


class FetchError(ChallengeSolverError):
    """An upstream HTTP request failed"""


class PreconditionError(ChallengeSolverError):
    """A local precondition (challenge, reference data) is not met"""


class InterpretationError(ChallengeSolverError):
    """The model output could not be turned into an answer"""


class CompletionResponseError(InterpretationError):
    """Completion payload has no message content"""


class JSONExtractionError(InterpretationError):
    """No JSON object found in the model reply"""


class JSONRepairError(InterpretationError):
    """JSON stayed invalid after the repair pass"""


class InvalidSolutionError(InterpretationError):
    """Solution is neither null nor a finite number"""
