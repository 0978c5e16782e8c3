"""Data Transfer Objects for wire contracts.

These Pydantic models describe the payloads exchanged with the challenge
service, the completion endpoint and the relay's own clients.

Internal domain logic should use entities from the entities package.
"""

from .requests import ChatCompletionRequest, ChatMessage, SubmitAnswerRequest
from .responses import (
    ChallengeResponse,
    ChatChoice,
    ChatCompletionResponse,
    ErrorResponse,
    HealthCheckResponse,
    SolutionResponse,
)

__all__ = [
    "ChatMessage",
    "ChatCompletionRequest",
    "SubmitAnswerRequest",
    "ChallengeResponse",
    "ChatChoice",
    "ChatCompletionResponse",
    "ErrorResponse",
    "HealthCheckResponse",
    "SolutionResponse",
]
