"""Request DTOs for outbound and relayed calls."""

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """A single chat message."""

    role: str = Field(..., description="Message role (developer, system, user, assistant)")
    content: str = Field(..., description="Message text")


class ChatCompletionRequest(BaseModel):
    """Body sent to the completion endpoint."""

    model: str = Field(..., description="Model identifier", min_length=1)
    messages: list[ChatMessage] = Field(..., description="Conversation so far", min_length=1)

    model_config = {"extra": "allow"}


class SubmitAnswerRequest(BaseModel):
    """Body sent to the challenge service when submitting a solution."""

    problem_id: str = Field(..., description="Identifier of the challenge being answered")
    answer: float = Field(..., description="The numeric answer")
