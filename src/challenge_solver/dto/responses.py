"""Response DTOs for inbound payloads and relay responses."""

from pydantic import BaseModel, Field


class ChallengeResponse(BaseModel):
    """Challenge service payload for GET /challenge/start|test."""

    id: str = Field(..., description="Problem identifier")
    problem: str = Field(..., description="Problem text")
    solution: float | None = Field(None, description="Reference solution (test challenges only)")

    model_config = {"extra": "allow", "coerce_numbers_to_str": True}


class SolutionResponse(BaseModel):
    """Challenge service payload for POST /challenge/solution."""

    success: bool = Field(..., description="Whether the answer was accepted")
    message: str = Field("", description="Human-readable verdict")

    model_config = {"extra": "allow"}


class ChatChoiceMessage(BaseModel):
    content: str


class ChatChoice(BaseModel):
    message: ChatChoiceMessage

    model_config = {"extra": "allow"}


class ChatCompletionResponse(BaseModel):
    """Completion endpoint payload; only the fields we read are declared."""

    choices: list[ChatChoice] = Field(..., min_length=1)

    model_config = {"extra": "allow"}


class ErrorResponse(BaseModel):
    """Error payload returned by the relay."""

    error: str = Field(..., description="Error description")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    upstream_url: str = Field(..., description="Completion endpoint the relay forwards to")
