from pydantic import BaseModel, Field, field_validator


class ChatRequest(BaseModel):
    """Request payload for the chat completion endpoint.

    Attributes:
        message: User's prompt. Missing or blank values are rejected by the
            route with a 400 rather than by schema validation.
    """

    message: str | None = None

    @field_validator("message", mode="before")
    @classmethod
    def strip_message(cls, v: str | None) -> str | None:
        """Strip whitespace from message before validation."""
        if isinstance(v, str):
            return v.strip()
        return v


class ChatResponse(BaseModel):
    """Completion returned by the gateway.

    Attributes:
        response: The model's answer. May be empty.
    """

    response: str


class ErrorResponse(BaseModel):
    """Error body for non-success responses.

    Attributes:
        error: Short, user-safe description.
        details: Underlying error message, when available.
    """

    error: str
    details: str | None = None


class HealthResponse(BaseModel):
    """Static liveness acknowledgement."""

    status: str = "ok"
    message: str = Field(default="Alith AI server is running")
