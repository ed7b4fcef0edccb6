"""Pydantic models for the Completion Gateway wire format.

Shared by the FastAPI routes and the chat panel's HTTP client so both ends
agree on the JSON shapes.

Models:
    - ChatRequest: {"message": str}
    - ChatResponse: {"response": str}
    - ErrorResponse: {"error": str, "details": str | None}
    - HealthResponse: {"status": str, "message": str}
"""

from src.models.schemas import ChatRequest, ChatResponse, ErrorResponse, HealthResponse

__all__ = ["ChatRequest", "ChatResponse", "ErrorResponse", "HealthResponse"]
