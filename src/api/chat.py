"""Chat completion endpoint.

Accepts a user message, forwards it to the agent service, and returns the
completion text. Failures become JSON error bodies with an `error` field.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse

from src.agent.chat_agent import AgentService, CompletionError
from src.models.schemas import ChatRequest, ChatResponse, ErrorResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["chat"])


def get_agent_service(request: Request) -> AgentService:
    """Return the agent service created at application startup.

    Raises:
        HTTPException: 503 if the service was never initialized.
    """
    service = getattr(request.app.state, "agent_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Completion service is not initialized",
        )
    return service


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=error, details=details)
    return JSONResponse(status_code=status_code, content=body.model_dump(exclude_none=True))


@router.post(
    "/chat",
    response_model=ChatResponse,
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
async def chat(
    request: ChatRequest,
    agent_service: Annotated[AgentService, Depends(get_agent_service)],
):
    """Get a completion for one message.

    Args:
        request: Body with the user's message.
        agent_service: Injected completion service.

    Returns:
        ChatResponse with the model's answer.

    Raises:
        400: Message missing or blank.
        500: The provider call failed.
    """
    if not request.message:
        return _error(status.HTTP_400_BAD_REQUEST, "Message is required")

    logger.info(f"Received message: {request.message}")

    try:
        response = await agent_service.get_response(request.message)
    except CompletionError as e:
        logger.exception("Error getting AI response")
        return _error(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Failed to get AI response",
            details=str(e),
        )

    logger.info(f"AI response: {response}")
    return ChatResponse(response=response)
