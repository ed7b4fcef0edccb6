"""FastAPI application factory and configuration.

Main application entry point with lifespan management, middleware,
and router registration.
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from src.agent.chat_agent import AgentService
from src.api.chat import router as chat_router
from src.models.schemas import HealthResponse

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown lifecycle.

    Creates the agent service once on startup unless one was injected.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control to the application while it runs.
    """
    # Startup
    logger.info("Starting Alith AI server...")
    if getattr(app.state, "agent_service", None) is None:
        app.state.agent_service = AgentService()
    yield
    # Shutdown
    logger.info("Shutting down Alith AI server...")


def create_app(agent_service: AgentService | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        agent_service: Optional pre-built completion service. When omitted,
            one is created from the environment during startup.

    Returns:
        Configured FastAPI application instance.
    """
    application = FastAPI(
        title="Alith AI Gateway",
        description=(
            "Completion Gateway for the Alith chat widget. Forwards a single "
            "user message to a language-model provider and returns its reply."
        ),
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    application.state.agent_service = agent_service

    application.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    application.include_router(chat_router)

    @application.get("/health", response_model=HealthResponse)
    async def health_check() -> HealthResponse:
        """Check service health status."""
        return HealthResponse()

    return application


app = create_app()
