"""Agno agent service behind the Completion Gateway.

One prompt in, one completion out. The service is constructed once at
process start (see src.api.app.lifespan) and handed to the routes; it keeps
no conversation state, so every request is an independent completion.
"""

import logging

from agno.agent import Agent
from agno.models.openai import OpenAIChat

from src.agent.config import AgentConfig, get_agent_config

logger = logging.getLogger(__name__)


class CompletionError(Exception):
    """Raised when the LLM provider call fails."""


class AgentService:
    """Service wrapping the Agno completion agent.

    Wraps Agno's Agent with:
    - An OpenAI-compatible model (Groq by default)
    - A single async completion call for the HTTP layer
    - Provider errors normalized to CompletionError
    """

    def __init__(self, config: AgentConfig | None = None) -> None:
        """Initialize the agent service.

        Args:
            config: Optional agent configuration.
                    Loads from environment if not provided.
        """
        self._config = config or get_agent_config()
        self._agent = self._create_agent()

    def _create_agent(self) -> Agent:
        """Create the Agno agent instance.

        Returns:
            Configured stateless Agent.
        """
        model = OpenAIChat(
            id=self._config.model_name,
            api_key=self._config.api_key,
            base_url=self._config.base_url,
            temperature=self._config.temperature,
            max_tokens=self._config.max_tokens,
        )

        return Agent(
            model=model,
            description="Alith AI Assistant, a helpful general-purpose chat assistant.",
            instructions=[
                "Provide helpful and accurate responses.",
                "Be concise yet thorough.",
            ],
            markdown=False,
        )

    async def get_response(self, message: str) -> str:
        """Get the complete response for a message.

        Args:
            message: The user's message.

        Returns:
            Response text, possibly empty.

        Raises:
            CompletionError: If the provider call fails.
        """
        try:
            response = await self._agent.arun(message)
        except Exception as e:
            raise CompletionError(str(e)) from e

        return response.content or ""
