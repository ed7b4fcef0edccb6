"""Agno agent logic for LLM completion.

Forwards one prompt to the language-model provider and returns its text.

Responsibilities:
    - Agent initialization with an OpenAI-compatible model
    - Provider configuration from the environment
    - Normalizing provider failures to CompletionError

Maintains clean separation from the HTTP layer.
"""

from src.agent.chat_agent import AgentService, CompletionError
from src.agent.config import AgentConfig, get_agent_config

__all__ = ["AgentConfig", "AgentService", "CompletionError", "get_agent_config"]
