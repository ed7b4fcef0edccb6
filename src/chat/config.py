"""Chat client configuration with environment variable loading.

Pydantic-based settings for reaching the Completion Gateway from the UI.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.chat.models import DEFAULT_GREETING

load_dotenv()


class ClientConfig(BaseModel):
    """Configuration for the chat panel's gateway client.

    Attributes:
        gateway_url: Base URL of the Completion Gateway.
        timeout: Request timeout in seconds.
        greeting: Text of the seed bot message.
    """

    model_config = ConfigDict(validate_default=True)

    gateway_url: str = Field(
        default_factory=lambda: os.getenv("GATEWAY_URL", "http://localhost:3001"),
        description="Base URL of the Completion Gateway",
    )
    timeout: float = Field(
        default_factory=lambda: os.getenv("GATEWAY_TIMEOUT", "30"),
        gt=0.0,
        description="Request timeout in seconds",
    )
    greeting: str = Field(
        default=DEFAULT_GREETING,
        min_length=1,
        description="Seed greeting shown when a session starts",
    )

    @field_validator("gateway_url")
    @classmethod
    def validate_gateway_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("GATEWAY_URL must start with http:// or https://")
        return v.rstrip("/")


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.
    """
    return ClientConfig()
