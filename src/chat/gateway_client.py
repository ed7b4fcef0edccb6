"""HTTP client for the Completion Gateway.

One call is one POST /api/chat exchange. Transport failures, non-2xx statuses
and undecodable bodies all come back as a GatewayFailure; nothing is raised
to the caller and nothing is retried.
"""

import logging
from dataclasses import dataclass
from types import TracebackType

import httpx

from src.chat.config import ClientConfig, get_client_config
from src.models.schemas import ChatRequest, ChatResponse

logger = logging.getLogger(__name__)

CHAT_PATH = "/api/chat"


class GatewayError(Exception):
    """Base class for failures talking to the Completion Gateway."""


class TransportError(GatewayError):
    """Gateway unreachable, timed out, or the connection dropped."""


class GatewayStatusError(GatewayError):
    """Gateway answered with a non-success HTTP status."""

    def __init__(self, status_code: int, reason: str = "") -> None:
        self.status_code = status_code
        self.reason = reason
        super().__init__(f"Server responded with {status_code}: {reason}".rstrip(": "))


class DecodeError(GatewayError):
    """Response body was not JSON or had no string `response` field."""


@dataclass(frozen=True)
class GatewaySuccess:
    text: str


@dataclass(frozen=True)
class GatewayFailure:
    error: GatewayError


GatewayResult = GatewaySuccess | GatewayFailure


class GatewayClient:
    """Async client for POST /api/chat.

    Wraps a single httpx.AsyncClient that is created once and reused for
    every call. Close it with aclose() or use the client as an async
    context manager.
    """

    def __init__(
        self,
        config: ClientConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the gateway client.

        Args:
            config: Optional client configuration.
                    Loads from environment if not provided.
            http_client: Optional preconfigured httpx client (tests inject
                    one with a mock or ASGI transport).
        """
        self._config = config or get_client_config()
        self._http = http_client or httpx.AsyncClient(
            base_url=self._config.gateway_url,
            timeout=self._config.timeout,
        )

    async def call(self, message: str) -> GatewayResult:
        """Send one message and return the completion or the failure.

        Args:
            message: Non-empty user message.

        Returns:
            GatewaySuccess with the response text (possibly empty), or
            GatewayFailure wrapping a TransportError, GatewayStatusError
            or DecodeError.
        """
        try:
            return GatewaySuccess(await self._exchange(message))
        except GatewayError as e:
            logger.debug(f"Gateway call failed: {e!r}")
            return GatewayFailure(e)

    async def _exchange(self, message: str) -> str:
        payload = ChatRequest(message=message).model_dump()

        try:
            response = await self._http.post(CHAT_PATH, json=payload)
        except httpx.RequestError as e:
            raise TransportError(f"Connection failed: {e!r}") from e

        if not response.is_success:
            raise GatewayStatusError(response.status_code, response.reason_phrase)

        try:
            body = ChatResponse.model_validate(response.json())
        except ValueError as e:
            raise DecodeError(f"Malformed gateway response: {e}") from e

        return body.response

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "GatewayClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
