"""Chat session controller.

Mediates between user input and the Completion Gateway for one chat panel.

Per submission the controller moves Idle -> AwaitingResponse -> Idle:

1. **submit** appends the user message, clears the draft, raises the pending
   flag and schedules exactly one gateway call on the running event loop.
2. **Resolution** appends exactly one bot message (the answer, the empty
   placeholder, or the fallback) and drops the pending flag.

While pending, further submits are ignored, so at most one call is ever in
flight and append order is always display order. Observers registered with
subscribe() are notified after every mutation.
"""

import asyncio
import logging
from collections.abc import Callable

from src.chat.gateway_client import (
    GatewayClient,
    GatewayError,
    GatewayFailure,
    GatewayResult,
    GatewaySuccess,
)
from src.chat.models import DEFAULT_GREETING, Message, Sender, SessionState

logger = logging.getLogger(__name__)

FALLBACK_TEXT = (
    "I'm sorry, I'm having trouble connecting right now. Please try again in a moment."
)
EMPTY_RESPONSE_TEXT = "No response received"

Listener = Callable[[SessionState], None]


class ChatSessionController:
    """Owns a SessionState and drives its request/response cycle."""

    def __init__(self, gateway: GatewayClient, greeting: str = DEFAULT_GREETING) -> None:
        """Start a fresh session.

        Args:
            gateway: Shared gateway client; the controller never closes it.
            greeting: Text of the seed bot message.
        """
        self._gateway = gateway
        self._listeners: list[Listener] = []
        self._inflight: asyncio.Task[None] | None = None
        self._closed = False
        self.state = SessionState(greeting)

    @property
    def messages(self) -> list[Message]:
        return self.state.messages

    @property
    def pending(self) -> bool:
        return self.state.pending

    @property
    def draft_text(self) -> str:
        return self.state.draft_text

    @property
    def closed(self) -> bool:
        return self._closed

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with the state after each change.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self.state)

    def update_draft(self, text: str) -> None:
        self.state.draft_text = text
        self._notify()

    def can_submit(self, text: str | None = None) -> bool:
        """Whether submit() would accept the given text (default: the draft)."""
        candidate = self.state.draft_text if text is None else text
        return bool(candidate.strip()) and not self.state.pending and not self._closed

    def submit(self, text: str) -> asyncio.Task[None] | None:
        """Accept a user message and dispatch it to the gateway.

        A no-op when the trimmed text is empty, a request is already pending,
        or the session was closed.

        Args:
            text: Raw user input.

        Returns:
            The task resolving the gateway call, or None if nothing was sent.
        """
        if not self.can_submit(text):
            return None

        loop = asyncio.get_running_loop()
        message = text.strip()
        self.state.append(Sender.USER, message)
        self.state.draft_text = ""
        self.state.pending = True
        self._notify()

        self._inflight = loop.create_task(self._dispatch(message))
        return self._inflight

    async def _dispatch(self, message: str) -> None:
        try:
            result = await self._gateway.call(message)
        except Exception as e:
            logger.exception("Unexpected error while calling the gateway")
            result = GatewayFailure(GatewayError(f"Unexpected gateway error: {e!r}"))
        finally:
            self._inflight = None

        if self._closed:
            logger.debug("Session closed before gateway result arrived; dropping it")
            return
        self.resolve(result)

    def resolve(self, result: GatewayResult) -> None:
        """Apply a gateway result to the session."""
        match result:
            case GatewaySuccess(text=text):
                self.on_gateway_success(text)
            case GatewayFailure(error=error):
                self.on_gateway_failure(error)

    def on_gateway_success(self, response_text: str) -> None:
        if not self.state.pending:
            logger.debug("Ignoring gateway success with no request pending")
            return
        self.state.append(Sender.BOT, response_text or EMPTY_RESPONSE_TEXT)
        self.state.pending = False
        self._notify()

    def on_gateway_failure(self, error: BaseException) -> None:
        if not self.state.pending:
            logger.debug(f"Ignoring gateway failure with no request pending: {error!r}")
            return
        # Error detail goes to the log only, never into the conversation.
        logger.warning(f"Error getting AI response: {error}")
        self.state.append(Sender.BOT, FALLBACK_TEXT)
        self.state.pending = False
        self._notify()

    def close(self) -> None:
        """Dispose of the session.

        An in-flight call still runs to completion, but its result is dropped.
        """
        self._closed = True
        self._listeners.clear()
