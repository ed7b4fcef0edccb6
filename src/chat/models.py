"""Message and session state for a single chat panel."""

import itertools
from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

GREETING_ID = 1
DEFAULT_GREETING = "Hello! I'm Alith AI Assistant. How can I help you today?"


class Sender(str, Enum):
    """Author of a message."""

    USER = "user"
    BOT = "bot"


class Message(BaseModel):
    """A single turn in the conversation.

    Attributes:
        id: Session-unique identifier, assigned at append time.
        text: Message body.
        sender: Who wrote the message.
        timestamp: Creation instant (UTC).
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., ge=1)
    text: str
    sender: Sender
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


class SessionState:
    """Process-local state of one conversation.

    Seeded with the greeting message (id=1). Messages are append-only and
    their insertion order is the display order.
    """

    def __init__(self, greeting: str = DEFAULT_GREETING) -> None:
        self._ids = itertools.count(GREETING_ID)
        self.messages: list[Message] = []
        self.pending: bool = False
        self.draft_text: str = ""
        self.append(Sender.BOT, greeting)

    def append(self, sender: Sender, text: str) -> Message:
        message = Message(id=next(self._ids), text=text, sender=sender)
        self.messages.append(message)
        return message

    @property
    def greeting(self) -> Message:
        return self.messages[0]
