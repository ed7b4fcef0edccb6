"""View projection from session state to render items.

The greeting (id=1) is always rendered first as the welcome block. Every
other message follows in insertion order; timestamps never reorder them.
"""

from enum import Enum

from pydantic import BaseModel

from src.chat.models import GREETING_ID, Message, Sender, SessionState

TIME_FORMAT = "%I:%M %p"


class ItemKind(str, Enum):
    """Kinds of rows the chat panel draws."""

    WELCOME = "welcome"
    USER = "user"
    BOT = "bot"
    TYPING = "typing"


class RenderItem(BaseModel):
    """One row of the rendered conversation.

    Attributes:
        key: Stable key for the row (message id, or "typing").
        kind: How the row is drawn.
        text: Message text (empty for the typing indicator).
        time: Display time of the message.
        align_end: True for right-aligned (user) rows.
    """

    key: str
    kind: ItemKind
    text: str = ""
    time: str = ""
    align_end: bool = False


def _to_item(message: Message) -> RenderItem:
    if message.id == GREETING_ID:
        kind = ItemKind.WELCOME
    elif message.sender is Sender.USER:
        kind = ItemKind.USER
    else:
        kind = ItemKind.BOT

    return RenderItem(
        key=str(message.id),
        kind=kind,
        text=message.text,
        time=message.timestamp.astimezone().strftime(TIME_FORMAT),
        align_end=message.sender is Sender.USER,
    )


def project(state: SessionState) -> list[RenderItem]:
    """Map session state to the ordered list of rows to draw.

    Args:
        state: The session to render.

    Returns:
        Welcome block, then messages in append order, then a typing
        indicator while a request is pending.
    """
    greeting = [m for m in state.messages if m.id == GREETING_ID]
    rest = [m for m in state.messages if m.id != GREETING_ID]

    items = [_to_item(m) for m in greeting + rest]
    if state.pending:
        items.append(RenderItem(key="typing", kind=ItemKind.TYPING))
    return items
