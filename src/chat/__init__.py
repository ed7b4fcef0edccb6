"""Chat session core - message log, pending state, and gateway access.

Framework-independent layer consumed by the NiceGUI panel.

Responsibilities:
    - Ordered, append-only message history with a seed greeting
    - Single in-flight request gating via the pending flag
    - One-shot HTTP exchange with the Completion Gateway
    - View projection for rendering (welcome block, bubbles, typing indicator)

Holds no UI code. Redraws are driven through controller subscriptions.
"""

from src.chat.controller import ChatSessionController
from src.chat.gateway_client import (
    DecodeError,
    GatewayClient,
    GatewayError,
    GatewayFailure,
    GatewayResult,
    GatewayStatusError,
    GatewaySuccess,
    TransportError,
)
from src.chat.models import Message, Sender, SessionState

__all__ = [
    "ChatSessionController",
    "DecodeError",
    "GatewayClient",
    "GatewayError",
    "GatewayFailure",
    "GatewayResult",
    "GatewayStatusError",
    "GatewaySuccess",
    "Message",
    "Sender",
    "SessionState",
    "TransportError",
]
