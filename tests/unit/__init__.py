"""Unit tests for individual components in isolation.

Ensures fast execution with minimal dependencies.

Coverage:
    - chat/: Controller state machine, gateway client, view projection
    - agent/: Agent configuration and completion call
    - config: Client configuration

Uses fakes and httpx.MockTransport instead of a live gateway.
Leverages pytest-check for multiple assertions per test.
"""
