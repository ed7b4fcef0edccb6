"""Integration tests for components working together as a system.

Coverage:
    - Gateway endpoints through ASGITransport
    - Chat session controller talking HTTP to the real FastAPI app
    - Live LLM completion (when a provider key is configured)

The agent service is faked unless a test is marked as needing an API key.
"""
