"""Alith Chat - a minimal chat widget backed by an LLM completion gateway.

Combines FastAPI for the completion endpoint, Agno for the LLM call,
httpx for the widget's gateway client, NiceGUI for visualization, and
Pydantic for data validation.

Components:
    - api: Completion Gateway HTTP endpoints
    - agent: LLM completion via Agno
    - chat: Session controller, gateway client and view projection
    - ui: Chat widget page
    - models: Wire schemas shared by server and client
"""

__version__ = "0.1.0"
