"""FastAPI endpoints for the Completion Gateway.

Endpoints:
    - GET /health: Static liveness acknowledgement
    - POST /api/chat: Single-message completion
"""

from src.api.app import create_app

__all__ = ["create_app"]
