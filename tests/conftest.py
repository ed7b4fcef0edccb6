"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - agent_service: Fake completion service with a fixed reply
    - gateway_app: FastAPI app wired to the fake service
    - async_client: HTTPX client for API testing
    - fake_gateway: Scripted gateway for controller tests
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.api.app import create_app
from tests.fakes import FakeAgentService, FakeGateway


@pytest.fixture
def agent_service() -> FakeAgentService:
    """Return a fake agent service answering "Hi there"."""
    return FakeAgentService()


@pytest.fixture
def gateway_app(agent_service: FakeAgentService) -> FastAPI:
    """Return the gateway app with the fake agent service injected."""
    return create_app(agent_service=agent_service)


@pytest.fixture
async def async_client(gateway_app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=gateway_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


@pytest.fixture
def fake_gateway() -> FakeGateway:
    """Return a gateway that echoes every message back."""
    return FakeGateway()
