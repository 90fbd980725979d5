"""Pytest fixtures and shared test configuration.

Provides reusable fixtures for unit and integration tests.

Fixtures:
    - relay_config: RelayConfig with a test API key
    - upstream: Recording fake of the DeepSeek completion endpoint
    - solve_app: FastAPI app whose solver talks to the fake upstream
    - async_client: HTTPX client bound to solve_app

The fake upstream is an httpx.MockTransport, so no test reaches the network.
"""

from collections.abc import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import ASGITransport, AsyncClient

from src.relay.config import RelayConfig
from tests.fakes import UPSTREAM_URL, FakeUpstream, build_app


@pytest.fixture
def relay_config() -> RelayConfig:
    """Return a configuration pointing at the fake upstream."""
    return RelayConfig(
        api_key="sk-test-key",
        api_url=UPSTREAM_URL,
        model_name="deepseek-test",
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    """Return a fresh fake upstream."""
    return FakeUpstream()


@pytest.fixture
def solve_app(relay_config: RelayConfig, upstream: FakeUpstream) -> FastAPI:
    return build_app(relay_config, upstream)


@pytest.fixture
async def async_client(solve_app: FastAPI) -> AsyncGenerator[AsyncClient]:
    """Create async HTTP client for API testing.

    Yields:
        Configured AsyncClient for making test requests.
    """
    transport = ASGITransport(app=solve_app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
