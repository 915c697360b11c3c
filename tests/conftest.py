"""Shared test fixtures and configuration."""

from typing import AsyncGenerator

import httpx
import pytest
import pytest_asyncio

from tests.mock_bridge import MockBridge


@pytest.fixture
def bridge_url() -> str:
    """Bridge base URL for tests."""
    return "https://bridge.example"


@pytest.fixture
def mock_bridge() -> MockBridge:
    """Bridge that acknowledges every request with 200."""
    return MockBridge()


@pytest_asyncio.fixture
async def bridge_client(mock_bridge: MockBridge) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client routed to the mock bridge."""
    client = httpx.AsyncClient(transport=mock_bridge.transport())
    yield client
    await client.aclose()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate tests from notifier environment variables."""
    for name in ("BRIDGE_URL", "BRIDGE_TIMEOUT_SECONDS", "LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(name, raising=False)
