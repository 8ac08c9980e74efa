"""Shared fixtures for Portal API Client tests."""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
import pytest

from services.portal_api_client.clients.api_client import ApiClient
from services.portal_api_client.config import PortalClientSettings
from services.portal_api_client.token_store import InMemoryTokenStore

TEST_BASE_URL = "http://portal.test"
TEST_TOKEN = "test-token-123"


@pytest.fixture
def test_settings() -> PortalClientSettings:
    """Provide settings isolated from the process environment."""
    return PortalClientSettings(_env_file=None, API_URL=TEST_BASE_URL)


@pytest.fixture
def token_store() -> InMemoryTokenStore:
    """Provide a token store holding a logged-in user's token."""
    return InMemoryTokenStore({"token": TEST_TOKEN})


@pytest.fixture
def empty_token_store() -> InMemoryTokenStore:
    """Provide a token store for a logged-out user."""
    return InMemoryTokenStore()


@pytest.fixture
async def http_client() -> AsyncIterator[httpx.AsyncClient]:
    """Real httpx client for respx mocking."""
    async with httpx.AsyncClient() as client:
        yield client


@pytest.fixture
def api_client(
    http_client: httpx.AsyncClient,
    token_store: InMemoryTokenStore,
    test_settings: PortalClientSettings,
) -> ApiClient:
    return ApiClient(http_client, token_store, test_settings)


@pytest.fixture
def anonymous_api_client(
    http_client: httpx.AsyncClient,
    empty_token_store: InMemoryTokenStore,
    test_settings: PortalClientSettings,
) -> ApiClient:
    return ApiClient(http_client, empty_token_store, test_settings)
