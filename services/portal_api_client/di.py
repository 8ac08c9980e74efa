"""Dependency Injection providers for the Portal API Client.

Provides the Dishka container setup with APP-scoped infrastructure: settings,
one shared HTTP client, the token store, the request gateway and the data
services built on it.
"""

from __future__ import annotations

from collections.abc import AsyncIterator

import httpx
from dishka import Provider, Scope, provide
from portal_service_libs.logging_utils import create_service_logger

from services.portal_api_client.clients.api_client import ApiClient
from services.portal_api_client.clients.dashboard_client import DashboardServiceImpl
from services.portal_api_client.clients.user_client import UserServiceImpl
from services.portal_api_client.config import PortalClientSettings, settings
from services.portal_api_client.protocols import (
    ApiClientProtocol,
    DashboardServiceProtocol,
    TokenStoreProtocol,
    UserServiceProtocol,
)
from services.portal_api_client.token_store import InMemoryTokenStore

logger = create_service_logger("portal_api_client.di")


class PortalClientProvider(Provider):
    """Infrastructure provider for the Portal API Client."""

    scope = Scope.APP

    def __init__(self, config: PortalClientSettings | None = None) -> None:
        super().__init__()
        self._config = config or settings

    @provide
    def get_config(self) -> PortalClientSettings:
        """Provide settings, the module singleton unless overridden."""
        return self._config

    @provide(scope=Scope.APP)
    async def get_http_client(
        self, config: PortalClientSettings
    ) -> AsyncIterator[httpx.AsyncClient]:
        """Provide shared HTTP client; no timeout unless one is configured."""
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(config.HTTP_CLIENT_TIMEOUT_SECONDS)
        ) as client:
            yield client
        logger.debug("HTTP client closed")

    @provide(scope=Scope.APP)
    def provide_token_store(self) -> TokenStoreProtocol:
        """Provide the process-wide token store."""
        return InMemoryTokenStore()

    @provide(scope=Scope.APP)
    def provide_api_client(
        self,
        http_client: httpx.AsyncClient,
        token_store: TokenStoreProtocol,
        config: PortalClientSettings,
    ) -> ApiClientProtocol:
        """Provide the request gateway singleton."""
        return ApiClient(http_client, token_store, config)

    @provide(scope=Scope.APP)
    def provide_user_service(self, api_client: ApiClientProtocol) -> UserServiceProtocol:
        return UserServiceImpl(api_client)

    @provide(scope=Scope.APP)
    def provide_dashboard_service(
        self, api_client: ApiClientProtocol
    ) -> DashboardServiceProtocol:
        return DashboardServiceImpl(api_client)
