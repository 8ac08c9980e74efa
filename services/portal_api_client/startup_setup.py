"""Startup and shutdown logic for the Portal API Client."""

from __future__ import annotations

from dishka import AsyncContainer, Provider, make_async_container
from portal_service_libs.logging_utils import (
    configure_service_logging,
    create_service_logger,
)

from services.portal_api_client.config import PortalClientSettings, settings
from services.portal_api_client.di import PortalClientProvider


def create_di_container(
    config: PortalClientSettings = settings, *providers: Provider
) -> AsyncContainer:
    """Configure logging and create the DI AsyncContainer.

    Extra providers override the defaults, which is how tests swap in
    their own token store or HTTP client.
    """
    configure_service_logging(
        config.SERVICE_NAME,
        environment=config.ENVIRONMENT,
        log_level=config.LOG_LEVEL,
    )
    logger = create_service_logger("portal_api_client.startup")

    container = make_async_container(PortalClientProvider(config), *providers)
    logger.info("DI AsyncContainer created", extra={"api_url": config.API_URL})
    return container


async def shutdown_container(container: AsyncContainer) -> None:
    """Close the container, releasing the shared HTTP client."""
    logger = create_service_logger("portal_api_client.startup")
    await container.close()
    logger.info("DI AsyncContainer closed")
