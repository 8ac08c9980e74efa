"""Protocol definitions for the Portal API Client.

Defines interfaces for the token store, the request gateway and the data
services used in dependency injection.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from services.portal_api_client.clients.api_client import RequestOptions, ResponseEnvelope
    from services.portal_api_client.dto.portal_v1 import (
        ChartDataV1,
        DashboardStatsV1,
        RecentActivityV1,
        StatusDistributionV1,
        UsersResponseV1,
        UserV1,
    )


class TokenStoreProtocol(Protocol):
    """Key-value store holding the bearer token between login and logout."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class ApiClientProtocol(Protocol):
    """Protocol for the backend request gateway."""

    async def request(
        self,
        path: str,
        options_or_method: str | RequestOptions | None = None,
        body: Any = None,
    ) -> Any | ResponseEnvelope:
        """Perform one backend call.

        GET returns the parsed payload and raises on failure. Every other verb
        returns a ResponseEnvelope and never raises for HTTP error statuses.
        """
        ...


class UserServiceProtocol(Protocol):
    """Protocol for user administration calls."""

    async def get_all_users(self, page: int = 1, limit: int = 10) -> UsersResponseV1: ...

    async def get_user_by_id(self, user_id: int) -> UserV1: ...

    async def update_user(self, user_id: int, changes: Mapping[str, Any]) -> UserV1: ...

    async def delete_user(self, user_id: int) -> None: ...

    async def search_users(self, query: str) -> list[UserV1]: ...


class DashboardServiceProtocol(Protocol):
    """Protocol for dashboard aggregates."""

    async def get_dashboard_stats(self) -> DashboardStatsV1: ...

    async def get_monthly_repair_data(self, now: datetime | None = None) -> list[ChartDataV1]: ...

    async def get_recent_activities(self, limit: int = 5) -> list[RecentActivityV1]: ...

    async def get_status_distribution(self) -> StatusDistributionV1: ...
