"""Portal API Client DTO module.

Contains Data Transfer Objects for backend listings and dashboard aggregates.
"""

from services.portal_api_client.dto.portal_v1 import (
    ChartDataV1,
    DashboardStatsV1,
    RecentActivityV1,
    StatusDistributionV1,
    UserRole,
    UsersResponseV1,
    UserV1,
)

__all__ = [
    "ChartDataV1",
    "DashboardStatsV1",
    "RecentActivityV1",
    "StatusDistributionV1",
    "UserRole",
    "UserV1",
    "UsersResponseV1",
]
