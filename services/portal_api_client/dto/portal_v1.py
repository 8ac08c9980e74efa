"""Maintenance portal v1 DTOs.

Models for the backend's user listings and for the dashboard aggregates the
client computes from ticket, user and loan listings. The backend speaks
camelCase, so every model accepts both the camelCase alias and the Python
field name.
"""

from __future__ import annotations

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserRole(str, Enum):
    """Portal roles that gate navigation."""

    USER = "USER"
    IT = "IT"
    ADMIN = "ADMIN"


class TicketStatus(str, Enum):
    """Ticket workflow states the dashboard counts."""

    OPEN = "OPEN"
    IN_PROGRESS = "IN_PROGRESS"
    DONE = "DONE"


class PortalModel(BaseModel):
    """Base model mapping snake_case fields to the backend's camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserCountsV1(PortalModel):
    """Per-user ticket counters returned by the user listing."""

    tickets: int = 0
    assigned: int = 0


class UserV1(PortalModel):
    """A portal user as returned by GET /users."""

    id: int
    name: str
    email: str
    role: UserRole
    department: str | None = None
    phone_number: str | None = None
    line_id: str | None = None
    created_at: datetime
    updated_at: datetime
    counts: UserCountsV1 | None = Field(default=None, alias="_count")


class PaginationV1(PortalModel):
    """Pagination metadata from the user listing."""

    total: int = 0
    page: int = 1
    limit: int = 10
    total_pages: int = 0


class UsersResponseV1(PortalModel):
    """Paginated user listing."""

    data: list[UserV1] = Field(default_factory=list)
    pagination: PaginationV1 = Field(default_factory=PaginationV1)


# --- Dashboard aggregates ---


class DashboardStatsV1(PortalModel):
    """Headline counters for the admin and IT dashboards."""

    total_repairs: int = 0
    pending_repairs: int = 0
    in_progress_repairs: int = 0
    completed_repairs: int = 0
    total_users: int = 0
    total_loans: int = 0
    completion_rate: float = 0


class ChartDataV1(PortalModel):
    """One bar of the monthly repairs chart."""

    month: str
    repairs: int = 0


class RecentActivityV1(PortalModel):
    """A recently created ticket."""

    id: int | str | None = None
    ticket_code: str | None = None
    title: str | None = None
    status: str | None = None
    created_at: str | None = None


class StatusDistributionV1(PortalModel):
    """Share of tickets per status, as percentages."""

    completed: float = 0
    in_progress: float = 0
    pending: float = 0
