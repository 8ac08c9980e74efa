"""Dashboard aggregates computed from backend listings.

The backend returns listings either as a bare array or wrapped in a paginated
``{"data": [...], "pagination": {...}}`` envelope depending on the endpoint, so
every listing goes through ``extract_records`` first.
"""

from __future__ import annotations

import asyncio
import math
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any

from portal_service_libs.logging_utils import create_service_logger

from services.portal_api_client.dto.portal_v1 import (
    ChartDataV1,
    DashboardStatsV1,
    RecentActivityV1,
    StatusDistributionV1,
    TicketStatus,
)
from services.portal_api_client.protocols import ApiClientProtocol

logger = create_service_logger("portal_api_client.dashboard_client")

TICKETS_PATH = "/api/tickets"
USERS_PATH = "/users"
LOANS_PATH = "/api/loans"

THAI_MONTH_ABBREVIATIONS = (
    "ม.ค.",
    "ก.พ.",
    "มี.ค.",
    "เม.ย.",
    "พ.ค.",
    "มิ.ย.",
    "ก.ค.",
    "ส.ค.",
    "ก.ย.",
    "ต.ค.",
    "พ.ย.",
    "ธ.ค.",
)
CHART_MONTHS = 8

_EPOCH = datetime(1970, 1, 1, tzinfo=UTC)


def extract_records(payload: Any) -> list[Any]:
    """Return the records of a bare-array or ``data``-wrapped listing."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, Mapping) and isinstance(payload.get("data"), list):
        return payload["data"]
    return []


def percentage(part: int, total: int) -> float:
    """Percentage of ``total`` rounded half-up to one decimal."""
    return math.floor(part / total * 100 * 10 + 0.5) / 10


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    if not isinstance(value, str) or not value:
        return None
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _count_status(tickets: list[Any], status: TicketStatus) -> int:
    return sum(1 for t in tickets if isinstance(t, Mapping) and t.get("status") == status)


def _month_window(now: datetime) -> list[tuple[int, int]]:
    months_since_epoch = now.year * 12 + now.month - 1
    return [
        divmod(months_since_epoch - back, 12)
        for back in range(CHART_MONTHS - 1, -1, -1)
    ]


class DashboardServiceImpl:
    """Builds the admin and IT dashboard figures."""

    def __init__(self, api_client: ApiClientProtocol) -> None:
        self._api = api_client

    async def _fetch_tickets(self) -> list[Any]:
        return extract_records(await self._api.request(TICKETS_PATH))

    async def get_dashboard_stats(self) -> DashboardStatsV1:
        """Fetch tickets, users and loans concurrently and count them."""
        try:
            tickets_response, users_response, loans_response = await asyncio.gather(
                self._api.request(TICKETS_PATH),
                self._api.request(USERS_PATH),
                self._api.request(LOANS_PATH),
            )
        except Exception:
            logger.error("Error fetching dashboard stats", exc_info=True)
            raise

        tickets = extract_records(tickets_response)
        total = len(tickets)
        completed = _count_status(tickets, TicketStatus.DONE)

        stats = DashboardStatsV1(
            total_repairs=total,
            pending_repairs=_count_status(tickets, TicketStatus.OPEN),
            in_progress_repairs=_count_status(tickets, TicketStatus.IN_PROGRESS),
            completed_repairs=completed,
            total_users=len(extract_records(users_response)),
            total_loans=len(extract_records(loans_response)),
            completion_rate=percentage(completed, total) if total > 0 else 0,
        )

        logger.debug("Dashboard stats calculated", extra=stats.model_dump())
        return stats

    async def get_monthly_repair_data(self, now: datetime | None = None) -> list[ChartDataV1]:
        """Count tickets created in each of the last eight months, oldest first."""
        try:
            tickets = await self._fetch_tickets()
        except Exception:
            logger.error("Error fetching monthly repair data", exc_info=True)
            raise

        if now is None:
            now = datetime.now().astimezone()
        elif now.tzinfo is None:
            now = now.replace(tzinfo=UTC)

        counts: dict[tuple[int, int], int] = {}
        for year, month_index in _month_window(now):
            counts[(year, month_index)] = 0

        for ticket in tickets:
            if not isinstance(ticket, Mapping):
                continue
            created = parse_timestamp(ticket.get("createdAt"))
            if created is None:
                continue
            created = created.astimezone(now.tzinfo)
            key = (created.year, created.month - 1)
            if key in counts:
                counts[key] += 1

        return [
            ChartDataV1(month=THAI_MONTH_ABBREVIATIONS[month_index], repairs=repairs)
            for (_, month_index), repairs in counts.items()
        ]

    async def get_recent_activities(self, limit: int = 5) -> list[RecentActivityV1]:
        """Most recently created tickets, newest first."""
        try:
            tickets = await self._fetch_tickets()
        except Exception:
            logger.error("Error fetching recent activities", exc_info=True)
            raise

        records = [t for t in tickets if isinstance(t, Mapping)]
        records.sort(
            key=lambda t: parse_timestamp(t.get("createdAt")) or _EPOCH,
            reverse=True,
        )

        return [
            RecentActivityV1(
                id=t.get("id"),
                ticket_code=t.get("ticketCode"),
                title=t.get("title"),
                status=t.get("status"),
                created_at=t.get("createdAt"),
            )
            for t in records[:limit]
        ]

    async def get_status_distribution(self) -> StatusDistributionV1:
        try:
            stats = await self.get_dashboard_stats()
        except Exception:
            logger.error("Error fetching status distribution", exc_info=True)
            raise

        total = stats.total_repairs or 1
        return StatusDistributionV1(
            completed=percentage(stats.completed_repairs, total),
            in_progress=percentage(stats.in_progress_repairs, total),
            pending=percentage(stats.pending_repairs, total),
        )
