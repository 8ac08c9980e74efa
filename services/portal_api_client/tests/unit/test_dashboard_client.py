"""Unit tests for dashboard aggregates."""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

import httpx
import pytest
from respx import MockRouter

from services.portal_api_client.clients.api_client import ApiClient
from services.portal_api_client.clients.dashboard_client import (
    DashboardServiceImpl,
    extract_records,
    percentage,
)
from services.portal_api_client.exceptions import ApiRequestError

BASE_URL = "http://portal.test"


def ticket(ticket_id: int, status: str, created_at: str | None) -> dict[str, Any]:
    record: dict[str, Any] = {
        "id": ticket_id,
        "ticketCode": f"TK-{ticket_id:04d}",
        "title": f"Repair #{ticket_id}",
        "status": status,
    }
    if created_at is not None:
        record["createdAt"] = created_at
    return record


TICKETS = [
    ticket(1, "OPEN", "2025-03-02T10:00:00.000Z"),
    ticket(2, "IN_PROGRESS", "2025-01-20T00:00:00.000Z"),
    ticket(3, "DONE", "2024-03-05T00:00:00.000Z"),
    ticket(4, "DONE", None),
    ticket(5, "DONE", "2025-02-28T23:00:00+00:00"),
    ticket(6, "CANCELLED", "not-a-date"),
]


@pytest.fixture
def dashboard_service(api_client: ApiClient) -> DashboardServiceImpl:
    return DashboardServiceImpl(api_client)


def mock_listings(
    respx_mock: MockRouter,
    tickets: Any,
    users: Any = None,
    loans: Any = None,
) -> None:
    respx_mock.get(f"{BASE_URL}/api/tickets").mock(return_value=httpx.Response(200, json=tickets))
    if users is not None:
        respx_mock.get(f"{BASE_URL}/users").mock(return_value=httpx.Response(200, json=users))
    if loans is not None:
        respx_mock.get(f"{BASE_URL}/api/loans").mock(return_value=httpx.Response(200, json=loans))


class TestExtractRecords:
    def test_bare_array(self) -> None:
        assert extract_records([{"id": 1}]) == [{"id": 1}]

    def test_wrapped_array(self) -> None:
        payload = {"data": [{"id": 1}, {"id": 2}], "pagination": {"total": 2}}

        assert extract_records(payload) == [{"id": 1}, {"id": 2}]

    @pytest.mark.parametrize("payload", [None, "text", {"data": "nope"}, {"items": []}])
    def test_unrecognized_shapes_yield_empty(self, payload: Any) -> None:
        assert extract_records(payload) == []


def test_percentage_rounds_half_up() -> None:
    assert percentage(1, 3) == 33.3
    assert percentage(2, 3) == 66.7
    assert percentage(1, 8) == 12.5
    assert percentage(0, 1) == 0


@pytest.mark.asyncio
async def test_dashboard_stats_counts_mixed_listing_shapes(
    dashboard_service: DashboardServiceImpl, respx_mock: MockRouter
) -> None:
    mock_listings(
        respx_mock,
        tickets={"data": TICKETS, "pagination": {"total": 6}},
        users=[{"id": 1}, {"id": 2}, {"id": 3}],
        loans={"loans": [{"id": 1}]},
    )

    stats = await dashboard_service.get_dashboard_stats()

    assert stats.total_repairs == 6
    assert stats.pending_repairs == 1
    assert stats.in_progress_repairs == 1
    assert stats.completed_repairs == 3
    assert stats.total_users == 3
    assert stats.total_loans == 0
    assert stats.completion_rate == 50.0
    assert stats.model_dump(by_alias=True)["completionRate"] == 50.0


@pytest.mark.asyncio
async def test_dashboard_stats_without_tickets(
    dashboard_service: DashboardServiceImpl, respx_mock: MockRouter
) -> None:
    mock_listings(respx_mock, tickets=[], users=[], loans=[{"id": 1}])

    stats = await dashboard_service.get_dashboard_stats()

    assert stats.total_repairs == 0
    assert stats.completion_rate == 0
    assert stats.total_loans == 1


@pytest.mark.asyncio
async def test_dashboard_stats_propagates_listing_failure(
    dashboard_service: DashboardServiceImpl, respx_mock: MockRouter
) -> None:
    respx_mock.get(f"{BASE_URL}/api/tickets").mock(
        return_value=httpx.Response(500, json={"message": "tickets unavailable"})
    )
    respx_mock.get(f"{BASE_URL}/users").mock(return_value=httpx.Response(200, json=[]))
    respx_mock.get(f"{BASE_URL}/api/loans").mock(return_value=httpx.Response(200, json=[]))

    with pytest.raises(ApiRequestError, match="tickets unavailable"):
        await dashboard_service.get_dashboard_stats()


@pytest.mark.asyncio
async def test_monthly_repair_data_covers_last_eight_months(
    dashboard_service: DashboardServiceImpl, respx_mock: MockRouter
) -> None:
    mock_listings(respx_mock, tickets=TICKETS)

    chart = await dashboard_service.get_monthly_repair_data(
        now=datetime(2025, 3, 15, 12, 0, tzinfo=UTC)
    )

    assert [point.month for point in chart] == [
        "ส.ค.",
        "ก.ย.",
        "ต.ค.",
        "พ.ย.",
        "ธ.ค.",
        "ม.ค.",
        "ก.พ.",
        "มี.ค.",
    ]
    counts = {point.month: point.repairs for point in chart}
    # ticket 3 is March of the previous year and stays out of the window
    assert counts["มี.ค."] == 1
    assert counts["ม.ค."] == 1
    assert counts["ก.พ."] == 1
    assert sum(counts.values()) == 3


@pytest.mark.asyncio
async def test_monthly_repair_data_spans_year_boundary(
    dashboard_service: DashboardServiceImpl, respx_mock: MockRouter
) -> None:
    mock_listings(respx_mock, tickets=[ticket(1, "OPEN", "2024-06-01T00:00:00Z")])

    chart = await dashboard_service.get_monthly_repair_data(now=datetime(2025, 1, 3))

    assert len(chart) == 8
    assert chart[0].month == "มิ.ย."
    assert chart[0].repairs == 1
    assert chart[-1].month == "ม.ค."


@pytest.mark.asyncio
async def test_recent_activities_newest_first(
    dashboard_service: DashboardServiceImpl, respx_mock: MockRouter
) -> None:
    mock_listings(respx_mock, tickets=TICKETS)

    activities = await dashboard_service.get_recent_activities(limit=3)

    assert [a.id for a in activities] == [1, 5, 2]
    assert activities[0].ticket_code == "TK-0001"
    assert activities[0].model_dump(by_alias=True) == {
        "id": 1,
        "ticketCode": "TK-0001",
        "title": "Repair #1",
        "status": "OPEN",
        "createdAt": "2025-03-02T10:00:00.000Z",
    }


@pytest.mark.asyncio
async def test_recent_activities_default_limit(
    dashboard_service: DashboardServiceImpl, respx_mock: MockRouter
) -> None:
    mock_listings(respx_mock, tickets={"data": TICKETS})

    activities = await dashboard_service.get_recent_activities()

    # undated tickets sort after dated ones, keeping listing order
    assert [a.id for a in activities] == [1, 5, 2, 3, 4]


@pytest.mark.asyncio
async def test_status_distribution(
    dashboard_service: DashboardServiceImpl, respx_mock: MockRouter
) -> None:
    mock_listings(
        respx_mock,
        tickets=[
            ticket(1, "OPEN", None),
            ticket(2, "IN_PROGRESS", None),
            ticket(3, "DONE", None),
        ],
        users=[],
        loans=[],
    )

    distribution = await dashboard_service.get_status_distribution()

    assert distribution.completed == 33.3
    assert distribution.in_progress == 33.3
    assert distribution.pending == 33.3


@pytest.mark.asyncio
async def test_status_distribution_with_no_tickets(
    dashboard_service: DashboardServiceImpl, respx_mock: MockRouter
) -> None:
    mock_listings(respx_mock, tickets=[], users=[], loans=[])

    distribution = await dashboard_service.get_status_distribution()

    assert distribution.completed == 0
    assert distribution.in_progress == 0
    assert distribution.pending == 0
