"""Unit tests for the read-side use cases."""

from datetime import UTC, date, datetime
from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from armory.application.dto.responses import AssignmentListResponse, TransferResponse
from armory.application.use_cases import (
    InventoryReportUseCase,
    ListAuditLogUseCase,
    QueryMovementsUseCase,
)
from armory.core.entities.audit import AuditFilter, AuditLogEntry
from armory.core.entities.inventory import InventoryRecord, InventorySummary, MovementTotals
from armory.core.entities.movements import (
    Assignment,
    MovementFilter,
    MovementKind,
    Transfer,
)
from armory.core.exceptions import ForbiddenError, InvalidInputError


@pytest.fixture
def assignment() -> Assignment:
    return Assignment(
        id=3,
        base_id=1,
        asset_id=1,
        quantity=Decimal("2.50"),
        assigned_to_personnel="Sgt. Rivera",
        assignment_date=date(2026, 3, 3),
        created_by=2,
    )


class TestQueryMovementsUseCase:
    async def test_list_response_shape(self, assignment, commander):
        service = AsyncMock()
        service.list_movements = AsyncMock(return_value=[assignment])
        use_case = QueryMovementsUseCase(MovementKind.ASSIGNMENT, service)

        records = await use_case.list_movements(commander, MovementFilter())
        response = use_case.to_list_response(records)

        assert isinstance(response, AssignmentListResponse)
        assert response.count == 1
        assert response.assignments[0].status.value == "active"
        service.list_movements.assert_awaited_once_with(
            commander, MovementKind.ASSIGNMENT, MovementFilter()
        )

    async def test_get_transfer(self, admin):
        transfer = Transfer(
            id=9,
            source_base_id=1,
            destination_base_id=2,
            asset_id=1,
            quantity=Decimal("4"),
            transfer_date=date(2026, 3, 2),
            created_by=1,
        )
        service = AsyncMock()
        service.get_movement = AsyncMock(return_value=transfer)
        use_case = QueryMovementsUseCase(MovementKind.TRANSFER, service)

        response = use_case.to_response(await use_case.get_movement(admin, 9))

        assert isinstance(response, TransferResponse)
        assert response.destination_base_id == 2
        service.get_movement.assert_awaited_once_with(admin, MovementKind.TRANSFER, 9)


class TestInventoryReportUseCase:
    async def test_dashboard(self, commander):
        service = AsyncMock()
        service.summarize = AsyncMock(
            return_value=[
                InventorySummary(
                    record=InventoryRecord(
                        id=1,
                        base_id=1,
                        asset_id=1,
                        current_quantity=Decimal("3"),
                        closing_balance=Decimal("6"),
                    ),
                    totals=MovementTotals(purchases=Decimal("10"), transfers_out=Decimal("4")),
                )
            ]
        )

        response = await InventoryReportUseCase(service).dashboard(commander)

        [row] = response.dashboard
        assert row.current_quantity == Decimal("3")
        assert row.totals.net_movement == Decimal("6")

    async def test_breakdown(self, admin):
        service = AsyncMock()
        service.breakdown = AsyncMock(return_value=MovementTotals(assigned=Decimal("3")))

        response = await InventoryReportUseCase(service).breakdown(admin, 1, 7)

        assert response.base_id == 1
        assert response.asset_id == 7
        assert response.breakdown.assigned == Decimal("3")


class TestListAuditLogUseCase:
    @pytest.fixture
    def mock_sink(self):
        sink = AsyncMock()
        sink.list_entries = AsyncMock(
            return_value=[
                AuditLogEntry(
                    id=1,
                    actor_id=1,
                    action="CREATE_PURCHASE",
                    entity_type="purchase",
                    entity_id=1,
                    details={"quantity": "10"},
                    created_at=datetime(2026, 3, 1, tzinfo=UTC),
                )
            ]
        )
        return sink

    async def test_admin_lists(self, mock_sink, admin):
        response = await ListAuditLogUseCase(mock_sink).execute(admin, AuditFilter())
        assert response.logs[0].action == "CREATE_PURCHASE"

    async def test_limit_clamped(self, mock_sink, admin):
        await ListAuditLogUseCase(mock_sink, max_limit=10).execute(admin, AuditFilter(limit=500))
        assert mock_sink.list_entries.call_args.args[0].limit == 10

    async def test_non_admin_refused(self, mock_sink, commander):
        with pytest.raises(ForbiddenError):
            await ListAuditLogUseCase(mock_sink).execute(commander, AuditFilter())
        mock_sink.list_entries.assert_not_called()

    async def test_bad_limit(self, mock_sink, admin):
        with pytest.raises(InvalidInputError):
            await ListAuditLogUseCase(mock_sink).execute(admin, AuditFilter(limit=0))
