"""Inventory Report Use Case: dashboard balances and movement breakdown."""

from datetime import date

from armory.application.dto.responses import (
    BreakdownResponse,
    DashboardResponse,
    InventorySummaryResponse,
    MovementTotalsResponse,
)
from armory.core.entities.identity import Caller
from armory.core.entities.inventory import InventorySummary, MovementTotals
from armory.core.services.inventory_report import InventoryReportService


def totals_response(totals: MovementTotals) -> MovementTotalsResponse:
    return MovementTotalsResponse(
        purchases=totals.purchases,
        transfers_in=totals.transfers_in,
        transfers_out=totals.transfers_out,
        assigned=totals.assigned,
        expended=totals.expended,
        net_movement=totals.net_movement,
    )


class InventoryReportUseCase:
    """Balances with period totals, scoped to the caller."""

    def __init__(self, report_service: InventoryReportService | None = None):
        self._report_service = report_service

    def _get_report_service(self) -> InventoryReportService:
        if self._report_service is None:
            from armory.application.services import get_inventory_report_service

            self._report_service = get_inventory_report_service()
        return self._report_service

    async def dashboard(
        self,
        caller: Caller,
        base_id: int | None = None,
        asset_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> DashboardResponse:
        summaries = await self._get_report_service().summarize(
            caller, base_id, asset_id, start_date, end_date
        )
        return DashboardResponse(dashboard=[self._summary_response(s) for s in summaries])

    async def breakdown(
        self,
        caller: Caller,
        base_id: int | None,
        asset_id: int | None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> BreakdownResponse:
        totals = await self._get_report_service().breakdown(
            caller, base_id, asset_id, start_date, end_date
        )
        return BreakdownResponse(
            base_id=base_id,  # type: ignore[arg-type]
            asset_id=asset_id,  # type: ignore[arg-type]
            breakdown=totals_response(totals),
        )

    @staticmethod
    def _summary_response(summary: InventorySummary) -> InventorySummaryResponse:
        record = summary.record
        return InventorySummaryResponse(
            id=record.id,
            base_id=record.base_id,
            asset_id=record.asset_id,
            opening_balance=record.opening_balance,
            current_quantity=record.current_quantity,
            closing_balance=record.closing_balance,
            totals=totals_response(summary.totals),
        )
