"""Inventory balance and dashboard endpoints."""

from datetime import date

from fastapi import APIRouter, Depends, Query

from armory.api.dependencies import get_caller, get_inventory_report_use_case
from armory.application.dto.responses import (
    BreakdownResponse,
    DashboardResponse,
    ErrorResponse,
)
from armory.application.use_cases.inventory_report import InventoryReportUseCase
from armory.core.entities.identity import Caller

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get(
    "",
    response_model=DashboardResponse,
    responses={403: {"model": ErrorResponse}},
)
async def get_dashboard(
    base_id: int | None = Query(default=None),
    asset_id: int | None = Query(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    caller: Caller = Depends(get_caller),
    use_case: InventoryReportUseCase = Depends(get_inventory_report_use_case),
) -> DashboardResponse:
    """Balances per (base, asset) with movement totals for the period."""
    return await use_case.dashboard(caller, base_id, asset_id, start_date, end_date)


@router.get(
    "/breakdown",
    response_model=BreakdownResponse,
    responses={400: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
)
async def get_movement_breakdown(
    base_id: int | None = Query(default=None),
    asset_id: int | None = Query(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    caller: Caller = Depends(get_caller),
    use_case: InventoryReportUseCase = Depends(get_inventory_report_use_case),
) -> BreakdownResponse:
    """Movement totals for one base and asset; both ids are required."""
    return await use_case.breakdown(caller, base_id, asset_id, start_date, end_date)
