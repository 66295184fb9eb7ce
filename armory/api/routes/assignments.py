"""Assignment endpoints."""

from fastapi import APIRouter, Depends, Query, status

from armory.api.dependencies import (
    get_assign_stock_use_case,
    get_assignment_query,
    get_caller,
    get_movement_filter,
    get_origin,
)
from armory.application.dto.requests import CreateAssignmentRequest
from armory.application.dto.responses import (
    AssignmentListResponse,
    AssignmentResponse,
    ErrorResponse,
    MovementCreatedResponse,
)
from armory.application.use_cases.assign_stock import AssignStockUseCase
from armory.application.use_cases.query_movements import QueryMovementsUseCase
from armory.core.entities.identity import Caller
from armory.core.entities.movements import AssignmentStatus, MovementFilter

router = APIRouter(prefix="/api/assignments", tags=["assignments"])


@router.post(
    "",
    response_model=MovementCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_assignment(
    request: CreateAssignmentRequest,
    caller: Caller = Depends(get_caller),
    origin: str | None = Depends(get_origin),
    use_case: AssignStockUseCase = Depends(get_assign_stock_use_case),
) -> MovementCreatedResponse:
    """Assign stock to personnel; reduces the quantity on hand."""
    assignment = await use_case.execute(caller, request, origin)
    return use_case.to_response(assignment)


@router.get("", response_model=AssignmentListResponse)
async def list_assignments(
    filters: MovementFilter = Depends(get_movement_filter),
    personnel: str | None = Query(default=None, description="Match on personnel name"),
    assignment_status: AssignmentStatus | None = Query(default=None, alias="status"),
    caller: Caller = Depends(get_caller),
    query: QueryMovementsUseCase = Depends(get_assignment_query),
) -> AssignmentListResponse:
    filters = filters.model_copy(update={"search": personnel, "status": assignment_status})
    records = await query.list_movements(caller, filters)
    return query.to_list_response(records)  # type: ignore[return-value]


@router.get(
    "/{assignment_id}",
    response_model=AssignmentResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_assignment(
    assignment_id: int,
    caller: Caller = Depends(get_caller),
    query: QueryMovementsUseCase = Depends(get_assignment_query),
) -> AssignmentResponse:
    record = await query.get_movement(caller, assignment_id)
    return query.to_response(record)  # type: ignore[return-value]
