"""Expenditure endpoints."""

from fastapi import APIRouter, Depends, Query, status

from armory.api.dependencies import (
    get_caller,
    get_expenditure_query,
    get_movement_filter,
    get_origin,
    get_record_expenditure_use_case,
)
from armory.application.dto.requests import CreateExpenditureRequest
from armory.application.dto.responses import (
    ErrorResponse,
    ExpenditureListResponse,
    ExpenditureResponse,
    MovementCreatedResponse,
)
from armory.application.use_cases.query_movements import QueryMovementsUseCase
from armory.application.use_cases.record_expenditure import RecordExpenditureUseCase
from armory.core.entities.identity import Caller
from armory.core.entities.movements import MovementFilter

router = APIRouter(prefix="/api/expenditures", tags=["expenditures"])


@router.post(
    "",
    response_model=MovementCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
)
async def create_expenditure(
    request: CreateExpenditureRequest,
    caller: Caller = Depends(get_caller),
    origin: str | None = Depends(get_origin),
    use_case: RecordExpenditureUseCase = Depends(get_record_expenditure_use_case),
) -> MovementCreatedResponse:
    """
    Record expended stock.

    When assignment_id is given that assignment is marked expended in the
    same unit; expending it twice is a 409.
    """
    expenditure = await use_case.execute(caller, request, origin)
    return use_case.to_response(expenditure)


@router.get("", response_model=ExpenditureListResponse)
async def list_expenditures(
    filters: MovementFilter = Depends(get_movement_filter),
    operation: str | None = Query(default=None, description="Match on operation name"),
    caller: Caller = Depends(get_caller),
    query: QueryMovementsUseCase = Depends(get_expenditure_query),
) -> ExpenditureListResponse:
    filters = filters.model_copy(update={"search": operation})
    records = await query.list_movements(caller, filters)
    return query.to_list_response(records)  # type: ignore[return-value]


@router.get(
    "/{expenditure_id}",
    response_model=ExpenditureResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_expenditure(
    expenditure_id: int,
    caller: Caller = Depends(get_caller),
    query: QueryMovementsUseCase = Depends(get_expenditure_query),
) -> ExpenditureResponse:
    record = await query.get_movement(caller, expenditure_id)
    return query.to_response(record)  # type: ignore[return-value]
