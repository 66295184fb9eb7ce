"""Purchase endpoints."""

from fastapi import APIRouter, Depends, status

from armory.api.dependencies import (
    get_caller,
    get_movement_filter,
    get_origin,
    get_purchase_query,
    get_record_purchase_use_case,
)
from armory.application.dto.requests import CreatePurchaseRequest
from armory.application.dto.responses import (
    ErrorResponse,
    MovementCreatedResponse,
    PurchaseListResponse,
    PurchaseResponse,
)
from armory.application.use_cases.query_movements import QueryMovementsUseCase
from armory.application.use_cases.record_purchase import RecordPurchaseUseCase
from armory.core.entities.identity import Caller
from armory.core.entities.movements import MovementFilter

router = APIRouter(prefix="/api/purchases", tags=["purchases"])


@router.post(
    "",
    response_model=MovementCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
    },
)
async def create_purchase(
    request: CreatePurchaseRequest,
    caller: Caller = Depends(get_caller),
    origin: str | None = Depends(get_origin),
    use_case: RecordPurchaseUseCase = Depends(get_record_purchase_use_case),
) -> MovementCreatedResponse:
    """Record a purchase; increases the base balance."""
    purchase = await use_case.execute(caller, request, origin)
    return use_case.to_response(purchase)


@router.get("", response_model=PurchaseListResponse)
async def list_purchases(
    filters: MovementFilter = Depends(get_movement_filter),
    caller: Caller = Depends(get_caller),
    query: QueryMovementsUseCase = Depends(get_purchase_query),
) -> PurchaseListResponse:
    """List purchases, most recent first, within the caller's base scope."""
    records = await query.list_movements(caller, filters)
    return query.to_list_response(records)  # type: ignore[return-value]


@router.get(
    "/{purchase_id}",
    response_model=PurchaseResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_purchase(
    purchase_id: int,
    caller: Caller = Depends(get_caller),
    query: QueryMovementsUseCase = Depends(get_purchase_query),
) -> PurchaseResponse:
    record = await query.get_movement(caller, purchase_id)
    return query.to_response(record)  # type: ignore[return-value]
