"""Inter-base transfer endpoints."""

from fastapi import APIRouter, Depends, status

from armory.api.dependencies import (
    get_caller,
    get_movement_filter,
    get_origin,
    get_transfer_query,
    get_transfer_stock_use_case,
)
from armory.application.dto.requests import CreateTransferRequest
from armory.application.dto.responses import (
    ErrorResponse,
    MovementCreatedResponse,
    TransferListResponse,
    TransferResponse,
)
from armory.application.use_cases.query_movements import QueryMovementsUseCase
from armory.application.use_cases.transfer_stock import TransferStockUseCase
from armory.core.entities.identity import Caller
from armory.core.entities.movements import MovementFilter

router = APIRouter(prefix="/api/transfers", tags=["transfers"])


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
async def create_transfer(
    request: CreateTransferRequest,
    caller: Caller = Depends(get_caller),
    origin: str | None = Depends(get_origin),
    use_case: TransferStockUseCase = Depends(get_transfer_stock_use_case),
) -> MovementCreatedResponse:
    """
    Transfer stock between bases.

    The source is debited and the destination credited in one atomic unit;
    a source without enough stock rejects the whole transfer.
    """
    transfer = await use_case.execute(caller, request, origin)
    return use_case.to_response(transfer)


@router.get("", response_model=TransferListResponse)
async def list_transfers(
    filters: MovementFilter = Depends(get_movement_filter),
    caller: Caller = Depends(get_caller),
    query: QueryMovementsUseCase = Depends(get_transfer_query),
) -> TransferListResponse:
    """List transfers touching the scoped base as source or destination."""
    records = await query.list_movements(caller, filters)
    return query.to_list_response(records)  # type: ignore[return-value]


@router.get(
    "/{transfer_id}",
    response_model=TransferResponse,
    responses={403: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def get_transfer(
    transfer_id: int,
    caller: Caller = Depends(get_caller),
    query: QueryMovementsUseCase = Depends(get_transfer_query),
) -> TransferResponse:
    record = await query.get_movement(caller, transfer_id)
    return query.to_response(record)  # type: ignore[return-value]
