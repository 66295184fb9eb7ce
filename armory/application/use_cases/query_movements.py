"""Query Movements Use Case: scoped listing and lookup of ledger records."""

from pydantic import BaseModel

from armory.application.dto.responses import (
    AssignmentListResponse,
    AssignmentResponse,
    ExpenditureListResponse,
    ExpenditureResponse,
    PurchaseListResponse,
    PurchaseResponse,
    TransferListResponse,
    TransferResponse,
)
from armory.core.entities.identity import Caller
from armory.core.entities.movements import MovementFilter, MovementKind, MovementRecord
from armory.core.services.movement_query import MovementQueryService

# Response shape per kind: (record model, list model, list field)
RESPONSE_MODELS: dict[MovementKind, tuple[type[BaseModel], type[BaseModel], str]] = {
    MovementKind.PURCHASE: (PurchaseResponse, PurchaseListResponse, "purchases"),
    MovementKind.TRANSFER: (TransferResponse, TransferListResponse, "transfers"),
    MovementKind.ASSIGNMENT: (AssignmentResponse, AssignmentListResponse, "assignments"),
    MovementKind.EXPENDITURE: (
        ExpenditureResponse,
        ExpenditureListResponse,
        "expenditures",
    ),
}


class QueryMovementsUseCase:
    """List or fetch movements of one kind within the caller's scope."""

    def __init__(
        self,
        kind: MovementKind,
        query_service: MovementQueryService | None = None,
    ):
        self.kind = kind
        self._query_service = query_service

    def _get_query_service(self) -> MovementQueryService:
        if self._query_service is None:
            from armory.application.services import get_movement_query_service

            self._query_service = get_movement_query_service()
        return self._query_service

    async def list_movements(
        self, caller: Caller, filters: MovementFilter
    ) -> list[MovementRecord]:
        return await self._get_query_service().list_movements(caller, self.kind, filters)

    async def get_movement(self, caller: Caller, movement_id: int) -> MovementRecord:
        return await self._get_query_service().get_movement(caller, self.kind, movement_id)

    def to_response(self, record: MovementRecord) -> BaseModel:
        record_model, _, _ = RESPONSE_MODELS[self.kind]
        return record_model.model_validate(record)

    def to_list_response(self, records: list[MovementRecord]) -> BaseModel:
        _, list_model, field = RESPONSE_MODELS[self.kind]
        return list_model(
            **{field: [self.to_response(r) for r in records], "count": len(records)}
        )
