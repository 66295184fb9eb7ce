"""In-memory implementation of the movement ledger."""

from datetime import date
from decimal import Decimal

from armory.core.entities.inventory import ZERO, MovementTotals
from armory.core.entities.movements import (
    Assignment,
    AssignmentStatus,
    MovementFilter,
    MovementKind,
    MovementRecord,
    Transfer,
    TransferStatus,
)
from armory.core.interfaces.movement_ledger import IMovementLedger, RecordT
from armory.infrastructure.storage.memory.state import InMemoryDatabase, MemoryState

# Attribute matched by MovementFilter.search, per kind
SEARCH_FIELDS: dict[MovementKind, str] = {
    MovementKind.ASSIGNMENT: "assigned_to_personnel",
    MovementKind.EXPENDITURE: "operation_name",
}


def _in_period(day: date, start_date: date | None, end_date: date | None) -> bool:
    if start_date is not None and day < start_date:
        return False
    return end_date is None or day <= end_date


def _matches(kind: MovementKind, record: MovementRecord, filters: MovementFilter) -> bool:
    if filters.base_id is not None and filters.base_id not in record.base_ids:
        return False
    if filters.asset_id is not None and record.asset_id != filters.asset_id:
        return False
    if not _in_period(record.business_date, filters.start_date, filters.end_date):
        return False
    search_field = SEARCH_FIELDS.get(kind)
    if filters.search and search_field:
        value = getattr(record, search_field) or ""
        if filters.search.casefold() not in value.casefold():
            return False
    if filters.status is not None and isinstance(record, Assignment):
        return record.status is filters.status
    return True


class InMemoryMovementLedger(IMovementLedger):
    """Movement records held in an InMemoryDatabase."""

    def __init__(self, database: InMemoryDatabase, state: MemoryState | None = None):
        self._db = database
        self._state = state

    @property
    def _view(self) -> MemoryState:
        return self._state if self._state is not None else self._db.state

    async def add_movement(self, record: RecordT) -> RecordT:
        if self._state is not None:
            return self._append(self._state, record)
        async with self._db.lock:
            return self._append(self._db.state, record)

    @staticmethod
    def _append(state: MemoryState, record: RecordT) -> RecordT:
        stored = record.model_copy(update={"id": state.allocate_id(record.kind.value)})
        state.movements[record.kind][stored.id] = stored
        return stored

    async def get_movement(
        self, kind: MovementKind, movement_id: int
    ) -> MovementRecord | None:
        return self._view.movements[kind].get(movement_id)

    async def list_movements(
        self, kind: MovementKind, filters: MovementFilter
    ) -> list[MovementRecord]:
        records = [
            record
            for record in self._view.movements[kind].values()
            if _matches(kind, record, filters)
        ]
        records.sort(key=lambda r: (r.business_date, r.id), reverse=True)
        return records[filters.offset : filters.offset + filters.limit]

    async def expend_assignment(self, assignment_id: int) -> bool:
        if self._state is not None:
            return self._expend(self._state, assignment_id)
        async with self._db.lock:
            return self._expend(self._db.state, assignment_id)

    @staticmethod
    def _expend(state: MemoryState, assignment_id: int) -> bool:
        assignments = state.movements[MovementKind.ASSIGNMENT]
        assignment = assignments.get(assignment_id)
        if not isinstance(assignment, Assignment) or not assignment.is_active:
            return False
        assignments[assignment_id] = assignment.model_copy(
            update={"status": AssignmentStatus.EXPENDED}
        )
        return True

    async def movement_totals(
        self,
        base_id: int,
        asset_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> MovementTotals:
        def total(kind: MovementKind, base_attr: str) -> Decimal:
            amount = ZERO
            for record in self._view.movements[kind].values():
                if record.asset_id != asset_id or getattr(record, base_attr) != base_id:
                    continue
                if isinstance(record, Transfer) and record.status is not TransferStatus.COMPLETED:
                    continue
                if _in_period(record.business_date, start_date, end_date):
                    amount += record.quantity
            return amount

        return MovementTotals(
            purchases=total(MovementKind.PURCHASE, "base_id"),
            transfers_in=total(MovementKind.TRANSFER, "destination_base_id"),
            transfers_out=total(MovementKind.TRANSFER, "source_base_id"),
            assigned=total(MovementKind.ASSIGNMENT, "base_id"),
            expended=total(MovementKind.EXPENDITURE, "base_id"),
        )
