"""Abstract interface for the append-only movement ledger."""

from abc import ABC, abstractmethod
from datetime import date
from typing import TypeVar

from armory.core.entities.inventory import MovementTotals
from armory.core.entities.movements import MovementFilter, MovementKind, MovementRecord

RecordT = TypeVar("RecordT", bound=MovementRecord)


class IMovementLedger(ABC):
    """Persistence for purchases, transfers, assignments and expenditures."""

    @abstractmethod
    async def add_movement(self, record: RecordT) -> RecordT:
        """Append a record and return a copy carrying its new id."""
        pass

    @abstractmethod
    async def get_movement(
        self, kind: MovementKind, movement_id: int
    ) -> MovementRecord | None:
        """Get one record of the given kind by id."""
        pass

    @abstractmethod
    async def list_movements(
        self, kind: MovementKind, filters: MovementFilter
    ) -> list[MovementRecord]:
        """List records, most recent business date first, then newest first."""
        pass

    @abstractmethod
    async def expend_assignment(self, assignment_id: int) -> bool:
        """
        Move an assignment from active to expended.

        Returns False without changing anything if the assignment is not
        currently active.
        """
        pass

    @abstractmethod
    async def movement_totals(
        self,
        base_id: int,
        asset_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> MovementTotals:
        """Sum quantities moved for one (base, asset) pair."""
        pass
