"""Scoped read paths over the movement ledger."""

from armory.config import get_logger
from armory.core.entities.identity import Caller
from armory.core.entities.movements import MovementFilter, MovementKind, MovementRecord
from armory.core.exceptions import InvalidInputError, NotFoundError
from armory.core.interfaces.movement_ledger import IMovementLedger
from armory.core.services.access_scope import AccessScope

logger = get_logger(__name__)


class MovementQueryService:
    """Lists and fetches movement records within the caller's scope."""

    def __init__(
        self,
        ledger: IMovementLedger,
        access_scope: AccessScope | None = None,
        max_limit: int = 1000,
    ) -> None:
        self._ledger = ledger
        self._scope = access_scope or AccessScope()
        self._max_limit = max_limit

    async def list_movements(
        self,
        caller: Caller,
        kind: MovementKind,
        filters: MovementFilter,
    ) -> list[MovementRecord]:
        """List records of one kind, most recent first."""
        if filters.start_date and filters.end_date and filters.start_date > filters.end_date:
            raise InvalidInputError(
                "start_date", "must not be after end_date", filters.start_date
            )
        if filters.limit < 1 or filters.offset < 0:
            raise InvalidInputError(
                "limit", "limit must be positive and offset non-negative", filters.limit
            )

        scoped = filters.model_copy(
            update={
                "base_id": self._scope.resolve_read_base(caller, filters.base_id),
                "limit": min(filters.limit, self._max_limit),
            }
        )
        records = await self._ledger.list_movements(kind, scoped)
        logger.debug(
            "movements_listed",
            kind=kind.value,
            base_id=scoped.base_id,
            count=len(records),
        )
        return records

    async def get_movement(
        self,
        caller: Caller,
        kind: MovementKind,
        movement_id: int,
    ) -> MovementRecord:
        """Fetch one record; NotFound if absent, Forbidden if out of scope."""
        record = await self._ledger.get_movement(kind, movement_id)
        if record is None:
            raise NotFoundError(kind.value, movement_id)
        self._scope.ensure_can_read(caller, record)
        return record
