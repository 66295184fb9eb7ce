"""In-memory implementation of inventory balance storage."""

from datetime import UTC, datetime
from decimal import Decimal

from armory.config import get_logger
from armory.core.entities.inventory import MAX_QUANTITY, ZERO, InventoryRecord
from armory.core.exceptions import InvalidInputError
from armory.core.interfaces.inventory_store import IInventoryStore
from armory.infrastructure.storage.memory.state import InMemoryDatabase, MemoryState

logger = get_logger(__name__)


def adjust_balance(
    state: MemoryState,
    base_id: int,
    asset_id: int,
    delta: Decimal,
    affects_closing: bool,
) -> Decimal | None:
    """Apply delta to state; None if a debit would go negative."""
    if delta == ZERO:
        raise InvalidInputError("delta", "must not be zero", delta)
    if abs(delta) > MAX_QUANTITY:
        raise InvalidInputError("delta", f"must not exceed {MAX_QUANTITY}", delta)

    key = (base_id, asset_id)
    record = state.inventory.get(key)
    now = datetime.now(UTC)

    if record is None:
        if delta < ZERO:
            return None
        record = InventoryRecord(
            id=state.allocate_id("inventory"),
            base_id=base_id,
            asset_id=asset_id,
            created_at=now,
            updated_at=now,
        )
    elif record.current_quantity + delta < ZERO:
        return None

    closing_delta = delta if affects_closing else ZERO
    if (
        record.current_quantity + delta > MAX_QUANTITY
        or record.closing_balance + closing_delta > MAX_QUANTITY
    ):
        raise InvalidInputError(
            "quantity", f"would raise the balance above {MAX_QUANTITY}", delta
        )
    state.inventory[key] = record.model_copy(
        update={
            "current_quantity": record.current_quantity + delta,
            "closing_balance": record.closing_balance + closing_delta,
            "updated_at": now,
        }
    )
    return state.inventory[key].current_quantity


class InMemoryInventoryStore(IInventoryStore):
    """
    Balances held in an InMemoryDatabase.

    Given a staged state the store works inside that unit; otherwise it
    reads committed state and writes under the database lock.
    """

    def __init__(self, database: InMemoryDatabase, state: MemoryState | None = None):
        self._db = database
        self._state = state

    @property
    def _view(self) -> MemoryState:
        return self._state if self._state is not None else self._db.state

    async def get_balance(self, base_id: int, asset_id: int) -> InventoryRecord | None:
        return self._view.inventory.get((base_id, asset_id))

    async def try_adjust(
        self,
        base_id: int,
        asset_id: int,
        delta: Decimal,
        *,
        affects_closing: bool = True,
    ) -> Decimal | None:
        if self._state is not None:
            return adjust_balance(self._state, base_id, asset_id, delta, affects_closing)
        async with self._db.lock:
            return adjust_balance(self._db.state, base_id, asset_id, delta, affects_closing)

    async def list_records(
        self,
        base_id: int | None = None,
        asset_id: int | None = None,
    ) -> list[InventoryRecord]:
        records = [
            record
            for record in self._view.inventory.values()
            if (base_id is None or record.base_id == base_id)
            and (asset_id is None or record.asset_id == asset_id)
        ]
        return sorted(records, key=lambda r: r.key)
