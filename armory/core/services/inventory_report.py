"""
Inventory reporting service.

Balances with per-period movement totals (the dashboard view) and the
movement breakdown for a single (base, asset) pair.
"""

from datetime import date

from armory.config import get_logger
from armory.core.entities.identity import Caller
from armory.core.entities.inventory import InventorySummary, MovementTotals
from armory.core.exceptions import InvalidInputError, MissingFieldsError
from armory.core.interfaces.inventory_store import IInventoryStore
from armory.core.interfaces.movement_ledger import IMovementLedger
from armory.core.services.access_scope import AccessScope

logger = get_logger(__name__)


def _check_period(start_date: date | None, end_date: date | None) -> None:
    if start_date and end_date and start_date > end_date:
        raise InvalidInputError("start_date", "must not be after end_date", start_date)


class InventoryReportService:
    """Read-only reporting over balances and the ledger."""

    def __init__(
        self,
        inventory_store: IInventoryStore,
        ledger: IMovementLedger,
        access_scope: AccessScope | None = None,
    ) -> None:
        self._inventory = inventory_store
        self._ledger = ledger
        self._scope = access_scope or AccessScope()

    async def summarize(
        self,
        caller: Caller,
        base_id: int | None = None,
        asset_id: int | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[InventorySummary]:
        """Every visible balance record with its movement totals."""
        _check_period(start_date, end_date)
        base_id = self._scope.resolve_read_base(caller, base_id)

        records = await self._inventory.list_records(base_id=base_id, asset_id=asset_id)
        summaries = []
        for record in records:
            totals = await self._ledger.movement_totals(
                record.base_id, record.asset_id, start_date, end_date
            )
            summaries.append(InventorySummary(record=record, totals=totals))

        logger.debug("inventory_summarized", base_id=base_id, records=len(summaries))
        return summaries

    async def breakdown(
        self,
        caller: Caller,
        base_id: int | None,
        asset_id: int | None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> MovementTotals:
        """Movement totals for one (base, asset) pair."""
        missing = [
            name
            for name, value in (("base_id", base_id), ("asset_id", asset_id))
            if value is None
        ]
        if missing:
            raise MissingFieldsError("movement breakdown", missing)
        _check_period(start_date, end_date)
        self._scope.resolve_read_base(caller, base_id)

        return await self._ledger.movement_totals(
            base_id, asset_id, start_date, end_date  # type: ignore[arg-type]
        )
