"""Abstract interface for inventory balance storage."""

from abc import ABC, abstractmethod
from decimal import Decimal

from armory.core.entities.inventory import InventoryRecord


class IInventoryStore(ABC):
    """Durable (base, asset) -> balance mapping with conditional mutation."""

    @abstractmethod
    async def get_balance(self, base_id: int, asset_id: int) -> InventoryRecord | None:
        """Get the balance record for a (base, asset) pair."""
        pass

    @abstractmethod
    async def try_adjust(
        self,
        base_id: int,
        asset_id: int,
        delta: Decimal,
        *,
        affects_closing: bool = True,
    ) -> Decimal | None:
        """
        Apply delta to current_quantity as one compare-and-apply.

        A credit (delta > 0) always succeeds and creates the record with a
        zero opening balance if it does not exist. A debit (delta < 0)
        changes nothing and returns None when the record is missing or the
        result would be negative.

        Args:
            base_id: Base holding the stock
            asset_id: Asset being adjusted
            delta: Signed, non-zero quantity
            affects_closing: Also move closing_balance by delta

        Returns:
            The new current_quantity, or None if a debit was refused
        """
        pass

    @abstractmethod
    async def list_records(
        self,
        base_id: int | None = None,
        asset_id: int | None = None,
    ) -> list[InventoryRecord]:
        """List balance records, ordered by base then asset."""
        pass
