"""Inventory balance entities."""

from datetime import UTC, datetime
from decimal import Decimal

from pydantic import BaseModel, Field

# Quantities are fixed-point with this many decimal places
QUANTITY_PLACES = 2
QUANTUM = Decimal(1).scaleb(-QUANTITY_PLACES)

ZERO = Decimal("0")

# Upper bound for a single quantity and for any stored balance
MAX_QUANTITY = Decimal("1000000000000")


def fits_quantum(value: Decimal) -> bool:
    """True if value carries no more precision than QUANTITY_PLACES."""
    return value == value.quantize(QUANTUM)


class InventoryRecord(BaseModel):
    """Live balance of one asset at one base."""

    id: int | None = None
    base_id: int
    asset_id: int
    opening_balance: Decimal = ZERO
    current_quantity: Decimal = ZERO
    closing_balance: Decimal = ZERO
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @property
    def key(self) -> tuple[int, int]:
        return (self.base_id, self.asset_id)


class MovementTotals(BaseModel):
    """Quantities moved for one (base, asset) pair over a period."""

    purchases: Decimal = ZERO
    transfers_in: Decimal = ZERO
    transfers_out: Decimal = ZERO
    assigned: Decimal = ZERO
    expended: Decimal = ZERO

    @property
    def net_movement(self) -> Decimal:
        """Purchases plus transfers in minus transfers out."""
        return self.purchases + self.transfers_in - self.transfers_out


class InventorySummary(BaseModel):
    """Balance plus movement totals, as shown on the dashboard."""

    record: InventoryRecord
    totals: MovementTotals
