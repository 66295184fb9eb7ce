"""Column conversions shared by the SQLite stores."""

from decimal import Decimal

from armory.core.entities.inventory import MAX_QUANTITY, QUANTITY_PLACES, QUANTUM

_SCALE = 10**QUANTITY_PLACES

# Largest stored value; keeps every column inside a 64-bit INTEGER
MAX_UNITS = int(MAX_QUANTITY) * _SCALE


def to_units(quantity: Decimal) -> int:
    """Decimal quantity -> integer hundredths."""
    return int(quantity.quantize(QUANTUM) * _SCALE)


def from_units(units: int | None) -> Decimal:
    """Integer hundredths -> Decimal quantity."""
    return (Decimal(units or 0) / _SCALE).quantize(QUANTUM)


def price_or_none(value: str | None) -> Decimal | None:
    return Decimal(value) if value is not None else None
