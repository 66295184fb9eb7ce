"""SQLite implementation of inventory balance storage."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from decimal import Decimal

import aiosqlite

from armory.config import get_logger
from armory.core.entities.inventory import MAX_QUANTITY, ZERO, InventoryRecord
from armory.core.exceptions import InvalidInputError
from armory.core.interfaces.inventory_store import IInventoryStore
from armory.infrastructure.storage.sqlite.columns import MAX_UNITS, from_units, to_units
from armory.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteInventoryStore(IInventoryStore):
    """
    SQLite implementation of (base, asset) balances.

    When constructed with a connection the store runs inside that
    connection's open transaction; otherwise each call takes its own
    connection from the global pool.
    """

    def __init__(self, conn: aiosqlite.Connection | None = None):
        self._conn = conn

    @asynccontextmanager
    async def _connection(self, write: bool = False) -> AsyncIterator[aiosqlite.Connection]:
        if self._conn is not None:
            yield self._conn
        elif write:
            async with get_transaction(immediate=True) as conn:
                yield conn
        else:
            async with get_connection() as conn:
                yield conn

    async def get_balance(self, base_id: int, asset_id: int) -> InventoryRecord | None:
        async with self._connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM inventory WHERE base_id = ? AND asset_id = ?",
                (base_id, asset_id),
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_record(row)

    async def try_adjust(
        self,
        base_id: int,
        asset_id: int,
        delta: Decimal,
        *,
        affects_closing: bool = True,
    ) -> Decimal | None:
        if delta == ZERO:
            raise InvalidInputError("delta", "must not be zero", delta)
        if abs(delta) > MAX_QUANTITY:
            raise InvalidInputError("delta", f"must not exceed {MAX_QUANTITY}", delta)

        units = to_units(abs(delta))
        closing_units = units if affects_closing else 0
        now = datetime.now(UTC).isoformat()

        async with self._connection(write=True) as conn:
            if delta > ZERO:
                cursor = await conn.execute(
                    """
                    INSERT INTO inventory (
                        base_id, asset_id, opening_balance, current_quantity,
                        closing_balance, created_at, updated_at
                    ) VALUES (?, ?, 0, ?, ?, ?, ?)
                    ON CONFLICT(base_id, asset_id) DO UPDATE SET
                        current_quantity = current_quantity + excluded.current_quantity,
                        closing_balance = closing_balance + excluded.closing_balance,
                        updated_at = excluded.updated_at
                    WHERE inventory.current_quantity + excluded.current_quantity <= ?
                      AND inventory.closing_balance + excluded.closing_balance <= ?
                    """,
                    (base_id, asset_id, units, closing_units, now, now, MAX_UNITS, MAX_UNITS),
                )
                if cursor.rowcount == 0:
                    logger.info(
                        "inventory_credit_refused",
                        base_id=base_id,
                        asset_id=asset_id,
                        quantity=str(delta),
                    )
                    raise InvalidInputError(
                        "quantity",
                        f"would raise the balance above {MAX_QUANTITY}",
                        delta,
                    )
            else:
                # Compare-and-apply: the row only changes if enough is on hand
                cursor = await conn.execute(
                    """
                    UPDATE inventory SET
                        current_quantity = current_quantity - ?,
                        closing_balance = closing_balance - ?,
                        updated_at = ?
                    WHERE base_id = ? AND asset_id = ? AND current_quantity >= ?
                    """,
                    (units, closing_units, now, base_id, asset_id, units),
                )
                if cursor.rowcount == 0:
                    logger.info(
                        "inventory_debit_refused",
                        base_id=base_id,
                        asset_id=asset_id,
                        quantity=str(-delta),
                    )
                    return None

            cursor = await conn.execute(
                "SELECT current_quantity FROM inventory WHERE base_id = ? AND asset_id = ?",
                (base_id, asset_id),
            )
            row = await cursor.fetchone()

        balance = from_units(row[0])
        logger.debug(
            "inventory_adjusted",
            base_id=base_id,
            asset_id=asset_id,
            delta=str(delta),
            balance=str(balance),
        )
        return balance

    async def list_records(
        self,
        base_id: int | None = None,
        asset_id: int | None = None,
    ) -> list[InventoryRecord]:
        query = "SELECT * FROM inventory WHERE 1=1"
        params: list[int] = []
        if base_id is not None:
            query += " AND base_id = ?"
            params.append(base_id)
        if asset_id is not None:
            query += " AND asset_id = ?"
            params.append(asset_id)
        query += " ORDER BY base_id, asset_id"

        async with self._connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_record(row) for row in rows]

    @staticmethod
    def _row_to_record(row: aiosqlite.Row) -> InventoryRecord:
        return InventoryRecord(
            id=row["id"],
            base_id=row["base_id"],
            asset_id=row["asset_id"],
            opening_balance=from_units(row["opening_balance"]),
            current_quantity=from_units(row["current_quantity"]),
            closing_balance=from_units(row["closing_balance"]),
            created_at=datetime.fromisoformat(row["created_at"]),
            updated_at=datetime.fromisoformat(row["updated_at"]),
        )
