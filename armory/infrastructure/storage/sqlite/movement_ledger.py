"""SQLite implementation of the append-only movement ledger."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from datetime import date
from typing import Any

import aiosqlite

from armory.config import get_logger
from armory.core.entities.inventory import MovementTotals
from armory.core.entities.movements import (
    Assignment,
    AssignmentStatus,
    Expenditure,
    MovementFilter,
    MovementKind,
    MovementRecord,
    Purchase,
    Transfer,
    TransferStatus,
)
from armory.core.interfaces.movement_ledger import IMovementLedger, RecordT
from armory.infrastructure.storage.sqlite.columns import from_units, to_units
from armory.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


@dataclass(frozen=True)
class MovementTable:
    """How one movement kind is laid out on disk."""

    name: str
    model: type[MovementRecord]
    date_column: str
    base_columns: tuple[str, ...]
    search_column: str | None = None
    has_status: bool = False


TABLES: dict[MovementKind, MovementTable] = {
    MovementKind.PURCHASE: MovementTable(
        name="purchases",
        model=Purchase,
        date_column="purchase_date",
        base_columns=("base_id",),
    ),
    MovementKind.TRANSFER: MovementTable(
        name="transfers",
        model=Transfer,
        date_column="transfer_date",
        base_columns=("source_base_id", "destination_base_id"),
    ),
    MovementKind.ASSIGNMENT: MovementTable(
        name="assignments",
        model=Assignment,
        date_column="assignment_date",
        base_columns=("base_id",),
        search_column="assigned_to_personnel",
        has_status=True,
    ),
    MovementKind.EXPENDITURE: MovementTable(
        name="expenditures",
        model=Expenditure,
        date_column="expenditure_date",
        base_columns=("base_id",),
        search_column="operation_name",
    ),
}


def _date_range(column: str, start_date: date | None, end_date: date | None) -> tuple[str, list[Any]]:
    clause = ""
    params: list[Any] = []
    if start_date is not None:
        clause += f" AND {column} >= ?"
        params.append(start_date.isoformat())
    if end_date is not None:
        clause += f" AND {column} <= ?"
        params.append(end_date.isoformat())
    return clause, params


class SQLiteMovementLedger(IMovementLedger):
    """
    SQLite implementation of purchases, transfers, assignments and
    expenditures, one table per kind.

    Bound to a connection it writes inside that transaction; unbound it
    uses the global pool.
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

    async def add_movement(self, record: RecordT) -> RecordT:
        table = TABLES[record.kind]
        values = record.model_dump(mode="json", exclude={"id"})
        values["quantity"] = to_units(record.quantity)
        columns = list(values)
        placeholders = ", ".join("?" for _ in columns)

        async with self._connection(write=True) as conn:
            cursor = await conn.execute(
                f"INSERT INTO {table.name} ({', '.join(columns)}) VALUES ({placeholders})",
                [values[column] for column in columns],
            )
            movement_id = cursor.lastrowid

        logger.debug("movement_appended", kind=record.kind.value, movement_id=movement_id)
        return record.model_copy(update={"id": movement_id})

    async def get_movement(
        self, kind: MovementKind, movement_id: int
    ) -> MovementRecord | None:
        table = TABLES[kind]
        async with self._connection() as conn:
            cursor = await conn.execute(
                f"SELECT * FROM {table.name} WHERE id = ?", (movement_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_record(table, row)

    async def list_movements(
        self, kind: MovementKind, filters: MovementFilter
    ) -> list[MovementRecord]:
        table = TABLES[kind]
        query = f"SELECT * FROM {table.name} WHERE 1=1"
        params: list[Any] = []

        if filters.base_id is not None:
            # Transfers belong to both endpoints
            query += " AND (" + " OR ".join(f"{c} = ?" for c in table.base_columns) + ")"
            params.extend([filters.base_id] * len(table.base_columns))
        if filters.asset_id is not None:
            query += " AND asset_id = ?"
            params.append(filters.asset_id)

        clause, date_params = _date_range(table.date_column, filters.start_date, filters.end_date)
        query += clause
        params.extend(date_params)

        if filters.search and table.search_column:
            query += f" AND {table.search_column} LIKE ?"
            params.append(f"%{filters.search}%")
        if filters.status is not None and table.has_status:
            query += " AND status = ?"
            params.append(filters.status.value)

        query += f" ORDER BY {table.date_column} DESC, id DESC LIMIT ? OFFSET ?"
        params.extend([filters.limit, filters.offset])

        async with self._connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_record(table, row) for row in rows]

    async def expend_assignment(self, assignment_id: int) -> bool:
        async with self._connection(write=True) as conn:
            cursor = await conn.execute(
                "UPDATE assignments SET status = ? WHERE id = ? AND status = ?",
                (
                    AssignmentStatus.EXPENDED.value,
                    assignment_id,
                    AssignmentStatus.ACTIVE.value,
                ),
            )
            expended = cursor.rowcount == 1

        if expended:
            logger.info("assignment_expended", assignment_id=assignment_id)
        return expended

    async def movement_totals(
        self,
        base_id: int,
        asset_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> MovementTotals:
        completed = TransferStatus.COMPLETED.value
        queries = {
            "purchases": ("purchases", "purchase_date", "base_id = ?", []),
            "transfers_in": (
                "transfers",
                "transfer_date",
                "destination_base_id = ? AND status = ?",
                [completed],
            ),
            "transfers_out": (
                "transfers",
                "transfer_date",
                "source_base_id = ? AND status = ?",
                [completed],
            ),
            "assigned": ("assignments", "assignment_date", "base_id = ?", []),
            "expended": ("expenditures", "expenditure_date", "base_id = ?", []),
        }

        totals: dict[str, Any] = {}
        async with self._connection() as conn:
            for field, (table_name, date_column, condition, extra) in queries.items():
                clause, date_params = _date_range(date_column, start_date, end_date)
                cursor = await conn.execute(
                    f"""
                    SELECT COALESCE(SUM(quantity), 0) FROM {table_name}
                    WHERE {condition} AND asset_id = ?{clause}
                    """,
                    [base_id, *extra, asset_id, *date_params],
                )
                row = await cursor.fetchone()
                totals[field] = from_units(row[0])

        return MovementTotals(**totals)

    @staticmethod
    def _row_to_record(table: MovementTable, row: aiosqlite.Row) -> MovementRecord:
        data = dict(row)
        data["quantity"] = from_units(data["quantity"])
        return table.model.model_validate(data)
