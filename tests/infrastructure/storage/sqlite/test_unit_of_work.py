"""Tests for SQLiteUnitOfWork and the connection pool."""

import asyncio
import sqlite3
from datetime import date
from decimal import Decimal

import pytest

from armory.core.entities.movements import MovementFilter, MovementKind, Purchase
from armory.core.exceptions import InvalidInputError, StoreUnavailableError
from armory.infrastructure.storage.sqlite import (
    ConnectionPool,
    SQLiteInventoryStore,
    SQLiteMovementLedger,
    SQLiteUnitOfWork,
    get_connection,
)
from armory.infrastructure.storage.sqlite.connection import integrity_error


def make_purchase(base_id: int = 1) -> Purchase:
    return Purchase(
        base_id=base_id,
        asset_id=1,
        quantity=Decimal("5"),
        purchase_date=date(2026, 3, 1),
        created_by=1,
    )


class TestAtomic:
    async def test_commits_together(self, ledger_db):
        async with SQLiteUnitOfWork().atomic() as session:
            await session.inventory.try_adjust(1, 1, Decimal("5"))
            await session.ledger.add_movement(make_purchase())

        assert (await SQLiteInventoryStore().get_balance(1, 1)).current_quantity == 5
        purchases = await SQLiteMovementLedger().list_movements(
            MovementKind.PURCHASE, MovementFilter()
        )
        assert len(purchases) == 1

    async def test_rolls_back_on_error(self, ledger_db):
        await SQLiteInventoryStore().try_adjust(1, 1, Decimal("5"))

        with pytest.raises(RuntimeError):
            async with SQLiteUnitOfWork().atomic() as session:
                await session.inventory.try_adjust(1, 1, Decimal("-5"))
                await session.inventory.try_adjust(2, 1, Decimal("5"))
                raise RuntimeError("abort")

        store = SQLiteInventoryStore()
        assert (await store.get_balance(1, 1)).current_quantity == Decimal("5")
        assert await store.get_balance(2, 1) is None

    async def test_reference_violation_rolls_back(self, ledger_db):
        with pytest.raises(InvalidInputError):
            async with SQLiteUnitOfWork().atomic() as session:
                await session.inventory.try_adjust(1, 1, Decimal("5"))
                await session.ledger.add_movement(make_purchase(base_id=99))

        assert await SQLiteInventoryStore().get_balance(1, 1) is None

    async def test_transfer_never_half_visible(self, ledger_db):
        """Readers see both sides of a two-sided unit or neither."""
        await SQLiteInventoryStore().try_adjust(1, 1, Decimal("10"))
        seen: list[Decimal] = []

        async def move():
            async with SQLiteUnitOfWork().atomic() as session:
                await session.inventory.try_adjust(1, 1, Decimal("-4"))
                await asyncio.sleep(0.05)
                await session.inventory.try_adjust(2, 1, Decimal("4"))

        async def observe():
            await asyncio.sleep(0.01)
            async with get_connection() as conn:
                cursor = await conn.execute(
                    "SELECT COALESCE(SUM(current_quantity), 0) FROM inventory WHERE asset_id = 1"
                )
                seen.append((await cursor.fetchone())[0])

        await asyncio.gather(move(), observe())

        assert seen == [1000]
        store = SQLiteInventoryStore()
        assert (await store.get_balance(1, 1)).current_quantity == Decimal("6")
        assert (await store.get_balance(2, 1)).current_quantity == Decimal("4")

    async def test_concurrent_units_serialize(self, ledger_db):
        await SQLiteInventoryStore().try_adjust(1, 1, Decimal("10"))
        uow = SQLiteUnitOfWork()

        async def debit() -> bool:
            async with uow.atomic() as session:
                remaining = await session.inventory.try_adjust(1, 1, Decimal("-4"))
                if remaining is None:
                    return False
                await session.inventory.try_adjust(2, 1, Decimal("4"))
                return True

        results = await asyncio.gather(*(debit() for _ in range(4)))

        assert results.count(True) == 2
        store = SQLiteInventoryStore()
        assert (await store.get_balance(1, 1)).current_quantity == Decimal("2")
        assert (await store.get_balance(2, 1)).current_quantity == Decimal("8")


class TestConnectionPool:
    async def test_unopenable_database(self, tmp_path):
        blocker = tmp_path / "not_a_dir"
        blocker.write_text("")
        pool = ConnectionPool(blocker / "armory.db", pool_size=1)

        with pytest.raises(StoreUnavailableError):
            await pool.initialize()

    async def test_close_resets(self, tmp_path):
        pool = ConnectionPool(tmp_path / "pool.db", pool_size=1)
        async with pool.acquire() as conn:
            cursor = await conn.execute("PRAGMA foreign_keys")
            assert (await cursor.fetchone())[0] == 1
        await pool.close()

        async with pool.acquire() as conn:
            cursor = await conn.execute("PRAGMA journal_mode")
            assert (await cursor.fetchone())[0] == "wal"
        await pool.close()


class TestIntegrityErrors:
    @pytest.mark.parametrize(
        ("text", "field", "message"),
        [
            ("FOREIGN KEY constraint failed", "reference", "unknown base"),
            ("UNIQUE constraint failed: inventory.base_id, inventory.asset_id", "record", "duplicates"),
            ("CHECK constraint failed: current_quantity >= 0", "record", "value constraint"),
            ("NOT NULL constraint failed: purchases.base_id", "record", "data constraint"),
        ],
    )
    def test_message_matches_constraint(self, text, field, message):
        error = integrity_error(sqlite3.IntegrityError(text))
        assert error.details["field"] == field
        assert message in error.details["message"]
        assert error.details["value"] == text
