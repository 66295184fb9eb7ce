"""SQLite atomic units spanning inventory and ledger."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from armory.config import get_logger
from armory.core.interfaces.unit_of_work import IUnitOfWork, StoreSession
from armory.infrastructure.storage.sqlite.connection import ConnectionPool, get_pool
from armory.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from armory.infrastructure.storage.sqlite.movement_ledger import SQLiteMovementLedger

logger = get_logger(__name__)


class SQLiteUnitOfWork(IUnitOfWork):
    """
    Opens one BEGIN IMMEDIATE transaction per unit.

    The write lock is held from the first statement, so two units touching
    the same balance run one after the other. Stores handed out in the
    session share the unit's connection.
    """

    def __init__(self, pool: ConnectionPool | None = None):
        self._pool = pool

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[StoreSession]:
        pool = self._pool or await get_pool()
        try:
            async with pool.transaction(immediate=True) as conn:
                yield StoreSession(
                    inventory=SQLiteInventoryStore(conn),
                    ledger=SQLiteMovementLedger(conn),
                )
        except Exception as e:
            logger.debug("unit_rolled_back", error_type=type(e).__name__)
            raise
