"""In-memory atomic units."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from armory.config import get_logger
from armory.core.interfaces.unit_of_work import IUnitOfWork, StoreSession
from armory.infrastructure.storage.memory.inventory_store import InMemoryInventoryStore
from armory.infrastructure.storage.memory.movement_ledger import InMemoryMovementLedger
from armory.infrastructure.storage.memory.state import InMemoryDatabase

logger = get_logger(__name__)


class InMemoryUnitOfWork(IUnitOfWork):
    """
    Serializes units with the database lock.

    Each unit works on a staged copy of the committed state, which replaces
    it only when the block exits normally.
    """

    def __init__(self, database: InMemoryDatabase | None = None):
        self.database = database or InMemoryDatabase()

    @asynccontextmanager
    async def atomic(self) -> AsyncIterator[StoreSession]:
        async with self.database.lock:
            staged = self.database.state.staged_copy()
            try:
                yield StoreSession(
                    inventory=InMemoryInventoryStore(self.database, staged),
                    ledger=InMemoryMovementLedger(self.database, staged),
                )
            except Exception as e:
                logger.debug("unit_rolled_back", error_type=type(e).__name__)
                raise
            self.database.state = staged
