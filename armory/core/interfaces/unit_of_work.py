"""Abstract interface for atomic units spanning inventory and ledger."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass

from armory.core.interfaces.inventory_store import IInventoryStore
from armory.core.interfaces.movement_ledger import IMovementLedger


@dataclass
class StoreSession:
    """Stores bound to one open atomic unit."""

    inventory: IInventoryStore
    ledger: IMovementLedger


class IUnitOfWork(ABC):
    """Opens atomic units against the durable store."""

    @abstractmethod
    def atomic(self) -> AbstractAsyncContextManager[StoreSession]:
        """
        Open an atomic unit.

        Everything done through the yielded session commits together when
        the block exits normally and is discarded if it raises. Writers on
        the same store are serialized for the lifetime of the unit.

        Usage:
            async with uow.atomic() as session:
                await session.inventory.try_adjust(...)
                await session.ledger.add_movement(...)
        """
        pass
