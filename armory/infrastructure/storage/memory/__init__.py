"""In-memory storage implementations."""

from armory.infrastructure.storage.memory.audit_sink import InMemoryAuditSink
from armory.infrastructure.storage.memory.inventory_store import InMemoryInventoryStore
from armory.infrastructure.storage.memory.movement_ledger import InMemoryMovementLedger
from armory.infrastructure.storage.memory.state import InMemoryDatabase, MemoryState
from armory.infrastructure.storage.memory.unit_of_work import InMemoryUnitOfWork

__all__ = [
    "InMemoryDatabase",
    "MemoryState",
    "InMemoryInventoryStore",
    "InMemoryMovementLedger",
    "InMemoryUnitOfWork",
    "InMemoryAuditSink",
]
