"""Core interfaces (ports) for dependency injection."""

from armory.core.interfaces.audit_sink import IAuditSink
from armory.core.interfaces.inventory_store import IInventoryStore
from armory.core.interfaces.movement_ledger import IMovementLedger
from armory.core.interfaces.unit_of_work import IUnitOfWork, StoreSession

__all__ = [
    "IInventoryStore",
    "IMovementLedger",
    "IUnitOfWork",
    "StoreSession",
    "IAuditSink",
]
