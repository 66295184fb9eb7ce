"""SQLite storage implementations."""

from armory.infrastructure.storage.sqlite.audit_sink import SQLiteAuditSink
from armory.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from armory.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from armory.infrastructure.storage.sqlite.movement_ledger import SQLiteMovementLedger
from armory.infrastructure.storage.sqlite.unit_of_work import SQLiteUnitOfWork

# Singleton instances
_inventory_store: SQLiteInventoryStore | None = None
_movement_ledger: SQLiteMovementLedger | None = None
_unit_of_work: SQLiteUnitOfWork | None = None
_audit_sink: SQLiteAuditSink | None = None


def get_inventory_store() -> SQLiteInventoryStore:
    """Get singleton inventory store bound to the global pool."""
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


def get_movement_ledger() -> SQLiteMovementLedger:
    """Get singleton movement ledger bound to the global pool."""
    global _movement_ledger
    if _movement_ledger is None:
        _movement_ledger = SQLiteMovementLedger()
    return _movement_ledger


def get_unit_of_work() -> SQLiteUnitOfWork:
    """Get singleton unit of work on the global pool."""
    global _unit_of_work
    if _unit_of_work is None:
        _unit_of_work = SQLiteUnitOfWork()
    return _unit_of_work


def get_audit_sink() -> SQLiteAuditSink:
    """Get singleton audit sink."""
    global _audit_sink
    if _audit_sink is None:
        _audit_sink = SQLiteAuditSink()
    return _audit_sink


__all__ = [
    # Connection
    "ConnectionPool",
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
    # Store classes
    "SQLiteInventoryStore",
    "SQLiteMovementLedger",
    "SQLiteUnitOfWork",
    "SQLiteAuditSink",
    # Factory functions
    "get_inventory_store",
    "get_movement_ledger",
    "get_unit_of_work",
    "get_audit_sink",
]
