"""
Service factory functions for dependency injection.

Wires the storage backend chosen in settings (sqlite or memory) to the
core services. Use cases and API dependencies import from here.
"""

from typing import TYPE_CHECKING

from armory.config import get_logger, get_settings
from armory.core.services import (
    InventoryReportService,
    MovementQueryService,
    MovementValidator,
    TransactionCoordinator,
)

if TYPE_CHECKING:
    from armory.core.interfaces import (
        IAuditSink,
        IInventoryStore,
        IMovementLedger,
        IUnitOfWork,
    )
    from armory.infrastructure.storage.memory import InMemoryDatabase

logger = get_logger(__name__)

# Singleton instances
_memory_database: "InMemoryDatabase | None" = None
_transaction_coordinator: TransactionCoordinator | None = None
_movement_query_service: MovementQueryService | None = None
_inventory_report_service: InventoryReportService | None = None


def _use_memory() -> bool:
    return get_settings().storage.backend == "memory"


def get_memory_database() -> "InMemoryDatabase":
    """Process-wide database for the memory backend."""
    global _memory_database
    if _memory_database is None:
        from armory.infrastructure.storage.memory import InMemoryDatabase

        _memory_database = InMemoryDatabase()
        logger.info("memory_database_created")
    return _memory_database


def get_unit_of_work() -> "IUnitOfWork":
    if _use_memory():
        from armory.infrastructure.storage.memory import InMemoryUnitOfWork

        return InMemoryUnitOfWork(get_memory_database())

    from armory.infrastructure.storage import sqlite

    return sqlite.get_unit_of_work()


def get_inventory_store() -> "IInventoryStore":
    """Store reading committed balances, outside any unit."""
    if _use_memory():
        from armory.infrastructure.storage.memory import InMemoryInventoryStore

        return InMemoryInventoryStore(get_memory_database())

    from armory.infrastructure.storage import sqlite

    return sqlite.get_inventory_store()


def get_movement_ledger() -> "IMovementLedger":
    """Ledger reading committed records, outside any unit."""
    if _use_memory():
        from armory.infrastructure.storage.memory import InMemoryMovementLedger

        return InMemoryMovementLedger(get_memory_database())

    from armory.infrastructure.storage import sqlite

    return sqlite.get_movement_ledger()


def get_audit_sink() -> "IAuditSink":
    if _use_memory():
        from armory.infrastructure.storage.memory import InMemoryAuditSink

        return InMemoryAuditSink(get_memory_database())

    from armory.infrastructure.storage import sqlite

    return sqlite.get_audit_sink()


def get_transaction_coordinator(
    unit_of_work: "IUnitOfWork | None" = None,
    audit_sink: "IAuditSink | None" = None,
) -> TransactionCoordinator:
    """
    Get or create the TransactionCoordinator.

    Audit notification is wired only when LEDGER_AUDIT_ENABLED is true.

    Args:
        unit_of_work: Optional unit of work override
        audit_sink: Optional audit sink override

    Returns:
        Configured TransactionCoordinator
    """
    global _transaction_coordinator

    overridden = unit_of_work is not None or audit_sink is not None
    if _transaction_coordinator is not None and not overridden:
        return _transaction_coordinator

    settings = get_settings()
    if audit_sink is None and settings.ledger.audit_enabled:
        audit_sink = get_audit_sink()

    coordinator = TransactionCoordinator(
        unit_of_work=unit_of_work or get_unit_of_work(),
        validator=MovementValidator(get_inventory_store(), get_movement_ledger()),
        audit_sink=audit_sink,
    )

    if not overridden:
        _transaction_coordinator = coordinator
    return coordinator


def get_movement_query_service() -> MovementQueryService:
    global _movement_query_service
    if _movement_query_service is None:
        _movement_query_service = MovementQueryService(
            get_movement_ledger(),
            max_limit=get_settings().ledger.max_list_limit,
        )
    return _movement_query_service


def get_inventory_report_service() -> InventoryReportService:
    global _inventory_report_service
    if _inventory_report_service is None:
        _inventory_report_service = InventoryReportService(
            get_inventory_store(),
            get_movement_ledger(),
        )
    return _inventory_report_service


def reset_services() -> None:
    """Reset all service singletons (for testing)."""
    global _memory_database, _transaction_coordinator
    global _movement_query_service, _inventory_report_service
    _memory_database = None
    _transaction_coordinator = None
    _movement_query_service = None
    _inventory_report_service = None
