"""Core domain entities."""

from armory.core.entities.audit import AuditFilter, AuditLogEntry
from armory.core.entities.commands import (
    AssignmentCommand,
    ExpenditureCommand,
    PurchaseCommand,
    TransferCommand,
)
from armory.core.entities.identity import Caller, Role
from armory.core.entities.inventory import (
    QUANTITY_PLACES,
    InventoryRecord,
    InventorySummary,
    MovementTotals,
)
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

__all__ = [
    # Identity
    "Caller",
    "Role",
    # Inventory
    "InventoryRecord",
    "InventorySummary",
    "MovementTotals",
    "QUANTITY_PLACES",
    # Movements
    "MovementKind",
    "MovementRecord",
    "Purchase",
    "Transfer",
    "TransferStatus",
    "Assignment",
    "AssignmentStatus",
    "Expenditure",
    "MovementFilter",
    # Commands
    "PurchaseCommand",
    "TransferCommand",
    "AssignmentCommand",
    "ExpenditureCommand",
    # Audit
    "AuditLogEntry",
    "AuditFilter",
]
