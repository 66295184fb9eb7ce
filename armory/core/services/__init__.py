"""Core domain services."""

from armory.core.services.access_scope import WRITE_PERMISSIONS, AccessScope
from armory.core.services.inventory_report import InventoryReportService
from armory.core.services.movement_query import MovementQueryService
from armory.core.services.movement_validator import MovementValidator
from armory.core.services.transaction_coordinator import TransactionCoordinator

__all__ = [
    "AccessScope",
    "WRITE_PERMISSIONS",
    "MovementValidator",
    "TransactionCoordinator",
    "MovementQueryService",
    "InventoryReportService",
]
