"""Use cases: the entry points API handlers call."""

from armory.application.use_cases.assign_stock import AssignStockUseCase
from armory.application.use_cases.inventory_report import InventoryReportUseCase
from armory.application.use_cases.list_audit_log import ListAuditLogUseCase
from armory.application.use_cases.query_movements import QueryMovementsUseCase
from armory.application.use_cases.record_expenditure import RecordExpenditureUseCase
from armory.application.use_cases.record_purchase import RecordPurchaseUseCase
from armory.application.use_cases.transfer_stock import TransferStockUseCase

__all__ = [
    "RecordPurchaseUseCase",
    "TransferStockUseCase",
    "AssignStockUseCase",
    "RecordExpenditureUseCase",
    "QueryMovementsUseCase",
    "InventoryReportUseCase",
    "ListAuditLogUseCase",
]
