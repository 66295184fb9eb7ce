"""Data transfer objects between the API and the use cases."""

from armory.application.dto.requests import (
    CreateAssignmentRequest,
    CreateExpenditureRequest,
    CreatePurchaseRequest,
    CreateTransferRequest,
)
from armory.application.dto.responses import (
    AssignmentListResponse,
    AssignmentResponse,
    AuditEntryResponse,
    AuditListResponse,
    BreakdownResponse,
    DashboardResponse,
    ErrorResponse,
    ExpenditureListResponse,
    ExpenditureResponse,
    HealthResponse,
    InventorySummaryResponse,
    MovementCreatedResponse,
    MovementTotalsResponse,
    PurchaseListResponse,
    PurchaseResponse,
    TransferListResponse,
    TransferResponse,
)

__all__ = [
    # Requests
    "CreatePurchaseRequest",
    "CreateTransferRequest",
    "CreateAssignmentRequest",
    "CreateExpenditureRequest",
    # Responses
    "MovementCreatedResponse",
    "PurchaseResponse",
    "TransferResponse",
    "AssignmentResponse",
    "ExpenditureResponse",
    "PurchaseListResponse",
    "TransferListResponse",
    "AssignmentListResponse",
    "ExpenditureListResponse",
    "MovementTotalsResponse",
    "InventorySummaryResponse",
    "DashboardResponse",
    "BreakdownResponse",
    "AuditEntryResponse",
    "AuditListResponse",
    "HealthResponse",
    "ErrorResponse",
]
