"""Response DTOs for API endpoints.

Quantities and prices are Decimals and serialize as strings, so values
such as 2.50 reach the client without float rounding.
"""

from datetime import UTC, date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from armory.core.entities.movements import AssignmentStatus, TransferStatus


class MovementCreatedResponse(BaseModel):
    """Returned by every create operation."""

    message: str
    created_id: int


# --- Movement records ---


class _RecordResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    asset_id: int
    quantity: Decimal
    created_by: int
    created_at: datetime


class PurchaseResponse(_RecordResponse):
    base_id: int
    unit_price: Decimal | None = None
    total_price: Decimal | None = None
    supplier_name: str | None = None
    purchase_order_number: str | None = None
    purchase_date: date
    notes: str | None = None


class TransferResponse(_RecordResponse):
    source_base_id: int
    destination_base_id: int
    transfer_date: date
    transfer_order_number: str | None = None
    reason: str | None = None
    status: TransferStatus


class AssignmentResponse(_RecordResponse):
    base_id: int
    assigned_to_personnel: str
    assigned_to_unit: str | None = None
    assignment_date: date
    purpose: str | None = None
    status: AssignmentStatus


class ExpenditureResponse(_RecordResponse):
    base_id: int
    assignment_id: int | None = None
    expenditure_date: date
    reason: str
    operation_name: str | None = None
    authorized_by: str | None = None


class PurchaseListResponse(BaseModel):
    purchases: list[PurchaseResponse]
    count: int


class TransferListResponse(BaseModel):
    transfers: list[TransferResponse]
    count: int


class AssignmentListResponse(BaseModel):
    assignments: list[AssignmentResponse]
    count: int


class ExpenditureListResponse(BaseModel):
    expenditures: list[ExpenditureResponse]
    count: int


# --- Inventory reporting ---


class MovementTotalsResponse(BaseModel):
    purchases: Decimal
    transfers_in: Decimal
    transfers_out: Decimal
    assigned: Decimal
    expended: Decimal
    net_movement: Decimal


class InventorySummaryResponse(BaseModel):
    """One (base, asset) balance with its movement totals."""

    id: int | None
    base_id: int
    asset_id: int
    opening_balance: Decimal
    current_quantity: Decimal
    closing_balance: Decimal
    totals: MovementTotalsResponse


class DashboardResponse(BaseModel):
    dashboard: list[InventorySummaryResponse]


class BreakdownResponse(BaseModel):
    base_id: int
    asset_id: int
    breakdown: MovementTotalsResponse


# --- Audit ---


class AuditEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int | None
    actor_id: int
    action: str
    entity_type: str
    entity_id: int | None
    details: dict[str, Any]
    origin: str | None
    created_at: datetime


class AuditListResponse(BaseModel):
    logs: list[AuditEntryResponse]


# --- Health & errors ---


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    backend: str


class ErrorResponse(BaseModel):
    """Standardized error response DTO.

    Every error response includes:
    - error_code: machine-readable code (e.g. INSUFFICIENT_BALANCE)
    - message: human-readable description
    - hint: suggested recovery action
    - path: request path that triggered the error
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
