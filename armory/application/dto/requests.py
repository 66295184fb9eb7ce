"""Request DTOs for API endpoints.

Pydantic v2 models for request bodies. Fields are optional so that absent
values reach the movement validator, which reports every missing field
in one INVALID_INPUT error; a value of the wrong type is still rejected
by FastAPI before that.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, Field


class CreatePurchaseRequest(BaseModel):
    """Request to record a purchase into a base."""

    base_id: int | None = Field(default=None, description="Receiving base")
    asset_id: int | None = Field(default=None, description="Asset purchased")
    quantity: Decimal | None = Field(
        default=None,
        description="Quantity purchased, at most two decimal places",
        examples=["10", "2.5"],
    )
    unit_price: Decimal | None = Field(default=None, description="Price per unit")
    supplier_name: str | None = Field(default=None, description="Supplier")
    purchase_order_number: str | None = Field(default=None, description="PO number")
    purchase_date: date | None = Field(default=None, description="Date of purchase")
    notes: str | None = Field(default=None, description="Additional notes")


class CreateTransferRequest(BaseModel):
    """Request to move stock between two bases."""

    source_base_id: int | None = Field(default=None, description="Base giving stock")
    destination_base_id: int | None = Field(
        default=None, description="Base receiving stock"
    )
    asset_id: int | None = Field(default=None, description="Asset transferred")
    quantity: Decimal | None = Field(default=None, description="Quantity transferred")
    transfer_date: date | None = Field(default=None, description="Date of transfer")
    transfer_order_number: str | None = Field(default=None, description="Order number")
    reason: str | None = Field(default=None, description="Reason for the transfer")


class CreateAssignmentRequest(BaseModel):
    """Request to check stock out to personnel."""

    base_id: int | None = Field(default=None, description="Base issuing stock")
    asset_id: int | None = Field(default=None, description="Asset assigned")
    quantity: Decimal | None = Field(default=None, description="Quantity assigned")
    assigned_to_personnel: str | None = Field(
        default=None,
        description="Person receiving the stock",
        examples=["Sgt. A. Rivera"],
    )
    assigned_to_unit: str | None = Field(default=None, description="Receiving unit")
    assignment_date: date | None = Field(default=None, description="Date of assignment")
    purpose: str | None = Field(default=None, description="Purpose of the assignment")


class CreateExpenditureRequest(BaseModel):
    """Request to record consumed stock."""

    base_id: int | None = Field(default=None, description="Base the stock belonged to")
    asset_id: int | None = Field(default=None, description="Asset expended")
    assignment_id: int | None = Field(
        default=None,
        description="Assignment this expenditure closes out, if any",
    )
    quantity: Decimal | None = Field(default=None, description="Quantity expended")
    expenditure_date: date | None = Field(default=None, description="Date expended")
    reason: str | None = Field(default=None, description="Why the stock was expended")
    operation_name: str | None = Field(default=None, description="Operation name")
    authorized_by: str | None = Field(default=None, description="Authorizing officer")
