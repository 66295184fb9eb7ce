"""Unvalidated movement requests as they arrive from a caller.

Every field is optional here; presence and business rules are checked by
the movement validator, which turns an accepted command into a record.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class PurchaseCommand(BaseModel):
    base_id: int | None = None
    asset_id: int | None = None
    quantity: Decimal | None = None
    unit_price: Decimal | None = None
    supplier_name: str | None = None
    purchase_order_number: str | None = None
    purchase_date: date | None = None
    notes: str | None = None


class TransferCommand(BaseModel):
    source_base_id: int | None = None
    destination_base_id: int | None = None
    asset_id: int | None = None
    quantity: Decimal | None = None
    transfer_date: date | None = None
    transfer_order_number: str | None = None
    reason: str | None = None


class AssignmentCommand(BaseModel):
    base_id: int | None = None
    asset_id: int | None = None
    quantity: Decimal | None = None
    assigned_to_personnel: str | None = None
    assigned_to_unit: str | None = None
    assignment_date: date | None = None
    purpose: str | None = None


class ExpenditureCommand(BaseModel):
    base_id: int | None = None
    asset_id: int | None = None
    assignment_id: int | None = None
    quantity: Decimal | None = None
    expenditure_date: date | None = None
    reason: str | None = None
    operation_name: str | None = None
    authorized_by: str | None = None
