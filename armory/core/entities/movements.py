"""Movement ledger entities.

Records are frozen once built: the ledger only ever appends them, and the one
permitted state change (an assignment becoming expended) happens in storage
through a conditioned write, never by mutating a record in place.
"""

from abc import abstractmethod
from datetime import UTC, date, datetime
from decimal import Decimal
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field


class MovementKind(str, Enum):
    """The four kinds of quantity-affecting events."""

    PURCHASE = "purchase"
    TRANSFER = "transfer"
    ASSIGNMENT = "assignment"
    EXPENDITURE = "expenditure"


class TransferStatus(str, Enum):
    """Only terminal-success transfers are produced."""

    COMPLETED = "completed"


class AssignmentStatus(str, Enum):
    """Lifecycle of an assignment."""

    ACTIVE = "active"
    EXPENDED = "expended"


def _utcnow() -> datetime:
    return datetime.now(UTC)


class MovementRecord(BaseModel):
    """Fields shared by every movement record."""

    model_config = ConfigDict(frozen=True)

    kind: ClassVar[MovementKind]

    id: int | None = None
    asset_id: int
    quantity: Decimal
    created_by: int
    created_at: datetime = Field(default_factory=_utcnow)

    @property
    @abstractmethod
    def base_ids(self) -> tuple[int, ...]:
        """Bases this record belongs to, for scope checks."""

    @property
    @abstractmethod
    def business_date(self) -> date:
        """Date the movement took effect, used for ordering and periods."""


class Purchase(MovementRecord):
    """Stock bought into a base."""

    kind: ClassVar[MovementKind] = MovementKind.PURCHASE

    base_id: int
    unit_price: Decimal | None = None
    total_price: Decimal | None = None
    supplier_name: str | None = None
    purchase_order_number: str | None = None
    purchase_date: date
    notes: str | None = None

    @property
    def base_ids(self) -> tuple[int, ...]:
        return (self.base_id,)

    @property
    def business_date(self) -> date:
        return self.purchase_date


class Transfer(MovementRecord):
    """Stock moved from one base to another."""

    kind: ClassVar[MovementKind] = MovementKind.TRANSFER

    source_base_id: int
    destination_base_id: int
    transfer_date: date
    transfer_order_number: str | None = None
    reason: str | None = None
    status: TransferStatus = TransferStatus.COMPLETED

    @property
    def base_ids(self) -> tuple[int, ...]:
        return (self.source_base_id, self.destination_base_id)

    @property
    def business_date(self) -> date:
        return self.transfer_date


class Assignment(MovementRecord):
    """Stock checked out to personnel or a unit."""

    kind: ClassVar[MovementKind] = MovementKind.ASSIGNMENT

    base_id: int
    assigned_to_personnel: str
    assigned_to_unit: str | None = None
    assignment_date: date
    purpose: str | None = None
    status: AssignmentStatus = AssignmentStatus.ACTIVE

    @property
    def base_ids(self) -> tuple[int, ...]:
        return (self.base_id,)

    @property
    def business_date(self) -> date:
        return self.assignment_date

    @property
    def is_active(self) -> bool:
        return self.status is AssignmentStatus.ACTIVE


class Expenditure(MovementRecord):
    """Stock consumed, optionally closing out an assignment."""

    kind: ClassVar[MovementKind] = MovementKind.EXPENDITURE

    base_id: int
    assignment_id: int | None = None
    expenditure_date: date
    reason: str
    operation_name: str | None = None
    authorized_by: str | None = None

    @property
    def base_ids(self) -> tuple[int, ...]:
        return (self.base_id,)

    @property
    def business_date(self) -> date:
        return self.expenditure_date


class MovementFilter(BaseModel):
    """Read filter for ledger listings.

    `search` matches assigned personnel for assignments and the operation
    name for expenditures; it is ignored for the other kinds.
    """

    base_id: int | None = None
    asset_id: int | None = None
    start_date: date | None = None
    end_date: date | None = None
    search: str | None = None
    status: AssignmentStatus | None = None
    limit: int = 100
    offset: int = 0
