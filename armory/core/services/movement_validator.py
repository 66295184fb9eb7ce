"""
Movement validation service.

Checks a movement command before anything is written and, when it is
accepted, builds the immutable record to persist. The availability checks
made here read committed balances only; they give early feedback, while the
conditioned debit inside the atomic unit remains the real guarantee.
"""

from decimal import Decimal

from armory.config import get_logger
from armory.core.entities.commands import (
    AssignmentCommand,
    ExpenditureCommand,
    PurchaseCommand,
    TransferCommand,
)
from armory.core.entities.identity import Caller
from armory.core.entities.inventory import MAX_QUANTITY, QUANTITY_PLACES, ZERO, fits_quantum
from armory.core.entities.movements import (
    Assignment,
    AssignmentStatus,
    Expenditure,
    MovementKind,
    Purchase,
    Transfer,
)
from armory.core.exceptions import (
    ConflictError,
    InsufficientBalanceError,
    InvalidInputError,
    MissingFieldsError,
    NotFoundError,
)
from armory.core.interfaces.inventory_store import IInventoryStore
from armory.core.interfaces.movement_ledger import IMovementLedger
from armory.core.services.access_scope import AccessScope

logger = get_logger(__name__)

REQUIRED_FIELDS: dict[MovementKind, tuple[str, ...]] = {
    MovementKind.PURCHASE: ("base_id", "asset_id", "quantity", "purchase_date"),
    MovementKind.TRANSFER: (
        "source_base_id",
        "destination_base_id",
        "asset_id",
        "quantity",
        "transfer_date",
    ),
    MovementKind.ASSIGNMENT: (
        "base_id",
        "asset_id",
        "quantity",
        "assigned_to_personnel",
        "assignment_date",
    ),
    MovementKind.EXPENDITURE: (
        "base_id",
        "asset_id",
        "quantity",
        "expenditure_date",
        "reason",
    ),
}


def _is_blank(value: object) -> bool:
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def require_fields(kind: MovementKind, command: object) -> None:
    """Raise MissingFieldsError naming every absent required field."""
    missing = [
        name for name in REQUIRED_FIELDS[kind] if _is_blank(getattr(command, name))
    ]
    if missing:
        raise MissingFieldsError(kind.value, missing)


def check_quantity(field: str, value: Decimal) -> Decimal:
    """Quantities must be finite, strictly positive and fixed-point."""
    if not value.is_finite() or value <= ZERO:
        raise InvalidInputError(field, "must be greater than zero", value)
    if value > MAX_QUANTITY:
        raise InvalidInputError(field, f"must not exceed {MAX_QUANTITY}", value)
    if not fits_quantum(value):
        raise InvalidInputError(
            field,
            f"must have at most {QUANTITY_PLACES} decimal places",
            value,
        )
    return value


def check_price(field: str, value: Decimal | None) -> Decimal | None:
    if value is None:
        return None
    if not value.is_finite() or value < ZERO:
        raise InvalidInputError(field, "must not be negative", value)
    return value


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class MovementValidator:
    """
    Validates movement commands for a caller.

    Each validate_* method runs, in order: role permission, required fields,
    value checks, base scope, and (for debits) the availability pre-check.
    """

    def __init__(
        self,
        inventory_store: IInventoryStore,
        ledger: IMovementLedger,
        access_scope: AccessScope | None = None,
    ) -> None:
        self._inventory = inventory_store
        self._ledger = ledger
        self._scope = access_scope or AccessScope()

    async def check_available(
        self, base_id: int, asset_id: int, quantity: Decimal
    ) -> Decimal:
        """Raise InsufficientBalanceError unless quantity is on hand."""
        record = await self._inventory.get_balance(base_id, asset_id)
        available = record.current_quantity if record is not None else ZERO
        if available < quantity:
            logger.info(
                "availability_check_failed",
                base_id=base_id,
                asset_id=asset_id,
                requested=str(quantity),
                available=str(available),
            )
            raise InsufficientBalanceError(base_id, asset_id, quantity, available)
        return available

    async def validate_purchase(self, caller: Caller, command: PurchaseCommand) -> Purchase:
        self._scope.authorize_role(caller, MovementKind.PURCHASE)
        require_fields(MovementKind.PURCHASE, command)
        quantity = check_quantity("quantity", command.quantity)
        unit_price = check_price("unit_price", command.unit_price)
        self._scope.authorize_write(caller, MovementKind.PURCHASE, [command.base_id])

        return Purchase(
            base_id=command.base_id,
            asset_id=command.asset_id,
            quantity=quantity,
            unit_price=unit_price,
            total_price=unit_price * quantity if unit_price is not None else None,
            supplier_name=_clean(command.supplier_name),
            purchase_order_number=_clean(command.purchase_order_number),
            purchase_date=command.purchase_date,
            notes=_clean(command.notes),
            created_by=caller.subject_id,
        )

    async def validate_transfer(self, caller: Caller, command: TransferCommand) -> Transfer:
        self._scope.authorize_role(caller, MovementKind.TRANSFER)
        require_fields(MovementKind.TRANSFER, command)
        quantity = check_quantity("quantity", command.quantity)
        if command.source_base_id == command.destination_base_id:
            raise InvalidInputError(
                "destination_base_id",
                "source and destination bases must be different",
                command.destination_base_id,
            )
        self._scope.authorize_write(
            caller,
            MovementKind.TRANSFER,
            [command.source_base_id, command.destination_base_id],
        )
        await self.check_available(
            command.source_base_id,
            command.asset_id,
            quantity,
        )

        return Transfer(
            source_base_id=command.source_base_id,
            destination_base_id=command.destination_base_id,
            asset_id=command.asset_id,
            quantity=quantity,
            transfer_date=command.transfer_date,
            transfer_order_number=_clean(command.transfer_order_number),
            reason=_clean(command.reason),
            created_by=caller.subject_id,
        )

    async def validate_assignment(
        self, caller: Caller, command: AssignmentCommand
    ) -> Assignment:
        self._scope.authorize_role(caller, MovementKind.ASSIGNMENT)
        require_fields(MovementKind.ASSIGNMENT, command)
        quantity = check_quantity("quantity", command.quantity)
        self._scope.authorize_write(caller, MovementKind.ASSIGNMENT, [command.base_id])
        await self.check_available(
            command.base_id,
            command.asset_id,
            quantity,
        )

        return Assignment(
            base_id=command.base_id,
            asset_id=command.asset_id,
            quantity=quantity,
            assigned_to_personnel=_clean(command.assigned_to_personnel),
            assigned_to_unit=_clean(command.assigned_to_unit),
            assignment_date=command.assignment_date,
            purpose=_clean(command.purpose),
            status=AssignmentStatus.ACTIVE,
            created_by=caller.subject_id,
        )

    async def validate_expenditure(
        self, caller: Caller, command: ExpenditureCommand
    ) -> Expenditure:
        self._scope.authorize_role(caller, MovementKind.EXPENDITURE)
        require_fields(MovementKind.EXPENDITURE, command)
        quantity = check_quantity("quantity", command.quantity)
        self._scope.authorize_write(caller, MovementKind.EXPENDITURE, [command.base_id])

        if command.assignment_id is not None:
            await self._check_assignment(command, quantity)

        return Expenditure(
            base_id=command.base_id,
            asset_id=command.asset_id,
            assignment_id=command.assignment_id,
            quantity=quantity,
            expenditure_date=command.expenditure_date,
            reason=_clean(command.reason),
            operation_name=_clean(command.operation_name),
            authorized_by=_clean(command.authorized_by),
            created_by=caller.subject_id,
        )

    async def _check_assignment(
        self, command: ExpenditureCommand, quantity: Decimal
    ) -> None:
        """The referenced assignment must match the expenditure and be active."""
        assignment = await self._ledger.get_movement(
            MovementKind.ASSIGNMENT, command.assignment_id
        )
        if assignment is None:
            raise NotFoundError("assignment", command.assignment_id)
        assert isinstance(assignment, Assignment)

        if (assignment.base_id, assignment.asset_id) != (command.base_id, command.asset_id):
            raise InvalidInputError(
                "assignment_id",
                "assignment belongs to a different base or asset",
                command.assignment_id,
            )
        if quantity > assignment.quantity:
            raise InvalidInputError(
                "quantity",
                f"exceeds the {assignment.quantity} assigned",
                quantity,
            )
        if not assignment.is_active:
            raise ConflictError(
                f"Assignment {assignment.id} has already been expended",
                assignment_id=assignment.id,
            )
