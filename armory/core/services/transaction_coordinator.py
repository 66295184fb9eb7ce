"""
Transaction coordinator.

Executes one movement as a single atomic unit: validate, adjust balances,
append the ledger record. Either every step commits or none does. The audit
sink hears about a movement only after its unit has committed, and a failing
sink never undoes that commit.
"""

from decimal import Decimal
from typing import Any

from armory.config import get_logger
from armory.core.entities.commands import (
    AssignmentCommand,
    ExpenditureCommand,
    PurchaseCommand,
    TransferCommand,
)
from armory.core.entities.identity import Caller
from armory.core.entities.movements import (
    Assignment,
    Expenditure,
    MovementRecord,
    Purchase,
    Transfer,
)
from armory.core.exceptions import ConflictError
from armory.core.interfaces.audit_sink import IAuditSink
from armory.core.interfaces.unit_of_work import IUnitOfWork
from armory.core.services.movement_validator import MovementValidator

logger = get_logger(__name__)


def _jsonable(details: dict[str, Any]) -> dict[str, Any]:
    """Audit payloads carry Decimals and dates as strings."""
    result: dict[str, Any] = {}
    for key, value in details.items():
        if isinstance(value, Decimal):
            result[key] = str(value)
        elif hasattr(value, "isoformat"):
            result[key] = value.isoformat()
        else:
            result[key] = value
    return result


class TransactionCoordinator:
    """Applies validated movements to inventory and ledger atomically."""

    def __init__(
        self,
        unit_of_work: IUnitOfWork,
        validator: MovementValidator,
        audit_sink: IAuditSink | None = None,
    ) -> None:
        self._uow = unit_of_work
        self._validator = validator
        self._audit_sink = audit_sink

    async def record_purchase(
        self,
        caller: Caller,
        command: PurchaseCommand,
        origin: str | None = None,
    ) -> Purchase:
        """Credit the base and append the purchase."""
        purchase = await self._validator.validate_purchase(caller, command)

        async with self._uow.atomic() as session:
            balance = await session.inventory.try_adjust(
                purchase.base_id, purchase.asset_id, purchase.quantity
            )
            purchase = await session.ledger.add_movement(purchase)

        logger.info(
            "purchase_recorded",
            purchase_id=purchase.id,
            base_id=purchase.base_id,
            asset_id=purchase.asset_id,
            quantity=str(purchase.quantity),
            balance=str(balance),
        )
        await self._notify(
            caller,
            "CREATE_PURCHASE",
            purchase,
            {
                "base_id": purchase.base_id,
                "asset_id": purchase.asset_id,
                "quantity": purchase.quantity,
                "purchase_date": purchase.purchase_date,
            },
            origin,
        )
        return purchase

    async def transfer(
        self,
        caller: Caller,
        command: TransferCommand,
        origin: str | None = None,
    ) -> Transfer:
        """Debit the source, credit the destination, append the transfer."""
        transfer = await self._validator.validate_transfer(caller, command)

        async with self._uow.atomic() as session:
            remaining = await session.inventory.try_adjust(
                transfer.source_base_id, transfer.asset_id, -transfer.quantity
            )
            if remaining is None:
                raise ConflictError(
                    "Balance at the source base changed before the transfer "
                    "could be applied",
                    base_id=transfer.source_base_id,
                    asset_id=transfer.asset_id,
                    quantity=str(transfer.quantity),
                )
            received = await session.inventory.try_adjust(
                transfer.destination_base_id, transfer.asset_id, transfer.quantity
            )
            transfer = await session.ledger.add_movement(transfer)

        logger.info(
            "transfer_completed",
            transfer_id=transfer.id,
            source_base_id=transfer.source_base_id,
            destination_base_id=transfer.destination_base_id,
            asset_id=transfer.asset_id,
            quantity=str(transfer.quantity),
            source_balance=str(remaining),
            destination_balance=str(received),
        )
        await self._notify(
            caller,
            "CREATE_TRANSFER",
            transfer,
            {
                "source_base_id": transfer.source_base_id,
                "destination_base_id": transfer.destination_base_id,
                "asset_id": transfer.asset_id,
                "quantity": transfer.quantity,
            },
            origin,
        )
        return transfer

    async def assign(
        self,
        caller: Caller,
        command: AssignmentCommand,
        origin: str | None = None,
    ) -> Assignment:
        """Check stock out of the base and append an active assignment."""
        assignment = await self._validator.validate_assignment(caller, command)

        async with self._uow.atomic() as session:
            # Checked-out stock stays on the closing balance until expended
            remaining = await session.inventory.try_adjust(
                assignment.base_id,
                assignment.asset_id,
                -assignment.quantity,
                affects_closing=False,
            )
            if remaining is None:
                raise ConflictError(
                    "Balance changed before the assignment could be applied",
                    base_id=assignment.base_id,
                    asset_id=assignment.asset_id,
                    quantity=str(assignment.quantity),
                )
            assignment = await session.ledger.add_movement(assignment)

        logger.info(
            "assignment_created",
            assignment_id=assignment.id,
            base_id=assignment.base_id,
            asset_id=assignment.asset_id,
            quantity=str(assignment.quantity),
            balance=str(remaining),
        )
        await self._notify(
            caller,
            "CREATE_ASSIGNMENT",
            assignment,
            {
                "base_id": assignment.base_id,
                "asset_id": assignment.asset_id,
                "quantity": assignment.quantity,
                "assigned_to_personnel": assignment.assigned_to_personnel,
            },
            origin,
        )
        return assignment

    async def record_expenditure(
        self,
        caller: Caller,
        command: ExpenditureCommand,
        origin: str | None = None,
    ) -> Expenditure:
        """
        Append the expenditure and close out its assignment, if any.

        Inventory is not touched: the quantity left current_quantity when the
        assignment was created.
        """
        expenditure = await self._validator.validate_expenditure(caller, command)

        async with self._uow.atomic() as session:
            expenditure = await session.ledger.add_movement(expenditure)
            if expenditure.assignment_id is not None:
                expended = await session.ledger.expend_assignment(
                    expenditure.assignment_id
                )
                if not expended:
                    raise ConflictError(
                        f"Assignment {expenditure.assignment_id} has already "
                        "been expended",
                        assignment_id=expenditure.assignment_id,
                    )

        logger.info(
            "expenditure_recorded",
            expenditure_id=expenditure.id,
            base_id=expenditure.base_id,
            asset_id=expenditure.asset_id,
            assignment_id=expenditure.assignment_id,
            quantity=str(expenditure.quantity),
        )
        await self._notify(
            caller,
            "CREATE_EXPENDITURE",
            expenditure,
            {
                "base_id": expenditure.base_id,
                "asset_id": expenditure.asset_id,
                "quantity": expenditure.quantity,
                "reason": expenditure.reason,
            },
            origin,
        )
        return expenditure

    async def _notify(
        self,
        caller: Caller,
        action: str,
        record: MovementRecord,
        details: dict[str, Any],
        origin: str | None,
    ) -> None:
        """Best-effort audit notification; failures are logged only."""
        if self._audit_sink is None:
            return
        try:
            await self._audit_sink.record(
                actor_id=caller.subject_id,
                action=action,
                entity_type=record.kind.value,
                entity_id=record.id,
                details=_jsonable(details),
                origin=origin,
            )
        except Exception as e:
            logger.warning(
                "audit_record_failed",
                action=action,
                entity_id=record.id,
                error=str(e),
            )
