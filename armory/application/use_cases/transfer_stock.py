"""Transfer Stock Use Case: move stock between two bases atomically."""

from armory.application.dto.requests import CreateTransferRequest
from armory.application.use_cases.create_movement import CreateMovementUseCase
from armory.config import get_logger
from armory.core.entities.commands import TransferCommand
from armory.core.entities.identity import Caller
from armory.core.entities.movements import Transfer

logger = get_logger(__name__)


class TransferStockUseCase(CreateMovementUseCase):
    """Debit the source base and credit the destination in one unit."""

    created_message = "Transfer completed successfully"

    async def execute(
        self,
        caller: Caller,
        request: CreateTransferRequest,
        origin: str | None = None,
    ) -> Transfer:
        logger.info(
            "transfer_stock_started",
            subject_id=caller.subject_id,
            source_base_id=request.source_base_id,
            destination_base_id=request.destination_base_id,
            asset_id=request.asset_id,
        )
        command = TransferCommand(**request.model_dump())
        return await self._get_coordinator().transfer(caller, command, origin)
