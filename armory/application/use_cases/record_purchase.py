"""Record Purchase Use Case: credit a base with bought stock."""

from armory.application.dto.requests import CreatePurchaseRequest
from armory.application.use_cases.create_movement import CreateMovementUseCase
from armory.config import get_logger
from armory.core.entities.commands import PurchaseCommand
from armory.core.entities.identity import Caller
from armory.core.entities.movements import Purchase

logger = get_logger(__name__)


class RecordPurchaseUseCase(CreateMovementUseCase):
    """Record a purchase and increase the base balance."""

    created_message = "Purchase recorded successfully"

    async def execute(
        self,
        caller: Caller,
        request: CreatePurchaseRequest,
        origin: str | None = None,
    ) -> Purchase:
        logger.info(
            "record_purchase_started",
            subject_id=caller.subject_id,
            base_id=request.base_id,
            asset_id=request.asset_id,
        )
        command = PurchaseCommand(**request.model_dump())
        return await self._get_coordinator().record_purchase(caller, command, origin)
