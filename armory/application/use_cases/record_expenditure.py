"""Record Expenditure Use Case: log consumed stock, closing its assignment."""

from armory.application.dto.requests import CreateExpenditureRequest
from armory.application.use_cases.create_movement import CreateMovementUseCase
from armory.config import get_logger
from armory.core.entities.commands import ExpenditureCommand
from armory.core.entities.identity import Caller
from armory.core.entities.movements import Expenditure

logger = get_logger(__name__)


class RecordExpenditureUseCase(CreateMovementUseCase):
    """Record an expenditure; a referenced assignment becomes expended."""

    created_message = "Expenditure recorded successfully"

    async def execute(
        self,
        caller: Caller,
        request: CreateExpenditureRequest,
        origin: str | None = None,
    ) -> Expenditure:
        logger.info(
            "record_expenditure_started",
            subject_id=caller.subject_id,
            base_id=request.base_id,
            assignment_id=request.assignment_id,
        )
        command = ExpenditureCommand(**request.model_dump())
        return await self._get_coordinator().record_expenditure(caller, command, origin)
