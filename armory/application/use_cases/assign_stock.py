"""Assign Stock Use Case: check stock out of a base to personnel."""

from armory.application.dto.requests import CreateAssignmentRequest
from armory.application.use_cases.create_movement import CreateMovementUseCase
from armory.core.entities.commands import AssignmentCommand
from armory.core.entities.identity import Caller
from armory.core.entities.movements import Assignment


class AssignStockUseCase(CreateMovementUseCase):
    created_message = "Asset assigned successfully"

    async def execute(
        self,
        caller: Caller,
        request: CreateAssignmentRequest,
        origin: str | None = None,
    ) -> Assignment:
        command = AssignmentCommand(**request.model_dump())
        return await self._get_coordinator().assign(caller, command, origin)
