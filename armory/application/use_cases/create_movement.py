"""Shared plumbing for the four create-movement use cases."""

from armory.application.dto.responses import MovementCreatedResponse
from armory.core.entities.movements import MovementRecord
from armory.core.services.transaction_coordinator import TransactionCoordinator


class CreateMovementUseCase:
    """Resolves the coordinator lazily and shapes the created response."""

    created_message = "Movement recorded successfully"

    def __init__(self, coordinator: TransactionCoordinator | None = None):
        self._coordinator = coordinator

    def _get_coordinator(self) -> TransactionCoordinator:
        if self._coordinator is None:
            from armory.application.services import get_transaction_coordinator

            self._coordinator = get_transaction_coordinator()
        return self._coordinator

    def to_response(self, record: MovementRecord) -> MovementCreatedResponse:
        """Convert result to API response."""
        return MovementCreatedResponse(
            message=self.created_message,
            created_id=record.id,  # type: ignore[arg-type]
        )
