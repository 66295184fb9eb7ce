"""Abstract interface for the audit collaborator."""

from abc import ABC, abstractmethod
from typing import Any

from armory.core.entities.audit import AuditFilter, AuditLogEntry


class IAuditSink(ABC):
    """Receives completed mutating actions."""

    @abstractmethod
    async def record(
        self,
        actor_id: int,
        action: str,
        entity_type: str,
        entity_id: int | None,
        details: dict[str, Any],
        origin: str | None = None,
    ) -> None:
        """Persist one audit entry."""
        pass

    @abstractmethod
    async def list_entries(self, filters: AuditFilter) -> list[AuditLogEntry]:
        """List entries newest first. Used by the admin listing only."""
        pass
