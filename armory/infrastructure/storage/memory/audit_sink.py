"""In-memory implementation of the audit sink."""

from typing import Any

from armory.core.entities.audit import AuditFilter, AuditLogEntry
from armory.core.interfaces.audit_sink import IAuditSink
from armory.infrastructure.storage.memory.state import InMemoryDatabase


class InMemoryAuditSink(IAuditSink):
    """Keeps audit entries in a list on the database."""

    def __init__(self, database: InMemoryDatabase):
        self._db = database

    async def record(
        self,
        actor_id: int,
        action: str,
        entity_type: str,
        entity_id: int | None,
        details: dict[str, Any],
        origin: str | None = None,
    ) -> None:
        self._db.audit_entries.append(
            AuditLogEntry(
                id=len(self._db.audit_entries) + 1,
                actor_id=actor_id,
                action=action,
                entity_type=entity_type,
                entity_id=entity_id,
                details=details,
                origin=origin,
            )
        )

    async def list_entries(self, filters: AuditFilter) -> list[AuditLogEntry]:
        entries = [
            entry
            for entry in self._db.audit_entries
            if (filters.actor_id is None or entry.actor_id == filters.actor_id)
            and (not filters.action or entry.action == filters.action)
            and (not filters.entity_type or entry.entity_type == filters.entity_type)
            and (filters.start is None or entry.created_at >= filters.start)
            and (filters.end is None or entry.created_at <= filters.end)
        ]
        entries.sort(key=lambda e: (e.created_at, e.id), reverse=True)
        return entries[: filters.limit]
