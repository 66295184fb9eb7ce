"""SQLite implementation of the audit sink."""

import json
from datetime import UTC, datetime
from typing import Any

import aiosqlite

from armory.config import get_logger
from armory.core.entities.audit import AuditFilter, AuditLogEntry
from armory.core.interfaces.audit_sink import IAuditSink
from armory.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteAuditSink(IAuditSink):
    """Appends audit entries to the audit_logs table."""

    async def record(
        self,
        actor_id: int,
        action: str,
        entity_type: str,
        entity_id: int | None,
        details: dict[str, Any],
        origin: str | None = None,
    ) -> None:
        async with get_transaction() as conn:
            cursor = await conn.execute(
                """
                INSERT INTO audit_logs (
                    actor_id, action, entity_type, entity_id, details, origin, created_at
                ) VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    actor_id,
                    action,
                    entity_type,
                    entity_id,
                    json.dumps(details),
                    origin,
                    datetime.now(UTC).isoformat(),
                ),
            )
            logger.debug("audit_recorded", audit_id=cursor.lastrowid, action=action)

    async def list_entries(self, filters: AuditFilter) -> list[AuditLogEntry]:
        query = "SELECT * FROM audit_logs WHERE 1=1"
        params: list[Any] = []

        if filters.actor_id is not None:
            query += " AND actor_id = ?"
            params.append(filters.actor_id)
        if filters.action:
            query += " AND action = ?"
            params.append(filters.action)
        if filters.entity_type:
            query += " AND entity_type = ?"
            params.append(filters.entity_type)
        if filters.start is not None:
            query += " AND created_at >= ?"
            params.append(filters.start.isoformat())
        if filters.end is not None:
            query += " AND created_at <= ?"
            params.append(filters.end.isoformat())

        query += " ORDER BY created_at DESC, id DESC LIMIT ?"
        params.append(filters.limit)

        async with get_connection() as conn:
            cursor = await conn.execute(query, params)
            rows = await cursor.fetchall()
            return [self._row_to_entry(row) for row in rows]

    @staticmethod
    def _row_to_entry(row: aiosqlite.Row) -> AuditLogEntry:
        return AuditLogEntry(
            id=row["id"],
            actor_id=row["actor_id"],
            action=row["action"],
            entity_type=row["entity_type"],
            entity_id=row["entity_id"],
            details=json.loads(row["details"]) if row["details"] else {},
            origin=row["origin"],
            created_at=datetime.fromisoformat(row["created_at"]),
        )
