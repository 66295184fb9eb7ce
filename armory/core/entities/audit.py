"""Audit log entity written by the audit sink."""

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class AuditLogEntry(BaseModel):
    """One completed mutating action."""

    model_config = ConfigDict(frozen=True)

    id: int | None = None
    actor_id: int
    action: str  # e.g. CREATE_TRANSFER
    entity_type: str
    entity_id: int | None = None
    details: dict[str, Any] = Field(default_factory=dict)
    origin: str | None = None  # client address
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class AuditFilter(BaseModel):
    """Filter for the admin audit listing."""

    actor_id: int | None = None
    action: str | None = None
    entity_type: str | None = None
    start: datetime | None = None
    end: datetime | None = None
    limit: int = 100
