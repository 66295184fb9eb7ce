"""Shared state for the in-memory storage adapter."""

import asyncio
from dataclasses import dataclass, field

from armory.core.entities.audit import AuditLogEntry
from armory.core.entities.inventory import InventoryRecord
from armory.core.entities.movements import MovementKind, MovementRecord


def _empty_movements() -> dict[MovementKind, dict[int, MovementRecord]]:
    return {kind: {} for kind in MovementKind}


@dataclass
class MemoryState:
    """
    Balances and movement records.

    Stored values are never mutated in place, only replaced, so a copy of
    the containers is enough to stage a unit.
    """

    inventory: dict[tuple[int, int], InventoryRecord] = field(default_factory=dict)
    movements: dict[MovementKind, dict[int, MovementRecord]] = field(
        default_factory=_empty_movements
    )
    next_ids: dict[str, int] = field(default_factory=dict)

    def allocate_id(self, key: str) -> int:
        next_id = self.next_ids.get(key, 0) + 1
        self.next_ids[key] = next_id
        return next_id

    def staged_copy(self) -> "MemoryState":
        return MemoryState(
            inventory=dict(self.inventory),
            movements={kind: dict(records) for kind, records in self.movements.items()},
            next_ids=dict(self.next_ids),
        )


class InMemoryDatabase:
    """Committed state plus the lock that serializes writers."""

    def __init__(self) -> None:
        self.state = MemoryState()
        self.audit_entries: list[AuditLogEntry] = []
        self.lock = asyncio.Lock()
