"""
Role and base scoping for ledger reads and writes.

Admins act on every base. Base commanders and logistics officers act on the
single base they are assigned to; an account without a base assignment is
treated as misconfigured and refused outright.
"""

from collections.abc import Iterable

from armory.config import get_logger
from armory.core.entities.identity import Caller, Role
from armory.core.entities.movements import MovementKind, MovementRecord
from armory.core.exceptions import ForbiddenError

logger = get_logger(__name__)

# Which roles may create each kind of movement
WRITE_PERMISSIONS: dict[MovementKind, frozenset[Role]] = {
    MovementKind.PURCHASE: frozenset({Role.ADMIN, Role.LOGISTICS_OFFICER}),
    MovementKind.TRANSFER: frozenset({Role.ADMIN, Role.LOGISTICS_OFFICER}),
    MovementKind.ASSIGNMENT: frozenset(
        {Role.ADMIN, Role.BASE_COMMANDER, Role.LOGISTICS_OFFICER}
    ),
    MovementKind.EXPENDITURE: frozenset({Role.ADMIN, Role.BASE_COMMANDER}),
}


class AccessScope:
    """Resolves read filters and authorizes writes for a caller."""

    def __init__(
        self, permissions: dict[MovementKind, frozenset[Role]] | None = None
    ) -> None:
        self._permissions = permissions or WRITE_PERMISSIONS

    def can_create(self, role: Role, kind: MovementKind) -> bool:
        return role in self._permissions.get(kind, frozenset())

    def require_base(self, caller: Caller) -> int:
        """Return the caller's assigned base or refuse the request."""
        if caller.base_id is None:
            logger.warning(
                "caller_without_base",
                subject_id=caller.subject_id,
                role=caller.role.value,
            )
            raise ForbiddenError(
                "User is not assigned to any base",
                subject_id=caller.subject_id,
            )
        return caller.base_id

    def authorize_role(self, caller: Caller, kind: MovementKind) -> None:
        """Refuse callers whose role may not create this kind of movement."""
        if not self.can_create(caller.role, kind):
            raise ForbiddenError(
                f"Role '{caller.role.value}' may not create a {kind.value}",
                role=caller.role.value,
                movement=kind.value,
            )

    def authorize_write(
        self,
        caller: Caller,
        kind: MovementKind,
        base_ids: Iterable[int],
    ) -> None:
        """
        Check role and base scope for a write.

        For base-scoped roles the caller's base must be one of base_ids: the
        only base for single-base movements, either endpoint for transfers.
        """
        self.authorize_role(caller, kind)
        if caller.is_admin:
            return

        own_base = self.require_base(caller)
        targets = tuple(base_ids)
        if own_base not in targets:
            raise ForbiddenError(
                f"You can only create {kind.value}s involving your assigned base",
                assigned_base_id=own_base,
                requested_base_ids=list(targets),
            )

    def resolve_read_base(self, caller: Caller, requested_base_id: int | None) -> int | None:
        """
        Base filter to apply to a listing.

        Admins get exactly what they asked for (None means every base).
        Scoped callers default to their own base and may not name another.
        """
        if caller.is_admin:
            return requested_base_id

        own_base = self.require_base(caller)
        if requested_base_id is not None and requested_base_id != own_base:
            raise ForbiddenError(
                "Access denied. You can only access your assigned base",
                assigned_base_id=own_base,
                requested_base_id=requested_base_id,
            )
        return own_base

    def ensure_can_read(self, caller: Caller, record: MovementRecord) -> None:
        """Refuse scoped callers reading a record outside their base."""
        if caller.is_admin:
            return
        own_base = self.require_base(caller)
        if own_base not in record.base_ids:
            raise ForbiddenError(
                "Access denied",
                movement=record.kind.value,
                movement_id=record.id,
            )

    def ensure_admin(self, caller: Caller) -> None:
        if not caller.is_admin:
            raise ForbiddenError(
                "Access denied. Insufficient permissions",
                role=caller.role.value,
            )
