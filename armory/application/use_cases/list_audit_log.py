"""List Audit Log Use Case: admin-only view of recorded actions."""

from armory.application.dto.responses import AuditEntryResponse, AuditListResponse
from armory.core.entities.audit import AuditFilter
from armory.core.entities.identity import Caller
from armory.core.exceptions import InvalidInputError
from armory.core.interfaces.audit_sink import IAuditSink
from armory.core.services.access_scope import AccessScope


class ListAuditLogUseCase:
    def __init__(
        self,
        audit_sink: IAuditSink | None = None,
        access_scope: AccessScope | None = None,
        max_limit: int = 1000,
    ):
        self._audit_sink = audit_sink
        self._scope = access_scope or AccessScope()
        self._max_limit = max_limit

    def _get_audit_sink(self) -> IAuditSink:
        if self._audit_sink is None:
            from armory.application.services import get_audit_sink

            self._audit_sink = get_audit_sink()
        return self._audit_sink

    async def execute(self, caller: Caller, filters: AuditFilter) -> AuditListResponse:
        self._scope.ensure_admin(caller)
        if filters.limit < 1:
            raise InvalidInputError("limit", "must be positive", filters.limit)
        filters = filters.model_copy(update={"limit": min(filters.limit, self._max_limit)})

        entries = await self._get_audit_sink().list_entries(filters)
        return AuditListResponse(
            logs=[AuditEntryResponse.model_validate(entry) for entry in entries]
        )
