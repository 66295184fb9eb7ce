"""Audit log endpoint (admin only)."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query

from armory.api.dependencies import get_caller, get_list_audit_log_use_case
from armory.application.dto.responses import AuditListResponse, ErrorResponse
from armory.application.use_cases.list_audit_log import ListAuditLogUseCase
from armory.core.entities.audit import AuditFilter
from armory.core.entities.identity import Caller

router = APIRouter(prefix="/api/audit", tags=["audit"])


@router.get(
    "",
    response_model=AuditListResponse,
    responses={403: {"model": ErrorResponse}},
)
async def list_audit_logs(
    user_id: int | None = Query(default=None, description="Actor subject id"),
    action: str | None = Query(default=None, examples=["CREATE_TRANSFER"]),
    entity_type: str | None = Query(default=None),
    start_date: datetime | None = Query(default=None),
    end_date: datetime | None = Query(default=None),
    limit: int = Query(default=100),
    caller: Caller = Depends(get_caller),
    use_case: ListAuditLogUseCase = Depends(get_list_audit_log_use_case),
) -> AuditListResponse:
    filters = AuditFilter(
        actor_id=user_id,
        action=action,
        entity_type=entity_type,
        start=start_date,
        end=end_date,
        limit=limit,
    )
    return await use_case.execute(caller, filters)
