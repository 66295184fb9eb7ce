"""
Dependency injection container for FastAPI.

Provides the caller identity and use case instances to route handlers.
"""

from datetime import date

from fastapi import Depends, Header, Query, Request

from armory.application.use_cases import (
    AssignStockUseCase,
    InventoryReportUseCase,
    ListAuditLogUseCase,
    QueryMovementsUseCase,
    RecordExpenditureUseCase,
    RecordPurchaseUseCase,
    TransferStockUseCase,
)
from armory.config import Settings, get_logger, get_settings
from armory.core.entities.identity import Caller, Role
from armory.core.entities.movements import MovementFilter, MovementKind
from armory.core.exceptions import ForbiddenError, UnauthenticatedError

logger = get_logger(__name__)


def get_app_settings() -> Settings:
    return get_settings()


# Identity


def _parse_id(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise UnauthenticatedError(f"Malformed {name} header") from None


async def get_caller(
    x_subject_id: str | None = Header(default=None),
    x_role: str | None = Header(default=None),
    x_base_id: str | None = Header(default=None),
) -> Caller:
    """
    Build the caller from headers set by the authenticating gateway.

    The claims are trusted as-is; verifying them happens upstream.
    """
    if not x_subject_id or not x_role:
        raise UnauthenticatedError("Access denied. No identity provided")

    try:
        role = Role(x_role)
    except ValueError:
        raise ForbiddenError(f"Unknown role '{x_role}'", role=x_role) from None

    base_id = _parse_id("X-Base-Id", x_base_id) if x_base_id else None
    return Caller(
        subject_id=_parse_id("X-Subject-Id", x_subject_id),
        role=role,
        base_id=base_id,
    )


def get_origin(request: Request) -> str | None:
    """Client address recorded on audit entries."""
    return request.client.host if request.client else None


# Read filters


def get_movement_filter(
    base_id: int | None = Query(default=None),
    asset_id: int | None = Query(default=None),
    start_date: date | None = Query(default=None),
    end_date: date | None = Query(default=None),
    limit: int | None = Query(default=None),
    offset: int = Query(default=0),
    settings: Settings = Depends(get_app_settings),
) -> MovementFilter:
    return MovementFilter(
        base_id=base_id,
        asset_id=asset_id,
        start_date=start_date,
        end_date=end_date,
        limit=limit if limit is not None else settings.ledger.default_list_limit,
        offset=offset,
    )


# Use case dependencies


def get_record_purchase_use_case() -> RecordPurchaseUseCase:
    return RecordPurchaseUseCase()


def get_transfer_stock_use_case() -> TransferStockUseCase:
    return TransferStockUseCase()


def get_assign_stock_use_case() -> AssignStockUseCase:
    return AssignStockUseCase()


def get_record_expenditure_use_case() -> RecordExpenditureUseCase:
    return RecordExpenditureUseCase()


def get_purchase_query() -> QueryMovementsUseCase:
    return QueryMovementsUseCase(MovementKind.PURCHASE)


def get_transfer_query() -> QueryMovementsUseCase:
    return QueryMovementsUseCase(MovementKind.TRANSFER)


def get_assignment_query() -> QueryMovementsUseCase:
    return QueryMovementsUseCase(MovementKind.ASSIGNMENT)


def get_expenditure_query() -> QueryMovementsUseCase:
    return QueryMovementsUseCase(MovementKind.EXPENDITURE)


def get_inventory_report_use_case() -> InventoryReportUseCase:
    return InventoryReportUseCase()


def get_list_audit_log_use_case(
    settings: Settings = Depends(get_app_settings),
) -> ListAuditLogUseCase:
    return ListAuditLogUseCase(max_limit=settings.ledger.max_list_limit)
