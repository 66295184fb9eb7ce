"""
Domain exceptions for the armory ledger.

Every rejection raised on a mutating path is raised before the atomic unit
commits, so no partial state is ever left behind.
"""

from decimal import Decimal
from typing import Any


class ArmoryError(Exception):
    """Base exception for all ledger errors."""

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for API responses."""
        return {
            "error": self.code,
            "message": self.message,
            "details": self.details,
        }


# Input Exceptions
class InvalidInputError(ArmoryError):
    """Missing, malformed or non-positive input."""

    def __init__(self, field: str, message: str, value: Any = None):
        super().__init__(
            f"Invalid input for '{field}': {message}",
            code="INVALID_INPUT",
            details={
                "field": field,
                "message": message,
                "value": str(value)[:100] if value is not None else None,
            },
        )


class MissingFieldsError(InvalidInputError):
    """One or more required fields were not supplied."""

    def __init__(self, movement: str, fields: list[str]):
        super().__init__(
            field=", ".join(fields),
            message=f"required to record a {movement}",
        )
        self.details.update({"movement": movement, "missing": fields})


# Access Exceptions
class AccessError(ArmoryError):
    """Base exception for identity and scope problems."""

    pass


class UnauthenticatedError(AccessError):
    """No caller identity was supplied."""

    def __init__(self, reason: str = "Authentication required"):
        super().__init__(reason, code="UNAUTHENTICATED")


class ForbiddenError(AccessError):
    """The caller's role or base scope does not permit the operation."""

    def __init__(self, reason: str, **details: Any):
        super().__init__(reason, code="FORBIDDEN", details=details)


# Lookup Exceptions
class NotFoundError(ArmoryError):
    """Referenced record does not exist."""

    def __init__(self, entity: str, entity_id: Any):
        super().__init__(
            f"{entity.capitalize()} not found: {entity_id}",
            code=f"{entity.upper()}_NOT_FOUND",
            details={"entity": entity, "id": entity_id},
        )


# Ledger Exceptions
class LedgerError(ArmoryError):
    """Base exception for business-rule rejections on the ledger."""

    pass


class InsufficientBalanceError(LedgerError):
    """A debit would take a balance below zero."""

    def __init__(
        self,
        base_id: int,
        asset_id: int,
        requested: Decimal,
        available: Decimal,
    ):
        super().__init__(
            f"Insufficient quantity at base {base_id} for asset {asset_id}: "
            f"requested {requested}, available {available}",
            code="INSUFFICIENT_BALANCE",
            details={
                "base_id": base_id,
                "asset_id": asset_id,
                "requested": str(requested),
                "available": str(available),
            },
        )


class ConflictError(LedgerError):
    """A concurrent writer changed the state this operation depended on."""

    def __init__(self, reason: str, **details: Any):
        super().__init__(reason, code="CONFLICT", details=details)


# Storage Exceptions
class StorageError(ArmoryError):
    """Base exception for storage operations."""

    pass


class StoreUnavailableError(StorageError):
    """Transient infrastructure failure; safe to retry."""

    def __init__(self, operation: str, error: str):
        super().__init__(
            f"Store unavailable during {operation}: {error}",
            code="STORE_UNAVAILABLE",
            details={"operation": operation, "error": error},
        )


class ConfigurationError(ArmoryError):
    """Configuration error."""

    pass
