"""Caller identity as supplied by the authentication collaborator."""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Role(str, Enum):
    """Closed set of roles the ledger understands."""

    ADMIN = "admin"
    BASE_COMMANDER = "base_commander"
    LOGISTICS_OFFICER = "logistics_officer"


class Caller(BaseModel):
    """Identity and role claims for one request. Trusted as-is."""

    model_config = ConfigDict(frozen=True)

    subject_id: int
    role: Role
    base_id: int | None = None

    @property
    def is_admin(self) -> bool:
        return self.role is Role.ADMIN
