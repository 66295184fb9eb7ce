"""Unit tests for AccessScope."""

from datetime import date
from decimal import Decimal

import pytest

from armory.core.entities.identity import Role
from armory.core.entities.movements import MovementKind, Transfer
from armory.core.exceptions import ForbiddenError
from armory.core.services.access_scope import AccessScope


@pytest.fixture
def scope() -> AccessScope:
    return AccessScope()


@pytest.fixture
def transfer_2_to_3() -> Transfer:
    return Transfer(
        id=5,
        source_base_id=2,
        destination_base_id=3,
        asset_id=1,
        quantity=Decimal("1"),
        transfer_date=date(2026, 3, 1),
        created_by=1,
    )


class TestRolePermissions:
    @pytest.mark.parametrize(
        ("role", "kind", "allowed"),
        [
            (Role.ADMIN, MovementKind.PURCHASE, True),
            (Role.ADMIN, MovementKind.EXPENDITURE, True),
            (Role.LOGISTICS_OFFICER, MovementKind.PURCHASE, True),
            (Role.LOGISTICS_OFFICER, MovementKind.TRANSFER, True),
            (Role.LOGISTICS_OFFICER, MovementKind.ASSIGNMENT, True),
            (Role.LOGISTICS_OFFICER, MovementKind.EXPENDITURE, False),
            (Role.BASE_COMMANDER, MovementKind.PURCHASE, False),
            (Role.BASE_COMMANDER, MovementKind.TRANSFER, False),
            (Role.BASE_COMMANDER, MovementKind.ASSIGNMENT, True),
            (Role.BASE_COMMANDER, MovementKind.EXPENDITURE, True),
        ],
    )
    def test_can_create(self, scope, role, kind, allowed):
        assert scope.can_create(role, kind) is allowed

    def test_authorize_role_refuses(self, scope, commander):
        with pytest.raises(ForbiddenError) as exc_info:
            scope.authorize_role(commander, MovementKind.TRANSFER)
        assert exc_info.value.details["movement"] == "transfer"


class TestAuthorizeWrite:
    def test_admin_writes_anywhere(self, scope, admin):
        scope.authorize_write(admin, MovementKind.PURCHASE, [3])

    def test_scoped_caller_on_own_base(self, scope, logistics):
        scope.authorize_write(logistics, MovementKind.PURCHASE, [1])

    def test_scoped_caller_on_other_base(self, scope, logistics):
        with pytest.raises(ForbiddenError):
            scope.authorize_write(logistics, MovementKind.PURCHASE, [2])

    def test_transfer_may_touch_own_base_at_either_end(self, scope, logistics):
        scope.authorize_write(logistics, MovementKind.TRANSFER, [1, 2])
        scope.authorize_write(logistics, MovementKind.TRANSFER, [2, 1])

    def test_transfer_between_two_other_bases(self, scope, logistics):
        with pytest.raises(ForbiddenError):
            scope.authorize_write(logistics, MovementKind.TRANSFER, [2, 3])

    def test_caller_without_base_is_refused(self, scope, unassigned_officer):
        with pytest.raises(ForbiddenError, match="not assigned"):
            scope.authorize_write(unassigned_officer, MovementKind.PURCHASE, [1])


class TestReadScope:
    def test_admin_gets_requested_filter(self, scope, admin):
        assert scope.resolve_read_base(admin, None) is None
        assert scope.resolve_read_base(admin, 2) == 2

    def test_scoped_caller_defaults_to_own_base(self, scope, commander):
        assert scope.resolve_read_base(commander, None) == 1
        assert scope.resolve_read_base(commander, 1) == 1

    def test_scoped_caller_naming_other_base(self, scope, commander):
        with pytest.raises(ForbiddenError):
            scope.resolve_read_base(commander, 2)

    def test_ensure_can_read_endpoint(self, scope, logistics_base_2, transfer_2_to_3):
        scope.ensure_can_read(logistics_base_2, transfer_2_to_3)

    def test_ensure_can_read_outside_scope(self, scope, logistics, transfer_2_to_3):
        with pytest.raises(ForbiddenError):
            scope.ensure_can_read(logistics, transfer_2_to_3)

    def test_ensure_admin(self, scope, admin, commander):
        scope.ensure_admin(admin)
        with pytest.raises(ForbiddenError):
            scope.ensure_admin(commander)
