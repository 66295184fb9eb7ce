"""Tests for SQLiteMovementLedger."""

from datetime import date
from decimal import Decimal

import pytest

from armory.core.entities.movements import (
    Assignment,
    AssignmentStatus,
    Expenditure,
    MovementFilter,
    MovementKind,
    Purchase,
    Transfer,
    TransferStatus,
)
from armory.core.exceptions import InvalidInputError
from armory.infrastructure.storage.sqlite import SQLiteMovementLedger


@pytest.fixture
def ledger(ledger_db) -> SQLiteMovementLedger:
    return SQLiteMovementLedger()


def make_purchase(base_id: int = 1, day: int = 1, quantity: str = "10", **extra) -> Purchase:
    return Purchase(
        base_id=base_id,
        asset_id=1,
        quantity=Decimal(quantity),
        purchase_date=date(2026, 3, day),
        created_by=1,
        **extra,
    )


def make_transfer(source: int = 1, destination: int = 2, day: int = 2) -> Transfer:
    return Transfer(
        source_base_id=source,
        destination_base_id=destination,
        asset_id=1,
        quantity=Decimal("4"),
        transfer_date=date(2026, 3, day),
        created_by=1,
    )


def make_assignment(personnel: str = "Sgt. Rivera") -> Assignment:
    return Assignment(
        base_id=1,
        asset_id=1,
        quantity=Decimal("3"),
        assigned_to_personnel=personnel,
        assignment_date=date(2026, 3, 3),
        created_by=2,
    )


class TestAddAndGet:
    async def test_purchase_round_trip(self, ledger):
        stored = await ledger.add_movement(
            make_purchase(
                quantity="2.5",
                unit_price=Decimal("12.40"),
                total_price=Decimal("31.00"),
                supplier_name="Acme",
            )
        )
        assert stored.id == 1

        fetched = await ledger.get_movement(MovementKind.PURCHASE, stored.id)
        assert isinstance(fetched, Purchase)
        assert fetched.quantity == Decimal("2.50")
        assert fetched.unit_price == Decimal("12.40")
        assert fetched.total_price == Decimal("31.00")
        assert fetched.supplier_name == "Acme"
        assert fetched.purchase_date == date(2026, 3, 1)

    async def test_transfer_round_trip(self, ledger):
        stored = await ledger.add_movement(make_transfer())
        fetched = await ledger.get_movement(MovementKind.TRANSFER, stored.id)
        assert fetched.status is TransferStatus.COMPLETED
        assert fetched.base_ids == (1, 2)

    async def test_missing(self, ledger):
        assert await ledger.get_movement(MovementKind.EXPENDITURE, 404) is None

    async def test_unknown_assignment_reference(self, ledger):
        with pytest.raises(InvalidInputError):
            await ledger.add_movement(
                Expenditure(
                    base_id=1,
                    asset_id=1,
                    assignment_id=999,
                    quantity=Decimal("1"),
                    expenditure_date=date(2026, 3, 4),
                    reason="Training",
                    created_by=2,
                )
            )


class TestListMovements:
    async def test_most_recent_first(self, ledger):
        for day in (5, 1, 9, 9):
            await ledger.add_movement(make_purchase(day=day))

        records = await ledger.list_movements(MovementKind.PURCHASE, MovementFilter())
        assert [(r.purchase_date.day, r.id) for r in records] == [(9, 4), (9, 3), (5, 1), (1, 2)]

    async def test_base_and_period(self, ledger):
        await ledger.add_movement(make_purchase(base_id=1, day=1))
        await ledger.add_movement(make_purchase(base_id=2, day=2))
        await ledger.add_movement(make_purchase(base_id=1, day=10))

        by_base = await ledger.list_movements(MovementKind.PURCHASE, MovementFilter(base_id=1))
        assert {r.base_id for r in by_base} == {1}

        in_period = await ledger.list_movements(
            MovementKind.PURCHASE,
            MovementFilter(start_date=date(2026, 3, 2), end_date=date(2026, 3, 10)),
        )
        assert [r.purchase_date.day for r in in_period] == [10, 2]

    async def test_paging(self, ledger):
        for day in range(1, 6):
            await ledger.add_movement(make_purchase(day=day))
        page = await ledger.list_movements(
            MovementKind.PURCHASE, MovementFilter(limit=2, offset=2)
        )
        assert [r.purchase_date.day for r in page] == [3, 2]

    async def test_transfer_visible_to_both_endpoints(self, ledger):
        await ledger.add_movement(make_transfer(1, 2))
        await ledger.add_movement(make_transfer(2, 3))

        assert len(await ledger.list_movements(MovementKind.TRANSFER, MovementFilter(base_id=2))) == 2
        assert len(await ledger.list_movements(MovementKind.TRANSFER, MovementFilter(base_id=1))) == 1

    async def test_personnel_search_and_status(self, ledger):
        rivera = await ledger.add_movement(make_assignment("Sgt. A. Rivera"))
        await ledger.add_movement(make_assignment("Cpl. Okafor"))
        await ledger.expend_assignment(rivera.id)

        found = await ledger.list_movements(
            MovementKind.ASSIGNMENT, MovementFilter(search="Rivera")
        )
        assert [r.id for r in found] == [rivera.id]

        expended = await ledger.list_movements(
            MovementKind.ASSIGNMENT, MovementFilter(status=AssignmentStatus.EXPENDED)
        )
        assert [r.id for r in expended] == [rivera.id]


class TestExpendAssignment:
    async def test_transitions_once(self, ledger):
        assignment = await ledger.add_movement(make_assignment())

        assert await ledger.expend_assignment(assignment.id) is True
        assert await ledger.expend_assignment(assignment.id) is False

        stored = await ledger.get_movement(MovementKind.ASSIGNMENT, assignment.id)
        assert stored.status is AssignmentStatus.EXPENDED

    async def test_unknown(self, ledger):
        assert await ledger.expend_assignment(12345) is False


class TestMovementTotals:
    async def test_sums_per_kind(self, ledger):
        await ledger.add_movement(make_purchase(quantity="10"))
        await ledger.add_movement(make_purchase(quantity="0.25", day=20))
        await ledger.add_movement(make_transfer(1, 2))
        await ledger.add_movement(make_transfer(2, 1, day=4))
        await ledger.add_movement(make_assignment())

        totals = await ledger.movement_totals(1, 1)
        assert totals.purchases == Decimal("10.25")
        assert totals.transfers_out == Decimal("4")
        assert totals.transfers_in == Decimal("4")
        assert totals.assigned == Decimal("3")
        assert totals.expended == Decimal("0")

        march_first_week = await ledger.movement_totals(
            1, 1, date(2026, 3, 1), date(2026, 3, 3)
        )
        assert march_first_week.purchases == Decimal("10")
        assert march_first_week.transfers_in == Decimal("0")

    async def test_other_asset_excluded(self, ledger):
        await ledger.add_movement(make_purchase())
        totals = await ledger.movement_totals(1, 2)
        assert totals.purchases == Decimal("0")
