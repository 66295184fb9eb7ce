"""Tests for SQLiteAuditSink."""

from datetime import UTC, datetime, timedelta

import pytest

from armory.core.entities.audit import AuditFilter
from armory.infrastructure.storage.sqlite import SQLiteAuditSink


@pytest.fixture
def sink(ledger_db) -> SQLiteAuditSink:
    return SQLiteAuditSink()


class TestSQLiteAuditSink:
    async def test_record_and_read_back(self, sink):
        await sink.record(
            actor_id=1,
            action="CREATE_TRANSFER",
            entity_type="transfer",
            entity_id=4,
            details={"quantity": "4", "source_base_id": 1},
            origin="10.1.2.3",
        )

        [entry] = await sink.list_entries(AuditFilter())
        assert entry.id == 1
        assert entry.details == {"quantity": "4", "source_base_id": 1}
        assert entry.origin == "10.1.2.3"
        assert entry.created_at.tzinfo is not None

    async def test_filters(self, sink):
        await sink.record(1, "CREATE_PURCHASE", "purchase", 1, {})
        await sink.record(2, "CREATE_ASSIGNMENT", "assignment", 1, {})
        await sink.record(2, "CREATE_EXPENDITURE", "expenditure", 1, {})

        assert [e.id for e in await sink.list_entries(AuditFilter())] == [3, 2, 1]
        assert len(await sink.list_entries(AuditFilter(actor_id=2))) == 2
        assert len(await sink.list_entries(AuditFilter(entity_type="purchase"))) == 1
        assert len(await sink.list_entries(AuditFilter(action="CREATE_EXPENDITURE"))) == 1
        assert len(await sink.list_entries(AuditFilter(limit=2))) == 2

    async def test_time_window(self, sink):
        await sink.record(1, "CREATE_PURCHASE", "purchase", 1, {})
        now = datetime.now(UTC)

        recent = await sink.list_entries(AuditFilter(start=now - timedelta(minutes=5)))
        assert len(recent) == 1
        future = await sink.list_entries(AuditFilter(start=now + timedelta(minutes=5)))
        assert future == []
