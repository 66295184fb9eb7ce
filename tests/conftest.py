"""Shared fixtures for the armory ledger test suite."""

from unittest.mock import MagicMock, patch

import pytest

from armory.application.services import reset_services
from armory.config import reset_settings
from armory.core.entities.identity import Caller, Role
from armory.core.services import MovementValidator, TransactionCoordinator
from armory.infrastructure.storage.memory import (
    InMemoryAuditSink,
    InMemoryDatabase,
    InMemoryInventoryStore,
    InMemoryMovementLedger,
    InMemoryUnitOfWork,
)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Each test starts from fresh settings and service singletons."""
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


# Callers


@pytest.fixture
def admin() -> Caller:
    return Caller(subject_id=1, role=Role.ADMIN)


@pytest.fixture
def commander() -> Caller:
    return Caller(subject_id=2, role=Role.BASE_COMMANDER, base_id=1)


@pytest.fixture
def logistics() -> Caller:
    return Caller(subject_id=3, role=Role.LOGISTICS_OFFICER, base_id=1)


@pytest.fixture
def logistics_base_2() -> Caller:
    return Caller(subject_id=4, role=Role.LOGISTICS_OFFICER, base_id=2)


@pytest.fixture
def unassigned_officer() -> Caller:
    return Caller(subject_id=5, role=Role.LOGISTICS_OFFICER)


# In-memory ledger


@pytest.fixture
def memory_db() -> InMemoryDatabase:
    return InMemoryDatabase()


@pytest.fixture
def memory_coordinator(memory_db) -> TransactionCoordinator:
    """Coordinator over the in-memory store, with auditing enabled."""
    return TransactionCoordinator(
        unit_of_work=InMemoryUnitOfWork(memory_db),
        validator=MovementValidator(
            InMemoryInventoryStore(memory_db),
            InMemoryMovementLedger(memory_db),
        ),
        audit_sink=InMemoryAuditSink(memory_db),
    )


# SQLite ledger


SEED_BASES = [(1, "Fort Alpha", "North"), (2, "Camp Bravo", "East"), (3, "Base Charlie", "West")]
SEED_ASSETS = [(1, "Rifle M4", "weapon", "unit"), (2, "5.56mm round", "ammunition", "box")]


@pytest.fixture
def ledger_settings(tmp_path):
    """Settings stub pointing storage at a temporary database."""
    mock_settings = MagicMock()
    mock_settings.storage.db_path = tmp_path / "armory_test.db"
    mock_settings.storage.pool_size = 2
    mock_settings.storage.busy_timeout = 5000
    mock_settings.storage.backup_before_migrate = False
    mock_settings.storage.backend = "sqlite"
    mock_settings.ledger.audit_enabled = True
    mock_settings.ledger.max_list_limit = 1000
    mock_settings.ledger.default_list_limit = 100
    return mock_settings


@pytest.fixture
async def ledger_db(ledger_settings):
    """
    Migrated SQLite database with bases 1-3 and assets 1-2 seeded.

    The global pool is pointed at the temporary file for the duration of
    the test and closed afterwards.
    """
    import aiosqlite

    import armory.infrastructure.storage.sqlite as sqlite_module
    import armory.infrastructure.storage.sqlite.connection as conn_module
    import armory.infrastructure.storage.sqlite.migrations.migrator as migrator
    from armory.infrastructure.storage.sqlite.connection import close_pool

    conn_module._pool = None
    for name in ("_inventory_store", "_movement_ledger", "_unit_of_work", "_audit_sink"):
        setattr(sqlite_module, name, None)

    db_path = ledger_settings.storage.db_path
    with (
        patch.object(conn_module, "get_settings", return_value=ledger_settings),
        patch.object(migrator, "get_settings", return_value=ledger_settings),
    ):
        results = await migrator.initialize_database(db_path, create_backup_before=False)
        assert all(r.success for r in results)

        async with aiosqlite.connect(db_path) as conn:
            await conn.executemany(
                "INSERT INTO bases (id, name, location) VALUES (?, ?, ?)", SEED_BASES
            )
            await conn.executemany(
                "INSERT INTO assets (id, name, category, unit_of_measure) VALUES (?, ?, ?, ?)",
                SEED_ASSETS,
            )
            await conn.commit()

        try:
            yield db_path
        finally:
            await close_pool()
            for name in ("_inventory_store", "_movement_ledger", "_unit_of_work", "_audit_sink"):
                setattr(sqlite_module, name, None)
