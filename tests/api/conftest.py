"""API test fixtures: the app on the memory backend."""

import pytest
from httpx import ASGITransport, AsyncClient

from armory.application.services import reset_services
from armory.config import reset_settings


@pytest.fixture
def app(monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    reset_settings()
    reset_services()

    from armory.api.main import create_app

    return create_app()


@pytest.fixture
async def async_client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client


def _identity(subject_id: int, role: str, base_id: int | None = None) -> dict[str, str]:
    headers = {"X-Subject-Id": str(subject_id), "X-Role": role}
    if base_id is not None:
        headers["X-Base-Id"] = str(base_id)
    return headers


@pytest.fixture
def identity():
    """Build identity headers as the authenticating gateway would."""
    return _identity


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return _identity(1, "admin")


@pytest.fixture
def commander_headers() -> dict[str, str]:
    return _identity(2, "base_commander", 1)


@pytest.fixture
def logistics_headers() -> dict[str, str]:
    return _identity(3, "logistics_officer", 1)
