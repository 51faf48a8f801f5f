from pathlib import Path

import pytest
from argon2 import PasswordHasher
from fastapi.testclient import TestClient

from agilesync.config import Settings
from agilesync.dependencies import AppContainer
from agilesync.identity.infrastructure.adapters.password_service import PasswordService
from agilesync.main import create_app

ADMIN_USERNAME = "root"
ADMIN_PASSWORD = "s3cret-admin-pass"


def make_settings(db_path: Path, **overrides) -> Settings:
    values = dict(
        DATABASE_URL=f"sqlite+aiosqlite:///{db_path}",
        ENVIRONMENT="local",
        LOG_LEVEL="WARNING",
        TESTING=True,
        AUTO_CREATE_SCHEMA=True,
        SUPERADMIN_USERNAME=ADMIN_USERNAME,
        SUPERADMIN_PASSWORD=ADMIN_PASSWORD,
    )
    values.update(overrides)
    return Settings(**values)


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path / "identity.db")


@pytest.fixture
def passwords() -> PasswordService:
    # minimum argon2 cost keeps the suite fast
    return PasswordService(PasswordHasher(time_cost=1, memory_cost=8, parallelism=1))


@pytest.fixture
async def container(settings, passwords):
    c = AppContainer.build(settings, passwords=passwords)
    await c.startup()
    yield c
    await c.shutdown()


def build_client(settings: Settings, passwords: PasswordService) -> TestClient:
    app = create_app(settings, container=AppContainer.build(settings, passwords=passwords))
    return TestClient(app)


@pytest.fixture
def client(settings, passwords):
    with build_client(settings, passwords) as c:
        yield c


@pytest.fixture
def admin_headers(client):
    r = client.post("/api/identity/admin/login", json={"username": ADMIN_USERNAME, "password": ADMIN_PASSWORD})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['data']['token']}"}
