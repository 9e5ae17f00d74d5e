from __future__ import annotations

import datetime as dt
from pathlib import Path
import sys

# Ensure repo root is importable
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))


import pytest
from fastapi.testclient import TestClient

from portfolio_api.api.app import create_app
from portfolio_api.core.settings import Settings
from portfolio_api.db.migrations import create_schema
from portfolio_api.db.session import create_engine_and_sessionmaker
from portfolio_api.services.passwords import PasswordHasher

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "TestPassword!12345"


class FakeClock:
    """Settable UTC clock for expiry and ordering tests."""

    def __init__(self, start: dt.datetime | None = None) -> None:
        self.now = start or dt.datetime(2026, 3, 1, 12, 0, tzinfo=dt.timezone.utc)

    def __call__(self) -> dt.datetime:
        return self.now

    def advance(self, **kwargs) -> dt.datetime:
        self.now = self.now + dt.timedelta(**kwargs)
        return self.now


@pytest.fixture()
def hasher() -> PasswordHasher:
    # Small Argon2 parameters keep the suite fast; the algorithm is unchanged.
    return PasswordHasher(time_cost=1, memory_cost=1024, parallelism=1)


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return Settings(
        env="test",
        db_path=str(tmp_path / "test.db"),
        seed_admin_email=ADMIN_EMAIL,
        seed_admin_password=ADMIN_PASSWORD,
        smtp_host="",
        smtp_user="",
        smtp_pass="",
        cors_origins=["http://localhost:5173"],
    )


@pytest.fixture()
def runtime(settings: Settings):
    rt = create_engine_and_sessionmaker(settings.database_url)
    create_schema(rt.engine)
    yield rt
    rt.dispose()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def client(settings: Settings, hasher: PasswordHasher):
    app = create_app(settings, hasher=hasher)
    with TestClient(app) as c:
        yield c


@pytest.fixture()
def admin_token(client: TestClient) -> str:
    resp = client.post("/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]
