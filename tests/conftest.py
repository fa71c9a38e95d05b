import os
from pathlib import Path

import pytest
import pytest_asyncio

# main reads its settings on import; tests swap them per client
os.environ.setdefault("POSTGRES_URL", "sqlite+aiosqlite://")

from db import Settings, build_engine, init_db  # noqa: E402
from seed import seed_if_empty  # noqa: E402


def sqlite_url(path: Path) -> str:
  return f"sqlite+aiosqlite:///{path}"


@pytest_asyncio.fixture()
async def bare_engine(tmp_path):
  # no tables: every query against it fails
  engine = build_engine(Settings(database_url=sqlite_url(tmp_path / "empty.db")))
  yield engine
  await engine.dispose()


@pytest_asyncio.fixture()
async def engine(tmp_path):
  engine = build_engine(Settings(database_url=sqlite_url(tmp_path / "dashboard.db")))
  await init_db(engine)
  assert await seed_if_empty(engine) is True
  yield engine
  await engine.dispose()


@pytest.fixture()
def client(tmp_path, monkeypatch):
  import main
  from fastapi.testclient import TestClient

  monkeypatch.setattr(main, "settings", Settings(database_url=sqlite_url(tmp_path / "api.db")))
  with TestClient(main.app) as c:
    res = c.post("/api/seed")
    assert res.status_code == 200
    assert res.json() == {"ok": True, "seeded": True}
    yield c
