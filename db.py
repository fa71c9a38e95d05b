# db.py
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from dotenv import load_dotenv
from sqlalchemy.engine import URL, make_url
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine
from sqlmodel import SQLModel

logger = logging.getLogger(__name__)

DEFAULT_CORS_ORIGINS = "http://127.0.0.1:3000,http://localhost:3000"


@dataclass(frozen=True)
class Settings:
  database_url: str
  database_ssl: str = "require"
  database_echo: bool = False
  cors_origins: Tuple[str, ...] = ()
  log_level: str = "INFO"


def _getenv(name: str, default: Optional[str] = None) -> Optional[str]:
  v = os.getenv(name, default)
  if v is None:
    return None
  v = v.strip()
  return v or None


def get_settings() -> Settings:
  load_dotenv()

  url = _getenv("POSTGRES_URL") or _getenv("DATABASE_URL")
  if not url:
    raise RuntimeError("POSTGRES_URL is not set in backend .env")

  origins = [x.strip() for x in (_getenv("CORS_ORIGINS", DEFAULT_CORS_ORIGINS) or "").split(",") if x.strip()]

  return Settings(
    database_url=url,
    database_ssl=_getenv("DATABASE_SSL", "require") or "require",
    database_echo=(_getenv("DATABASE_ECHO", "false") or "false").lower() == "true",
    cors_origins=tuple(origins),
    log_level=(_getenv("LOG_LEVEL", "INFO") or "INFO").upper(),
  )


def _connect_args(url: URL, settings: Settings) -> Tuple[URL, Dict[str, Any]]:
  if url.get_backend_name() not in ("postgres", "postgresql"):
    return url, {}

  # asyncpg takes `ssl`, not libpq's `sslmode`
  query = dict(url.query)
  ssl = query.pop("sslmode", None) or settings.database_ssl
  url = url.set(drivername="postgresql+asyncpg", query=query)
  if not ssl or ssl == "disable":
    return url, {}
  return url, {"ssl": ssl}


def build_engine(settings: Settings) -> AsyncEngine:
  url, connect_args = _connect_args(make_url(settings.database_url), settings)
  return create_async_engine(
    url,
    echo=settings.database_echo,
    pool_pre_ping=True,
    connect_args=connect_args,
  )


class Database:
  """Process-wide engine holder: init once on startup, dispose on shutdown."""

  def __init__(self) -> None:
    self._engine: Optional[AsyncEngine] = None

  @property
  def engine(self) -> AsyncEngine:
    if self._engine is None:
      raise RuntimeError("Database engine is not initialized")
    return self._engine

  @property
  def initialized(self) -> bool:
    return self._engine is not None

  def init(self, settings: Settings) -> AsyncEngine:
    if self._engine is None:
      self._engine = build_engine(settings)
      logger.info("Database engine created for %s", self._engine.url.render_as_string(hide_password=True))
    return self._engine

  async def dispose(self) -> None:
    if self._engine is None:
      return
    await self._engine.dispose()
    self._engine = None
    logger.info("Database engine disposed")


database = Database()


async def init_db(engine: AsyncEngine) -> None:
  # make sure the table models are registered on the metadata
  import models  # noqa: F401

  async with engine.begin() as conn:
    await conn.run_sync(SQLModel.metadata.create_all)


def get_engine() -> AsyncEngine:
  return database.engine
