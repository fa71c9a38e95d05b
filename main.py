# main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from dashboard_route import router
from data import DataFetchError
from db import database, get_settings

settings = get_settings()

logging.basicConfig(
  level=settings.log_level,
  format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
  database.init(settings)
  try:
    yield
  finally:
    await database.dispose()


app = FastAPI(title="Dashboard Backend", version="1.0.0", lifespan=lifespan)
app.add_middleware(
  CORSMiddleware,
  allow_origins=list(settings.cors_origins),
  allow_credentials=True,
  allow_methods=["*"],
  allow_headers=["*"],
)
app.include_router(router)


@app.exception_handler(DataFetchError)
async def data_fetch_error_handler(request: Request, exc: DataFetchError):
  # the cause was already logged where it was caught
  return JSONResponse(status_code=500, content={"detail": str(exc)})


@app.get("/health")
def health():
  return {"ok": True, "database": database.initialized}
