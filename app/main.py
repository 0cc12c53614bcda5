import logging

from fastapi import FastAPI
from contextlib import asynccontextmanager

from app.config import get_settings
from app.db.database import engine, Base, SessionLocal
from app.api import doses, checkins, dashboard, safety, preferences
from app.services.preferences import PreferencesStore
from app.services.record_store import RecordStore
from app.storage import SqlKeyValueStore

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)

    kv = SqlKeyValueStore(SessionLocal)
    app.state.record_store = RecordStore(kv, save_retries=settings.save_retries)
    app.state.preferences = PreferencesStore(kv)

    report = app.state.record_store.last_load
    if report.degraded:
        logger.warning(f"Started with degraded storage: {report.to_dict()}")
    yield


app = FastAPI(
    title="Dose Tracker API",
    description="Personal dose log with check-ins, effect phases and recovery tracking",
    version="0.1.0",
    lifespan=lifespan
)

app.include_router(doses.router, prefix="/doses", tags=["doses"])
app.include_router(checkins.router, prefix="/checkins", tags=["checkins"])
app.include_router(dashboard.router, prefix="/dashboard", tags=["dashboard"])
app.include_router(safety.router, prefix="/safety", tags=["safety"])
app.include_router(preferences.router, prefix="/preferences", tags=["preferences"])
app.include_router(preferences.data_router, prefix="/data", tags=["data"])


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
