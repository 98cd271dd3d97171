from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
import logging

from globetrotter.api import cities, health, stops, trips
from globetrotter.api.deps import get_local_storage
from globetrotter.config import get_settings
from globetrotter.database import Base, SessionLocal, engine, ensure_sqlite_dir
from globetrotter.models import Activity, City, Profile, Trip, TripActivity, TripStop  # noqa: F401 - registers tables
from globetrotter.services.cities import seed_cities
from globetrotter.store import RecordNotFound, StoreError, build_local_stores, build_sql_stores

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


async def _seed_catalog():
    if settings.store_backend == "local":
        await seed_cities(build_local_stores(get_local_storage()))
        return

    db = SessionLocal()
    try:
        await seed_cities(build_sql_stores(db))
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting Globetrotter ({settings.env}, {settings.store_backend} store)")

    if settings.store_backend == "sql" and settings.database_url.startswith("sqlite"):
        logger.info("SQLite detected - creating tables if needed")
        ensure_sqlite_dir()
        Base.metadata.create_all(bind=engine)

    try:
        await _seed_catalog()
    except StoreError as e:
        logger.error(f"City catalog seeding failed: {e}")

    yield

    logger.info("Shutting down Globetrotter")


app = FastAPI(
    title="Globetrotter",
    description="Multi-city trip planner - itineraries, budgets and sharing",
    version="1.0.0",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


@app.exception_handler(RecordNotFound)
async def record_not_found_handler(request: Request, exc: RecordNotFound):
    logger.warning(f"{request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=404, content={"detail": str(exc)})


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error(f"{request.method} {request.url.path}: store failure: {exc}")
    return JSONResponse(status_code=503, content={"detail": "Storage unavailable, please retry"})


app.include_router(trips.router, prefix="/trips", tags=["trips"])
app.include_router(stops.router, tags=["stops"])
app.include_router(cities.router, prefix="/cities", tags=["cities"])
app.include_router(health.router, tags=["health"])


# Health check for monitoring/Docker
@app.get("/ping")
async def ping():
    """Simple ping endpoint for health checks."""
    return {"status": "ok"}
