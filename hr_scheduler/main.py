"""Main FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hr_scheduler import __version__
from hr_scheduler.api.v1.router import api_router
from hr_scheduler.core.config import settings
from hr_scheduler.core.database import AsyncSessionLocal, Base, engine
from hr_scheduler.core.errors import SchedulingError
from hr_scheduler.core.logging import setup_logging
from hr_scheduler.jobs.scheduled_jobs import ScheduledJobs
from hr_scheduler.services.retention_sweeper import RetentionSweeper

import hr_scheduler.models  # noqa: F401  registers tables on Base.metadata

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    # Startup
    setup_logging()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    jobs = None
    if settings.RETENTION_SWEEP_ENABLED:
        sweeper = RetentionSweeper(AsyncSessionLocal, grace_days=settings.RETENTION_GRACE_DAYS)
        jobs = ScheduledJobs(sweeper, hour_utc=settings.RETENTION_SWEEP_HOUR_UTC)
        jobs.start()
    yield
    # Shutdown
    if jobs is not None:
        await jobs.stop()
    await engine.dispose()


app = FastAPI(
    title="HR Interview Scheduling API",
    description="Interview scheduling, conflict detection and reporting",
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)


@app.exception_handler(SchedulingError)
async def scheduling_error_handler(request: Request, exc: SchedulingError):
    """Map domain errors to a stable JSON body."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message} {exc.details}")
    return JSONResponse(status_code=exc.status_code, content=jsonable_encoder(exc.to_dict()))


app.include_router(api_router, prefix="/api/v1")


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "hr-scheduler"}


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": "HR Interview Scheduling API", "version": __version__}
