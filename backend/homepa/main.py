import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import text
from contextlib import asynccontextmanager
from homepa.core.config import settings
from homepa.core.database import get_engine
from homepa.core.errors import register_exception_handlers
from homepa.core.scheduler import start_scheduler, stop_scheduler
from homepa.api.routes import auth, events, memos, profile, suggestions

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage app lifecycle events.

    Startup: Start background scheduler for periodic cleanup
    Shutdown: Stop background scheduler
    The database engine is created lazily by the first request that needs it.
    """
    if settings.SCHEDULER_ENABLED:
        start_scheduler()
    yield
    stop_scheduler()


app = FastAPI(
    title="homepa API",
    description="Personal scheduling assistant: calendar events, memos and suggestions",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware - allows the calendar frontend to call the API with cookies
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)

# All routes are prefixed with /api for consistency
app.include_router(auth.router, prefix="/api")
app.include_router(profile.router, prefix="/api")
app.include_router(events.router, prefix="/api")
app.include_router(memos.router, prefix="/api")
app.include_router(suggestions.router, prefix="/api")


@app.get("/")
async def root():
    """Root endpoint - API information"""
    return {"message": "homepa API", "version": "1.0.0"}


@app.get("/health")
async def health():
    """Health check endpoint - used by monitoring/deployment tools"""
    return {"status": "healthy"}


@app.get("/health/db")
def health_db():
    """Database connectivity check - a failure surfaces as 503"""
    with get_engine().connect() as connection:
        connection.execute(text("SELECT 1"))
    return {"status": "healthy", "database": "connected"}
