"""Main FastAPI application entry point."""

from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from iam.presentation import router as iam_router
from infrastructure.database.dependencies import (
    close_database_connections,
    get_read_session,
)
from infrastructure.logging import configure_logging
from infrastructure.settings import get_settings
from infrastructure.version import __version__


@asynccontextmanager
async def groupbridge_lifespan(app: FastAPI):
    """Application lifespan context.

    Manages:
    - Logging configuration at startup
    - Database engine lifecycle (created lazily, disposed on shutdown)
    """
    configure_logging(get_settings().log_level)

    yield

    await close_database_connections()


app = FastAPI(
    title=get_settings().app_name,
    description="Tenant-scoped mappings from external identity groups to internal groups",
    version=__version__,
    lifespan=groupbridge_lifespan,
)

# Include IAM bounded context routes
app.include_router(iam_router)


@app.get("/health")
def health():
    """Basic health check endpoint."""
    return {"status": "ok"}


@app.get("/health/db")
async def health_db(
    session: Annotated[AsyncSession, Depends(get_read_session)],
) -> dict:
    """Check database connection health."""
    try:
        await session.execute(text("SELECT 1"))
        return {"status": "ok", "connected": True}
    except Exception as e:
        return {
            "status": "error",
            "connected": False,
            "error": str(e),
        }
