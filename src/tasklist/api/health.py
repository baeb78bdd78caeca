"""Health check endpoint.

Learn: Always answers 200 while the process is serving. The database
check is reported in the body, not through the status code, so a load
balancer doesn't pull every instance when the database blips.
"""

import structlog
from fastapi import APIRouter, Request
from sqlalchemy import text

from tasklist import __version__

logger = structlog.get_logger()

router = APIRouter()


@router.get("/health")
async def health_check(request: Request):
    """Check server health and database connectivity."""
    checks = {"status": "ok", "version": __version__}

    try:
        async with request.app.state.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        logger.warning("health.database_unavailable", error=str(e))
        checks["database"] = "unavailable"

    return checks
