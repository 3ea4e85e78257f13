"""
Health check endpoint.

Reports that the process is up and whether the database answers.  The
endpoint itself always returns 200; the ``database`` field carries the
store's status.
"""

from datetime import datetime, timezone
from typing import Dict

from fastapi import APIRouter
from fastapi.concurrency import run_in_threadpool

from devhub_api.app.core.db import check_database

router = APIRouter()


@router.get("", response_model=Dict[str, str])
async def health() -> Dict[str, str]:
    database_ok = await run_in_threadpool(check_database)
    return {
        "status": "healthy",
        "database": "healthy" if database_ok else "unhealthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
