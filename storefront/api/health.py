# storefront/api/health.py
"""
Health check endpoints.
"""
from datetime import datetime, timezone
from fastapi import APIRouter

from storefront.db import get_connection_error, is_connected

router = APIRouter(tags=["Health"])


@router.get("/healthz")
async def healthz():
    """Simple health check."""
    return {"ok": True, "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/api/health")
async def api_health():
    """API health check, including database connectivity."""
    connected = is_connected()
    return {
        "status": "healthy" if connected else "degraded",
        "database": {
            "connected": connected,
            "error": None if connected else get_connection_error(),
        },
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
