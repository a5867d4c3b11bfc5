"""Health check endpoints for load balancers and monitoring."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.config import settings
from app.database import COLLECTIONS, DocumentStore, get_store
from app.middleware.exceptions import StorageError

router = APIRouter(tags=["health"])

SERVICE = "Transport Management System"


@router.get("/health")
async def health_check():
    """Lightweight liveness check (does not touch the data file)."""
    return {
        "status": "ok",
        "service": SERVICE,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": settings.environment,
    }


@router.get("/health/ready")
def readiness_check(store: DocumentStore = Depends(get_store)):
    """Readiness: the data file loads and every collection is present.

    Returns 503 when the store cannot be read.
    """
    checks = {"service": "ok", "store": "unknown"}
    healthy = True
    try:
        doc = store.document
        counts = {name: len(doc.get(name) or []) for name in COLLECTIONS}
        checks["store"] = "ok"
    except StorageError as e:
        counts = {}
        checks["store"] = f"error: {e.message[:100]}"
        healthy = False

    return JSONResponse(
        status_code=status.HTTP_200_OK if healthy else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "service": SERVICE,
            "checks": checks,
            "collections": counts,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        },
    )
