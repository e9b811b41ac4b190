# routers/health.py

from fastapi import APIRouter
from core.config import settings
from core.supabase_client import ping_supabase

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


# -----------------------------------------------------
# GET /health/db
# Checks Supabase connection + submissions table
# No auth required
# -----------------------------------------------------
@router.get("/db", summary="Supabase / DB health check")
async def health_db():
    """
    Verifies Supabase connectivity when submissions are stored there.
    Safe for external health monitors (no auth required).
    """
    if settings.SUBMISSION_STORE == "memory":
        return {"service": "Supabase", "status": "skipped", "store": "memory"}

    status = ping_supabase()
    return {
        "service": "Supabase",
        "status": status.get("status", "unknown"),
        "details": status,
    }


# -----------------------------------------------------
# GET /health/app
# -----------------------------------------------------
@router.get("/app", summary="App health check")
async def health_app():
    """Lightweight health check for uptime monitors."""
    return {
        "service": "GameHub API",
        "status": "ok",
    }
