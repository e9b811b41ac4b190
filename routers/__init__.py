# routers/__init__.py

from fastapi import APIRouter

from .submissions import router as submissions_router
from .roles import router as roles_router
from .health import router as health_router


# Master router (main.py registers the routers individually)
api_router = APIRouter()

api_router.include_router(submissions_router)
api_router.include_router(roles_router)
api_router.include_router(health_router)

__all__ = ["api_router"]
