import os
import sys
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Ensure local imports resolve
sys.path.append(os.path.dirname(__file__))

# Core
from core.config import settings
from core.config_validator import validate_config_on_startup
from core.errors import Forbidden, GameHubError, InvalidTransition, Unauthorized
from core.logging_config import logger

# -------------------------------------------------
# Routers
# -------------------------------------------------
from routers.submissions import router as submissions_router
from routers.roles import router as roles_router
from routers.health import router as health_router


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="GameHub API — game submission moderation and access control",
    )

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------
    # Startup
    # -------------------------------------------------
    @app.on_event("startup")
    async def on_startup():
        logger.info("Starting GameHub API")
        validate_config_on_startup()

    # -------------------------------------------------
    # Error handling
    # -------------------------------------------------
    @app.exception_handler(GameHubError)
    async def handle_domain_error(request: Request, exc: GameHubError):
        content = {
            "detail": exc.detail,
            "error": exc.kind,
            "retryable": exc.retryable,
        }
        headers = None

        if isinstance(exc, InvalidTransition):
            content["current_status"] = exc.current_status
            content["allowed_transitions"] = exc.allowed
        elif isinstance(exc, Unauthorized):
            headers = {"WWW-Authenticate": "Bearer"}

        if isinstance(exc, Forbidden):
            logger.warning(f"HTTP 403 at {request.url} — {exc.reason}")
        elif exc.status_code in (401, 503):
            logger.warning(f"HTTP {exc.status_code} at {request.url} — {exc.detail}")

        return JSONResponse(status_code=exc.status_code, content=content, headers=headers)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (401, 403, 500):
            logger.warning(
                f"HTTP {exc.status_code} at {request.url} — {exc.detail}"
            )
        return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s", request.url, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"detail": "Internal server error"},
        )

    # -------------------------------------------------
    # Register Routers
    # -------------------------------------------------
    app.include_router(submissions_router)
    app.include_router(roles_router)
    app.include_router(health_router)

    return app


# Create the global FastAPI instance
app = create_app()
