from typing import List, Literal, Optional
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    # -------------------------------------------------
    # General
    # -------------------------------------------------
    PROJECT_NAME: str = "GameHub API"
    ENV: str = "development"
    LOG_LEVEL: str = "INFO"

    # -------------------------------------------------
    # Frontend Domains
    # -------------------------------------------------
    FRONTEND_DOMAINS: List[str] = [
        "http://localhost:5173",
    ]

    # -------------------------------------------------
    # CORS (auto-built below)
    # -------------------------------------------------
    BACKEND_CORS_ORIGINS: List[str] = []

    # -------------------------------------------------
    # Supabase (Primary DB & Auth)
    # -------------------------------------------------
    SUPABASE_URL: Optional[str] = None
    SUPABASE_ANON_KEY: Optional[str] = None
    SUPABASE_SERVICE_ROLE_KEY: Optional[str] = None

    # -------------------------------------------------
    # Submission persistence
    # -------------------------------------------------
    # "memory" keeps submissions in-process (local dev / tests)
    SUBMISSION_STORE: Literal["supabase", "memory"] = "supabase"
    SUBMISSIONS_TABLE: str = "game_submissions"

    # Upper bound for a single load / persist step
    STORE_TIMEOUT_SECONDS: float = Field(
        10.0,
        gt=0,
        description="Seconds before a store call fails with Unavailable (default: 10)",
    )

    # -------------------------------------------------
    # Model Config
    # -------------------------------------------------
    class Config:
        case_sensitive = True


# Instantiate settings
settings = Settings()

# -------------------------------------------------
# Build CORS list dynamically after loading settings
# -------------------------------------------------
cors_origins = [d.rstrip("/") for d in settings.FRONTEND_DOMAINS]
settings.BACKEND_CORS_ORIGINS = sorted(set(cors_origins))
