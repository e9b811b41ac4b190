# core/supabase_client.py

from typing import Optional
from supabase import ClientOptions, create_client, Client
from core.config import settings
from core.logging_config import logger


# ============================================================
# Supabase Client Factory (ALWAYS service role)
# ============================================================

def get_supabase_client() -> Optional[Client]:
    """
    Creates a Supabase client using the SERVICE ROLE KEY.
    REQUIRED for:
        - auth.get_user (token validation)
        - full read/write on game_submissions

    PostgREST calls are bounded by STORE_TIMEOUT_SECONDS.
    """
    try:
        supabase_url = settings.SUPABASE_URL
        supabase_key = settings.SUPABASE_SERVICE_ROLE_KEY  # MUST be service-role

        if not supabase_url or not supabase_key:
            logger.error("Missing Supabase credentials")
            logger.error(f"   URL: {supabase_url}")
            logger.error(f"   SERVICE ROLE KEY: {'SET' if supabase_key else 'MISSING'}")
            return None

        options = ClientOptions(postgrest_client_timeout=settings.STORE_TIMEOUT_SECONDS)
        return create_client(supabase_url, supabase_key, options=options)

    except Exception as e:
        logger.error(f"Supabase Init Error: {e}", exc_info=True)
        return None


# ============================================================
# Ping Supabase for health checks
# ============================================================

def ping_supabase() -> dict:
    """
    Simple connectivity check against the submissions table.
    Does NOT query auth tables.
    """
    client = get_supabase_client()
    if client is None:
        return {"service": "Supabase", "status": "not_configured"}

    table = settings.SUBMISSIONS_TABLE
    try:
        res = client.table(table).select("id").limit(1).execute()
        return {
            "service": "Supabase",
            "status": "ok",
            "tables": {table: {"status": "ok", "rows_found": len(res.data or [])}},
        }
    except Exception as e:
        logger.error(f"Supabase Ping Error: {e}", exc_info=True)
        return {"service": "Supabase", "status": "error", "detail": str(e)}
