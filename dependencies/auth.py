from typing import Iterable, Optional, Union
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from supabase import Client

from core.access_guard import require_permission, require_role
from core.errors import Unauthorized
from core.logging_config import logger
from core.permissions import Permission
from core.supabase_client import get_supabase_client
from models.actor import Actor
from models.enums import Role


bearer_scheme = HTTPBearer(auto_error=False)

_ROLES = {role.value: role for role in Role}


# ============================================================
# AUTH DECODING (Supabase: validates JWT + reads role metadata)
# ============================================================
def get_current_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Actor:
    if credentials is None or not credentials.credentials:
        raise Unauthorized()

    client: Client = get_supabase_client()
    if not client:
        raise HTTPException(status.HTTP_500_INTERNAL_SERVER_ERROR, "Supabase client not configured")

    # ---------------------------------------------------------
    # Validate JWT via Supabase GoTrue
    # ---------------------------------------------------------
    try:
        auth_resp = client.auth.get_user(credentials.credentials)
    except Exception as e:
        logger.warning(f"Token validation failed: {e}")
        raise Unauthorized("Invalid or expired authentication token") from e

    if not auth_resp or not auth_resp.user:
        raise Unauthorized("Invalid or expired authentication token")

    auth_user = auth_resp.user
    metadata = auth_user.user_metadata or {}

    # ---------------------------------------------------------
    # Role outside the catalog → no role (fails every guard)
    # ---------------------------------------------------------
    raw_role = metadata.get("role")
    role = _ROLES.get(raw_role) if isinstance(raw_role, str) else None
    if role is None:
        logger.warning(f"User {auth_user.id} has unrecognised role {raw_role!r}")

    return Actor(
        id=auth_user.id,
        role=role,
        username=metadata.get("username"),
        email=auth_user.email,
    )


# ============================================================
# OPTIONAL AUTHENTICATION (for hybrid endpoints)
# ============================================================
def get_optional_actor(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[Actor]:
    """
    Returns Actor if a valid token was provided, None otherwise.
    Does not raise for missing or invalid tokens.
    """
    if not credentials:
        return None

    try:
        return get_current_actor(credentials)
    except Unauthorized:
        return None


# ============================================================
# ROLE CHECKER (basic role list guard)
# ============================================================
def requires_role(allowed_roles: Iterable[Union[Role, str]]):
    allowed = list(allowed_roles)

    def checker(actor: Actor = Depends(get_current_actor)) -> Actor:
        return require_role(actor, allowed)
    return checker


# ============================================================
# PERMISSION CHECK
# ============================================================
def requires_permission(permission: Union[Permission, str]):
    """
    Usage:
        @router.get("/", dependencies=[Depends(requires_permission(Permission.manage_users))])
    """

    def dependency(actor: Actor = Depends(get_current_actor)) -> Actor:
        return require_permission(actor, permission)
    return dependency
