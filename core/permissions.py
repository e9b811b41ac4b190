# core/permissions.py

"""
Canonical permission catalog and role authority.

This is the only role → permission map in the codebase. It is built once at
import time and exposed read-only; there are no runtime grants.
"""

from types import MappingProxyType
from typing import FrozenSet, List, Mapping, Optional, Union

from models.enums import BaseStrEnum, Role


# -----------------------------------------------------
# PERMISSION CATALOG
# -----------------------------------------------------
class Permission(BaseStrEnum):
    """
    Closed set of permission identifiers.

    ``Permission("not_a_permission")`` raises ValueError: building a value
    outside the catalog is a programming error.
    """

    # Admin permissions
    manage_users = "manage_users"
    manage_games = "manage_games"
    manage_categories = "manage_categories"
    moderate_content = "moderate_content"
    view_analytics = "view_analytics"
    configure_system = "configure_system"

    # Game developer permissions
    manage_own_games = "manage_own_games"
    view_own_analytics = "view_own_analytics"
    edit_own_profile = "edit_own_profile"
    submit_games = "submit_games"

    # Player permissions
    play_games = "play_games"
    rate_games = "rate_games"
    manage_playlists = "manage_playlists"


# ============================================
# CENTRALIZED ROLE → PERMISSIONS MAP
# ============================================
_PLAYER = frozenset({
    Permission.play_games,
    Permission.rate_games,
    Permission.manage_playlists,
    Permission.edit_own_profile,
})

_GAME_DEVELOPER = _PLAYER | frozenset({
    Permission.submit_games,
    Permission.manage_own_games,
    Permission.view_own_analytics,
})

ROLE_PERMISSIONS: Mapping[Role, FrozenSet[Permission]] = MappingProxyType({

    # =====================================================
    # ADMIN — moderation + everything developers can do
    # =====================================================
    Role.admin: _GAME_DEVELOPER | frozenset({
        Permission.manage_users,
        Permission.manage_games,
        Permission.manage_categories,
        Permission.moderate_content,
        Permission.view_analytics,
        Permission.configure_system,
    }),

    # =====================================================
    # GAME DEVELOPER
    # =====================================================
    Role.game_developer: _GAME_DEVELOPER,

    # =====================================================
    # PLAYER
    # =====================================================
    Role.player: _PLAYER,
})


def _check_catalog() -> None:
    missing = [role.value for role in Role if not ROLE_PERMISSIONS.get(role)]
    if missing:
        raise RuntimeError(f"Roles without permissions: {', '.join(missing)}")


_check_catalog()


# -----------------------------------------------------
# ROLE AUTHORITY
# -----------------------------------------------------
_ROLES_BY_VALUE = {role.value: role for role in Role}
_PERMISSIONS_BY_VALUE = {perm.value: perm for perm in Permission}


def _as_role(value: Union[Role, str, None]) -> Optional[Role]:
    if isinstance(value, Role):
        return value
    if isinstance(value, str):
        return _ROLES_BY_VALUE.get(value)
    return None


def _as_permission(value: Union[Permission, str, None]) -> Optional[Permission]:
    if isinstance(value, Permission):
        return value
    if isinstance(value, str):
        return _PERMISSIONS_BY_VALUE.get(value)
    return None


def has_permission(role: Union[Role, str, None], permission: Union[Permission, str, None]) -> bool:
    """Fail-closed: unknown roles or permissions are never granted."""
    resolved_role = _as_role(role)
    resolved_perm = _as_permission(permission)
    if resolved_role is None or resolved_perm is None:
        return False
    return resolved_perm in ROLE_PERMISSIONS.get(resolved_role, frozenset())


def permissions_for(role: Union[Role, str, None]) -> FrozenSet[Permission]:
    """Permissions granted to ``role``; empty for anything unknown."""
    resolved = _as_role(role)
    if resolved is None:
        return frozenset()
    return ROLE_PERMISSIONS.get(resolved, frozenset())


def all_permissions() -> List[Permission]:
    return list(Permission)


def all_roles() -> List[Role]:
    return list(Role)


def is_valid_permission(value: str) -> bool:
    return _as_permission(value) is not None
