# core/access_guard.py

"""
Request-time guards.

Each guard is an independent predicate: it inspects the actor (and the
owner id when relevant) and either returns the actor or raises. Guards never
mutate their inputs, so a protected operation can stack as many as it needs:

    actor = require_permission(actor, Permission.manage_own_games)
    require_ownership(actor, submission.developer_id)
"""

from typing import Iterable, Optional, Union

from core.errors import Forbidden, Unauthorized
from core.logging_config import logger
from core.permissions import Permission, has_permission
from models.actor import Actor
from models.enums import Role


def is_admin(actor: Optional[Actor]) -> bool:
    return actor is not None and actor.role == Role.admin


# -----------------------------------------------------
# Authentication
# -----------------------------------------------------
def require_authenticated(actor: Optional[Actor]) -> Actor:
    """An actor must be present and carry an id and a catalog role."""
    if actor is None or not actor.id or actor.role is None:
        raise Unauthorized()
    return actor


# -----------------------------------------------------
# Permission
# -----------------------------------------------------
def require_permission(actor: Optional[Actor], permission: Union[Permission, str]) -> Actor:
    actor = require_authenticated(actor)
    if not has_permission(actor.role, permission):
        logger.warning(
            f"Permission denied: actor={actor.id} role={actor.role} permission={permission}"
        )
        raise Forbidden(f"missing permission {permission}")
    return actor


# -----------------------------------------------------
# Role
# -----------------------------------------------------
def require_role(actor: Optional[Actor], allowed_roles: Iterable[Union[Role, str]]) -> Actor:
    actor = require_authenticated(actor)
    allowed = {str(role) for role in allowed_roles}
    if str(actor.role) not in allowed:
        logger.warning(
            f"Role denied: actor={actor.id} role={actor.role} allowed={sorted(allowed)}"
        )
        raise Forbidden(f"role {actor.role} not in {sorted(allowed)}")
    return actor


# -----------------------------------------------------
# Ownership (admins always pass)
# -----------------------------------------------------
def require_ownership(actor: Optional[Actor], resource_owner_id: Optional[str]) -> Actor:
    actor = require_authenticated(actor)
    if is_admin(actor):
        return actor
    if resource_owner_id is None or actor.id != resource_owner_id:
        logger.warning(f"Ownership denied: actor={actor.id} owner={resource_owner_id}")
        raise Forbidden("not the resource owner")
    return actor
