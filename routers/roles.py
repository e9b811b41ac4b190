# routers/roles.py

from fastapi import APIRouter, Depends

from core.access_guard import require_authenticated
from core.permissions import Permission, all_permissions, all_roles, permissions_for
from dependencies.auth import get_current_actor, requires_permission
from models.actor import Actor

router = APIRouter(
    prefix="/roles",
    tags=["Roles"],
)


@router.get("/me", summary="Caller's role and permissions")
def my_permissions(actor: Actor = Depends(get_current_actor)):
    actor = require_authenticated(actor)
    return {
        "user_id": actor.id,
        "role": actor.role.value,
        "permissions": sorted(p.value for p in permissions_for(actor.role)),
    }


@router.get(
    "/",
    summary="Full role → permission catalog",
    dependencies=[Depends(requires_permission(Permission.manage_users))],
)
def list_roles():
    return {
        "permissions": [p.value for p in all_permissions()],
        "roles": {
            role.value: sorted(p.value for p in permissions_for(role))
            for role in all_roles()
        },
    }
