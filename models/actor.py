# models/actor.py

from typing import Optional
from pydantic import BaseModel, ConfigDict

from models.enums import Role


class Actor(BaseModel):
    """
    Authenticated caller. ``role`` is None when the identity provider sent a
    role outside the catalog; such an actor fails every guard.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    role: Optional[Role] = None
    username: Optional[str] = None
    email: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.username or self.id
