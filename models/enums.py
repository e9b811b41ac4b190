from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]


# -----------------------------------------------------
# USER ROLE
# -----------------------------------------------------
class Role(BaseStrEnum):
    """Coarse-grained role carried by every actor. Closed set."""

    admin = "admin"
    game_developer = "game_developer"
    player = "player"


# -----------------------------------------------------
# SUBMISSION STATUS
# -----------------------------------------------------
class SubmissionStatus(BaseStrEnum):
    """Moderation state of a game submission."""

    draft = "draft"
    submitted = "submitted"
    in_review = "in_review"
    approved = "approved"
    rejected = "rejected"
    published = "published"


# -----------------------------------------------------
# REVIEW NOTE SEVERITY
# -----------------------------------------------------
class NoteSeverity(BaseStrEnum):
    info = "info"
    warning = "warning"
    critical = "critical"
