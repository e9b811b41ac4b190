# -------------------------
# Enums
# -------------------------
from .enums import (
    BaseStrEnum,
    NoteSeverity,
    Role,
    SubmissionStatus,
)

# -------------------------
# Actor (authenticated caller)
# -------------------------
from .actor import Actor

# -------------------------
# Submission Models
# -------------------------
from .submission import (
    ApproveRequest,
    GameSubmission,
    GameSubmissionCreate,
    RejectRequest,
    ResubmitRequest,
    ReviewNote,
    ReviewNoteCreate,
    SubmissionMetadata,
    SubmissionMetadataUpdate,
)

__all__ = [
    "BaseStrEnum",
    "NoteSeverity",
    "Role",
    "SubmissionStatus",
    "Actor",
    "ApproveRequest",
    "GameSubmission",
    "GameSubmissionCreate",
    "RejectRequest",
    "ResubmitRequest",
    "ReviewNote",
    "ReviewNoteCreate",
    "SubmissionMetadata",
    "SubmissionMetadataUpdate",
]
