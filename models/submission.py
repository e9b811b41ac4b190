# models/submission.py

from typing import List, Optional
from datetime import datetime, timezone
from uuid import uuid4
from pydantic import BaseModel, ConfigDict, Field

from models.enums import NoteSeverity, SubmissionStatus


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_id() -> str:
    return str(uuid4())


# -----------------------------------------------------
# Metadata (opaque to moderation; stored as-is)
# -----------------------------------------------------
class SubmissionMetadata(BaseModel):
    """Developer-supplied game metadata."""

    model_config = ConfigDict(extra="allow")

    title: str = Field(..., min_length=1, description="Game title")
    description: str = Field("", description="Long description")
    short_description: Optional[str] = None
    tags: List[str] = Field(default_factory=list)
    categories: List[str] = Field(default_factory=list, description="Category IDs")
    release_notes: Optional[str] = None


class SubmissionMetadataUpdate(BaseModel):
    """Partial metadata update (drafts only)."""

    model_config = ConfigDict(extra="allow")

    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    short_description: Optional[str] = None
    tags: Optional[List[str]] = None
    categories: Optional[List[str]] = None
    release_notes: Optional[str] = None


# -----------------------------------------------------
# Review notes (append-only audit trail)
# -----------------------------------------------------
class ReviewNote(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(default_factory=new_id)
    author_id: str
    author_name: Optional[str] = None
    content: str
    severity: NoteSeverity = NoteSeverity.info
    resolved: bool = False
    created_at: datetime = Field(default_factory=utcnow)


# -----------------------------------------------------
# Game submission
# -----------------------------------------------------
class GameSubmission(BaseModel):
    """
    The moderated entity. Instances are treated as values: lifecycle code
    returns an updated copy instead of mutating in place.
    """

    id: str = Field(default_factory=new_id)
    developer_id: str
    game_id: Optional[str] = None
    metadata: SubmissionMetadata
    status: SubmissionStatus = SubmissionStatus.draft
    version: int = Field(1, ge=1)
    # Bumped by the store on every successful write
    revision: int = Field(0, ge=0)
    review_notes: List[ReviewNote] = Field(default_factory=list)
    rejection_reason: Optional[str] = None
    reviewer_id: Optional[str] = None
    created_at: datetime = Field(default_factory=utcnow)
    submitted_at: Optional[datetime] = None
    reviewed_at: Optional[datetime] = None
    published_at: Optional[datetime] = None


# -----------------------------------------------------
# Request payloads
# -----------------------------------------------------
class GameSubmissionCreate(BaseModel):
    game_id: Optional[str] = Field(None, description="Catalog game this submission updates (optional)")
    metadata: SubmissionMetadata


class RejectRequest(BaseModel):
    reason: str = Field(..., description="Shown to the developer; required")


class ApproveRequest(BaseModel):
    note: Optional[str] = Field(None, description="Optional note attached to the approval")


class ResubmitRequest(BaseModel):
    note: Optional[str] = Field(None, description="What changed since the rejection")


class ReviewNoteCreate(BaseModel):
    content: str
    severity: NoteSeverity = NoteSeverity.info
