# routers/submissions.py

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from core.submission_store import SubmissionStore, get_submission_store
from dependencies.auth import get_current_actor
from models.actor import Actor
from models.enums import SubmissionStatus
from models.submission import (
    ApproveRequest,
    GameSubmission,
    GameSubmissionCreate,
    RejectRequest,
    ResubmitRequest,
    ReviewNoteCreate,
    SubmissionMetadataUpdate,
)
from services.moderation import ModerationWorkbench

router = APIRouter(
    prefix="/submissions",
    tags=["Game Submissions"],
)


def get_workbench(store: SubmissionStore = Depends(get_submission_store)) -> ModerationWorkbench:
    return ModerationWorkbench(store)


# -----------------------------------------------------
# Drafts
# -----------------------------------------------------
@router.post("/", response_model=GameSubmission, status_code=201)
def create_submission(
    payload: GameSubmissionCreate,
    actor: Actor = Depends(get_current_actor),
    workbench: ModerationWorkbench = Depends(get_workbench),
):
    """Start a new draft owned by the caller (requires `submit_games`)."""
    return workbench.create_draft(actor, payload)


@router.get("/", response_model=List[GameSubmission])
def list_submissions(
    status: Optional[SubmissionStatus] = Query(None, description="Filter by status"),
    actor: Actor = Depends(get_current_actor),
    workbench: ModerationWorkbench = Depends(get_workbench),
):
    """
    List submissions.

    - Admins: the whole moderation queue
    - Everyone else: only their own submissions
    """
    return workbench.list(actor, status=status)


@router.get("/{submission_id}", response_model=GameSubmission)
def get_submission(
    submission_id: str,
    actor: Actor = Depends(get_current_actor),
    workbench: ModerationWorkbench = Depends(get_workbench),
):
    return workbench.get(actor, submission_id)


@router.patch("/{submission_id}", response_model=GameSubmission)
def update_submission(
    submission_id: str,
    payload: SubmissionMetadataUpdate,
    actor: Actor = Depends(get_current_actor),
    workbench: ModerationWorkbench = Depends(get_workbench),
):
    """Edit draft metadata (owner or admin, drafts only)."""
    return workbench.update_metadata(actor, submission_id, payload)


@router.delete("/{submission_id}")
def delete_submission(
    submission_id: str,
    actor: Actor = Depends(get_current_actor),
    workbench: ModerationWorkbench = Depends(get_workbench),
):
    workbench.delete(actor, submission_id)
    return {"status": "deleted", "submission_id": submission_id}


# -----------------------------------------------------
# Lifecycle transitions
# -----------------------------------------------------
@router.post("/{submission_id}/submit", response_model=GameSubmission)
def submit_submission(
    submission_id: str,
    actor: Actor = Depends(get_current_actor),
    workbench: ModerationWorkbench = Depends(get_workbench),
):
    """draft → submitted (owning developer)."""
    return workbench.submit(actor, submission_id)


@router.post("/{submission_id}/start-review", response_model=GameSubmission)
def start_review(
    submission_id: str,
    actor: Actor = Depends(get_current_actor),
    workbench: ModerationWorkbench = Depends(get_workbench),
):
    """submitted → in_review (admin)."""
    return workbench.start_review(actor, submission_id)


@router.post("/{submission_id}/approve", response_model=GameSubmission)
def approve_submission(
    submission_id: str,
    payload: Optional[ApproveRequest] = None,
    actor: Actor = Depends(get_current_actor),
    workbench: ModerationWorkbench = Depends(get_workbench),
):
    """in_review → approved (admin, optional note)."""
    return workbench.approve(actor, submission_id, note=payload.note if payload else None)


@router.post("/{submission_id}/reject", response_model=GameSubmission)
def reject_submission(
    submission_id: str,
    payload: RejectRequest,
    actor: Actor = Depends(get_current_actor),
    workbench: ModerationWorkbench = Depends(get_workbench),
):
    """in_review → rejected (admin, reason required)."""
    return workbench.reject(actor, submission_id, payload.reason)


@router.post("/{submission_id}/publish", response_model=GameSubmission)
def publish_submission(
    submission_id: str,
    actor: Actor = Depends(get_current_actor),
    workbench: ModerationWorkbench = Depends(get_workbench),
):
    """
    approved → published (admin).

    Catalog indexing and developer notifications are triggered by callers
    observing the returned status, not here.
    """
    return workbench.publish(actor, submission_id)


@router.post("/{submission_id}/resubmit", response_model=GameSubmission)
def resubmit_submission(
    submission_id: str,
    payload: Optional[ResubmitRequest] = None,
    actor: Actor = Depends(get_current_actor),
    workbench: ModerationWorkbench = Depends(get_workbench),
):
    """rejected → draft (owning developer); bumps the version."""
    return workbench.resubmit(actor, submission_id, note=payload.note if payload else None)


# -----------------------------------------------------
# Review notes
# -----------------------------------------------------
@router.post("/{submission_id}/notes", response_model=GameSubmission)
def add_review_note(
    submission_id: str,
    payload: ReviewNoteCreate,
    actor: Actor = Depends(get_current_actor),
    workbench: ModerationWorkbench = Depends(get_workbench),
):
    """Append a moderator note (admin). Notes are never edited or removed."""
    return workbench.add_review_note(actor, submission_id, payload.content, payload.severity)
