# services/moderation.py

from typing import List, Optional

from pydantic import ValidationError

from core.access_guard import (
    is_admin,
    require_authenticated,
    require_ownership,
    require_permission,
    require_role,
)
from core.errors import InvalidTransition, ValidationFailed
from core.lifecycle import (
    TRANSITIONS,
    Transition,
    apply_transition,
    authorize_transition,
    check_transition,
    legal_transitions,
)
from core.logging_config import logger
from core.permissions import Permission
from core.submission_store import SubmissionStore
from models.actor import Actor
from models.enums import NoteSeverity, Role, SubmissionStatus
from models.submission import (
    GameSubmission,
    GameSubmissionCreate,
    ReviewNote,
    SubmissionMetadata,
    SubmissionMetadataUpdate,
)


# ============================================================
# Moderation Workbench
# ============================================================
class ModerationWorkbench:
    """
    Orchestrates submission transitions.

    Every transition runs the same sequence:
        1. load the submission (NotFound)
        2. refuse actors whose role never performs this transition
           (Unauthorized / Forbidden)
        3. check the transition is legal from its status (InvalidTransition)
        4. check permission and, for developer transitions, ownership
        5. apply status change + mandated note, then save conditionally on
           the status loaded in step 1 (Conflict if another write won)

    Legality (3) is checked before permission and ownership (4), so an
    actor in the right role always learns the current status of an
    illegal request.

    The workbench never notifies anyone or touches the public catalog;
    callers react to the returned status.
    """

    def __init__(self, store: SubmissionStore):
        self.store = store

    # ---------------------------------------------------------
    # Transitions
    # ---------------------------------------------------------
    def submit(self, actor: Optional[Actor], submission_id: str) -> GameSubmission:
        return self._transition(actor, submission_id, Transition.submit)

    def start_review(self, actor: Optional[Actor], submission_id: str) -> GameSubmission:
        return self._transition(actor, submission_id, Transition.start_review)

    def approve(self, actor: Optional[Actor], submission_id: str, note: Optional[str] = None) -> GameSubmission:
        return self._transition(actor, submission_id, Transition.approve, note=note)

    def reject(self, actor: Optional[Actor], submission_id: str, reason: str) -> GameSubmission:
        return self._transition(actor, submission_id, Transition.reject, note=reason)

    def publish(self, actor: Optional[Actor], submission_id: str) -> GameSubmission:
        return self._transition(actor, submission_id, Transition.publish)

    def resubmit(self, actor: Optional[Actor], submission_id: str, note: Optional[str] = None) -> GameSubmission:
        return self._transition(actor, submission_id, Transition.resubmit, note=note)

    def _transition(
        self,
        actor: Optional[Actor],
        submission_id: str,
        transition: Transition,
        note: Optional[str] = None,
    ) -> GameSubmission:
        submission = self.store.load(submission_id)
        # A role that can never perform this transition is refused whatever the status
        require_role(actor, [TRANSITIONS[transition].role])
        rule = check_transition(submission, transition)
        actor = authorize_transition(actor, submission, rule)

        updated = apply_transition(submission, transition, actor, note=note)
        saved = self.store.save(updated, expected_status=rule.source)

        logger.info(
            f"Actor {actor.id} applied {transition.value} to submission {submission_id}: "
            f"{rule.source.value} -> {rule.target.value} (version {saved.version})"
        )
        return saved

    # ---------------------------------------------------------
    # Drafts
    # ---------------------------------------------------------
    def create_draft(self, actor: Optional[Actor], payload: GameSubmissionCreate) -> GameSubmission:
        actor = require_permission(actor, Permission.submit_games)
        submission = GameSubmission(
            developer_id=actor.id,
            game_id=payload.game_id,
            metadata=payload.metadata,
        )
        created = self.store.create(submission)
        logger.info(f"Actor {actor.id} created draft submission {created.id}")
        return created

    def update_metadata(
        self,
        actor: Optional[Actor],
        submission_id: str,
        changes: SubmissionMetadataUpdate,
    ) -> GameSubmission:
        """Edit a draft's metadata (owner, or an admin)."""
        submission = self.store.load(submission_id)
        actor = require_permission(actor, Permission.manage_own_games)
        require_ownership(actor, submission.developer_id)

        if submission.status != SubmissionStatus.draft:
            raise InvalidTransition(
                "Metadata can only be updated while the submission is a draft",
                current_status=submission.status.value,
                allowed=[t.value for t in legal_transitions(submission.status)],
            )

        # Merge and revalidate so explicit nulls cannot clear required fields
        merged = {**submission.metadata.model_dump(), **changes.model_dump(exclude_unset=True)}
        try:
            metadata = SubmissionMetadata.model_validate(merged)
        except ValidationError as e:
            fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in e.errors())
            raise ValidationFailed(f"Invalid metadata: {fields}") from e

        saved = self.store.save(
            submission.model_copy(update={"metadata": metadata}),
            expected_status=submission.status,
        )
        logger.info(f"Actor {actor.id} updated metadata of submission {submission_id}")
        return saved

    # ---------------------------------------------------------
    # Review notes
    # ---------------------------------------------------------
    def add_review_note(
        self,
        actor: Optional[Actor],
        submission_id: str,
        content: str,
        severity: NoteSeverity = NoteSeverity.info,
    ) -> GameSubmission:
        """Append a moderator note without changing status."""
        submission = self.store.load(submission_id)
        actor = require_role(actor, [Role.admin])
        require_permission(actor, Permission.moderate_content)

        text = (content or "").strip()
        if not text:
            raise ValidationFailed("Review note content is required")

        note = ReviewNote(
            author_id=actor.id,
            author_name=actor.username,
            content=text,
            severity=severity,
        )
        saved = self.store.save(
            submission.model_copy(update={"review_notes": [*submission.review_notes, note]}),
            expected_status=submission.status,
        )
        logger.info(f"Actor {actor.id} added {severity.value} note to submission {submission_id}")
        return saved

    # ---------------------------------------------------------
    # Reads / removal
    # ---------------------------------------------------------
    def get(self, actor: Optional[Actor], submission_id: str) -> GameSubmission:
        submission = self.store.load(submission_id)
        require_ownership(actor, submission.developer_id)
        return submission

    def list(self, actor: Optional[Actor], status: Optional[SubmissionStatus] = None) -> List[GameSubmission]:
        """Admins see the whole queue; everyone else sees their own submissions."""
        actor = require_authenticated(actor)
        if is_admin(actor):
            return self.store.list(status=status)
        return self.store.list(developer_id=actor.id, status=status)

    def delete(self, actor: Optional[Actor], submission_id: str) -> None:
        """Terminal removal. Not a lifecycle transition."""
        submission = self.store.load(submission_id)
        actor = require_permission(actor, Permission.manage_own_games)
        require_ownership(actor, submission.developer_id)
        self.store.delete(submission_id)
        logger.info(f"Actor {actor.id} deleted submission {submission_id} ({submission.status.value})")
