# core/lifecycle.py

"""
Submission lifecycle state machine.

    draft ──submit──▶ submitted ──start_review──▶ in_review ──approve──▶ approved ──publish──▶ published
      ▲                                              │
      └──────────────resubmit──── rejected ◀──reject─┘

Every other (status, transition) pair is illegal. ``apply_transition`` is
pure: it returns an updated copy of the submission with the status change
and any mandated review note applied together.
"""

from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import List, Mapping, Optional

from core.access_guard import require_ownership, require_permission, require_role
from core.errors import InvalidTransition, ValidationFailed
from core.permissions import Permission
from models.actor import Actor
from models.enums import BaseStrEnum, NoteSeverity, Role, SubmissionStatus
from models.submission import GameSubmission, ReviewNote, utcnow


class Transition(BaseStrEnum):
    submit = "submit"
    start_review = "start_review"
    approve = "approve"
    reject = "reject"
    publish = "publish"
    resubmit = "resubmit"


@dataclass(frozen=True)
class TransitionRule:
    transition: Transition
    source: SubmissionStatus
    target: SubmissionStatus
    role: Role
    permission: Permission
    owner_only: bool = False


# ============================================
# TRANSITION TABLE (who may move what, where)
# ============================================
TRANSITIONS: Mapping[Transition, TransitionRule] = MappingProxyType({
    Transition.submit: TransitionRule(
        Transition.submit,
        SubmissionStatus.draft, SubmissionStatus.submitted,
        Role.game_developer, Permission.submit_games, owner_only=True,
    ),
    Transition.start_review: TransitionRule(
        Transition.start_review,
        SubmissionStatus.submitted, SubmissionStatus.in_review,
        Role.admin, Permission.moderate_content,
    ),
    Transition.approve: TransitionRule(
        Transition.approve,
        SubmissionStatus.in_review, SubmissionStatus.approved,
        Role.admin, Permission.moderate_content,
    ),
    Transition.reject: TransitionRule(
        Transition.reject,
        SubmissionStatus.in_review, SubmissionStatus.rejected,
        Role.admin, Permission.moderate_content,
    ),
    Transition.publish: TransitionRule(
        Transition.publish,
        SubmissionStatus.approved, SubmissionStatus.published,
        Role.admin, Permission.moderate_content,
    ),
    Transition.resubmit: TransitionRule(
        Transition.resubmit,
        SubmissionStatus.rejected, SubmissionStatus.draft,
        Role.game_developer, Permission.manage_own_games, owner_only=True,
    ),
})


def legal_transitions(status: SubmissionStatus) -> List[Transition]:
    return [rule.transition for rule in TRANSITIONS.values() if rule.source == status]


def check_transition(submission: GameSubmission, transition: Transition) -> TransitionRule:
    """Raise InvalidTransition unless ``transition`` may leave the current status."""
    rule = TRANSITIONS[transition]
    if submission.status != rule.source:
        raise InvalidTransition(
            f"Cannot {transition.value} a submission in status '{submission.status.value}'",
            current_status=submission.status.value,
            allowed=[t.value for t in legal_transitions(submission.status)],
        )
    return rule


def authorize_transition(actor: Optional[Actor], submission: GameSubmission, rule: TransitionRule) -> Actor:
    """Role, then permission, then ownership for owner-only transitions."""
    actor = require_role(actor, [rule.role])
    require_permission(actor, rule.permission)
    if rule.owner_only:
        require_ownership(actor, submission.developer_id)
    return actor


def _note(actor: Actor, content: str, severity: NoteSeverity, now: datetime) -> ReviewNote:
    return ReviewNote(
        author_id=actor.id,
        author_name=actor.username,
        content=content,
        severity=severity,
        created_at=now,
    )


def apply_transition(
    submission: GameSubmission,
    transition: Transition,
    actor: Actor,
    *,
    note: Optional[str] = None,
    now: Optional[datetime] = None,
) -> GameSubmission:
    """
    Return ``submission`` moved along ``transition``.

    ``note`` is the rejection reason for reject (required), an optional
    comment for approve and resubmit, and ignored otherwise.
    """
    rule = check_transition(submission, transition)
    now = now or utcnow()
    text = (note or "").strip()

    update = {"status": rule.target}
    notes = list(submission.review_notes)

    if transition == Transition.submit:
        update["submitted_at"] = now

    elif transition == Transition.start_review:
        update["reviewer_id"] = actor.id

    elif transition == Transition.approve:
        update["reviewer_id"] = actor.id
        update["reviewed_at"] = now
        if text:
            notes.append(_note(actor, text, NoteSeverity.info, now))

    elif transition == Transition.reject:
        if not text:
            raise ValidationFailed("A rejection reason is required")
        update["reviewer_id"] = actor.id
        update["reviewed_at"] = now
        update["rejection_reason"] = text
        notes.append(_note(actor, text, NoteSeverity.critical, now))

    elif transition == Transition.publish:
        update["published_at"] = now

    elif transition == Transition.resubmit:
        version = submission.version + 1
        update["version"] = version
        update["rejection_reason"] = None
        update["reviewer_id"] = None
        update["reviewed_at"] = None
        notes.append(_note(actor, text or f"Resubmitted as version {version}", NoteSeverity.info, now))

    update["review_notes"] = notes
    return submission.model_copy(update=update)
