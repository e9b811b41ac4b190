# core/errors.py

from typing import Iterable, Optional


# ============================================================
# Error taxonomy
# ============================================================
class GameHubError(Exception):
    """
    Base class for every failure the access-control and moderation core
    reports. Each kind maps onto one HTTP status in main.py.

    ``retryable`` tells the caller whether repeating the identical request
    (from a fresh load) can succeed.
    """

    status_code: int = 500
    kind: str = "error"
    retryable: bool = False
    default_detail: str = "Request failed"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class Unauthorized(GameHubError):
    """No actor, or an actor without a usable identity/role."""

    status_code = 401
    kind = "unauthorized"
    default_detail = "Authentication required"


class Forbidden(GameHubError):
    """
    Authenticated but lacking the permission, role or ownership.

    The client-facing detail is always generic so responses never reveal
    which permission was missing.
    """

    status_code = 403
    kind = "forbidden"
    default_detail = "Access denied"

    def __init__(self, reason: Optional[str] = None):
        super().__init__(self.default_detail)
        # Server-side only (logs)
        self.reason = reason


class NotFound(GameHubError):
    status_code = 404
    kind = "not_found"
    default_detail = "Submission not found"


class InvalidTransition(GameHubError):
    """Requested transition is not legal from the submission's current status."""

    status_code = 409
    kind = "invalid_transition"
    default_detail = "Transition not allowed"

    def __init__(
        self,
        detail: Optional[str] = None,
        *,
        current_status: Optional[str] = None,
        allowed: Iterable[str] = (),
    ):
        super().__init__(detail)
        self.current_status = current_status
        self.allowed = list(allowed)


class ValidationFailed(GameHubError):
    status_code = 422
    kind = "validation_failed"
    default_detail = "Validation failed"


class Conflict(GameHubError):
    """Lost an optimistic-concurrency race; retry from a fresh load."""

    status_code = 409
    kind = "conflict"
    retryable = True
    default_detail = "Submission was modified concurrently, reload and retry"


class Unavailable(GameHubError):
    """Transient infrastructure failure or timeout; nothing was written."""

    status_code = 503
    kind = "unavailable"
    retryable = True
    default_detail = "Submission store unavailable, retry later"


# ============================================================
# Supabase error helpers
# ============================================================
def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Case 1 — PostgREST APIError / GoTrue errors expose .message
    message = getattr(error, "message", None)
    if message:
        return str(message)

    # Case 2 — errors with args (common)
    if error.args:
        return str(error.args[0])

    # Case 3 — Plain string fallback
    return str(error) or error.__class__.__name__
