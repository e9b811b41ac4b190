# core/submission_store.py

"""
Persistence for game submissions.

Writes are optimistic: ``save`` only succeeds when the stored row still has
the status the caller loaded (``expected_status``) and the same revision.
Otherwise the caller lost a race and gets ``Conflict``.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from threading import Lock
from typing import Dict, List, Optional

from core.config import settings
from core.errors import Conflict, NotFound, Unavailable, extract_supabase_error
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from models.enums import SubmissionStatus
from models.submission import GameSubmission


class SubmissionStore(ABC):
    @abstractmethod
    def load(self, submission_id: str) -> GameSubmission:
        """Return the stored submission or raise NotFound."""

    @abstractmethod
    def create(self, submission: GameSubmission) -> GameSubmission:
        ...

    @abstractmethod
    def save(self, submission: GameSubmission, expected_status: SubmissionStatus) -> GameSubmission:
        """Persist ``submission``; raise Conflict if the row moved since it was loaded."""

    @abstractmethod
    def delete(self, submission_id: str) -> None:
        ...

    @abstractmethod
    def list(
        self,
        developer_id: Optional[str] = None,
        status: Optional[SubmissionStatus] = None,
    ) -> List[GameSubmission]:
        ...


# ============================================================
# In-memory store (local dev / tests)
# ============================================================
class InMemorySubmissionStore(SubmissionStore):
    """Thread-safe process-local store. Returned objects are copies."""

    def __init__(self, timeout_seconds: Optional[float] = None):
        self._rows: Dict[str, GameSubmission] = {}
        self._lock = Lock()
        self._timeout = timeout_seconds if timeout_seconds is not None else settings.STORE_TIMEOUT_SECONDS

    @contextmanager
    def _locked(self):
        if not self._lock.acquire(timeout=self._timeout):
            logger.error(f"Submission store lock not acquired within {self._timeout}s")
            raise Unavailable()
        try:
            yield
        finally:
            self._lock.release()

    def load(self, submission_id: str) -> GameSubmission:
        with self._locked():
            row = self._rows.get(submission_id)
            if row is None:
                raise NotFound()
            return row.model_copy(deep=True)

    def create(self, submission: GameSubmission) -> GameSubmission:
        with self._locked():
            if submission.id in self._rows:
                raise Conflict("Submission already exists")
            self._rows[submission.id] = submission.model_copy(deep=True)
            return submission.model_copy(deep=True)

    def save(self, submission: GameSubmission, expected_status: SubmissionStatus) -> GameSubmission:
        with self._locked():
            current = self._rows.get(submission.id)
            if current is None:
                raise NotFound()
            if current.status != expected_status or current.revision != submission.revision:
                logger.warning(
                    f"Write conflict on submission {submission.id}: "
                    f"expected {expected_status.value}@{submission.revision}, "
                    f"found {current.status.value}@{current.revision}"
                )
                raise Conflict()
            stored = submission.model_copy(deep=True, update={"revision": current.revision + 1})
            self._rows[submission.id] = stored
            return stored.model_copy(deep=True)

    def delete(self, submission_id: str) -> None:
        with self._locked():
            if self._rows.pop(submission_id, None) is None:
                raise NotFound()

    def list(
        self,
        developer_id: Optional[str] = None,
        status: Optional[SubmissionStatus] = None,
    ) -> List[GameSubmission]:
        with self._locked():
            rows = [
                row.model_copy(deep=True)
                for row in self._rows.values()
                if (developer_id is None or row.developer_id == developer_id)
                and (status is None or row.status == status)
            ]
        return sorted(rows, key=lambda row: row.created_at, reverse=True)


# ============================================================
# Supabase store (one row per submission)
# ============================================================
class SupabaseSubmissionStore(SubmissionStore):
    """
    Review notes live in a JSON column on the submission row, so a status
    change and its note are written by a single UPDATE.
    """

    def __init__(self, client=None, table: Optional[str] = None):
        self._client = client
        self.table = table or settings.SUBMISSIONS_TABLE

    def _table(self):
        client = self._client or get_supabase_client()
        if client is None:
            raise Unavailable("Supabase client not configured")
        return client.table(self.table)

    @staticmethod
    def _execute(query, operation: str):
        try:
            return query.execute()
        except Exception as e:
            detail = extract_supabase_error(e)
            logger.error(f"{operation}: {detail}")
            raise Unavailable() from e

    @staticmethod
    def _to_row(submission: GameSubmission) -> dict:
        return submission.model_dump(mode="json")

    @staticmethod
    def _from_row(row: dict) -> GameSubmission:
        return GameSubmission.model_validate(row)

    def load(self, submission_id: str) -> GameSubmission:
        result = self._execute(
            self._table().select("*").eq("id", submission_id).limit(1),
            "Failed to load submission",
        )
        if not result.data:
            raise NotFound()
        return self._from_row(result.data[0])

    def create(self, submission: GameSubmission) -> GameSubmission:
        result = self._execute(
            self._table().insert(self._to_row(submission)),
            "Failed to create submission",
        )
        return self._from_row(result.data[0]) if result.data else submission

    def save(self, submission: GameSubmission, expected_status: SubmissionStatus) -> GameSubmission:
        row = self._to_row(submission)
        row["revision"] = submission.revision + 1

        result = self._execute(
            self._table()
            .update(row)
            .eq("id", submission.id)
            .eq("status", expected_status.value)
            .eq("revision", submission.revision),
            "Failed to save submission",
        )
        if result.data:
            return self._from_row(result.data[0])

        # Zero rows matched: either the row is gone or someone else wrote first
        self.load(submission.id)
        logger.warning(
            f"Write conflict on submission {submission.id}: expected {expected_status.value}@{submission.revision}"
        )
        raise Conflict()

    def delete(self, submission_id: str) -> None:
        result = self._execute(
            self._table().delete().eq("id", submission_id),
            "Failed to delete submission",
        )
        if not result.data:
            raise NotFound()

    def list(
        self,
        developer_id: Optional[str] = None,
        status: Optional[SubmissionStatus] = None,
    ) -> List[GameSubmission]:
        query = self._table().select("*")
        if developer_id:
            query = query.eq("developer_id", developer_id)
        if status:
            query = query.eq("status", status.value)
        result = self._execute(query.order("created_at", desc=True), "Failed to list submissions")
        return [self._from_row(row) for row in (result.data or [])]


# ============================================================
# Process-wide store
# ============================================================
_store: Optional[SubmissionStore] = None


def get_submission_store() -> SubmissionStore:
    """FastAPI dependency; backend chosen by SUBMISSION_STORE."""
    global _store
    if _store is None:
        if settings.SUBMISSION_STORE == "memory":
            _store = InMemorySubmissionStore()
        else:
            _store = SupabaseSubmissionStore()
        logger.info(f"Using {type(_store).__name__} for submissions")
    return _store
