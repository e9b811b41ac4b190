# tests/conftest.py

"""
Pytest configuration and shared fixtures for testing.
"""

import os

# Keep submissions in-process for the whole test session
os.environ.setdefault("SUBMISSION_STORE", "memory")

import pytest
from fastapi.testclient import TestClient
from typing import Generator

from main import create_app
from core.submission_store import InMemorySubmissionStore, get_submission_store
from dependencies.auth import get_current_actor
from models.actor import Actor
from models.enums import Role
from models.submission import GameSubmissionCreate, SubmissionMetadata
from services.moderation import ModerationWorkbench


# ------------------------------------------------------------------
# Actors
# ------------------------------------------------------------------
@pytest.fixture
def developer():
    return Actor(id="dev-1", role=Role.game_developer, username="dana")


@pytest.fixture
def other_developer():
    return Actor(id="dev-2", role=Role.game_developer, username="omar")


@pytest.fixture
def player():
    return Actor(id="player-1", role=Role.player, username="pat")


@pytest.fixture
def admin():
    return Actor(id="admin-1", role=Role.admin, username="ada")


# ------------------------------------------------------------------
# Store + workbench
# ------------------------------------------------------------------
@pytest.fixture
def store():
    return InMemorySubmissionStore(timeout_seconds=1.0)


@pytest.fixture
def workbench(store):
    return ModerationWorkbench(store)


@pytest.fixture
def draft_payload():
    return GameSubmissionCreate(
        metadata=SubmissionMetadata(
            title="Pixel Quest",
            description="A tiny platformer",
            tags=["platformer", "retro"],
        )
    )


@pytest.fixture
def draft(workbench, developer, draft_payload):
    """A fresh draft owned by ``developer``."""
    return workbench.create_draft(developer, draft_payload)


@pytest.fixture
def in_review(workbench, developer, admin, draft):
    workbench.submit(developer, draft.id)
    return workbench.start_review(admin, draft.id)


# ------------------------------------------------------------------
# HTTP
# ------------------------------------------------------------------
class ActorSwitch:
    """Mutable holder so a test can change who is calling between requests."""

    def __init__(self):
        self.actor = None

    def __call__(self):
        return self.actor


@pytest.fixture
def as_actor():
    return ActorSwitch()


@pytest.fixture(scope="function")
def app(store, as_actor):
    """Create a test FastAPI application instance."""
    application = create_app()
    application.dependency_overrides[get_submission_store] = lambda: store
    application.dependency_overrides[get_current_actor] = as_actor
    yield application
    application.dependency_overrides = {}


@pytest.fixture(scope="function")
def client(app) -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client
