# tests/test_auth.py

"""
Tests for bearer-token → Actor resolution.
"""

import pytest
from fastapi.security import HTTPAuthorizationCredentials
from unittest.mock import Mock, patch

from core.errors import Unauthorized
from dependencies.auth import get_current_actor, get_optional_actor
from models.enums import Role


def bearer(token="test-token"):
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


def mock_auth_user(role="game_developer", user_id="dev-1"):
    user = Mock()
    user.id = user_id
    user.email = "dev@example.com"
    user.user_metadata = {"role": role, "username": "dana"}
    return Mock(user=user)


def test_valid_token_resolves_actor():
    with patch("dependencies.auth.get_supabase_client") as mock_supabase:
        mock_client = Mock()
        mock_client.auth.get_user.return_value = mock_auth_user()
        mock_supabase.return_value = mock_client

        actor = get_current_actor(bearer())

        mock_client.auth.get_user.assert_called_once_with("test-token")
        assert actor.id == "dev-1"
        assert actor.role == Role.game_developer
        assert actor.username == "dana"


def test_unknown_role_yields_roleless_actor():
    with patch("dependencies.auth.get_supabase_client") as mock_supabase:
        mock_client = Mock()
        mock_client.auth.get_user.return_value = mock_auth_user(role="super_admin")
        mock_supabase.return_value = mock_client

        actor = get_current_actor(bearer())
        assert actor.role is None


def test_missing_token_is_unauthorized():
    with pytest.raises(Unauthorized):
        get_current_actor(None)


def test_invalid_token_is_unauthorized():
    with patch("dependencies.auth.get_supabase_client") as mock_supabase:
        mock_client = Mock()
        mock_client.auth.get_user.side_effect = Exception("invalid JWT")
        mock_supabase.return_value = mock_client

        with pytest.raises(Unauthorized):
            get_current_actor(bearer("bad"))
        assert get_optional_actor(bearer("bad")) is None


def test_optional_actor_without_credentials():
    assert get_optional_actor(None) is None
