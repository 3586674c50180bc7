"""
Tests for session resolution and password handling
"""

from datetime import timedelta

import jwt
import pytest
from fastapi import HTTPException

from slidewizard.backend import auth
from slidewizard.backend.auth import (
    SessionContext,
    create_access_token,
    hash_password,
    require_user,
    resolve_session,
    verify_password,
)
from slidewizard.backend.db_models import UserInDB


@pytest.fixture
def stored_user(user):
    return UserInDB(**user.model_dump(), hashed_password=hash_password('correct horse'))


@pytest.fixture
def user_lookup(monkeypatch, stored_user):
    users = {stored_user.email: stored_user}
    monkeypatch.setattr(auth, 'get_user_by_email', lambda email: users.get(email))
    return users


class TestPasswords:
    def test_hash_and_verify(self):
        hashed = hash_password('s3cret')
        assert hashed != 's3cret'
        assert verify_password('s3cret', hashed)
        assert not verify_password('wrong', hashed)


class TestResolveSession:
    """Tests for resolve_session."""

    def test_valid_token(self, user_lookup, stored_user):
        token = create_access_token({'sub': stored_user.email})
        session = resolve_session(token)

        assert session.is_authenticated
        assert session.user_id == stored_user.id
        assert not hasattr(session.user, 'hashed_password')

    @pytest.mark.parametrize('token', [None, '', 'not-a-jwt'])
    def test_missing_or_garbage_token(self, user_lookup, token):
        assert resolve_session(token) == SessionContext.anonymous()

    def test_expired_token(self, user_lookup, stored_user):
        token = create_access_token({'sub': stored_user.email}, expires_delta=timedelta(minutes=-5))
        assert not resolve_session(token).is_authenticated

    def test_wrong_signature(self, user_lookup, stored_user):
        token = jwt.encode({'sub': stored_user.email}, 'some-other-key', algorithm='HS256')
        assert not resolve_session(token).is_authenticated

    def test_unknown_user(self, user_lookup):
        token = create_access_token({'sub': 'ghost@example.com'})
        assert not resolve_session(token).is_authenticated

    def test_token_without_subject(self, user_lookup):
        assert not resolve_session(create_access_token({'role': 'admin'})).is_authenticated

    def test_inactive_user(self, user_lookup, stored_user):
        stored_user.is_active = False
        token = create_access_token({'sub': stored_user.email})
        assert not resolve_session(token).is_authenticated


class TestRequireUser:
    def test_anonymous_is_unauthorized(self):
        with pytest.raises(HTTPException) as exc_info:
            require_user(SessionContext.anonymous())
        assert exc_info.value.status_code == 401
        assert exc_info.value.detail == 'Unauthorized'

    def test_authenticated(self, user):
        assert require_user(SessionContext(user=user)) is user


class TestAuthenticateUser:
    def test_correct_password(self, user_lookup, stored_user):
        assert auth.authenticate_user(stored_user.email, 'correct horse') == stored_user

    def test_wrong_password(self, user_lookup, stored_user):
        assert auth.authenticate_user(stored_user.email, 'battery staple') is None

    def test_unknown_email(self, user_lookup):
        assert auth.authenticate_user('ghost@example.com', 'whatever') is None
