"""Tests for password hashing and session tokens"""

from datetime import datetime, timedelta, timezone
from types import SimpleNamespace

import pytest
from jose import jwt

from brewshare.config import settings
from brewshare.exceptions import AuthenticationRequired, InvalidToken
from brewshare.utils.auth import (
    create_access_token,
    decode_token,
    get_password_hash,
    issue_session_token,
    verify_password,
    verify_session_token,
)

USER = SimpleNamespace(id=42, email="alice@example.com")


def test_password_hashing():
    """Test password hashing and verification"""

    password = "testpassword123"

    hashed = get_password_hash(password)

    assert hashed != password
    assert verify_password(password, hashed) is True
    assert verify_password("wrongpassword", hashed) is False


def test_password_hashes_are_salted():
    assert get_password_hash("same-password") != get_password_hash("same-password")


def test_session_token_roundtrip():
    """Issued tokens carry the user id and email"""

    claims = verify_session_token(issue_session_token(USER))

    assert claims.user_id == 42
    assert claims.email == "alice@example.com"
    assert claims.jti


def test_session_token_expires_after_one_hour():
    payload = decode_token(issue_session_token(USER))

    assert payload["exp"] - payload["iat"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
    assert settings.ACCESS_TOKEN_EXPIRE_MINUTES == 60


def test_tokens_get_distinct_ids():
    first = verify_session_token(issue_session_token(USER))
    second = verify_session_token(issue_session_token(USER))

    assert first.jti != second.jti


def test_expired_token_is_rejected():
    token = issue_session_token(USER, expires_delta=timedelta(seconds=-5))

    with pytest.raises(InvalidToken):
        verify_session_token(token)


def test_token_signed_with_other_key_is_rejected():
    token = jwt.encode(
        {
            "user_id": 42,
            "email": "alice@example.com",
            "type": "access",
            "jti": "abc",
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        },
        "not-the-server-secret",
        algorithm=settings.ALGORITHM
    )

    with pytest.raises(InvalidToken):
        verify_session_token(token)


def test_garbage_token_is_rejected():
    with pytest.raises(InvalidToken):
        verify_session_token("not.a.token")


def test_token_of_wrong_type_is_rejected():
    token = create_access_token({"user_id": 42, "email": "alice@example.com"})
    payload = decode_token(token)
    payload["type"] = "refresh"
    forged = jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.ALGORITHM)

    with pytest.raises(InvalidToken):
        verify_session_token(forged)


def test_token_without_identity_is_rejected():
    token = create_access_token({"email": "alice@example.com"})

    with pytest.raises(InvalidToken):
        verify_session_token(token)


def test_invalid_token_is_an_authentication_failure():
    """Every token problem surfaces as an authentication failure"""

    assert issubclass(InvalidToken, AuthenticationRequired)
    assert InvalidToken().status_code == 401
