# tests/auth/test_token_manager.py
"""Tests for the JWT token manager."""

from datetime import timedelta
from uuid import uuid4

from jose import jwt

from app.configs import settings
from app.managers.token_manager import create_access_token, decode_access_token, token_lifetime


class TestCreateAccessToken:
    def test_token_contains_correct_claims(self) -> None:
        user_id = uuid4()

        token = create_access_token(user_id=user_id, username="testuser", role="viewer")
        token_data = decode_access_token(token)

        assert token_data is not None
        assert token_data.username == "testuser"
        assert token_data.user_id == user_id
        assert token_data.role == "viewer"

    def test_author_tokens_live_shorter(self) -> None:
        assert token_lifetime("author") < token_lifetime("viewer")


class TestDecodeAccessToken:
    def test_expired_token_is_rejected(self) -> None:
        token = create_access_token(
            user_id=uuid4(),
            username="testuser",
            role="author",
            expires_delta=timedelta(seconds=-1),
        )

        assert decode_access_token(token) is None

    def test_garbage_is_rejected(self) -> None:
        assert decode_access_token("not.a.token") is None

    def test_wrong_secret_is_rejected(self) -> None:
        token = create_access_token(user_id=uuid4(), username="testuser", role="author")
        claims = jwt.get_unverified_claims(token)
        forged = jwt.encode(claims, "another-secret", algorithm=settings.ALGORITHM)

        assert decode_access_token(forged) is None

    def test_unknown_role_is_rejected(self) -> None:
        token = create_access_token(user_id=uuid4(), username="testuser", role="author")
        claims = jwt.get_unverified_claims(token)
        claims["role"] = "admin"
        tampered = jwt.encode(
            claims,
            settings.SECRET_KEY.get_secret_value(),
            algorithm=settings.ALGORITHM,
        )

        assert decode_access_token(tampered) is None
