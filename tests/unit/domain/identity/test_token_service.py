"""Tests for TokenService."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from trackrate.config import JwtConfig
from trackrate.domain.identity.model.value import UserId
from trackrate.domain.identity.service.token import AUDIENCE, TokenService

SECRET = "test-secret-key-that-is-long-enough-for-hs256"


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(config=JwtConfig(secret=SECRET, access_token_expire_minutes=5))


class TestTokenService:
    def test_subject_is_user_id(self, token_service: TokenService):
        token = token_service.create_access_token(UserId(42))

        payload = token_service.validate_access_token(token)

        assert payload["sub"] == "42"
        assert payload["aud"] == AUDIENCE
        assert payload["exp"] - payload["iat"] == 300

    def test_tokens_are_unique(self, token_service: TokenService):
        first = token_service.create_access_token(UserId(1))
        second = token_service.create_access_token(UserId(1))
        assert first != second

    def test_role_is_not_embedded(self, token_service: TokenService):
        payload = token_service.validate_access_token(token_service.create_access_token(UserId(1)))
        assert "role" not in payload

    def test_expired_token(self, token_service: TokenService):
        past = datetime.now(UTC) - timedelta(hours=1)
        token = jwt.encode(
            {"sub": "1", "aud": AUDIENCE, "iat": past, "exp": past + timedelta(minutes=1)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(jwt.ExpiredSignatureError):
            token_service.validate_access_token(token)

    def test_wrong_secret(self, token_service: TokenService):
        other = TokenService(config=JwtConfig(secret="another-secret-key-also-long-enough-x"))
        token = other.create_access_token(UserId(1))

        with pytest.raises(jwt.InvalidTokenError):
            token_service.validate_access_token(token)

    def test_wrong_audience(self, token_service: TokenService):
        token = jwt.encode(
            {"sub": "1", "aud": "someone-else", "exp": datetime.now(UTC) + timedelta(minutes=1)},
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(jwt.InvalidAudienceError):
            token_service.validate_access_token(token)

    def test_expire_seconds(self, token_service: TokenService):
        assert token_service.access_token_expire_seconds == 300
