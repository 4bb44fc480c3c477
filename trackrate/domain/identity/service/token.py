"""Token service for JWT creation and validation."""

import secrets
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt

from trackrate.config import JwtConfig
from trackrate.domain.identity.model.value import UserId
from trackrate.domain.shared.service import Service

AUDIENCE = "authenticated"


class TokenService(Service):
    """Issues and verifies HS256 access tokens.

    Tokens carry only the subject; role and ban state are always read from
    storage when the token is used.
    """

    config: JwtConfig

    def create_access_token(self, user_id: UserId) -> str:
        now = datetime.now(UTC)
        expires_at = now + timedelta(minutes=self.config.access_token_expire_minutes)

        payload = {
            "sub": str(user_id),
            "aud": AUDIENCE,
            "iat": int(now.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": secrets.token_hex(16),
        }
        return jwt.encode(payload, self.config.secret, algorithm=self.config.algorithm)

    def validate_access_token(self, token: str) -> dict[str, Any]:
        """Decode a token.

        Raises:
            jwt.InvalidTokenError: If token is invalid or expired
        """
        return jwt.decode(
            token,
            self.config.secret,
            algorithms=[self.config.algorithm],
            audience=AUDIENCE,
        )

    @property
    def access_token_expire_seconds(self) -> int:
        return self.config.access_token_expire_minutes * 60
