"""DI provider for the identity domain."""

import logging

import jwt
from dishka import Provider, from_context, provide
from starlette.requests import Request

from trackrate.config import Config
from trackrate.domain.identity.model.actor import Actor, SessionContext
from trackrate.domain.identity.model.value import UserId
from trackrate.domain.identity.port.repository import UserRepository
from trackrate.domain.identity.service.identity import IdentityService
from trackrate.domain.identity.service.token import TokenService
from trackrate.domain.shared.error import AuthorizationError
from trackrate.util.di.scope import Scope

logger = logging.getLogger(__name__)

FINGERPRINT_HEADER = "X-Guest-Fingerprint"


class IdentityProvider(Provider):
    request = from_context(provides=Request, scope=Scope.UOW)

    identity_service = provide(IdentityService, scope=Scope.UOW)

    @provide(scope=Scope.APP)
    def get_token_service(self, config: Config) -> TokenService:
        return TokenService(config=config.auth.jwt)

    @provide(scope=Scope.UOW)
    async def get_session_context(
        self,
        request: Request,
        token_service: TokenService,
        users: UserRepository,
    ) -> SessionContext:
        """Resolve the caller from the bearer token and the guest fingerprint header.

        The Actor's role and ban state come from the stored user row; nothing
        in the token beyond its subject is trusted.
        """
        fingerprint = request.headers.get(FINGERPRINT_HEADER)

        auth_header = request.headers.get("Authorization")
        if not auth_header or not auth_header.startswith("Bearer "):
            return SessionContext(fingerprint=fingerprint)

        token = auth_header[7:]  # Remove "Bearer " prefix
        try:
            payload = token_service.validate_access_token(token)
            user_id = UserId(int(payload["sub"]))
        except jwt.ExpiredSignatureError as e:
            raise AuthorizationError("Token has expired", code="TOKEN_EXPIRED") from e
        except (jwt.InvalidTokenError, KeyError, ValueError) as e:
            raise AuthorizationError("Invalid token", code="INVALID_TOKEN") from e

        user = await users.get(user_id)
        if user is None:
            logger.warning("Token subject does not exist: user_id=%s", user_id)
            raise AuthorizationError("Invalid token", code="INVALID_TOKEN")

        logger.debug("Actor resolved: user_id=%s role=%s", user.id, user.role)
        return SessionContext(actor=user.to_actor(), fingerprint=fingerprint)

    @provide(scope=Scope.UOW)
    def get_actor(self, context: SessionContext) -> Actor:
        """The authenticated actor. Raises if the request has no bearer session."""
        if context.actor is None:
            raise AuthorizationError("Authentication required", code="MISSING_TOKEN")
        return context.actor
