"""Issue access tokens for local development."""

import asyncio
import sys

from trackrate.application.di import create_container
from trackrate.cli.console import get_console
from trackrate.config import Config
from trackrate.domain.identity.model.value import UserId
from trackrate.domain.identity.service.identity import IdentityService
from trackrate.domain.identity.service.token import TokenService
from trackrate.domain.shared.error import TrackRateError
from trackrate.util.di.scope import Scope


async def _issue(config: Config, user_id: UserId) -> str:
    container = create_container(config)
    try:
        async with container(scope=Scope.UOW) as uow:
            identity = await uow.get(IdentityService)
            user = await identity.get_user(user_id)
            tokens = await uow.get(TokenService)
            return tokens.create_access_token(user.id)
    finally:
        await container.close()


def token(user_id: int) -> None:
    """Print a bearer token for an existing user.

    Args:
        user_id: Id of the user the token authenticates.
    """
    console = get_console()
    config = Config()  # type: ignore[call-arg]
    if not config.auth.jwt.secret:
        console.error("No JWT secret configured", hint="Set TRACKRATE_AUTH__JWT__SECRET")
        sys.exit(1)

    try:
        access_token = asyncio.run(_issue(config, UserId(user_id)))
    except TrackRateError as e:
        console.error(e.message, hint=e.code)
        sys.exit(1)
    console.print(access_token)
