"""AuthorizationGuard - evaluates the role and capability matrix for an actor."""

import logging

from trackrate.domain.access.model.capability import Capability
from trackrate.domain.access.model.decision import Decision, Denied, Ownership
from trackrate.domain.access.model.policy import evaluate
from trackrate.domain.access.port.repository import PermissionRepository
from trackrate.domain.identity.model.actor import Actor
from trackrate.domain.shared.error import AuthorizationError
from trackrate.domain.shared.service import Service

logger = logging.getLogger(__name__)


class AuthorizationGuard(Service):
    """Loads the actor's PermissionSet when a flag capability is asked for and
    delegates the decision to the pure policy."""

    permissions: PermissionRepository

    async def authorize(
        self,
        actor: Actor,
        capability: Capability,
        ownership: Ownership | None = None,
    ) -> Decision:
        permissions = None
        if capability.is_flag and not actor.banned:
            permissions = await self.permissions.get(actor.user_id)

        decision = evaluate(actor, capability, permissions, ownership)

        if isinstance(decision, Denied):
            logger.warning(
                "Authorization denied: user=%s role=%s capability=%s reason=%s",
                actor.user_id,
                actor.role,
                capability,
                decision.reason,
            )
        else:
            logger.info(
                "Authorization allowed: user=%s capability=%s",
                actor.user_id,
                capability,
            )
        return decision

    async def require(
        self,
        actor: Actor,
        capability: Capability,
        ownership: Ownership | None = None,
    ) -> None:
        """Raise AuthorizationError unless the actor is allowed."""
        decision = await self.authorize(actor, capability, ownership)
        if isinstance(decision, Denied):
            raise AuthorizationError(
                f"Access denied: {decision.message}",
                code=decision.reason.code,
                reason=decision.reason.value,
            )
