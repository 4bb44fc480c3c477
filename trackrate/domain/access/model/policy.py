"""Authorization matrix - pure evaluation, independent of storage.

Evaluation order:
1. banned actors are denied unconditionally
2. owners of the target are allowed regardless of flags
3. super admins are allowed everything
4. admins and moderators: super-admin-only capabilities are denied,
   staff capabilities are allowed, flag capabilities consult the PermissionSet
"""

from typing import assert_never

from trackrate.domain.access.model.capability import (
    STAFF_CAPABILITIES,
    SUPER_ADMIN_CAPABILITIES,
    Capability,
)
from trackrate.domain.access.model.decision import (
    ALLOWED,
    Decision,
    Denied,
    DenialReason,
    Ownership,
)
from trackrate.domain.access.model.permission import PermissionSet
from trackrate.domain.identity.model.actor import Actor
from trackrate.domain.identity.model.role import Role


def evaluate(
    actor: Actor,
    capability: Capability,
    permissions: PermissionSet | None = None,
    ownership: Ownership | None = None,
) -> Decision:
    """Decide whether ``actor`` may exercise ``capability``."""
    if actor.banned:
        return Denied(DenialReason.BANNED, "Actor is banned")

    if ownership is not None and ownership.is_owned_by(actor.user_id):
        return ALLOWED

    match actor.role:
        case Role.SUPER_ADMIN:
            return ALLOWED
        case Role.ADMIN | Role.MODERATOR:
            return _evaluate_staff(actor, capability, permissions)
        case _:
            assert_never(actor.role)


def _evaluate_staff(
    actor: Actor,
    capability: Capability,
    permissions: PermissionSet | None,
) -> Decision:
    if capability in SUPER_ADMIN_CAPABILITIES:
        return Denied(
            DenialReason.INSUFFICIENT_ROLE,
            f"{capability} requires role {Role.SUPER_ADMIN}",
        )

    if capability in STAFF_CAPABILITIES:
        return ALLOWED

    effective = permissions or PermissionSet.defaults(actor.user_id)
    if effective.allows(capability):
        return ALLOWED
    return Denied(
        DenialReason.INSUFFICIENT_CAPABILITY,
        f"Missing capability {capability}",
    )
