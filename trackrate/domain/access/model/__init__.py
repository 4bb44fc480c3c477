"""Access domain models."""

from .award import Award, AwardId, UserAward
from .capability import Capability
from .decision import ALLOWED, Allowed, Decision, Denied, DenialReason, Ownership
from .permission import PermissionSet, PermissionUpdate

__all__ = [
    "ALLOWED",
    "Allowed",
    "Award",
    "AwardId",
    "Capability",
    "Decision",
    "Denied",
    "DenialReason",
    "Ownership",
    "PermissionSet",
    "PermissionUpdate",
    "UserAward",
]
