"""Closed set of staff roles."""

from enum import StrEnum

from trackrate.domain.shared.error import ValidationError


class Role(StrEnum):
    """Roles a registered user can hold.

    The set is closed: every consumer must handle all three members.
    """

    SUPER_ADMIN = "super_admin"
    ADMIN = "admin"
    MODERATOR = "moderator"

    @classmethod
    def parse(cls, value: str) -> "Role":
        try:
            return cls(value)
        except ValueError as e:
            allowed = ", ".join(r.value for r in cls)
            raise ValidationError(
                f"Role must be one of: {allowed}",
                field="role",
                code="INVALID_ROLE",
            ) from e
