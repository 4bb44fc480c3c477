"""Capabilities checked by the authorization guard."""

from enum import StrEnum


class Capability(StrEnum):
    """Every authorization-relevant action.

    Flag capabilities map one-to-one onto PermissionSet columns.
    """

    # Per-user capability flags
    EDIT_OTHERS_RATINGS = "can_edit_others_ratings"
    DELETE_OTHERS_RATINGS = "can_delete_others_ratings"
    VERIFY_ARTISTS = "can_verify_artists"
    ADD_ARTISTS = "can_add_artists"
    DELETE_ARTISTS = "can_delete_artists"

    # Granted by any staff role
    ENGAGE = "engage"
    MODERATE_COMMENTS = "moderate_comments"
    RENAME_GUESTS = "rename_guests"

    # Super admin only
    MANAGE_USERS = "manage_users"
    MANAGE_PERMISSIONS = "manage_permissions"
    MANAGE_BANS = "manage_bans"
    MANAGE_AWARDS = "manage_awards"
    VIEW_ACTIVITY = "view_activity"
    RECONCILE_COUNTERS = "reconcile_counters"

    @property
    def is_flag(self) -> bool:
        return self in FLAG_CAPABILITIES


FLAG_CAPABILITIES: frozenset[Capability] = frozenset(
    {
        Capability.EDIT_OTHERS_RATINGS,
        Capability.DELETE_OTHERS_RATINGS,
        Capability.VERIFY_ARTISTS,
        Capability.ADD_ARTISTS,
        Capability.DELETE_ARTISTS,
    }
)

STAFF_CAPABILITIES: frozenset[Capability] = frozenset(
    {
        Capability.ENGAGE,
        Capability.MODERATE_COMMENTS,
        Capability.RENAME_GUESTS,
    }
)

SUPER_ADMIN_CAPABILITIES: frozenset[Capability] = frozenset(
    {
        Capability.MANAGE_USERS,
        Capability.MANAGE_PERMISSIONS,
        Capability.MANAGE_BANS,
        Capability.MANAGE_AWARDS,
        Capability.VIEW_ACTIVITY,
        Capability.RECONCILE_COUNTERS,
    }
)
