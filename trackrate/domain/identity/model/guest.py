"""GuestIdentity entity - fingerprint-bound anonymous identity."""

from datetime import datetime

from trackrate.domain.identity.model.value import MIN_DISPLAY_NAME_LENGTH, GuestId
from trackrate.domain.shared.error import ValidationError
from trackrate.domain.shared.model.entity import Entity


class GuestIdentity(Entity):
    """An unauthenticated client identified by a browser fingerprint.

    Invariants:
    - `fingerprint` is globally unique and never changes after creation
    - `display_name` changes only through staff moderation
    """

    id: GuestId
    fingerprint: str
    display_name: str
    created_at: datetime
    updated_at: datetime


def normalize_fingerprint(fingerprint: str | None) -> str:
    """Strip a client fingerprint, rejecting blank values."""
    if not isinstance(fingerprint, str) or not fingerprint.strip():
        raise ValidationError(
            "Fingerprint is required",
            field="fingerprint",
            code="INVALID_FINGERPRINT",
        )
    return fingerprint.strip()


def normalize_display_name(display_name: str | None) -> str:
    """Strip a proposed display name and enforce the minimum length."""
    if not isinstance(display_name, str) or not display_name.strip():
        raise ValidationError(
            "Display name is required",
            field="display_name",
            code="MISSING_DISPLAY_NAME",
        )
    trimmed = display_name.strip()
    if len(trimmed) < MIN_DISPLAY_NAME_LENGTH:
        raise ValidationError(
            f"Display name must be at least {MIN_DISPLAY_NAME_LENGTH} characters",
            field="display_name",
            code="INVALID_DISPLAY_NAME",
        )
    return trimmed
