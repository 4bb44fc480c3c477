from datetime import UTC, datetime

import pytest

from trackrate.domain.catalog.model.value import EntityType
from trackrate.domain.engagement.model.like import Like
from trackrate.domain.identity.model.engager import Engager
from trackrate.domain.identity.model.guest import normalize_display_name, normalize_fingerprint
from trackrate.domain.identity.model.role import Role
from trackrate.domain.identity.model.value import GuestId, UserId
from trackrate.domain.shared.error import IdentityConflictError, ValidationError


class TestEngager:
    def test_exactly_one_identity(self):
        Engager.for_user(UserId(1)).ensure_exclusive()
        Engager.for_guest(GuestId(1)).ensure_exclusive()

    def test_both_identities_conflict(self):
        with pytest.raises(IdentityConflictError):
            Engager(user_id=UserId(1), guest_id=GuestId(2)).ensure_exclusive()

    def test_no_identity_conflicts(self):
        with pytest.raises(IdentityConflictError):
            Engager().ensure_exclusive()

    def test_ref(self):
        assert Engager.for_user(UserId(3)).ref == "user:3"
        assert Engager.for_guest(GuestId(7)).ref == "guest:7"

    def test_like_rejects_two_identities(self):
        with pytest.raises(IdentityConflictError):
            Like(
                id=1,
                entity_type=EntityType.TRACK,
                entity_id=4,
                user_id=UserId(1),
                guest_id=GuestId(2),
                created_at=datetime.now(UTC),
            )


class TestNormalization:
    def test_fingerprint_stripped(self):
        assert normalize_fingerprint("  abc ") == "abc"

    @pytest.mark.parametrize("value", [None, "", "   "])
    def test_fingerprint_required(self, value):
        with pytest.raises(ValidationError):
            normalize_fingerprint(value)

    def test_display_name_two_chars_ok(self):
        assert normalize_display_name(" Al ") == "Al"

    def test_display_name_single_char(self):
        with pytest.raises(ValidationError) as exc_info:
            normalize_display_name("A")
        assert exc_info.value.code == "INVALID_DISPLAY_NAME"


class TestRole:
    def test_parse(self):
        assert Role.parse("moderator") is Role.MODERATOR

    def test_parse_rejects_unknown(self):
        with pytest.raises(ValidationError) as exc_info:
            Role.parse("evaluator")
        assert exc_info.value.code == "INVALID_ROLE"
