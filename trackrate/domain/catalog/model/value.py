"""Identifiers for catalog entities referenced by ratings and engagement."""

from enum import StrEnum
from typing import NewType

ArtistId = NewType("ArtistId", int)
TrackId = NewType("TrackId", int)


class EntityType(StrEnum):
    """Kinds of catalog entity that can be liked."""

    ARTIST = "artist"
    TRACK = "track"

    @property
    def not_found_code(self) -> str:
        return f"{self.value.upper()}_NOT_FOUND"
