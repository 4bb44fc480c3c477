from .value import ArtistId, EntityType, TrackId

__all__ = ["ArtistId", "EntityType", "TrackId"]
