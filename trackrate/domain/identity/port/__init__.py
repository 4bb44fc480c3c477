from trackrate.domain.identity.port.repository import GuestRepository, UserRepository

__all__ = ["GuestRepository", "UserRepository"]
