from trackrate.domain.access.port.repository import AwardRepository, PermissionRepository

__all__ = ["AwardRepository", "PermissionRepository"]
