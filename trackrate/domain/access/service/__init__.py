from trackrate.domain.access.service.admin import AdminService
from trackrate.domain.access.service.guard import AuthorizationGuard

__all__ = ["AdminService", "AuthorizationGuard"]
