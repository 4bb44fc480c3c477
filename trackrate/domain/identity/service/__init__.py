from trackrate.domain.identity.service.identity import IdentityService
from trackrate.domain.identity.service.token import TokenService

__all__ = ["IdentityService", "TokenService"]
