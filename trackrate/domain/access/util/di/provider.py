from dishka import Provider, provide

from trackrate.domain.access.service.admin import AdminService
from trackrate.domain.access.service.guard import AuthorizationGuard
from trackrate.util.di.scope import Scope


class AccessProvider(Provider):
    """DI provider for authorization and administration services."""

    guard = provide(AuthorizationGuard, scope=Scope.UOW)
    admin_service = provide(AdminService, scope=Scope.UOW)
