from dishka import Provider, provide

from trackrate.domain.engagement.service.ledger import EngagementLedger
from trackrate.util.di.scope import Scope


class EngagementProvider(Provider):
    ledger = provide(EngagementLedger, scope=Scope.UOW)
