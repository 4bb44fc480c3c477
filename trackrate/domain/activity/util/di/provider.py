from dishka import Provider, provide

from trackrate.domain.activity.service.activity import ActivityLog
from trackrate.util.di.scope import Scope


class ActivityProvider(Provider):
    activity_log = provide(ActivityLog, scope=Scope.APP)
