from dishka import Provider, provide

from trackrate.domain.rating.service.aggregator import RatingAggregator
from trackrate.util.di.scope import Scope


class RatingProvider(Provider):
    aggregator = provide(RatingAggregator, scope=Scope.UOW)
