from trackrate.domain.rating.service.aggregator import RatingAggregator

__all__ = ["RatingAggregator"]
