from trackrate.domain.rating.util.di.provider import RatingProvider

__all__ = ["RatingProvider"]
