from .repository import RatingRepository

__all__ = ["RatingRepository"]
