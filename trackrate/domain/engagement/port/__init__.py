from .repository import CommentRepository, LikeRepository

__all__ = ["CommentRepository", "LikeRepository"]
