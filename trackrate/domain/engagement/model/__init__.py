"""Engagement domain models."""

from .comment import Comment, CommentId, CommentView
from .like import Like, LikeResult, LikeStatus

__all__ = [
    "Comment",
    "CommentId",
    "CommentView",
    "Like",
    "LikeResult",
    "LikeStatus",
]
