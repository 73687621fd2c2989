"""Domain model entities for remark."""

from remark.domain.model.comment import Comment, CommentPage, CommentThread

__all__ = [
    "Comment",
    "CommentPage",
    "CommentThread",
]
