"""Comment use cases."""

from .create_comment import (
    CreateCommentRequest,
    CreateCommentResponse,
    CreateCommentUseCase,
)
from .delete_comment import (
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from .list_comment_threads import (
    ListCommentThreadsRequest,
    ListCommentThreadsUseCase,
)
from .list_comments import (
    ListCommentsRequest,
    ListCommentsResponse,
    ListCommentsUseCase,
)
from .list_replies import ListRepliesRequest, ListRepliesResponse, ListRepliesUseCase
from .schema import CommentItem, CommentOwner, CommentThreadItem, TopLevelCommentItem

__all__ = [
    "CommentItem",
    "CommentOwner",
    "CommentThreadItem",
    "TopLevelCommentItem",
    "CreateCommentRequest",
    "CreateCommentResponse",
    "CreateCommentUseCase",
    "DeleteCommentRequest",
    "DeleteCommentResponse",
    "DeleteCommentUseCase",
    "ListCommentThreadsRequest",
    "ListCommentThreadsUseCase",
    "ListCommentsRequest",
    "ListCommentsResponse",
    "ListCommentsUseCase",
    "ListRepliesRequest",
    "ListRepliesResponse",
    "ListRepliesUseCase",
]
