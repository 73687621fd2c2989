"""List replies use case."""

from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.domain.service import CommentService
from remark.domain.value import Pagination, parse_comment_id

from .schema import CommentItem, WireModel


class ListRepliesRequest(BaseModel):
    """List replies request."""

    comment_id: str
    limit: str | None = None
    skip: str | None = None
    viewer_email: str | None = None


class ListRepliesResponse(WireModel):
    """One page of direct replies, oldest first."""

    replies: list[CommentItem]
    total: int
    limit: int
    skip: int
    has_more: bool


class ListRepliesUseCase(BaseUseCase):
    """Use case for listing the direct replies of a comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize list replies use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: ListRepliesRequest) -> ListRepliesResponse:
        """Execute list replies flow.

        The parent is not required to exist; an unknown or deleted parent
        simply has no (or orphaned) replies.

        Args:
            request: Parent comment ID, pagination and optional viewer

        Returns:
            Page of replies without ``repliesCount``

        Raises:
            ValidationError: If the comment ID is malformed
        """
        parent_id = parse_comment_id(request.comment_id)
        pagination = Pagination.parse(request.limit, request.skip)

        page = await self.comment_service.get_replies(parent_id, pagination)

        return ListRepliesResponse(
            replies=[
                CommentItem.project(reply, request.viewer_email)
                for reply in page.comments
            ],
            total=page.total,
            limit=page.limit,
            skip=page.skip,
            has_more=page.has_more,
        )
