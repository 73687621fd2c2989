"""List comments with embedded replies use case (legacy response shape)."""

from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.domain.service import CommentService
from remark.domain.value import PageFilter

from .schema import CommentItem, CommentThreadItem


class ListCommentThreadsRequest(BaseModel):
    """List comment threads request."""

    page_id: str | None = None
    domain: str | None = None
    viewer_email: str | None = None


class ListCommentThreadsUseCase(BaseUseCase):
    """Use case for listing every top-level comment with its replies."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize list comment threads use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(
        self, request: ListCommentThreadsRequest
    ) -> list[CommentThreadItem]:
        """Execute list comment threads flow.

        Args:
            request: Filter values plus optional viewer

        Returns:
            Threads newest first, each with a ``replies`` array newest first

        Raises:
            ValidationError: If neither a page ID nor a domain is usable
        """
        page_filter = PageFilter.parse(request.page_id, request.domain)
        threads = await self.comment_service.get_threads(page_filter)

        return [
            CommentThreadItem.project(
                thread.comment,
                request.viewer_email,
                replies=[
                    CommentItem.project(reply, request.viewer_email)
                    for reply in thread.replies
                ],
            )
            for thread in threads
        ]
