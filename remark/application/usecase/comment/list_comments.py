"""List top-level comments use case."""

import logfire
from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.domain.service import CommentService
from remark.domain.value import PageFilter, Pagination, SortOrder

from .schema import TopLevelCommentItem, WireModel


class ListCommentsRequest(BaseModel):
    """List top-level comments request.

    Raw query values; parsing and clamping happen in the use case.
    """

    page_id: str | None = None
    domain: str | None = None
    limit: str | None = None
    skip: str | None = None
    sort: str | None = None
    viewer_email: str | None = None


class ListCommentsResponse(WireModel):
    """One page of top-level comments."""

    comments: list[TopLevelCommentItem]
    total: int
    limit: int
    skip: int
    has_more: bool


class ListCommentsUseCase(BaseUseCase):
    """Use case for listing top-level comments with their reply counts."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize list comments use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: ListCommentsRequest) -> ListCommentsResponse:
        """Execute list top-level comments flow.

        Args:
            request: Filter, pagination and sort values plus optional viewer

        Returns:
            Page of top-level comments, each with ``repliesCount`` and ``isOwn``

        Raises:
            ValidationError: If neither a page ID nor a domain is usable
            StorageError: If the comment store fails
        """
        page_filter = PageFilter.parse(request.page_id, request.domain)
        pagination = Pagination.parse(request.limit, request.skip)
        sort = SortOrder.parse(request.sort)

        page = await self.comment_service.get_top_level_comments(
            page_filter, pagination, sort
        )

        items = [
            TopLevelCommentItem.project(
                comment,
                request.viewer_email,
                replies_count=page.replies_count(comment.id),
            )
            for comment in page.comments
        ]
        logfire.debug(
            "Top-level comments projected",
            count=len(items),
            authenticated=bool(request.viewer_email),
        )

        return ListCommentsResponse(
            comments=items,
            total=page.total,
            limit=page.limit,
            skip=page.skip,
            has_more=page.has_more,
        )
