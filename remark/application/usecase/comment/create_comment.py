"""Create comment use case."""

from pydantic import BaseModel

from remark.application.usecase.base import BaseUseCase
from remark.domain.service import CommentService
from remark.domain.value import parse_comment_id

from .schema import CommentItem


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    page_url: str
    page_id: str
    body: str
    author: str
    email: str
    parent_id: str | None = None  # Parent comment ID for replies
    viewer_email: str | None = None  # Email from the viewer token, if any


class CreateCommentResponse(CommentItem):
    """Created comment as returned to its author.

    Unlike read projections it includes the email and the deletion secret.
    """

    page_id: str
    page_url: str
    domain: str
    email: str
    secret: str


class CreateCommentUseCase(BaseUseCase):
    """Use case for creating a comment on a page or replying to another comment."""

    def __init__(self, comment_service: CommentService) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
        """
        self.comment_service = comment_service

    async def execute(self, request: CreateCommentRequest) -> CreateCommentResponse:
        """Execute create comment flow.

        Args:
            request: Create comment request

        Returns:
            Created comment with its deletion secret

        Raises:
            ValidationError: If the parent ID is malformed or the submission
                is invalid
            NotFoundError: If the parent comment does not exist
        """
        parent_id = parse_comment_id(request.parent_id) if request.parent_id else None

        comment = await self.comment_service.create_comment(
            page_url=request.page_url,
            page_id=request.page_id,
            body=request.body,
            author=request.author,
            email=request.email,
            parent_id=parent_id,
            viewer_email=request.viewer_email,
        )

        # The creator always owns what they just posted
        return CreateCommentResponse.project(
            comment,
            comment.email,
            page_id=comment.page_id,
            page_url=comment.page_url,
            domain=comment.domain,
            email=comment.email,
            secret=comment.secret,
        )
