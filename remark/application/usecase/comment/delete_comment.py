"""Delete comment use case."""

from pydantic import BaseModel, Field

from remark.application.usecase.base import BaseUseCase
from remark.domain.service import CommentService
from remark.domain.value import parse_comment_id

from .schema import WireModel


class DeleteCommentRequest(BaseModel):
    """Delete comment request."""

    comment_id: str
    secret: str | None = None
    viewer_email: str | None = None


class DeleteCommentResponse(WireModel):
    """Delete comment response."""

    id: str = Field(alias="_id")


class DeleteCommentUseCase(BaseUseCase):
    """Use case for deleting a comment by secret or as its author.

    Replies of the deleted comment stay in place.
    """

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Raises:
            ValidationError: If the comment ID is malformed
            NotAuthorizedError: If neither a secret nor a viewer is given
            NotFoundError: If nothing matched
        """
        comment_id = parse_comment_id(request.comment_id)
        await self.comment_service.delete_comment(
            comment_id,
            secret=request.secret,
            viewer_email=request.viewer_email,
        )
        return DeleteCommentResponse(id=str(comment_id))
