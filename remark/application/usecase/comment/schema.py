"""Public comment projections shared by the comment use cases.

Wire names are camelCase for compatibility with existing embed widgets. No
read projection carries ``email`` or ``secret``.
"""

from datetime import datetime
from typing import Self

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from remark.domain.model import Comment


class WireModel(BaseModel):
    """Response model serialised with camelCase aliases."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class CommentOwner(WireModel):
    """Display identity of a comment's author."""

    name: str
    gravatar: str


class CommentItem(WireModel):
    """Public projection of a comment."""

    id: str = Field(alias="_id")
    author: str
    gravatar: str
    body: str
    parent_id: str | None
    is_verified: bool
    created_at: datetime
    owner: CommentOwner
    is_own: bool

    @classmethod
    def project(
        cls, comment: Comment, viewer_email: str | None, **extra
    ) -> Self:
        """Project a comment for a viewer.

        Args:
            comment: Stored comment
            viewer_email: Email of the viewer, None when anonymous
            **extra: Fields of subclasses (reply counts, embedded replies)
        """
        return cls(
            id=str(comment.id),
            author=comment.author,
            gravatar=comment.gravatar,
            body=comment.body,
            parent_id=str(comment.parent_id) if comment.parent_id else None,
            is_verified=comment.is_verified,
            created_at=comment.created_at,
            owner=CommentOwner(name=comment.author, gravatar=comment.gravatar),
            is_own=comment.is_owned_by(viewer_email),
            **extra,
        )


class TopLevelCommentItem(CommentItem):
    """Top-level comment annotated with its number of direct replies."""

    replies_count: int = 0


class CommentThreadItem(CommentItem):
    """Top-level comment with its direct replies embedded, one level deep."""

    replies: list[CommentItem] = []
