"""Comment entity.

Comments belong to exactly one page and reference their parent, if any, by
ID within the same collection. The query engine models a single level of
nesting: a reply is any comment with a parent.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from remark.domain.model.common import DomainModel
from remark.domain.value import CommentId


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Comment(DomainModel):
    """Comment entity.

    ``email`` and ``secret`` are stored but never part of a public projection.
    """

    id: CommentId
    parent_id: Optional[CommentId] = None
    page_id: str = Field(min_length=1, max_length=500)
    domain: str = Field(max_length=253)
    page_url: str
    author: str
    email: str
    gravatar: str
    body: str
    is_verified: bool = False
    secret: str
    created_at: datetime = Field(default_factory=_utcnow)
    updated_at: datetime = Field(default_factory=_utcnow)

    def is_owned_by(self, viewer_email: str | None) -> bool:
        """Exact, case-sensitive match against the viewer's email.

        Anonymous viewers (no or empty email) never own a comment.
        """
        return bool(viewer_email) and viewer_email == self.email


class CommentThread(DomainModel):
    """A top-level comment with its direct replies, newest first."""

    comment: Comment
    replies: list[Comment] = []


class CommentPage(DomainModel):
    """One page of a sorted comment listing.

    ``reply_counts`` is only filled for top-level listings.
    """

    comments: list[Comment]
    total: int
    limit: int
    skip: int
    reply_counts: dict[CommentId, int] = {}

    @property
    def has_more(self) -> bool:
        """Whether items remain after this page."""
        return self.skip + len(self.comments) < self.total

    def replies_count(self, comment_id: CommentId) -> int:
        """Reply count for a comment on this page (0 when it has none)."""
        return self.reply_counts.get(comment_id, 0)
