"""In-memory comment repository for testing."""

from typing import Optional

from remark.domain.model.comment import Comment, CommentThread
from remark.domain.repository.comment import CommentRepository
from remark.domain.value import CommentId, PageFilter, SortOrder


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing.

    Every repository call is appended to ``queries`` so tests can assert how
    many round trips a listing costs.
    """

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}
        self.queries: list[str] = []

    def _top_level(self, page_filter: PageFilter) -> list[Comment]:
        field = page_filter.field.value
        return [
            c
            for c in self._comments.values()
            if c.parent_id is None and getattr(c, field) == page_filter.value
        ]

    def _replies_of(self, parent_id: CommentId) -> list[Comment]:
        return [c for c in self._comments.values() if c.parent_id == parent_id]

    @staticmethod
    def _sorted(comments: list[Comment], descending: bool) -> list[Comment]:
        # Ties on created_at fall back to ID order in both directions
        comments = sorted(comments, key=lambda c: str(c.id))
        return sorted(comments, key=lambda c: c.created_at, reverse=descending)

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        self.queries.append("find_by_id")
        return self._comments.get(comment_id)

    async def find_top_level(
        self,
        page_filter: PageFilter,
        sort: SortOrder = SortOrder.ASC,
        limit: int = 10,
        skip: int = 0,
    ) -> list[Comment]:
        """Find top-level comments of a page or domain."""
        self.queries.append("find_top_level")
        comments = self._sorted(
            self._top_level(page_filter), descending=sort == SortOrder.DESC
        )

        # Paginate
        return comments[skip : skip + limit]

    async def count_top_level(self, page_filter: PageFilter) -> int:
        """Count top-level comments of a page or domain."""
        self.queries.append("count_top_level")
        return len(self._top_level(page_filter))

    async def count_replies_by_parent(
        self, parent_ids: list[CommentId]
    ) -> dict[CommentId, int]:
        """Count direct replies for several comments."""
        self.queries.append("count_replies_by_parent")
        wanted = set(parent_ids)
        counts: dict[CommentId, int] = {}
        for comment in self._comments.values():
            if comment.parent_id in wanted:
                counts[comment.parent_id] = counts.get(comment.parent_id, 0) + 1
        return counts

    async def find_replies(
        self,
        parent_id: CommentId,
        limit: int = 10,
        skip: int = 0,
    ) -> list[Comment]:
        """Find direct replies of a comment, oldest first."""
        self.queries.append("find_replies")
        replies = self._sorted(self._replies_of(parent_id), descending=False)
        return replies[skip : skip + limit]

    async def count_replies(self, parent_id: CommentId) -> int:
        """Count direct replies of a comment."""
        self.queries.append("count_replies")
        return len(self._replies_of(parent_id))

    async def find_threads(self, page_filter: PageFilter) -> list[CommentThread]:
        """Find top-level comments with embedded replies, newest first."""
        self.queries.append("find_threads")
        parents = self._sorted(self._top_level(page_filter), descending=True)
        return [
            CommentThread(
                comment=parent,
                replies=self._sorted(self._replies_of(parent.id), descending=True),
            )
            for parent in parents
        ]

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        self.queries.append("save")
        self._comments[comment.id] = comment
        return comment

    async def delete(
        self,
        comment_id: CommentId,
        secret: Optional[str] = None,
        email: Optional[str] = None,
    ) -> bool:
        """Delete a comment if the given secret or email matches."""
        self.queries.append("delete")
        comment = self._comments.get(comment_id)
        if comment is None:
            return False
        if secret is not None:
            matches = comment.secret == secret
        elif email is not None:
            matches = comment.email == email
        else:
            matches = False

        if matches:
            del self._comments[comment_id]
        return matches
