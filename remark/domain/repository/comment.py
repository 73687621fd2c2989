"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from remark.domain.model.comment import Comment, CommentThread
from remark.domain.value import CommentId, PageFilter, SortOrder


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer and raise
    ``StorageError`` when the backing store fails.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_top_level(
        self,
        page_filter: PageFilter,
        sort: SortOrder = SortOrder.ASC,
        limit: int = 10,
        skip: int = 0,
    ) -> List[Comment]:
        """Find top-level comments of a page or domain.

        Args:
            page_filter: Page or domain to match
            sort: Creation-time order
            limit: Maximum number of comments to return
            skip: Number of comments to skip

        Returns:
            Comments without a parent, in the requested order
        """
        pass

    @abstractmethod
    async def count_top_level(self, page_filter: PageFilter) -> int:
        """Count top-level comments of a page or domain, ignoring pagination."""
        pass

    @abstractmethod
    async def count_replies_by_parent(
        self, parent_ids: List[CommentId]
    ) -> dict[CommentId, int]:
        """Count direct replies for several comments in one grouped query.

        Args:
            parent_ids: Comments to count replies for

        Returns:
            Mapping of parent ID to reply count; parents without replies
            are absent
        """
        pass

    @abstractmethod
    async def find_replies(
        self,
        parent_id: CommentId,
        limit: int = 10,
        skip: int = 0,
    ) -> List[Comment]:
        """Find direct replies of a comment, oldest first.

        Args:
            parent_id: The parent comment ID
            limit: Maximum number of replies to return
            skip: Number of replies to skip

        Returns:
            Replies in creation order
        """
        pass

    @abstractmethod
    async def count_replies(self, parent_id: CommentId) -> int:
        """Count direct replies of a comment."""
        pass

    @abstractmethod
    async def find_threads(self, page_filter: PageFilter) -> List[CommentThread]:
        """Find all top-level comments with their direct replies embedded.

        Parents and replies are both ordered newest first. Implementations
        must load everything with a single statement, however many parents
        match.

        Args:
            page_filter: Page or domain to match

        Returns:
            Threads in parent order
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def delete(
        self,
        comment_id: CommentId,
        secret: Optional[str] = None,
        email: Optional[str] = None,
    ) -> bool:
        """Delete a comment if the given secret or email matches.

        Exactly one of ``secret`` and ``email`` is expected. Replies of the
        deleted comment are left in place.

        Args:
            comment_id: The comment ID to delete
            secret: Deletion secret handed out at creation
            email: Author email of an authenticated viewer

        Returns:
            True if a comment was deleted
        """
        pass
