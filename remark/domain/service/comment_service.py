"""Comment domain service."""

from datetime import datetime, timezone
from urllib.parse import urlsplit
from uuid import uuid4

import logfire

from remark.domain.error import NotAuthorizedError, NotFoundError, ValidationError
from remark.domain.model.comment import Comment, CommentPage, CommentThread
from remark.domain.repository import CommentRepository
from remark.domain.value import (
    MAX_DOMAIN_LENGTH,
    CommentId,
    PageFilter,
    Pagination,
    SortOrder,
)
from remark.util.text import (
    clean_email,
    clean_name,
    generate_secret,
    gravatar_hash,
    sanitize_comment,
)

from .base import Service


class CommentService(Service):
    """Domain service for comment operations."""

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def get_top_level_comments(
        self,
        page_filter: PageFilter,
        pagination: Pagination,
        sort: SortOrder = SortOrder.ASC,
    ) -> CommentPage:
        """Get one page of top-level comments with their reply counts.

        Reply counts for the whole page come from a single grouped query.

        Args:
            page_filter: Page or domain to match
            pagination: Limit/skip window
            sort: Creation-time order

        Returns:
            Page of comments with total count and reply counts

        Raises:
            StorageError: If the comment store fails
        """
        with logfire.span(
            "comment_service.get_top_level_comments",
            filter_field=page_filter.field.value,
            filter_value=page_filter.value,
            limit=pagination.limit,
            skip=pagination.skip,
            sort=sort.value,
        ):
            total = await self.comment_repository.count_top_level(page_filter)
            comments = await self.comment_repository.find_top_level(
                page_filter,
                sort=sort,
                limit=pagination.limit,
                skip=pagination.skip,
            )

            reply_counts: dict[CommentId, int] = {}
            if comments:
                reply_counts = await self.comment_repository.count_replies_by_parent(
                    [comment.id for comment in comments]
                )

            logfire.info(
                "Top-level comments retrieved",
                count=len(comments),
                total=total,
            )
            return CommentPage(
                comments=comments,
                total=total,
                limit=pagination.limit,
                skip=pagination.skip,
                reply_counts=reply_counts,
            )

    async def get_replies(
        self, parent_id: CommentId, pagination: Pagination
    ) -> CommentPage:
        """Get one page of direct replies, oldest first.

        Args:
            parent_id: Parent comment ID
            pagination: Limit/skip window

        Returns:
            Page of replies with total count
        """
        with logfire.span(
            "comment_service.get_replies",
            parent_id=str(parent_id),
            limit=pagination.limit,
            skip=pagination.skip,
        ):
            total = await self.comment_repository.count_replies(parent_id)
            replies = await self.comment_repository.find_replies(
                parent_id, limit=pagination.limit, skip=pagination.skip
            )
            logfire.info(
                "Replies retrieved",
                parent_id=str(parent_id),
                count=len(replies),
                total=total,
            )
            return CommentPage(
                comments=replies,
                total=total,
                limit=pagination.limit,
                skip=pagination.skip,
            )

    async def get_threads(self, page_filter: PageFilter) -> list[CommentThread]:
        """Get every top-level comment with its replies embedded.

        Args:
            page_filter: Page or domain to match

        Returns:
            Threads, newest first
        """
        with logfire.span(
            "comment_service.get_threads",
            filter_field=page_filter.field.value,
            filter_value=page_filter.value,
        ):
            threads = await self.comment_repository.find_threads(page_filter)
            logfire.info(
                "Comment threads retrieved",
                count=len(threads),
                replies=sum(len(thread.replies) for thread in threads),
            )
            return threads

    async def create_comment(
        self,
        page_url: str,
        page_id: str,
        body: str,
        author: str,
        email: str,
        parent_id: CommentId | None = None,
        viewer_email: str | None = None,
    ) -> Comment:
        """Create a comment on a page or a reply to another comment.

        Args:
            page_url: Absolute URL of the page
            page_id: Page identifier chosen by the embedding site
            body: Comment body (HTML is sanitised)
            author: Display name (cleaned)
            email: Author email
            parent_id: Parent comment ID for replies (None for top-level)
            viewer_email: Email of the authenticated viewer, if any

        Returns:
            Created comment, including its deletion secret

        Raises:
            ValidationError: If the URL, author or body is unusable, or the
                parent belongs to another page
            NotFoundError: If the parent comment does not exist
        """
        with logfire.span(
            "comment_service.create_comment",
            page_id=page_id,
            parent_id=str(parent_id) if parent_id else None,
        ):
            domain = self._extract_domain(page_url)

            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.warn("Parent comment not found", parent_id=str(parent_id))
                    raise NotFoundError("Comment", str(parent_id))
                if parent.page_id != page_id:
                    logfire.warn(
                        "Parent comment belongs to another page",
                        parent_id=str(parent_id),
                        parent_page_id=parent.page_id,
                        target_page_id=page_id,
                    )
                    raise ValidationError("Parent comment does not belong to this page")

            email = clean_email(email)
            author = clean_name(author)
            body = sanitize_comment(body.strip())
            if not author:
                raise ValidationError("Author name is required")
            if not body:
                raise ValidationError("Comment body is required")

            now = datetime.now(timezone.utc)
            comment = Comment(
                id=CommentId(uuid4()),
                parent_id=parent_id,
                page_id=page_id,
                domain=domain,
                page_url=page_url,
                author=author,
                email=email,
                gravatar=gravatar_hash(email),
                body=body,
                is_verified=bool(viewer_email) and viewer_email == email,
                secret=generate_secret(),
                created_at=now,
                updated_at=now,
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=str(saved.id),
                page_id=page_id,
                domain=domain,
                is_verified=saved.is_verified,
            )
            return saved

    async def delete_comment(
        self,
        comment_id: CommentId,
        secret: str | None = None,
        viewer_email: str | None = None,
    ) -> None:
        """Delete a comment by deletion secret or as its authenticated author.

        Replies are not deleted.

        Args:
            comment_id: Comment ID
            secret: Deletion secret handed out at creation
            viewer_email: Email of the authenticated viewer, if any

        Raises:
            NotAuthorizedError: If neither a secret nor a viewer is given
            NotFoundError: If no matching comment was deleted
        """
        with logfire.span(
            "comment_service.delete_comment",
            comment_id=str(comment_id),
            by_secret=bool(secret),
        ):
            if secret:
                deleted = await self.comment_repository.delete(
                    comment_id, secret=secret
                )
            elif viewer_email:
                deleted = await self.comment_repository.delete(
                    comment_id, email=clean_email(viewer_email)
                )
            else:
                logfire.warn("Anonymous comment deletion", comment_id=str(comment_id))
                raise NotAuthorizedError("comment", str(comment_id))

            if not deleted:
                logfire.warn("Comment not deleted", comment_id=str(comment_id))
                raise NotFoundError("Comment", str(comment_id))

            logfire.info("Comment deleted", comment_id=str(comment_id))

    @staticmethod
    def _extract_domain(page_url: str) -> str:
        """Hostname of an absolute http(s) page URL."""
        try:
            parts = urlsplit(page_url)
            hostname = parts.hostname
        except ValueError:
            raise ValidationError("Invalid page URL")

        if parts.scheme not in ("http", "https") or not hostname:
            raise ValidationError("Invalid page URL")
        if len(hostname) > MAX_DOMAIN_LENGTH:
            raise ValidationError("Invalid page URL")
        return hostname
