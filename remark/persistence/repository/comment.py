"""PostgreSQL implementation of Comment repository.

Statements are built by module-level functions so their shape (grouped
reply counts, single parent/reply join) can be checked without a database.
"""

from typing import Any, List, Optional

import logfire
from sqlalchemy import Select, and_, delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql.expression import ColumnElement
from sqlalchemy.sql.selectable import FromClause

from remark.domain.error import StorageError
from remark.domain.model import Comment, CommentThread
from remark.domain.repository import CommentRepository
from remark.domain.value import CommentId, PageFilter, SortOrder
from remark.persistence.mappers import (
    COMMENT_COLUMNS,
    comment_to_dict,
    row_to_comment,
)
from remark.persistence.tables import comments_table

REPLY_PREFIX = "reply_"


def top_level_condition(
    page_filter: PageFilter, table: FromClause = comments_table
) -> ColumnElement[bool]:
    """Top-level comments of the filtered page or domain."""
    return and_(
        table.c.parent_id.is_(None),
        table.c[page_filter.field.value] == page_filter.value,
    )


def select_top_level(
    page_filter: PageFilter, sort: SortOrder, limit: int, skip: int
) -> Select:
    """Page of top-level comments ordered by creation time."""
    created_at = comments_table.c.created_at
    order = created_at.desc() if sort == SortOrder.DESC else created_at.asc()
    return (
        select(comments_table)
        .where(top_level_condition(page_filter))
        .order_by(order, comments_table.c.id)
        .limit(limit)
        .offset(skip)
    )


def count_top_level(page_filter: PageFilter) -> Select:
    """Total number of top-level comments for the filter."""
    return (
        select(func.count())
        .select_from(comments_table)
        .where(top_level_condition(page_filter))
    )


def count_replies_grouped(parent_ids: List[CommentId]) -> Select:
    """Reply counts for several parents, grouped by parent ID."""
    return (
        select(comments_table.c.parent_id, func.count().label("count"))
        .where(comments_table.c.parent_id.in_(parent_ids))
        .group_by(comments_table.c.parent_id)
    )


def select_replies(parent_id: CommentId, limit: int, skip: int) -> Select:
    """Page of direct replies, oldest first."""
    return (
        select(comments_table)
        .where(comments_table.c.parent_id == parent_id)
        .order_by(comments_table.c.created_at.asc(), comments_table.c.id)
        .limit(limit)
        .offset(skip)
    )


def count_replies(parent_id: CommentId) -> Select:
    """Total number of direct replies of a comment."""
    return (
        select(func.count())
        .select_from(comments_table)
        .where(comments_table.c.parent_id == parent_id)
    )


def select_threads(page_filter: PageFilter) -> Select:
    """Top-level comments left-joined to their direct replies.

    One row per (parent, reply) pair, or one row with NULL reply columns for
    a parent without replies. Rows of the same parent are contiguous.
    """
    parent = comments_table.alias("parent")
    reply = comments_table.alias("reply")
    reply_columns = [
        reply.c[name].label(f"{REPLY_PREFIX}{name}") for name in COMMENT_COLUMNS
    ]
    return (
        select(*parent.c, *reply_columns)
        .select_from(parent.outerjoin(reply, reply.c.parent_id == parent.c.id))
        .where(top_level_condition(page_filter, parent))
        .order_by(
            parent.c.created_at.desc(),
            parent.c.id,
            reply.c.created_at.desc(),
            reply.c.id,
        )
    )


def rows_to_threads(rows: List[dict[str, Any]]) -> List[CommentThread]:
    """Fold parent/reply join rows into threads, keeping row order."""
    threads: List[CommentThread] = []
    parent: Optional[Comment] = None
    replies: List[Comment] = []

    for row in rows:
        if parent is None or parent.id != row["id"]:
            if parent is not None:
                threads.append(CommentThread(comment=parent, replies=replies))
            parent = row_to_comment(row)
            replies = []
        if row.get(f"{REPLY_PREFIX}id") is not None:
            replies.append(row_to_comment(row, prefix=REPLY_PREFIX))

    if parent is not None:
        threads.append(CommentThread(comment=parent, replies=replies))
    return threads


class PostgresCommentRepository(CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _execute(self, stmt: Any) -> Any:
        """Execute a statement, surfacing store failures as StorageError."""
        try:
            return await self.session.execute(stmt)
        except (SQLAlchemyError, OSError) as e:
            logfire.error(
                "Comment store query failed",
                error=str(e),
                error_type=type(e).__name__,
            )
            raise StorageError("Comment store query failed") from e

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except (SQLAlchemyError, OSError) as e:
            logfire.error("Comment store flush failed", error=str(e))
            raise StorageError("Comment store flush failed") from e

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self._execute(stmt)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_top_level(
        self,
        page_filter: PageFilter,
        sort: SortOrder = SortOrder.ASC,
        limit: int = 10,
        skip: int = 0,
    ) -> List[Comment]:
        """Find top-level comments of a page or domain."""
        result = await self._execute(select_top_level(page_filter, sort, limit, skip))
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_top_level(self, page_filter: PageFilter) -> int:
        """Count top-level comments of a page or domain."""
        result = await self._execute(count_top_level(page_filter))
        return result.scalar() or 0

    async def count_replies_by_parent(
        self, parent_ids: List[CommentId]
    ) -> dict[CommentId, int]:
        """Count direct replies for several comments in one grouped query."""
        if not parent_ids:
            return {}
        result = await self._execute(count_replies_grouped(parent_ids))
        return {CommentId(row.parent_id): row.count for row in result.fetchall()}

    async def find_replies(
        self,
        parent_id: CommentId,
        limit: int = 10,
        skip: int = 0,
    ) -> List[Comment]:
        """Find direct replies of a comment, oldest first."""
        result = await self._execute(select_replies(parent_id, limit, skip))
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def count_replies(self, parent_id: CommentId) -> int:
        """Count direct replies of a comment."""
        result = await self._execute(count_replies(parent_id))
        return result.scalar() or 0

    async def find_threads(self, page_filter: PageFilter) -> List[CommentThread]:
        """Find top-level comments with embedded replies in one statement."""
        result = await self._execute(select_threads(page_filter))
        return rows_to_threads([row._asdict() for row in result.fetchall()])

    async def save(self, comment: Comment) -> Comment:
        """Insert a new comment."""
        stmt = comments_table.insert().values(**comment_to_dict(comment))
        await self._execute(stmt)
        await self._flush()
        return comment

    async def delete(
        self,
        comment_id: CommentId,
        secret: Optional[str] = None,
        email: Optional[str] = None,
    ) -> bool:
        """Delete a comment if the given secret or email matches."""
        if secret is None and email is None:
            return False

        stmt = delete(comments_table).where(comments_table.c.id == comment_id)
        if secret is not None:
            stmt = stmt.where(comments_table.c.secret == secret)
        else:
            stmt = stmt.where(comments_table.c.email == email)

        result = await self._execute(stmt)
        await self._flush()
        return result.rowcount > 0
