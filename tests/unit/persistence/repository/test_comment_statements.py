"""Unit tests for PostgreSQL comment statements and row handling."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest
from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import OperationalError

from remark.domain.error import StorageError
from remark.domain.value import CommentId, PageFilter, SortOrder
from remark.persistence.mappers import COMMENT_COLUMNS, comment_to_dict
from remark.persistence.repository.comment import (
    PostgresCommentRepository,
    count_replies_grouped,
    count_top_level,
    rows_to_threads,
    select_replies,
    select_threads,
    select_top_level,
)
from tests.conftest import make_comment


def _sql(stmt) -> str:
    return str(stmt.compile(dialect=postgresql.dialect()))


def _join_row(parent, reply=None) -> dict:
    row = comment_to_dict(parent)
    for name in COMMENT_COLUMNS:
        row[f"reply_{name}"] = getattr(reply, name) if reply else None
    return row


class TestStatementShape:
    """The SQL each listing sends to PostgreSQL."""

    def test_top_level_filters_parentless_comments(self):
        # Act
        sql = _sql(
            select_top_level(PageFilter.parse("p", None), SortOrder.DESC, 10, 20)
        )

        # Assert
        assert "comments.parent_id IS NULL" in sql
        assert "comments.page_id = " in sql
        assert "ORDER BY comments.created_at DESC, comments.id" in sql
        assert "LIMIT" in sql and "OFFSET" in sql

    def test_top_level_by_domain_ascending(self):
        # Act
        sql = _sql(
            select_top_level(PageFilter.parse(None, "example.com"), SortOrder.ASC, 10, 0)
        )

        # Assert
        assert "comments.domain = " in sql
        assert "ORDER BY comments.created_at ASC" in sql

    def test_count_top_level(self):
        # Act
        sql = _sql(count_top_level(PageFilter.parse("p", None)))

        # Assert
        assert sql.startswith("SELECT count(*)")
        assert "comments.parent_id IS NULL" in sql

    def test_reply_counts_are_one_grouped_query(self):
        """All parents are counted in a single GROUP BY statement."""
        # Act
        sql = _sql(count_replies_grouped([CommentId(uuid4()) for _ in range(5)]))

        # Assert
        assert sql.count("SELECT") == 1
        assert "comments.parent_id IN" in sql
        assert "GROUP BY comments.parent_id" in sql

    def test_replies_oldest_first(self):
        # Act
        sql = _sql(select_replies(CommentId(uuid4()), 10, 0))

        # Assert
        assert "comments.parent_id = " in sql
        assert "ORDER BY comments.created_at ASC, comments.id" in sql

    def test_threads_are_a_single_self_join(self):
        """Parents and replies come back from one LEFT OUTER JOIN."""
        # Act
        sql = _sql(select_threads(PageFilter.parse("p", None)))

        # Assert
        assert sql.count("SELECT") == 1
        assert (
            "comments AS parent LEFT OUTER JOIN comments AS reply "
            "ON reply.parent_id = parent.id"
        ) in sql
        assert "parent.parent_id IS NULL" in sql
        assert "reply.id AS reply_id" in sql
        assert "ORDER BY parent.created_at DESC" in sql
        assert "reply.created_at DESC" in sql


class TestRowsToThreads:
    """Folding join rows into threads."""

    def test_groups_contiguous_rows(self):
        # Arrange
        a = make_comment(minutes=1)
        b1 = make_comment(parent=a, minutes=3)
        b2 = make_comment(parent=a, minutes=2)
        c = make_comment(minutes=5)
        rows = [_join_row(c), _join_row(a, b1), _join_row(a, b2)]

        # Act
        threads = rows_to_threads(rows)

        # Assert
        assert [t.comment.id for t in threads] == [c.id, a.id]
        assert threads[0].replies == []
        assert [r.id for r in threads[1].replies] == [b1.id, b2.id]
        assert threads[1].replies[0].parent_id == a.id

    def test_no_rows(self):
        assert rows_to_threads([]) == []


class TestPostgresCommentRepository:
    """Repository behaviour against a mocked session."""

    @pytest.mark.asyncio
    async def test_store_failure_becomes_storage_error(self):
        # Arrange
        session = AsyncMock()
        session.execute.side_effect = OperationalError(
            "SELECT 1", {}, Exception("connection refused")
        )
        repo = PostgresCommentRepository(session)

        # Act & Assert
        with pytest.raises(StorageError):
            await repo.count_top_level(PageFilter.parse("p", None))

    @pytest.mark.asyncio
    async def test_reply_counts_keyed_by_parent(self):
        # Arrange
        parent_id = uuid4()
        result = MagicMock()
        result.fetchall.return_value = [SimpleNamespace(parent_id=parent_id, count=3)]
        session = AsyncMock()
        session.execute.return_value = result
        repo = PostgresCommentRepository(session)

        # Act
        counts = await repo.count_replies_by_parent([CommentId(parent_id)])

        # Assert
        assert counts == {parent_id: 3}
        assert session.execute.await_count == 1

    @pytest.mark.asyncio
    async def test_no_parents_no_query(self):
        # Arrange
        session = AsyncMock()
        repo = PostgresCommentRepository(session)

        # Act
        counts = await repo.count_replies_by_parent([])

        # Assert
        assert counts == {}
        session.execute.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_delete_reports_whether_a_row_matched(self):
        # Arrange
        session = AsyncMock()
        session.execute.return_value = MagicMock(rowcount=0)
        repo = PostgresCommentRepository(session)

        # Act
        deleted = await repo.delete(CommentId(uuid4()), secret="nope")

        # Assert
        assert deleted is False
