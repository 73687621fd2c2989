"""Integration tests for PostgresCommentRepository.

Requires a running PostgreSQL reachable at DATABASE__URL; skipped otherwise.
"""

import os
from uuid import uuid4

import pytest
from sqlalchemy.ext.asyncio import AsyncEngine

from remark.domain.repository import CommentRepository
from remark.domain.value import PageFilter, SortOrder
from remark.persistence.tables import metadata
from tests.conftest import make_comment
from tests.harness import create_env_fixture

pytestmark = pytest.mark.skipif(
    not os.environ.get("DATABASE__URL"), reason="DATABASE__URL not set"
)

integration_env = create_env_fixture(unmock={"persistence"})


async def _repository(env) -> CommentRepository:
    engine = await env.get(AsyncEngine)
    async with engine.begin() as conn:
        await conn.run_sync(metadata.create_all)
    return await env.get(CommentRepository)


class TestPostgresCommentRepository:
    """Listing queries against a real database."""

    @pytest.mark.asyncio
    async def test_top_level_listing_and_grouped_counts(self, integration_env):
        # Arrange
        repo = await _repository(integration_env)
        page_id = f"page-{uuid4()}"
        a = make_comment(page_id=page_id, minutes=1)
        b = make_comment(page_id=page_id, parent=a, minutes=2)
        c = make_comment(page_id=page_id, minutes=3)
        for comment in (a, b, c):
            await repo.save(comment)
        page_filter = PageFilter.parse(page_id, None)

        # Act
        top = await repo.find_top_level(page_filter, sort=SortOrder.ASC)
        total = await repo.count_top_level(page_filter)
        counts = await repo.count_replies_by_parent([a.id, c.id])

        # Assert
        assert [x.id for x in top] == [a.id, c.id]
        assert total == 2
        assert counts == {a.id: 1}

    @pytest.mark.asyncio
    async def test_threads_and_orphaned_replies(self, integration_env):
        # Arrange
        repo = await _repository(integration_env)
        page_id = f"page-{uuid4()}"
        a = make_comment(page_id=page_id, minutes=1)
        b1 = make_comment(page_id=page_id, parent=a, minutes=2)
        b2 = make_comment(page_id=page_id, parent=a, minutes=3)
        c = make_comment(page_id=page_id, minutes=4)
        for comment in (a, b1, b2, c):
            await repo.save(comment)

        # Act
        threads = await repo.find_threads(PageFilter.parse(page_id, None))
        deleted = await repo.delete(a.id, secret=a.secret)
        orphans = await repo.find_replies(a.id)

        # Assert
        assert [t.comment.id for t in threads] == [c.id, a.id]
        assert [r.id for r in threads[1].replies] == [b2.id, b1.id]
        assert deleted is True
        assert [r.id for r in orphans] == [b1.id, b2.id]
