"""Unit tests for ListCommentsUseCase."""

import pytest

from remark.application.usecase.comment import (
    ListCommentsRequest,
    ListCommentsUseCase,
)
from remark.domain.error import ValidationError
from remark.domain.repository import CommentRepository
from tests.conftest import make_comment
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestListCommentsUseCase:
    """Tests for ListCommentsUseCase."""

    @pytest.mark.asyncio
    async def test_items_carry_reply_counts_and_no_private_fields(self, unit_env):
        """Projections include repliesCount but never email or secret."""
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)
        repo = await unit_env.get(CommentRepository)
        a = make_comment(minutes=1)
        await repo.save(a)
        await repo.save(make_comment(parent=a, minutes=2))
        await repo.save(make_comment(minutes=3))

        # Act
        response = await use_case.execute(ListCommentsRequest(page_id="page-1"))
        payload = response.model_dump(by_alias=True)

        # Assert
        assert payload["total"] == 2
        assert payload["hasMore"] is False
        first = payload["comments"][0]
        assert first["_id"] == str(a.id)
        assert first["repliesCount"] == 1
        assert first["parentId"] is None
        assert first["owner"] == {"name": a.author, "gravatar": a.gravatar}
        assert payload["comments"][1]["repliesCount"] == 0
        for item in payload["comments"]:
            assert "email" not in item
            assert "secret" not in item
            assert "replies" not in item

    @pytest.mark.asyncio
    async def test_is_own_is_exact_and_case_sensitive(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)
        repo = await unit_env.get(CommentRepository)
        await repo.save(make_comment(email="alice@example.com"))

        # Act
        owner = await use_case.execute(
            ListCommentsRequest(page_id="page-1", viewer_email="alice@example.com")
        )
        other_case = await use_case.execute(
            ListCommentsRequest(page_id="page-1", viewer_email="Alice@example.com")
        )
        anonymous = await use_case.execute(ListCommentsRequest(page_id="page-1"))
        empty = await use_case.execute(
            ListCommentsRequest(page_id="page-1", viewer_email="")
        )

        # Assert
        assert owner.comments[0].is_own is True
        assert other_case.comments[0].is_own is False
        assert anonymous.comments[0].is_own is False
        assert empty.comments[0].is_own is False

    @pytest.mark.asyncio
    async def test_limit_is_clamped(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)

        # Act
        large = await use_case.execute(
            ListCommentsRequest(page_id="page-1", limit="1000")
        )
        invalid = await use_case.execute(
            ListCommentsRequest(page_id="page-1", limit="abc", skip="-3")
        )

        # Assert
        assert large.limit == 50
        assert invalid.limit == 10
        assert invalid.skip == 0

    @pytest.mark.asyncio
    async def test_missing_filter_is_validation_error(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListCommentsUseCase)
        repo = await unit_env.get(CommentRepository)

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(ListCommentsRequest())
        assert repo.queries == []
