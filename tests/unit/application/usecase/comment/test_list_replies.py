"""Unit tests for ListRepliesUseCase."""

import pytest

from remark.application.usecase.comment import ListRepliesRequest, ListRepliesUseCase
from remark.domain.error import ValidationError
from remark.domain.repository import CommentRepository
from tests.conftest import make_comment
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


class TestListRepliesUseCase:
    """Tests for ListRepliesUseCase."""

    @pytest.mark.asyncio
    async def test_replies_have_no_reply_count(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListRepliesUseCase)
        repo = await unit_env.get(CommentRepository)
        parent = make_comment()
        reply = make_comment(parent=parent, minutes=1, email="bob@example.com")
        await repo.save(parent)
        await repo.save(reply)

        # Act
        response = await use_case.execute(
            ListRepliesRequest(comment_id=str(parent.id), viewer_email="bob@example.com")
        )
        payload = response.model_dump(by_alias=True)

        # Assert
        assert payload["total"] == 1
        item = payload["replies"][0]
        assert item["_id"] == str(reply.id)
        assert item["parentId"] == str(parent.id)
        assert item["isOwn"] is True
        assert "repliesCount" not in item
        assert "email" not in item
        assert "secret" not in item

    @pytest.mark.asyncio
    async def test_invalid_id_rejected_without_store_access(self, unit_env):
        # Arrange
        use_case = await unit_env.get(ListRepliesUseCase)
        repo = await unit_env.get(CommentRepository)

        # Act & Assert
        with pytest.raises(ValidationError, match="Invalid comment ID"):
            await use_case.execute(ListRepliesRequest(comment_id="nope"))
        assert repo.queries == []
