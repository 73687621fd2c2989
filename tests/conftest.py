"""Test configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from uuid import uuid4

from remark.domain.model import Comment
from remark.domain.value import CommentId
from remark.util.text import gravatar_hash

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_comment(
    page_id: str = "page-1",
    domain: str = "example.com",
    parent: Comment | None = None,
    minutes: int = 0,
    author: str = "Alice",
    email: str = "alice@example.com",
    body: str = "Hello",
) -> Comment:
    """Build a stored comment for tests.

    ``minutes`` offsets ``created_at`` from a fixed base time so ordering is
    deterministic.
    """
    created_at = BASE_TIME + timedelta(minutes=minutes)
    return Comment(
        id=CommentId(uuid4()),
        parent_id=parent.id if parent else None,
        page_id=page_id,
        domain=domain,
        page_url=f"https://{domain}/{page_id}",
        author=author,
        email=email,
        gravatar=gravatar_hash(email),
        body=body,
        is_verified=False,
        secret=uuid4().hex,
        created_at=created_at,
        updated_at=created_at,
    )
