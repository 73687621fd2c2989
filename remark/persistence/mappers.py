"""Mappers for converting between database rows and domain models.

Since we're using Pydantic domain models (immutable), we use manual mapping
instead of SQLAlchemy's classical imperative mapping.
"""

from typing import Any, Dict
from uuid import UUID

from remark.domain.model import Comment
from remark.domain.value import CommentId

COMMENT_COLUMNS = (
    "id",
    "parent_id",
    "page_id",
    "domain",
    "page_url",
    "author",
    "email",
    "gravatar",
    "body",
    "is_verified",
    "secret",
    "created_at",
    "updated_at",
)


def _to_comment_id(value: Any) -> CommentId:
    return CommentId(UUID(value) if isinstance(value, str) else value)


def row_to_comment(row: Dict[str, Any], prefix: str = "") -> Comment:
    """Convert database row to Comment domain model.

    Args:
        row: Database row as dict
        prefix: Column label prefix, for rows that carry two comments
            (e.g. ``"reply_"`` in a parent/reply join)

    Returns:
        Comment domain model
    """
    parent_id = row.get(f"{prefix}parent_id")
    return Comment(
        id=_to_comment_id(row[f"{prefix}id"]),
        parent_id=_to_comment_id(parent_id) if parent_id else None,
        page_id=row[f"{prefix}page_id"],
        domain=row[f"{prefix}domain"],
        page_url=row[f"{prefix}page_url"],
        author=row[f"{prefix}author"],
        email=row[f"{prefix}email"],
        gravatar=row[f"{prefix}gravatar"],
        body=row[f"{prefix}body"],
        is_verified=row[f"{prefix}is_verified"],
        secret=row[f"{prefix}secret"],
        created_at=row[f"{prefix}created_at"],
        updated_at=row[f"{prefix}updated_at"],
    )


def comment_to_dict(comment: Comment) -> Dict[str, Any]:
    """Convert Comment domain model to database dict.

    Args:
        comment: Comment domain model

    Returns:
        Dict suitable for database insertion
    """
    return comment.model_dump(include=set(COMMENT_COLUMNS))
