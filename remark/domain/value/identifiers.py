"""Strongly typed identifiers for remark domain entities.

Using NewType for strong typing prevents mixing up identifiers with other
UUIDs and makes the code more self-documenting.
"""

from typing import NewType
from uuid import UUID

from remark.domain.error import ValidationError

CommentId = NewType("CommentId", UUID)


def parse_comment_id(value: str) -> CommentId:
    """Parse the external string form of a comment ID.

    Args:
        value: Identifier as received from a client

    Returns:
        Typed comment ID

    Raises:
        ValidationError: If the value is not a UUID
    """
    try:
        return CommentId(UUID(value))
    except (TypeError, ValueError, AttributeError):
        raise ValidationError("Invalid comment ID")
