"""Domain value objects for remark."""

from remark.domain.value.identifiers import CommentId, parse_comment_id
from remark.domain.value.types import (
    DEFAULT_LIMIT,
    MAX_DOMAIN_LENGTH,
    MAX_LIMIT,
    MAX_PAGE_ID_LENGTH,
    PageFilter,
    PageFilterField,
    Pagination,
    SortOrder,
)

__all__ = [
    # Identifiers
    "CommentId",
    "parse_comment_id",
    # Types
    "PageFilter",
    "PageFilterField",
    "Pagination",
    "SortOrder",
    # Limits
    "DEFAULT_LIMIT",
    "MAX_LIMIT",
    "MAX_PAGE_ID_LENGTH",
    "MAX_DOMAIN_LENGTH",
]
