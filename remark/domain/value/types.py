"""Domain value objects for remark.

Value objects are immutable and defined by their values, not identity.
They encapsulate the parsing rules for raw query input so that every caller
gets the same defaults and clamping.
"""

from enum import Enum

from remark.domain.error import ValidationError
from remark.domain.value.common import ValueObject

MAX_PAGE_ID_LENGTH = 500
MAX_DOMAIN_LENGTH = 253

DEFAULT_LIMIT = 10
MAX_LIMIT = 50
MAX_SKIP = 2**31 - 1


class SortOrder(str, Enum):
    """Sort order for top-level comment listings (by creation time)."""

    ASC = "asc"  # Oldest first
    DESC = "desc"  # Newest first

    @classmethod
    def parse(cls, value: str | None) -> "SortOrder":
        """Parse a sort query parameter.

        Anything other than ``"desc"`` is treated as ascending.
        """
        return cls.DESC if value == cls.DESC.value else cls.ASC


class PageFilterField(str, Enum):
    """Comment attribute a page filter matches on."""

    PAGE_ID = "page_id"
    DOMAIN = "domain"


class PageFilter(ValueObject):
    """Selects the comments of one page or of a whole domain."""

    field: PageFilterField
    value: str

    @classmethod
    def parse(cls, page_id: str | None, domain: str | None) -> "PageFilter":
        """Build a filter from the ``pageId``/``domain`` query parameters.

        ``page_id`` takes precedence when both are supplied.

        Args:
            page_id: Page identifier (optional)
            domain: Site hostname (optional)

        Returns:
            Page filter on exactly one field

        Raises:
            ValidationError: If neither is supplied or either is too long
        """
        page_id = page_id or ""
        domain = domain or ""

        if not page_id and not domain:
            raise ValidationError("pageId or domain is required")
        if len(page_id) > MAX_PAGE_ID_LENGTH or len(domain) > MAX_DOMAIN_LENGTH:
            raise ValidationError("Bad request")

        if page_id:
            return cls(field=PageFilterField.PAGE_ID, value=page_id)
        return cls(field=PageFilterField.DOMAIN, value=domain)


def _parse_non_negative(value: str | int | None) -> int | None:
    """Parse a plain decimal integer, returning None for anything else."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if not value or not value.isascii() or not value.isdigit():
        return None
    return int(value)


class Pagination(ValueObject):
    """Limit/skip window over a sorted listing."""

    limit: int = DEFAULT_LIMIT
    skip: int = 0

    @classmethod
    def parse(
        cls, limit: str | int | None = None, skip: str | int | None = None
    ) -> "Pagination":
        """Parse raw ``limit``/``skip`` query values.

        Invalid input never fails: a non-numeric or non-positive limit falls
        back to the default, a limit above the maximum is clamped, and an
        invalid, negative or out-of-range skip becomes 0.

        Args:
            limit: Requested page size
            skip: Number of items to skip

        Returns:
            Normalised pagination window
        """
        parsed_limit = _parse_non_negative(limit)
        if not parsed_limit:
            parsed_limit = DEFAULT_LIMIT
        parsed_limit = min(parsed_limit, MAX_LIMIT)

        parsed_skip = _parse_non_negative(skip) or 0
        if parsed_skip > MAX_SKIP:
            parsed_skip = 0

        return cls(limit=parsed_limit, skip=parsed_skip)
