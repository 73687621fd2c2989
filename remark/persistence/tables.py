"""SQLAlchemy table definitions for remark.

These table definitions are used with SQLAlchemy Core statements.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import Boolean, Column, Index, MetaData, String, Table, Text, text
from sqlalchemy.dialects.postgresql import TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# COMMENTS TABLE
# ============================================================================
# parent_id references another comment by ID without a foreign key: deleting
# a parent leaves its replies in place.
comments_table = Table(
    "comments",
    metadata,
    Column("id", UUID(as_uuid=True), primary_key=True),
    Column("parent_id", UUID(as_uuid=True), nullable=True),
    Column("page_id", String(500), nullable=False),
    Column("domain", String(253), nullable=False),
    Column("page_url", Text, nullable=False),
    Column("author", String(100), nullable=False),
    Column("email", String(254), nullable=False),
    Column("gravatar", String(32), nullable=False),
    Column("body", Text, nullable=False),
    Column("is_verified", Boolean, nullable=False, server_default=text("false")),
    Column("secret", String(64), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default=text("NOW()")
    ),
)

Index("idx_comments_page_id", comments_table.c.page_id)
Index("idx_comments_domain", comments_table.c.domain)
Index("idx_comments_parent_id", comments_table.c.parent_id)
Index("idx_comments_created_at", comments_table.c.created_at)
