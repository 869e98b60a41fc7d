"""Column factories shared by the table models."""

from sqlalchemy import JSON, DateTime
from sqlalchemy.dialects.postgresql import JSONB
from sqlmodel import Column

from app.utils.helpers import utc_now

# JSONB on PostgreSQL, plain JSON elsewhere (SQLite in the test-suite)
JSONDocument = JSON().with_variant(JSONB(), "postgresql")


def json_list_column() -> Column:
    """Return a non-null JSON array column for a back-reference or like list."""
    return Column(JSONDocument, nullable=False)


def created_at_column() -> Column:
    return Column(DateTime(timezone=True), nullable=False, index=True)


def updated_at_column() -> Column:
    return Column(DateTime(timezone=True), nullable=True, onupdate=utc_now)
