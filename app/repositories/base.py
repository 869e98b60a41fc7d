"""Base repository for database operations."""

from collections.abc import Mapping
from datetime import datetime
from typing import ClassVar, Literal
from uuid import UUID

from sqlalchemy import asc, desc, func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from app.errors.database import (
    DatabaseConnectionError,
    DatabaseError,
    DuplicateEntryError,
    RecordNotFoundError,
)

type FilterValue = str | int | float | bool | UUID | datetime | None
type SortOption = Literal["latest", "oldest", "title", "name"]


class BaseRepository[ModelT: SQLModel]:
    """
    Base repository implementing common CRUD operations.

    Writes are flushed, never committed: the request-scoped `transaction()`
    owns the commit so an owner write and every back-reference write made
    for it land together.

    Attributes:
        model: The SQLModel database model type.
        entity: Human readable entity name used in error messages.
        id_field: The name of the primary key field (default: "id").
        filter_fields: Columns that may be used as equality filters.
    """

    model: type[ModelT]
    entity: ClassVar[str] = "Record"
    id_field: str = "id"
    filter_fields: ClassVar[frozenset[str]] = frozenset()

    def __init__(self, session: AsyncSession) -> None:
        """
        Initialize repository with database session.

        Args:
            session: Async database session
        """
        self.session = session

    async def get_by_id(self, record_id: UUID | str) -> ModelT | None:
        """
        Get a record by its ID.

        Args:
            record_id: Record UUID (or its string form)

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        if isinstance(record_id, str):
            try:
                record_id = UUID(record_id)
            except ValueError:
                return None
        id_column = getattr(self.model, self.id_field)
        statement = select(self.model).where(id_column == record_id)
        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def get_by_field(
        self,
        field_name: str,
        value: FilterValue,
    ) -> ModelT | None:
        """
        Get a record by a specific field value.

        Args:
            field_name: Name of the field to search
            value: Value to search for

        Returns:
            ModelT | None: Record if found, None otherwise
        """
        field = getattr(self.model, field_name)
        statement = select(self.model).where(field == value)
        result = await self.session.execute(statement)
        return result.scalars().first()

    async def get_or_raise(self, record_id: UUID | str) -> ModelT:
        """
        Get a record by ID or raise an exception if not found.

        Args:
            record_id: Record UUID

        Returns:
            ModelT: Record if found

        Raises:
            RecordNotFoundError: If record is not found
        """
        record = await self.get_by_id(record_id)
        if not record:
            raise RecordNotFoundError(entity=self.entity, record_id=record_id)
        return record

    async def get_many(self, record_ids: list[UUID | str]) -> list[ModelT]:
        """Load the records whose ids are given, preserving the given order."""
        ids = []
        for record_id in record_ids:
            try:
                ids.append(record_id if isinstance(record_id, UUID) else UUID(record_id))
            except ValueError:
                continue
        if not ids:
            return []
        id_column = getattr(self.model, self.id_field)
        result = await self.session.execute(select(self.model).where(id_column.in_(ids)))
        by_id = {getattr(record, self.id_field): record for record in result.scalars().all()}
        return [by_id[record_id] for record_id in ids if record_id in by_id]

    def _filtered(self, filters: Mapping[str, FilterValue] | None):  # noqa: ANN202
        statement = select(self.model)
        for name, value in (filters or {}).items():
            if name not in self.filter_fields:
                continue
            statement = statement.where(getattr(self.model, name) == value)
        return statement

    def _ordered(self, statement, sort: SortOption):  # noqa: ANN001, ANN202
        match sort:
            case "oldest":
                return statement.order_by(asc(self.model.created_at))
            case "title" if hasattr(self.model, "title"):
                return statement.order_by(asc(self.model.title))
            case "name" if hasattr(self.model, "name"):
                return statement.order_by(asc(self.model.name))
            case _:
                return statement.order_by(desc(self.model.created_at))

    async def get_all(
        self,
        page: int = 1,
        limit: int = 8,
        filters: Mapping[str, FilterValue] | None = None,
        sort: SortOption = "latest",
    ) -> list[ModelT]:
        """
        Get records with pagination, equality filters and a named sort.

        Args:
            page: 1-based page number
            limit: Page size
            filters: Column equality filters (only `filter_fields` apply)
            sort: One of `latest`, `oldest`, `title`, `name`

        Returns:
            list[ModelT]: List of records
        """
        statement = self._ordered(self._filtered(filters), sort)
        statement = statement.offset((max(page, 1) - 1) * limit).limit(limit)
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def count(self, filters: Mapping[str, FilterValue] | None = None) -> int:
        """
        Count records matching the filters.

        Returns:
            int: Total number of records
        """
        statement = select(func.count()).select_from(self._filtered(filters).subquery())
        result = await self.session.execute(statement)
        count = result.scalar()
        return count if count is not None else 0

    async def save(self, record: ModelT) -> ModelT:
        """
        Add or update a record and flush it.

        Raises:
            DuplicateEntryError: If a unique constraint is violated
            DatabaseError: For other integrity errors
            DatabaseConnectionError: For any other database failure
        """
        try:
            self.session.add(record)
            await self.session.flush()
            await self.session.refresh(record)
            return record
        except IntegrityError as e:
            error_msg = str(e.orig) if e.orig else str(e)
            if "unique" in error_msg.lower() or "duplicate" in error_msg.lower():
                raise DuplicateEntryError(
                    detail=f"{self.entity} with this value already exists",
                ) from e
            raise DatabaseError(detail=f"Database integrity error: {error_msg}") from e
        except SQLAlchemyError as e:
            raise DatabaseConnectionError(detail=f"Failed to save record: {e}") from e

    async def delete(self, record: ModelT) -> None:
        """Delete a loaded record and flush."""
        await self.session.delete(record)
        await self.session.flush()

    async def exists_by_field(
        self,
        field_name: str,
        value: FilterValue,
        exclude_id: UUID | None = None,
    ) -> bool:
        """
        Check if a record exists with a specific field value.

        Args:
            field_name: Name of the field to check
            value: Value to check for
            exclude_id: Optional ID to exclude from check (for updates)

        Returns:
            bool: True if record exists, False otherwise
        """
        field = getattr(self.model, field_name)
        statement = select(1).where(field == value)

        if exclude_id is not None:
            id_column = getattr(self.model, self.id_field)
            statement = statement.where(id_column != exclude_id)

        result = await self.session.execute(statement.limit(1))
        return result.scalar_one_or_none() is not None
