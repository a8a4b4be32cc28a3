"""Generic Async Repository Pattern for DDD.

This module provides a generic repository base class that handles
insert and lookup operations with full async support using SQLAlchemy 2.0.
Records managed here are write-once, so no update or delete operations
are exposed.
"""

from typing import Any, Generic, TypeVar
from uuid import UUID

from pydantic import BaseModel
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.infra.database import Base

# Type variables for generic repository
ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType", bound=BaseModel)


class GenericRepository(Generic[ModelType, CreateSchemaType]):
    """Generic async repository providing insert-only persistence.

    Type Parameters:
        ModelType: The SQLAlchemy model class
        CreateSchemaType: Pydantic schema for creation

    Example:
        class TripPlanRepository(GenericRepository[TripPlanRecord, TripPlanCreate]):
            def __init__(self, session: AsyncSession):
                super().__init__(TripPlanRecord, session)
    """

    def __init__(self, model: type[ModelType], session: AsyncSession) -> None:
        """Initialize the repository.

        Args:
            model: The SQLAlchemy model class
            session: Async database session
        """
        self._model = model
        self._session = session

    @property
    def session(self) -> AsyncSession:
        """Get the database session."""
        return self._session

    @property
    def model(self) -> type[ModelType]:
        """Get the model class."""
        return self._model

    # ==================== CREATE Operations ====================

    async def create(self, data: CreateSchemaType | dict[str, Any]) -> ModelType:
        """Create a new record.

        Args:
            data: Pydantic schema or dict with creation data

        Returns:
            The created model instance
        """
        if isinstance(data, BaseModel):
            obj_data = data.model_dump(exclude_unset=True)
        else:
            obj_data = data

        db_obj = self._model(**obj_data)
        self._session.add(db_obj)
        await self._session.flush()
        await self._session.refresh(db_obj)
        return db_obj

    # ==================== READ Operations ====================

    async def get_by_id(self, id: UUID) -> ModelType | None:
        """Get a record by its ID.

        Args:
            id: The UUID of the record

        Returns:
            The model instance or None if not found
        """
        return await self.find_one(self._model.id == id)

    async def find_one(self, *conditions: Any) -> ModelType | None:
        """Find a single record matching the conditions.

        Args:
            *conditions: SQLAlchemy filter conditions

        Returns:
            The model instance or None
        """
        stmt = select(self._model).where(*conditions)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def count(self, *conditions: Any) -> int:
        """Count records matching the conditions."""
        stmt = select(func.count()).select_from(self._model)
        if conditions:
            stmt = stmt.where(*conditions)
        result = await self._session.execute(stmt)
        return result.scalar() or 0

    async def commit(self) -> None:
        """Commit the current transaction."""
        await self._session.commit()

    async def rollback(self) -> None:
        """Rollback the current transaction."""
        await self._session.rollback()
