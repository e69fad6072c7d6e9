import uuid as uuid_pkg
from typing import Any, Generic, TypeVar

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

ModelType = TypeVar("ModelType", bound=SQLModel)


class BaseOperations(Generic[ModelType]):
    """Base read operations for user-owned models."""

    def __init__(self, model: type[ModelType]):
        self.model = model

    async def get_multi_by_user(
        self,
        db: AsyncSession,
        user_id: uuid_pkg.UUID,
        order_by: Any = None,
    ) -> list[ModelType]:
        """Get all records for a user, newest record first unless order_by is given."""
        statement = (
            select(self.model)
            .where(self.model.user_id == user_id)  # type: ignore[attr-defined]
            .order_by(order_by if order_by is not None else self.model.created_at.desc())  # type: ignore[attr-defined]
        )
        result = await db.execute(statement)
        return list(result.scalars().all())
