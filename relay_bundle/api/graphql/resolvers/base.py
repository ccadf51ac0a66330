from typing import Any, Generic, Optional, Type, TypeVar
from uuid import UUID
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from strawberry.types import Info

from relay_bundle.core.errors import NotFound

T = TypeVar('T')  # Type for the database model

class BaseResolver(Generic[T]):
    """Base resolver class to standardize lookups behind the relay types."""

    model_class: Type[T] = None
    type_name: str = None

    @classmethod
    async def get_by_id(cls, id: str, db: AsyncSession, *options: Any) -> T:
        """Get a model instance by its raw ID.

        Raises NotFound for ids that are not UUIDs and for missing rows.
        """
        try:
            model_id = UUID(id)
        except (TypeError, ValueError):
            raise NotFound(cls.type_name, id) from None

        query = select(cls.model_class).where(cls.model_class.id == model_id)
        if options:
            query = query.options(*options)
        result = await db.execute(query)
        instance = result.scalars().first()
        if instance is None:
            raise NotFound(cls.type_name, id)
        return instance

    @classmethod
    def get_db_from_info(cls, info: Optional[Info]) -> AsyncSession:
        """Extract database session from GraphQL info context."""
        if info is None:
            raise RuntimeError(f"Resolving {cls.type_name} requires a GraphQL context")
        context = info.context
        return context.get("db")
