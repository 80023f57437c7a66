"""
Base repository with common read operations.

Club tables are owned by the dashboard; analytics only ever reads them, so
repositories here expose lookups and bulk loads, no writes.

Usage:
    class MemberRepository(BaseRepository[Member]):
        def __init__(self, db: AsyncSession):
            super().__init__(db, Member)

        async def get_named(self, ids: list[int]) -> list[Member]:
            return await self.get_where_in("id", ids)
"""

from typing import Any, Iterable, TypeVar, Generic, Type
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

T = TypeVar("T")


class BaseRepository(Generic[T]):
    """
    Base repository for database reads.

    All methods are async for use with AsyncSession.
    """

    def __init__(self, db: AsyncSession, model: Type[T]):
        """
        Initialize repository.

        Args:
            db: Async database session
            model: SQLAlchemy model class
        """
        self.db = db
        self.model = model

    async def get_by_id(self, id: int) -> T | None:
        """
        Get entity by primary key ID.

        Returns:
            Entity if found, None otherwise
        """
        result = await self.db.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def get_all(self) -> list[T]:
        """Get every row of the table."""
        result = await self.db.execute(select(self.model))
        return list(result.scalars().all())

    async def get_where_in(self, field: str, values: Iterable[Any]) -> list[T]:
        """
        Get all entities whose ``field`` is one of ``values``.

        Used to batch-resolve referenced ids in one round trip.
        An empty ``values`` short-circuits without querying.
        """
        values = list(values)
        if not values:
            return []
        result = await self.db.execute(
            select(self.model).where(getattr(self.model, field).in_(values))
        )
        return list(result.scalars().all())
