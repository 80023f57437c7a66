"""
Loading club datasets for analytics.

ClubDataSource is what the analytics service depends on; SqlClubDataSource
reads the club tables through the read-only repositories and converts rows
into snapshot records. Every read opens its own session so independent
datasets can be fetched concurrently.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Iterable, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from clubstats.features.club import (
    BoutRepository,
    CoachRepository,
    CompetitionRepository,
    DisciplineRepository,
    EntryRepository,
    MemberRepository,
    OrganisationRepository,
    ResultRepository,
    TeamRepository,
)

from .exceptions import DataSourceError
from .records import (
    BoutRecord,
    CoachRecord,
    CompetitionRecord,
    DisciplineRecord,
    EntryRecord,
    MemberRecord,
    OrganisationRecord,
    ResultRecord,
    TeamRecord,
)

logger = logging.getLogger(__name__)


# Snapshot field name -> (repository class, record class)
DATASETS: dict[str, tuple[type, type]] = {
    "competitions": (CompetitionRepository, CompetitionRecord),
    "entries": (EntryRepository, EntryRecord),
    "bouts": (BoutRepository, BoutRecord),
    "results": (ResultRepository, ResultRecord),
    "teams": (TeamRepository, TeamRecord),
    "members": (MemberRepository, MemberRecord),
    "organisations": (OrganisationRepository, OrganisationRecord),
    "coaches": (CoachRepository, CoachRecord),
    "disciplines": (DisciplineRepository, DisciplineRecord),
}


def to_record(record_cls: type, row: Any):
    """Copy the record's fields off an ORM row."""
    return record_cls(**{
        name: getattr(row, name)
        for name in record_cls.__dataclass_fields__
    })


class ClubDataSource(Protocol):
    """Read access to the club datasets."""

    async def load_all(self, dataset: str) -> list:
        """Every row of one dataset (a DATASETS key), as records."""
        ...

    async def load_where_in(self, dataset: str, field: str, values: Iterable[Any]) -> list:
        """Rows of one dataset whose field is in values, as records."""
        ...

    async def get_member(self, member_id: int) -> MemberRecord | None:
        ...


class SqlClubDataSource:
    """ClubDataSource backed by SQLAlchemy async sessions."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def _read(self, dataset: str, query: Callable[[Any], Awaitable[list]]) -> list:
        repository_cls, record_cls = DATASETS[dataset]
        try:
            async with self.session_factory() as db:
                rows = await query(repository_cls(db))
        except SQLAlchemyError as e:
            raise DataSourceError(dataset, str(e)) from e
        logger.debug(f"Loaded {len(rows)} {dataset}")
        return [to_record(record_cls, row) for row in rows]

    async def load_all(self, dataset: str) -> list:
        return await self._read(dataset, lambda repo: repo.get_all())

    async def load_where_in(self, dataset: str, field: str, values: Iterable[Any]) -> list:
        values = [v for v in set(values) if v is not None]
        if not values:
            return []
        return await self._read(dataset, lambda repo: repo.get_where_in(field, values))

    async def get_member(self, member_id: int) -> MemberRecord | None:
        async def query(repo: MemberRepository) -> list:
            member = await repo.get_by_id(member_id)
            return [member] if member else []

        members = await self._read("members", query)
        return members[0] if members else None
