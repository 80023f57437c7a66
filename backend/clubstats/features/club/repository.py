"""
Club repositories.

Read-only data access for the club tables.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from clubstats.shared.repository import BaseRepository
from .models import (
    Coach,
    Competition,
    CompetitionBout,
    CompetitionEntry,
    CompetitionResult,
    CompetitionTeam,
    Discipline,
    Member,
    Organisation,
)


class CompetitionRepository(BaseRepository[Competition]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Competition)


class EntryRepository(BaseRepository[CompetitionEntry]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, CompetitionEntry)


class BoutRepository(BaseRepository[CompetitionBout]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, CompetitionBout)


class ResultRepository(BaseRepository[CompetitionResult]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, CompetitionResult)


class TeamRepository(BaseRepository[CompetitionTeam]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, CompetitionTeam)


class MemberRepository(BaseRepository[Member]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Member)


class OrganisationRepository(BaseRepository[Organisation]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Organisation)


class CoachRepository(BaseRepository[Coach]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Coach)


class DisciplineRepository(BaseRepository[Discipline]):
    def __init__(self, db: AsyncSession):
        super().__init__(db, Discipline)
