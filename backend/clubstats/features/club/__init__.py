"""
Club data module.

Usage:
    from clubstats.features.club import Competition, EntryRepository

Models mirror the tables maintained by the club management dashboard.
Repositories are read-only.
"""

from .models import (
    Organisation,
    Competition,
    CompetitionEntry,
    CompetitionBout,
    CompetitionResult,
    CompetitionTeam,
    Member,
    Coach,
    Discipline,
)
from .repository import (
    CompetitionRepository,
    EntryRepository,
    BoutRepository,
    ResultRepository,
    TeamRepository,
    MemberRepository,
    OrganisationRepository,
    CoachRepository,
    DisciplineRepository,
)

__all__ = [
    # Models
    "Organisation",
    "Competition",
    "CompetitionEntry",
    "CompetitionBout",
    "CompetitionResult",
    "CompetitionTeam",
    "Member",
    "Coach",
    "Discipline",
    # Repositories
    "CompetitionRepository",
    "EntryRepository",
    "BoutRepository",
    "ResultRepository",
    "TeamRepository",
    "MemberRepository",
    "OrganisationRepository",
    "CoachRepository",
    "DisciplineRepository",
]
