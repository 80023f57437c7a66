"""
Club data models.

Tables are owned by the club management dashboard; this service only reads
them. Column names follow the existing relational schema (``<table>_id``
primary keys, capitalised ``Name`` on competitions).

Models:
- Organisation: Competition organiser with an optional level
- Competition: Event the club attended
- CompetitionEntry: Member registered into one competition
- CompetitionBout: One recorded match (entry or team)
- CompetitionResult: Medal / round reached for an entry
- CompetitionTeam: Team fielded in a competition
- Member, Coach, Discipline: Lookup tables
"""

from datetime import datetime
from sqlalchemy import Column, String, Integer, Date, DateTime, Boolean, ForeignKey

from clubstats.models.base import Base


class Organisation(Base):
    """Competition organiser."""

    __tablename__ = "organisations"

    id = Column("organisations_id", Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=True)
    level = Column(String(50), nullable=True)  # free text: "National", "world", ...

    def __repr__(self):
        return f"<Organisation {self.id} ({self.name})>"


class Competition(Base):
    """Competition attended by club members."""

    __tablename__ = "competitions"

    id = Column("competitions_id", Integer, primary_key=True, autoincrement=True)
    name = Column("Name", String(255), nullable=True)
    date_start = Column(Date, nullable=True)
    date_end = Column(Date, nullable=True)
    location = Column(String(255), nullable=True)
    organisation_id = Column(
        "organisations_id",
        Integer,
        ForeignKey("organisations.organisations_id"),
        nullable=True,
        index=True,
    )

    created_at = Column(DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f"<Competition {self.id} ({self.name})>"


class Member(Base):
    """Club member."""

    __tablename__ = "members"

    id = Column("members_id", Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)

    def __repr__(self):
        return f"<Member {self.id} ({self.first_name} {self.last_name})>"


class Coach(Base):
    """Coach assigned to competition entries."""

    __tablename__ = "competition_coaches"

    id = Column("competition_coaches_id", Integer, primary_key=True, autoincrement=True)
    first_name = Column(String(100), nullable=True)
    last_name = Column(String(100), nullable=True)


class Discipline(Base):
    """Competition discipline (kata, kumite, team kumite...)."""

    __tablename__ = "competition_disciplines"

    id = Column("competition_disciplines_id", Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=True)
    team_event = Column(Boolean, default=False)


class CompetitionEntry(Base):
    """A member's registration into one competition."""

    __tablename__ = "competition_entries"

    id = Column("competition_entries_id", Integer, primary_key=True, autoincrement=True)
    competition_id = Column(
        "competitions_id",
        Integer,
        ForeignKey("competitions.competitions_id"),
        nullable=True,
        index=True,
    )
    member_id = Column(
        "members_id", Integer, ForeignKey("members.members_id"), nullable=True, index=True
    )
    coach_id = Column(
        "competition_coaches_id",
        Integer,
        ForeignKey("competition_coaches.competition_coaches_id"),
        nullable=True,
    )
    discipline_id = Column(
        "competition_disciplines_id",
        Integer,
        ForeignKey("competition_disciplines.competition_disciplines_id"),
        nullable=True,
    )
    category = Column(String(100), nullable=True)


class CompetitionTeam(Base):
    """Team fielded in a competition."""

    __tablename__ = "competition_teams"

    id = Column("competition_teams_id", Integer, primary_key=True, autoincrement=True)
    team_name = Column(String(255), nullable=True)
    competition_id = Column(
        "competitions_id", Integer, ForeignKey("competitions.competitions_id"), nullable=True
    )
    discipline_id = Column(
        "competition_disciplines_id",
        Integer,
        ForeignKey("competition_disciplines.competition_disciplines_id"),
        nullable=True,
    )
    medal = Column(String(20), nullable=True)


class CompetitionBout(Base):
    """
    One recorded match.

    Exactly one of entry_id / team_id is expected to be set. ``result`` is
    free text ("Win", "W", "lost"...), see analytics.classifier.
    """

    __tablename__ = "competition_bouts"

    id = Column("competition_bouts_id", Integer, primary_key=True, autoincrement=True)
    entry_id = Column(
        "competition_entries_id",
        Integer,
        ForeignKey("competition_entries.competition_entries_id"),
        nullable=True,
        index=True,
    )
    team_id = Column(
        "competition_teams_id",
        Integer,
        ForeignKey("competition_teams.competition_teams_id"),
        nullable=True,
        index=True,
    )
    competition_id = Column(
        "competitions_id", Integer, ForeignKey("competitions.competitions_id"), nullable=True
    )
    result = Column(String(50), nullable=True)
    score_for = Column(Integer, nullable=True)
    score_against = Column(Integer, nullable=True)
    round = Column(String(50), nullable=True)
    opponent_name = Column(String(255), nullable=True)
    opponent_club = Column(String(255), nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)


class CompetitionResult(Base):
    """Medal record for an entry (at most one medal per row)."""

    __tablename__ = "competition_results"

    id = Column("competition_results_id", Integer, primary_key=True, autoincrement=True)
    entry_id = Column(
        "competition_entries_id",
        Integer,
        ForeignKey("competition_entries.competition_entries_id"),
        nullable=True,
        index=True,
    )
    medal = Column(String(20), nullable=True)
    round_reached = Column(String(50), nullable=True)
