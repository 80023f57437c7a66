"""Plain snapshot records for analytics (dataclasses, no DB dependency)."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime


@dataclass(frozen=True)
class CompetitionRecord:
    id: int
    name: str | None = None
    date_start: date | None = None
    date_end: date | None = None
    organisation_id: int | None = None
    location: str | None = None


@dataclass(frozen=True)
class EntryRecord:
    id: int
    competition_id: int | None = None
    member_id: int | None = None
    coach_id: int | None = None
    discipline_id: int | None = None
    category: str | None = None


@dataclass(frozen=True)
class BoutRecord:
    """One bout; attributed to an entry or a team, never both."""

    id: int
    entry_id: int | None = None
    team_id: int | None = None
    competition_id: int | None = None
    result: str | None = None  # free text: "Win", "W", "lost", ...
    score_for: int | None = None
    score_against: int | None = None
    round: str | None = None
    opponent_name: str | None = None
    opponent_club: str | None = None
    created_at: datetime | None = None

    @property
    def is_individual(self) -> bool:
        return self.entry_id is not None and self.team_id is None

    @property
    def is_team(self) -> bool:
        return self.team_id is not None and self.entry_id is None


@dataclass(frozen=True)
class ResultRecord:
    id: int
    entry_id: int | None = None
    medal: str | None = None  # free text: "Gold", "silver", ...
    round_reached: str | None = None


@dataclass(frozen=True)
class TeamRecord:
    id: int
    team_name: str | None = None
    competition_id: int | None = None
    discipline_id: int | None = None
    medal: str | None = None


@dataclass(frozen=True)
class MemberRecord:
    id: int
    first_name: str | None = None
    last_name: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


@dataclass(frozen=True)
class OrganisationRecord:
    id: int
    name: str | None = None
    level: str | None = None


@dataclass(frozen=True)
class CoachRecord:
    id: int
    first_name: str | None = None
    last_name: str | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name or ''} {self.last_name or ''}".strip()


@dataclass(frozen=True)
class DisciplineRecord:
    id: int
    name: str | None = None
    team_event: bool = False


@dataclass
class ClubSnapshot:
    """
    Every collection one analytics pass needs, fully materialized.

    Treated as immutable for the duration of a computation. Lookup maps
    are built once so aggregators never search lists per row.
    """

    competitions: list[CompetitionRecord] = field(default_factory=list)
    entries: list[EntryRecord] = field(default_factory=list)
    bouts: list[BoutRecord] = field(default_factory=list)
    results: list[ResultRecord] = field(default_factory=list)
    teams: list[TeamRecord] = field(default_factory=list)
    members: list[MemberRecord] = field(default_factory=list)
    organisations: list[OrganisationRecord] = field(default_factory=list)
    coaches: list[CoachRecord] = field(default_factory=list)
    disciplines: list[DisciplineRecord] = field(default_factory=list)

    def __post_init__(self):
        self.competition_by_id = {c.id: c for c in self.competitions}
        self.entry_by_id = {e.id: e for e in self.entries}
        self.team_by_id = {t.id: t for t in self.teams}
        self.member_by_id = {m.id: m for m in self.members}
        self.organisation_by_id = {o.id: o for o in self.organisations}
        self.coach_by_id = {c.id: c for c in self.coaches}
        self.discipline_by_id = {d.id: d for d in self.disciplines}

        self.bouts_by_entry: dict[int, list[BoutRecord]] = {}
        for bout in self.bouts:
            if bout.is_individual:
                self.bouts_by_entry.setdefault(bout.entry_id, []).append(bout)

        self.results_by_entry: dict[int, list[ResultRecord]] = {}
        for result in self.results:
            if result.entry_id is not None:
                self.results_by_entry.setdefault(result.entry_id, []).append(result)

    def member_name(self, member_id: int | None) -> str | None:
        """Display name of a member, None when not resolvable."""
        member = self.member_by_id.get(member_id)
        return member.full_name if member else None

    def entries_of(self, member_id: int) -> list[EntryRecord]:
        return [e for e in self.entries if e.member_id == member_id]
