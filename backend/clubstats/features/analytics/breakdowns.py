"""
Supplementary dashboard breakdowns.

Yearly trends, win rate by coach/member, the bout-level win-rate analysis,
competitors overview, medals breakdown and per-competition summary. All
functions are pure over a ClubSnapshot.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime

from clubstats.shared.constants import (
    Medal,
    UNKNOWN_COACH,
    UNKNOWN_COMPETITION,
    UNKNOWN_DISCIPLINE,
    UNKNOWN_MEMBER,
    UNKNOWN_TEAM,
)
from clubstats.shared.formulas import rate

from .classifier import MedalTally, is_loss, is_streak_win, is_strict_win, is_win, parse_medal
from .records import BoutRecord, ClubSnapshot, CompetitionRecord, EntryRecord

ALL_DISCIPLINES = "All Disciplines"


# =============================================================================
# Yearly trends
# =============================================================================

@dataclass
class YearTrend:
    year: int
    total_medals: int
    gold_medals: int
    silver_medals: int
    bronze_medals: int
    total_entries: int
    total_bouts: int
    win_rate: float


def yearly_trends(snapshot: ClubSnapshot) -> list[YearTrend]:
    """Entries, bouts, strict win rate and medals per competition year.

    Bouts are matched on their own competition_id, so team bouts count.
    """
    bouts_by_competition: dict[int, list[BoutRecord]] = {}
    for bout in snapshot.bouts:
        if bout.competition_id is not None:
            bouts_by_competition.setdefault(bout.competition_id, []).append(bout)

    years: dict[int, dict] = {}
    for competition in snapshot.competitions:
        if not competition.date_start:
            continue
        stats = years.setdefault(
            competition.date_start.year,
            {"entries": 0, "bouts": 0, "wins": 0, "tally": MedalTally()},
        )
        competition_bouts = bouts_by_competition.get(competition.id, [])
        stats["bouts"] += len(competition_bouts)
        stats["wins"] += sum(1 for b in competition_bouts if is_strict_win(b.result))

        for entry in snapshot.entries:
            if entry.competition_id != competition.id:
                continue
            stats["entries"] += 1
            for result in snapshot.results_by_entry.get(entry.id, []):
                stats["tally"].add(result.medal)

    return [
        YearTrend(
            year=year,
            total_medals=stats["tally"].total,
            gold_medals=stats["tally"].gold,
            silver_medals=stats["tally"].silver,
            bronze_medals=stats["tally"].bronze,
            total_entries=stats["entries"],
            total_bouts=stats["bouts"],
            win_rate=rate(stats["wins"], stats["bouts"]),
        )
        for year, stats in sorted(years.items())
    ]


# =============================================================================
# Win rate by coach / member
# =============================================================================

@dataclass
class CoachWinRate:
    coach_id: int
    coach_name: str
    bouts: int
    wins: int
    win_rate: float


@dataclass
class MemberWinRate:
    member_id: int
    member_name: str
    bouts: int
    wins: int
    win_rate: float


def _group_entry_bouts(snapshot: ClubSnapshot, key: str, only: int | None) -> dict[int, list[int]]:
    """Group attributed bouts by an entry attribute -> [bouts, wins]."""
    groups: dict[int, list[int]] = {}
    for bout in snapshot.bouts:
        if not bout.is_individual:
            continue
        entry = snapshot.entry_by_id.get(bout.entry_id)
        group_id = getattr(entry, key, None) if entry else None
        if group_id is None or (only is not None and group_id != only):
            continue
        counts = groups.setdefault(group_id, [0, 0])
        counts[0] += 1
        if is_streak_win(bout.result):
            counts[1] += 1
    return groups


def win_rate_by_coach(snapshot: ClubSnapshot, coach_id: int | None = None) -> list[CoachWinRate]:
    """Win rate of bouts fought under each coach, best first."""
    rows = []
    for group_id, (bouts, wins) in _group_entry_bouts(snapshot, "coach_id", coach_id).items():
        coach = snapshot.coach_by_id.get(group_id)
        rows.append(
            CoachWinRate(
                coach_id=group_id,
                coach_name=coach.full_name if coach and coach.full_name else UNKNOWN_COACH,
                bouts=bouts,
                wins=wins,
                win_rate=rate(wins, bouts),
            )
        )
    rows.sort(key=lambda r: r.win_rate, reverse=True)
    return rows


def win_rate_by_member(snapshot: ClubSnapshot, member_id: int | None = None) -> list[MemberWinRate]:
    """Win rate of each member's bouts, best first."""
    rows = []
    for group_id, (bouts, wins) in _group_entry_bouts(snapshot, "member_id", member_id).items():
        rows.append(
            MemberWinRate(
                member_id=group_id,
                member_name=snapshot.member_name(group_id) or UNKNOWN_MEMBER,
                bouts=bouts,
                wins=wins,
                win_rate=rate(wins, bouts),
            )
        )
    rows.sort(key=lambda r: r.win_rate, reverse=True)
    return rows


# =============================================================================
# Win-rate analysis (bout level)
# =============================================================================

@dataclass
class IndividualBoutRow:
    bout_id: int
    member_id: int
    member_name: str
    competition_id: int | None
    competition_name: str
    date: date | None
    result: str
    opponent: str
    opponent_club: str
    score_for: int | None
    score_against: int | None
    coach: str | None
    discipline: str
    round: str | None
    is_win: bool
    is_loss: bool


@dataclass
class TeamBoutRow:
    bout_id: int
    team_id: int
    team_name: str
    competition_id: int | None
    competition_name: str
    date: date | None
    result: str
    opponent: str
    opponent_club: str
    score_for: int | None
    score_against: int | None
    discipline: str
    is_win: bool
    is_loss: bool


@dataclass
class WinRateSummary:
    total_bouts: int = 0
    total_wins: int = 0
    total_losses: int = 0
    overall_win_rate: float = 0.0
    individual_bouts: int = 0
    individual_wins: int = 0
    individual_losses: int = 0
    individual_win_rate: float = 0.0
    team_bouts: int = 0
    team_wins: int = 0
    team_losses: int = 0
    team_win_rate: float = 0.0
    unique_competitors: int = 0
    unique_teams: int = 0
    unique_competitions: int = 0


@dataclass
class WinRateAnalysis:
    individual_bouts: list[IndividualBoutRow] = field(default_factory=list)
    team_bouts: list[TeamBoutRow] = field(default_factory=list)
    summary: WinRateSummary = field(default_factory=WinRateSummary)


def _display_date(competition: CompetitionRecord | None, bout: BoutRecord) -> date | None:
    if competition is not None and competition.date_start:
        return competition.date_start
    if isinstance(bout.created_at, datetime):
        return bout.created_at.date()
    return bout.created_at


def summarize_bouts(
    individual: list[IndividualBoutRow], team: list[TeamBoutRow]
) -> WinRateSummary:
    """Summary counts; losses here are loss-vocabulary matches."""
    individual_wins = sum(1 for b in individual if b.is_win)
    individual_losses = sum(1 for b in individual if b.is_loss)
    team_wins = sum(1 for b in team if b.is_win)
    team_losses = sum(1 for b in team if b.is_loss)
    total_bouts = len(individual) + len(team)
    total_wins = individual_wins + team_wins

    return WinRateSummary(
        total_bouts=total_bouts,
        total_wins=total_wins,
        total_losses=individual_losses + team_losses,
        overall_win_rate=rate(total_wins, total_bouts),
        individual_bouts=len(individual),
        individual_wins=individual_wins,
        individual_losses=individual_losses,
        individual_win_rate=rate(individual_wins, len(individual)),
        team_bouts=len(team),
        team_wins=team_wins,
        team_losses=team_losses,
        team_win_rate=rate(team_wins, len(team)),
        unique_competitors=len({b.member_id for b in individual}),
        unique_teams=len({b.team_id for b in team}),
        unique_competitions=len(
            {b.competition_id for b in individual} | {b.competition_id for b in team}
        ),
    )


def win_rate_analysis(snapshot: ClubSnapshot) -> WinRateAnalysis:
    """Every attributed bout as a display row, newest first, plus summary."""
    ordered = sorted(
        snapshot.bouts,
        key=lambda b: b.created_at or datetime.min,
        reverse=True,
    )

    individual: list[IndividualBoutRow] = []
    team: list[TeamBoutRow] = []
    for bout in ordered:
        if bout.is_individual:
            entry = snapshot.entry_by_id.get(bout.entry_id)
            if entry is None or entry.member_id is None:
                continue
            competition = snapshot.competition_by_id.get(entry.competition_id)
            coach = snapshot.coach_by_id.get(entry.coach_id)
            discipline = snapshot.discipline_by_id.get(entry.discipline_id)
            individual.append(
                IndividualBoutRow(
                    bout_id=bout.id,
                    member_id=entry.member_id,
                    member_name=snapshot.member_name(entry.member_id) or UNKNOWN_MEMBER,
                    competition_id=entry.competition_id,
                    competition_name=(competition.name if competition else None) or UNKNOWN_COMPETITION,
                    date=_display_date(competition, bout),
                    result=bout.result or "Unknown",
                    opponent=bout.opponent_name or "Unknown Opponent",
                    opponent_club=bout.opponent_club or "Unknown Club",
                    score_for=bout.score_for,
                    score_against=bout.score_against,
                    coach=coach.full_name if coach else None,
                    discipline=(discipline.name if discipline else None) or UNKNOWN_DISCIPLINE,
                    round=bout.round,
                    is_win=is_win(bout.result),
                    is_loss=is_loss(bout.result),
                )
            )
        elif bout.is_team:
            team_record = snapshot.team_by_id.get(bout.team_id)
            if team_record is None:
                continue
            competition = snapshot.competition_by_id.get(team_record.competition_id)
            discipline = snapshot.discipline_by_id.get(team_record.discipline_id)
            team.append(
                TeamBoutRow(
                    bout_id=bout.id,
                    team_id=team_record.id,
                    team_name=team_record.team_name or UNKNOWN_TEAM,
                    competition_id=team_record.competition_id,
                    competition_name=(competition.name if competition else None) or UNKNOWN_COMPETITION,
                    date=_display_date(competition, bout),
                    result=bout.result or "Unknown",
                    opponent=bout.opponent_name or "Unknown Opponent",
                    opponent_club=bout.opponent_club or "Unknown Club",
                    score_for=bout.score_for,
                    score_against=bout.score_against,
                    discipline=(discipline.name if discipline else None) or UNKNOWN_DISCIPLINE,
                    is_win=is_win(bout.result),
                    is_loss=is_loss(bout.result),
                )
            )

    return WinRateAnalysis(
        individual_bouts=individual,
        team_bouts=team,
        summary=summarize_bouts(individual, team),
    )


def filter_by_discipline(analysis: WinRateAnalysis, discipline: str | None) -> WinRateAnalysis:
    """Narrow individual bouts to one discipline and recompute the summary.

    Team bouts are kept as-is; most of them carry no discipline.
    """
    if not discipline or discipline == ALL_DISCIPLINES:
        return analysis

    individual = [b for b in analysis.individual_bouts if b.discipline == discipline]
    return replace(
        analysis,
        individual_bouts=individual,
        summary=summarize_bouts(individual, analysis.team_bouts),
    )


# =============================================================================
# Competitors overview
# =============================================================================

@dataclass
class CompetitorCompetition:
    competition_id: int | None
    competition_name: str
    date: date | None
    bouts: int = 0
    wins: int = 0
    medals: int = 0


@dataclass
class CompetitorSummary:
    member_id: int
    member_name: str
    total_competitions: int
    total_bouts: int
    total_wins: int
    win_rate: float
    total_medals: int
    gold_medals: int
    silver_medals: int
    bronze_medals: int
    first_competition: date | None
    last_competition: date | None
    competitions: list[CompetitorCompetition] = field(default_factory=list)


@dataclass
class CompetitorsTotals:
    total_competitors: int = 0
    total_competitions: int = 0
    total_bouts: int = 0
    total_wins: int = 0
    overall_win_rate: float = 0.0
    total_medals: int = 0


@dataclass
class CompetitorsOverview:
    competitors: list[CompetitorSummary] = field(default_factory=list)
    totals: CompetitorsTotals = field(default_factory=CompetitorsTotals)


def _summarize_competitor(
    snapshot: ClubSnapshot, member_id: int, entries: list[EntryRecord]
) -> CompetitorSummary:
    tally = MedalTally()
    bouts = wins = 0
    per_competition: dict[int | None, CompetitorCompetition] = {}
    dates: list[date] = []

    for entry in entries:
        competition = snapshot.competition_by_id.get(entry.competition_id)
        if competition is not None and competition.date_start:
            dates.append(competition.date_start)
        row = per_competition.setdefault(
            entry.competition_id,
            CompetitorCompetition(
                competition_id=entry.competition_id,
                competition_name=(competition.name if competition else None) or UNKNOWN_COMPETITION,
                date=competition.date_start if competition else None,
            ),
        )

        entry_bouts = snapshot.bouts_by_entry.get(entry.id, [])
        entry_wins = sum(1 for b in entry_bouts if is_win(b.result))
        bouts += len(entry_bouts)
        wins += entry_wins
        row.bouts += len(entry_bouts)
        row.wins += entry_wins

        for result in snapshot.results_by_entry.get(entry.id, []):
            if parse_medal(result.medal) is not Medal.NONE:
                row.medals += 1
            tally.add(result.medal)

    return CompetitorSummary(
        member_id=member_id,
        member_name=snapshot.member_name(member_id) or UNKNOWN_MEMBER,
        total_competitions=len(entries),
        total_bouts=bouts,
        total_wins=wins,
        win_rate=rate(wins, bouts),
        total_medals=tally.total,
        gold_medals=tally.gold,
        silver_medals=tally.silver,
        bronze_medals=tally.bronze,
        first_competition=min(dates) if dates else None,
        last_competition=max(dates) if dates else None,
        competitions=sorted(
            per_competition.values(),
            key=lambda c: (c.date is None, c.date or date.min),
        ),
    )


def competitors_overview(snapshot: ClubSnapshot, limit: int | None = None) -> CompetitorsOverview:
    """One row per known member who has entries, medals first then win rate."""
    entries_by_member: dict[int, list[EntryRecord]] = {}
    for entry in snapshot.entries:
        if entry.member_id is not None and entry.member_id in snapshot.member_by_id:
            entries_by_member.setdefault(entry.member_id, []).append(entry)

    competitors = [
        _summarize_competitor(snapshot, member_id, entries)
        for member_id, entries in entries_by_member.items()
    ]
    competitors.sort(key=lambda c: (-c.total_medals, -c.win_rate))

    total_bouts = sum(c.total_bouts for c in competitors)
    total_wins = sum(c.total_wins for c in competitors)
    totals = CompetitorsTotals(
        total_competitors=len(competitors),
        total_competitions=len({e.competition_id for e in snapshot.entries if e.member_id is not None}),
        total_bouts=total_bouts,
        total_wins=total_wins,
        overall_win_rate=rate(total_wins, total_bouts),
        total_medals=sum(c.total_medals for c in competitors),
    )

    if limit is not None:
        competitors = competitors[:limit]
    return CompetitorsOverview(competitors=competitors, totals=totals)


# =============================================================================
# Medals breakdown
# =============================================================================

@dataclass
class MedalAward:
    competition_id: int | None
    competition_name: str
    date: date | None
    medal: str
    discipline: str
    category: str | None = None


@dataclass
class MedalHolder:
    """A member (individual) or team name with its medal haul."""

    name: str
    gold_medals: int = 0
    silver_medals: int = 0
    bronze_medals: int = 0
    member_id: int | None = None
    awards: list[MedalAward] = field(default_factory=list)

    @property
    def total_medals(self) -> int:
        return self.gold_medals + self.silver_medals + self.bronze_medals

    def add(self, medal: Medal, award: MedalAward) -> None:
        setattr(self, f"{medal.value}_medals", getattr(self, f"{medal.value}_medals") + 1)
        self.awards.append(award)


@dataclass
class MedalsTotals:
    total_gold: int = 0
    total_silver: int = 0
    total_bronze: int = 0
    total_medals: int = 0
    unique_competitors: int = 0
    unique_teams: int = 0


@dataclass
class MedalsBreakdown:
    individual: list[MedalHolder] = field(default_factory=list)
    teams: list[MedalHolder] = field(default_factory=list)
    totals: MedalsTotals = field(default_factory=MedalsTotals)


def _discipline_name(snapshot: ClubSnapshot, discipline_id: int | None) -> str:
    discipline = snapshot.discipline_by_id.get(discipline_id)
    return (discipline.name if discipline else None) or UNKNOWN_DISCIPLINE


def medals_breakdown(snapshot: ClubSnapshot) -> MedalsBreakdown:
    """Gold/silver/bronze per member (from results) and per team (from teams)."""
    individual: dict[int, MedalHolder] = {}
    for result in snapshot.results:
        medal = parse_medal(result.medal)
        if medal is Medal.NONE:
            continue
        entry = snapshot.entry_by_id.get(result.entry_id)
        if entry is None or entry.member_id not in snapshot.member_by_id:
            continue
        competition = snapshot.competition_by_id.get(entry.competition_id)
        holder = individual.setdefault(
            entry.member_id,
            MedalHolder(name=snapshot.member_name(entry.member_id), member_id=entry.member_id),
        )
        holder.add(
            medal,
            MedalAward(
                competition_id=entry.competition_id,
                competition_name=(competition.name if competition else None) or UNKNOWN_COMPETITION,
                date=competition.date_start if competition else None,
                medal=result.medal,
                discipline=_discipline_name(snapshot, entry.discipline_id),
                category=entry.category,
            ),
        )

    teams: dict[str, MedalHolder] = {}
    for team in snapshot.teams:
        medal = parse_medal(team.medal)
        if medal is Medal.NONE:
            continue
        name = team.team_name or UNKNOWN_TEAM
        competition = snapshot.competition_by_id.get(team.competition_id)
        holder = teams.setdefault(name, MedalHolder(name=name))
        holder.add(
            medal,
            MedalAward(
                competition_id=team.competition_id,
                competition_name=(competition.name if competition else None) or UNKNOWN_COMPETITION,
                date=competition.date_start if competition else None,
                medal=team.medal,
                discipline=_discipline_name(snapshot, team.discipline_id),
            ),
        )

    individual_rows = sorted(individual.values(), key=lambda h: h.total_medals, reverse=True)
    team_rows = sorted(teams.values(), key=lambda h: h.total_medals, reverse=True)
    holders = individual_rows + team_rows

    return MedalsBreakdown(
        individual=individual_rows,
        teams=team_rows,
        totals=MedalsTotals(
            total_gold=sum(h.gold_medals for h in holders),
            total_silver=sum(h.silver_medals for h in holders),
            total_bronze=sum(h.bronze_medals for h in holders),
            total_medals=sum(h.total_medals for h in holders),
            unique_competitors=len(individual_rows),
            unique_teams=len(team_rows),
        ),
    )


# =============================================================================
# Competition summary
# =============================================================================

@dataclass
class CompetitionSummary:
    competition_id: int
    competition_name: str
    date_start: date | None
    date_end: date | None
    location: str | None
    total_medals: int
    gold_medals: int
    silver_medals: int
    bronze_medals: int
    total_bouts: int
    total_wins: int
    total_losses: int
    win_rate: float
    total_entries: int
    unique_competitors: int
    medal_efficiency: float


def competition_summary(snapshot: ClubSnapshot) -> list[CompetitionSummary]:
    """Per-competition results, most recent competition first."""
    team_bouts: dict[int, list[BoutRecord]] = {}
    for bout in snapshot.bouts:
        if not bout.is_team:
            continue
        team = snapshot.team_by_id.get(bout.team_id)
        if team is not None and team.competition_id is not None:
            team_bouts.setdefault(team.competition_id, []).append(bout)

    summaries = []
    for competition in snapshot.competitions:
        entries = [e for e in snapshot.entries if e.competition_id == competition.id]
        bouts = [
            bout
            for entry in entries
            for bout in snapshot.bouts_by_entry.get(entry.id, [])
        ] + team_bouts.get(competition.id, [])
        tally = MedalTally.of(
            result.medal
            for entry in entries
            for result in snapshot.results_by_entry.get(entry.id, [])
        )
        wins = sum(1 for b in bouts if is_win(b.result))

        summaries.append(
            CompetitionSummary(
                competition_id=competition.id,
                competition_name=competition.name or UNKNOWN_COMPETITION,
                date_start=competition.date_start,
                date_end=competition.date_end,
                location=competition.location,
                total_medals=tally.total,
                gold_medals=tally.gold,
                silver_medals=tally.silver,
                bronze_medals=tally.bronze,
                total_bouts=len(bouts),
                total_wins=wins,
                total_losses=len(bouts) - wins,
                win_rate=rate(wins, len(bouts)),
                total_entries=len(entries),
                unique_competitors=len({e.member_id for e in entries if e.member_id is not None}),
                medal_efficiency=rate(tally.total, len(entries)),
            )
        )

    dated = sorted((s for s in summaries if s.date_start), key=lambda s: s.date_start, reverse=True)
    return dated + [s for s in summaries if not s.date_start]
