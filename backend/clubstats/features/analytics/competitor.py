"""Per-competitor analytics for one member's detail view."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime

from clubstats.shared.constants import (
    Medal,
    UNKNOWN,
    UNKNOWN_COMPETITION,
    UNKNOWN_DISCIPLINE,
)
from clubstats.shared.formulas import rate

from .classifier import MedalTally, is_streak_win, is_strict_win, is_win, parse_medal
from .records import BoutRecord, ClubSnapshot, EntryRecord, MemberRecord


@dataclass
class Streak:
    type: str  # "win" | "loss"
    count: int


@dataclass
class DisciplineStats:
    discipline: str
    bouts: int
    wins: int
    win_rate: float
    medals: int


@dataclass
class PerformancePoint:
    date: date | None
    competition: str
    result: str  # "win" | "loss"
    medal: str | None = None
    round: str | None = None


@dataclass
class BoutHistoryItem:
    date: date | None
    competition: str
    opponent: str
    opponent_club: str
    result: str  # "win" | "loss"
    score: str  # "for-against"
    round: str
    coach: str | None = None


@dataclass
class CoachPerformance:
    coach_id: int
    coach_name: str
    bouts: int
    wins: int
    win_rate: float


@dataclass
class CompetitorAnalytics:
    member_id: int
    member_name: str

    total_medals: int
    gold_medals: int
    silver_medals: int
    bronze_medals: int

    total_bouts: int
    total_wins: int
    total_losses: int
    win_rate: float

    current_streak: Streak
    discipline_breakdown: list[DisciplineStats] = field(default_factory=list)
    performance_over_time: list[PerformancePoint] = field(default_factory=list)
    bout_history: list[BoutHistoryItem] = field(default_factory=list)
    coach_performance: list[CoachPerformance] = field(default_factory=list)


def _as_date(value: date | datetime | None) -> date | None:
    if isinstance(value, datetime):
        return value.date()
    return value


def _bout_date(snapshot: ClubSnapshot, entry: EntryRecord, bout: BoutRecord) -> date | None:
    """Competition start date, else the bout's own timestamp."""
    competition = snapshot.competition_by_id.get(entry.competition_id)
    if competition is not None and competition.date_start:
        return competition.date_start
    return _as_date(bout.created_at)


def _competition_name(snapshot: ClubSnapshot, entry: EntryRecord) -> str:
    competition = snapshot.competition_by_id.get(entry.competition_id)
    if competition is None or not competition.name:
        return UNKNOWN_COMPETITION
    return competition.name


def _date_key(value: date | None):
    return (value is None, value or date.min)


def current_streak(bouts: list[BoutRecord]) -> Streak:
    """Run length of the most recent outcome, newest bout first.

    Outcome here is the exact Win/win/Victory/victory match; everything else
    counts toward a loss streak.
    """
    ordered = sorted(
        bouts,
        key=lambda b: b.created_at or datetime.min,
        reverse=True,
    )
    if not ordered:
        return Streak(type="win", count=0)

    latest_win = is_streak_win(ordered[0].result)
    count = 0
    for bout in ordered:
        if is_streak_win(bout.result) != latest_win:
            break
        count += 1
    return Streak(type="win" if latest_win else "loss", count=count)


def _entry_medal(snapshot: ClubSnapshot, entry: EntryRecord) -> str | None:
    for result in snapshot.results_by_entry.get(entry.id, []):
        medal = parse_medal(result.medal)
        if medal is not Medal.NONE:
            return medal.value
    return None


def compute_competitor_analytics(
    snapshot: ClubSnapshot, member: MemberRecord
) -> CompetitorAnalytics:
    """Statistics for one member across all their entries."""
    entries = snapshot.entries_of(member.id)

    entry_bouts: list[tuple[EntryRecord, BoutRecord]] = [
        (entry, bout)
        for entry in entries
        for bout in snapshot.bouts_by_entry.get(entry.id, [])
    ]
    bouts = [bout for _, bout in entry_bouts]
    tally = MedalTally.of(
        result.medal
        for entry in entries
        for result in snapshot.results_by_entry.get(entry.id, [])
    )

    total_bouts = len(bouts)
    total_wins = sum(1 for b in bouts if is_win(b.result))

    return CompetitorAnalytics(
        member_id=member.id,
        member_name=member.full_name,
        total_medals=tally.total,
        gold_medals=tally.gold,
        silver_medals=tally.silver,
        bronze_medals=tally.bronze,
        total_bouts=total_bouts,
        total_wins=total_wins,
        total_losses=total_bouts - total_wins,
        win_rate=rate(total_wins, total_bouts),
        current_streak=current_streak(bouts),
        discipline_breakdown=_discipline_breakdown(snapshot, entries),
        performance_over_time=_performance_over_time(snapshot, entry_bouts),
        bout_history=_bout_history(snapshot, entry_bouts),
        coach_performance=_coach_performance(snapshot, entries),
    )


def _performance_over_time(
    snapshot: ClubSnapshot, entry_bouts: list[tuple[EntryRecord, BoutRecord]]
) -> list[PerformancePoint]:
    points = [
        PerformancePoint(
            date=_bout_date(snapshot, entry, bout),
            competition=_competition_name(snapshot, entry),
            result="win" if is_strict_win(bout.result) else "loss",
            medal=_entry_medal(snapshot, entry),
            round=bout.round,
        )
        for entry, bout in entry_bouts
    ]
    points.sort(key=lambda p: _date_key(p.date))
    return points


def _bout_history(
    snapshot: ClubSnapshot, entry_bouts: list[tuple[EntryRecord, BoutRecord]]
) -> list[BoutHistoryItem]:
    history = []
    for entry, bout in entry_bouts:
        coach = snapshot.coach_by_id.get(entry.coach_id)
        history.append(
            BoutHistoryItem(
                date=_bout_date(snapshot, entry, bout),
                competition=_competition_name(snapshot, entry),
                opponent=bout.opponent_name or UNKNOWN,
                opponent_club=bout.opponent_club or UNKNOWN,
                result="win" if is_strict_win(bout.result) else "loss",
                score=f"{bout.score_for or 0}-{bout.score_against or 0}",
                round=bout.round or UNKNOWN,
                coach=coach.full_name if coach else None,
            )
        )
    # Newest first, undated last
    dated = sorted((h for h in history if h.date), key=lambda h: h.date, reverse=True)
    return dated + [h for h in history if not h.date]


def _coach_performance(
    snapshot: ClubSnapshot, entries: list[EntryRecord]
) -> list[CoachPerformance]:
    counts: dict[int, list[int]] = {}
    for entry in entries:
        if entry.coach_id is None:
            continue
        entry_bouts = snapshot.bouts_by_entry.get(entry.id, [])
        coach_counts = counts.setdefault(entry.coach_id, [0, 0])
        coach_counts[0] += len(entry_bouts)
        coach_counts[1] += sum(1 for b in entry_bouts if is_win(b.result))

    performance = []
    for coach_id, (bouts, wins) in counts.items():
        coach = snapshot.coach_by_id.get(coach_id)
        performance.append(
            CoachPerformance(
                coach_id=coach_id,
                coach_name=coach.full_name if coach and coach.full_name else UNKNOWN,
                bouts=bouts,
                wins=wins,
                win_rate=rate(wins, bouts),
            )
        )
    performance.sort(key=lambda c: c.win_rate, reverse=True)
    return performance


def _discipline_breakdown(
    snapshot: ClubSnapshot, entries: list[EntryRecord]
) -> list[DisciplineStats]:
    grouped: dict[str, dict] = {}
    for entry in entries:
        discipline = snapshot.discipline_by_id.get(entry.discipline_id)
        name = discipline.name if discipline and discipline.name else UNKNOWN_DISCIPLINE
        stats = grouped.setdefault(name, {"bouts": 0, "wins": 0, "tally": MedalTally()})

        entry_bouts = snapshot.bouts_by_entry.get(entry.id, [])
        stats["bouts"] += len(entry_bouts)
        stats["wins"] += sum(1 for b in entry_bouts if is_win(b.result))
        for result in snapshot.results_by_entry.get(entry.id, []):
            stats["tally"].add(result.medal)

    return [
        DisciplineStats(
            discipline=name,
            bouts=stats["bouts"],
            wins=stats["wins"],
            win_rate=rate(stats["wins"], stats["bouts"]),
            medals=stats["tally"].total,
        )
        for name, stats in grouped.items()
    ]
