"""Club-wide competition analytics."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from clubstats.shared.constants import NOT_AVAILABLE, UNKNOWN
from clubstats.shared.formulas import percentage, rate, relative_change, round_1

from .classifier import MedalTally, is_strict_win, is_win, score_medal
from .levels import CompetitionLevels, competition_level_breakdown
from .records import BoutRecord, ClubSnapshot


@dataclass
class TopPerformer:
    name: str
    member_id: int
    medal_points: int
    win_rate: float


@dataclass
class MostImproved:
    name: str
    member_id: int | None
    improvement: float  # percentage points, last window minus previous


@dataclass
class BestTeamPairing:
    team_name: str
    win_rate: float
    bouts: int
    # Team membership is not recorded anywhere; never filled in.
    members: list[str] | None = None


@dataclass
class ClubAnalytics:
    # Medals
    total_medals: int
    gold_medals: int
    silver_medals: int
    bronze_medals: int

    # Bouts
    total_bouts: int
    total_wins: int
    total_losses: int
    win_rate: float

    # Efficiency
    medal_efficiency: float
    year_on_year_trend: float

    # Participation
    competitions_attended: int
    unique_locations: list[str]
    total_competitors: int

    # Highlights
    top_performer: TopPerformer | None
    most_improved: MostImproved
    best_team_pairing: BestTeamPairing

    competition_levels: CompetitionLevels = field(default_factory=CompetitionLevels)


def compute_club_analytics(
    snapshot: ClubSnapshot,
    today: date | None = None,
    improvement_window: int = 3,
) -> ClubAnalytics:
    """Derive the club dashboard statistics from one snapshot.

    Args:
        snapshot: All club collections for this pass.
        today: Reference date for the year-on-year split (defaults to today).
        improvement_window: Competitions per window for most improved.
    """
    tally = MedalTally.of(r.medal for r in snapshot.results)

    total_bouts = len(snapshot.bouts)
    total_wins = sum(1 for b in snapshot.bouts if is_win(b.result))
    # Complement: unclassified results count as losses.
    total_losses = total_bouts - total_wins

    return ClubAnalytics(
        total_medals=tally.total,
        gold_medals=tally.gold,
        silver_medals=tally.silver,
        bronze_medals=tally.bronze,
        total_bouts=total_bouts,
        total_wins=total_wins,
        total_losses=total_losses,
        win_rate=rate(total_wins, total_bouts),
        medal_efficiency=rate(tally.total, len(snapshot.entries)),
        year_on_year_trend=year_on_year_trend(snapshot.bouts, today),
        competitions_attended=len({e.competition_id for e in snapshot.entries}),
        unique_locations=unique_locations(snapshot),
        total_competitors=len({e.member_id for e in snapshot.entries}),
        top_performer=find_top_performer(snapshot),
        most_improved=find_most_improved(snapshot, window=improvement_window),
        best_team_pairing=find_best_team(snapshot),
        competition_levels=competition_level_breakdown(snapshot),
    )


def unique_locations(snapshot: ClubSnapshot) -> list[str]:
    """Distinct non-empty locations in first-seen order."""
    return list(dict.fromkeys(c.location for c in snapshot.competitions if c.location))


def _strict_win_rate(bouts: list[BoutRecord]) -> float:
    wins = sum(1 for b in bouts if is_strict_win(b.result))
    return percentage(wins, len(bouts))


def year_on_year_trend(bouts: list[BoutRecord], today: date | None = None) -> float:
    """Relative change of this calendar year's win rate against last year's.

    Bouts are bucketed by created_at. Wins are exact "Win"/"win" matches.
    0 when last year has no wins (or no bouts).
    """
    current_year = (today or date.today()).year
    current = [b for b in bouts if b.created_at and b.created_at.year == current_year]
    previous = [b for b in bouts if b.created_at and b.created_at.year == current_year - 1]

    return round_1(relative_change(_strict_win_rate(current), _strict_win_rate(previous)))


# =============================================================================
# Highlights
# =============================================================================

@dataclass
class _MemberStats:
    member_id: int
    medal_points: int = 0
    bouts: int = 0
    wins: int = 0

    @property
    def win_rate(self) -> float:
        return percentage(self.wins, self.bouts)


def find_top_performer(snapshot: ClubSnapshot) -> TopPerformer | None:
    """Member with most medal points, ties broken by win rate.

    None when nobody has entries/results or the winner is not in members.
    """
    stats: dict[int, _MemberStats] = {}

    for result in snapshot.results:
        entry = snapshot.entry_by_id.get(result.entry_id)
        if entry is None or entry.member_id is None:
            continue
        member = stats.setdefault(entry.member_id, _MemberStats(entry.member_id))
        member.medal_points += score_medal(result.medal).points

    for entry in snapshot.entries:
        if entry.member_id is None:
            continue
        member = stats.setdefault(entry.member_id, _MemberStats(entry.member_id))
        entry_bouts = snapshot.bouts_by_entry.get(entry.id, [])
        member.bouts += len(entry_bouts)
        member.wins += sum(1 for b in entry_bouts if is_strict_win(b.result))

    if not stats:
        return None

    best = sorted(stats.values(), key=lambda s: (-s.medal_points, -s.win_rate))[0]
    name = snapshot.member_name(best.member_id)
    if name is None:
        return None

    return TopPerformer(
        name=name,
        member_id=best.member_id,
        medal_points=best.medal_points,
        win_rate=round_1(best.win_rate),
    )


def _window_stats(
    snapshot: ClubSnapshot, competition_ids: set[int]
) -> dict[int, list[int]]:
    """member_id -> [bouts, strict wins] for entries in the given competitions."""
    stats: dict[int, list[int]] = {}
    for entry in snapshot.entries:
        if entry.member_id is None or entry.competition_id not in competition_ids:
            continue
        entry_bouts = snapshot.bouts_by_entry.get(entry.id, [])
        counts = stats.setdefault(entry.member_id, [0, 0])
        counts[0] += len(entry_bouts)
        counts[1] += sum(1 for b in entry_bouts if is_strict_win(b.result))
    return stats


def find_most_improved(snapshot: ClubSnapshot, window: int = 3) -> MostImproved:
    """Largest win-rate gain between the two most recent competition windows.

    With window=3 the last six dated competitions are split into
    [-6, -3) and [-3, end). Only members with bouts in both windows count.
    """
    not_available = MostImproved(name=NOT_AVAILABLE, member_id=None, improvement=0.0)

    dated = sorted(
        (c for c in snapshot.competitions if c.date_start),
        key=lambda c: c.date_start,
    )
    if len(dated) < window * 2:
        return not_available

    last_ids = {c.id for c in dated[-window:]}
    previous_ids = {c.id for c in dated[-window * 2:-window]}

    last_stats = _window_stats(snapshot, last_ids)
    previous_stats = _window_stats(snapshot, previous_ids)

    best_member: int | None = None
    best_improvement = 0.0
    for member_id, (last_bouts, last_wins) in last_stats.items():
        previous = previous_stats.get(member_id)
        if previous is None or last_bouts == 0 or previous[0] == 0:
            continue
        improvement = percentage(last_wins, last_bouts) - percentage(previous[1], previous[0])
        if best_member is None or improvement > best_improvement:
            best_member, best_improvement = member_id, improvement

    if best_member is None:
        return not_available

    return MostImproved(
        name=snapshot.member_name(best_member) or UNKNOWN,
        member_id=best_member,
        improvement=round_1(best_improvement),
    )


def find_best_team(snapshot: ClubSnapshot) -> BestTeamPairing:
    """Team (by name) with the highest strict win rate over its bouts."""
    teams: dict[str, list[int]] = {}
    for bout in snapshot.bouts:
        if not bout.is_team:
            continue
        team = snapshot.team_by_id.get(bout.team_id)
        if team is None or not team.team_name:
            continue
        counts = teams.setdefault(team.team_name, [0, 0])
        counts[0] += 1
        if is_strict_win(bout.result):
            counts[1] += 1

    if not teams:
        return BestTeamPairing(team_name=NOT_AVAILABLE, win_rate=0.0, bouts=0)

    best_name, best_rate, best_bouts = None, -1.0, 0
    for team_name, (bouts, wins) in teams.items():
        team_rate = percentage(wins, bouts)
        if team_rate > best_rate:
            best_name, best_rate, best_bouts = team_name, team_rate, bouts

    return BestTeamPairing(team_name=best_name, win_rate=round_1(best_rate), bouts=best_bouts)
