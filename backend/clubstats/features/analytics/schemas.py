"""
Analytics schemas.

Pydantic response models; built from the aggregation dataclasses with
model_validate (from_attributes).
"""

import datetime as dt
from typing import Optional

from pydantic import BaseModel, ConfigDict


class _FromAttributes(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# =============================================================================
# Club analytics
# =============================================================================

class TopPerformerResponse(_FromAttributes):
    name: str
    member_id: int
    medal_points: int
    win_rate: float


class MostImprovedResponse(_FromAttributes):
    name: str
    member_id: Optional[int] = None
    improvement: float


class BestTeamPairingResponse(_FromAttributes):
    team_name: str
    win_rate: float
    bouts: int
    members: Optional[list[str]] = None  # membership not recorded


class CompetitionLevelsResponse(_FromAttributes):
    club: int
    national: int
    international: int


class ClubAnalyticsResponse(_FromAttributes):
    """Club-wide dashboard statistics."""

    total_medals: int
    gold_medals: int
    silver_medals: int
    bronze_medals: int

    total_bouts: int
    total_wins: int
    total_losses: int
    win_rate: float

    medal_efficiency: float
    year_on_year_trend: float

    competitions_attended: int
    unique_locations: list[str]
    total_competitors: int

    top_performer: Optional[TopPerformerResponse] = None
    most_improved: MostImprovedResponse
    best_team_pairing: BestTeamPairingResponse
    competition_levels: CompetitionLevelsResponse


# =============================================================================
# Competitor analytics
# =============================================================================

class StreakResponse(_FromAttributes):
    type: str
    count: int


class DisciplineStatsResponse(_FromAttributes):
    discipline: str
    bouts: int
    wins: int
    win_rate: float
    medals: int


class PerformancePointResponse(_FromAttributes):
    date: Optional[dt.date] = None
    competition: str
    result: str
    medal: Optional[str] = None
    round: Optional[str] = None


class BoutHistoryItemResponse(_FromAttributes):
    date: Optional[dt.date] = None
    competition: str
    opponent: str
    opponent_club: str
    result: str
    score: str
    round: str
    coach: Optional[str] = None


class CoachPerformanceResponse(_FromAttributes):
    coach_id: int
    coach_name: str
    bouts: int
    wins: int
    win_rate: float


class CompetitorAnalyticsResponse(_FromAttributes):
    """One member's detail view."""

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

    current_streak: StreakResponse
    discipline_breakdown: list[DisciplineStatsResponse] = []
    performance_over_time: list[PerformancePointResponse] = []
    bout_history: list[BoutHistoryItemResponse] = []
    coach_performance: list[CoachPerformanceResponse] = []


# =============================================================================
# Breakdowns
# =============================================================================

class YearTrendResponse(_FromAttributes):
    year: int
    total_medals: int
    gold_medals: int
    silver_medals: int
    bronze_medals: int
    total_entries: int
    total_bouts: int
    win_rate: float


class CoachWinRateResponse(_FromAttributes):
    coach_id: int
    coach_name: str
    bouts: int
    wins: int
    win_rate: float


class MemberWinRateResponse(_FromAttributes):
    member_id: int
    member_name: str
    bouts: int
    wins: int
    win_rate: float


class IndividualBoutResponse(_FromAttributes):
    bout_id: int
    member_id: int
    member_name: str
    competition_id: Optional[int] = None
    competition_name: str
    date: Optional[dt.date] = None
    result: str
    opponent: str
    opponent_club: str
    score_for: Optional[int] = None
    score_against: Optional[int] = None
    coach: Optional[str] = None
    discipline: str
    round: Optional[str] = None
    is_win: bool
    is_loss: bool


class TeamBoutResponse(_FromAttributes):
    bout_id: int
    team_id: int
    team_name: str
    competition_id: Optional[int] = None
    competition_name: str
    date: Optional[dt.date] = None
    result: str
    opponent: str
    opponent_club: str
    score_for: Optional[int] = None
    score_against: Optional[int] = None
    discipline: str
    is_win: bool
    is_loss: bool


class WinRateSummaryResponse(_FromAttributes):
    total_bouts: int
    total_wins: int
    total_losses: int
    overall_win_rate: float
    individual_bouts: int
    individual_wins: int
    individual_losses: int
    individual_win_rate: float
    team_bouts: int
    team_wins: int
    team_losses: int
    team_win_rate: float
    unique_competitors: int
    unique_teams: int
    unique_competitions: int


class WinRateAnalysisResponse(_FromAttributes):
    individual_bouts: list[IndividualBoutResponse]
    team_bouts: list[TeamBoutResponse]
    summary: WinRateSummaryResponse


class CompetitorCompetitionResponse(_FromAttributes):
    competition_id: Optional[int] = None
    competition_name: str
    date: Optional[dt.date] = None
    bouts: int
    wins: int
    medals: int


class CompetitorSummaryResponse(_FromAttributes):
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
    first_competition: Optional[dt.date] = None
    last_competition: Optional[dt.date] = None
    competitions: list[CompetitorCompetitionResponse] = []


class CompetitorsTotalsResponse(_FromAttributes):
    total_competitors: int
    total_competitions: int
    total_bouts: int
    total_wins: int
    overall_win_rate: float
    total_medals: int


class CompetitorsOverviewResponse(_FromAttributes):
    competitors: list[CompetitorSummaryResponse]
    totals: CompetitorsTotalsResponse


class MedalAwardResponse(_FromAttributes):
    competition_id: Optional[int] = None
    competition_name: str
    date: Optional[dt.date] = None
    medal: str
    discipline: str
    category: Optional[str] = None


class MedalHolderResponse(_FromAttributes):
    name: str
    member_id: Optional[int] = None
    gold_medals: int
    silver_medals: int
    bronze_medals: int
    total_medals: int
    awards: list[MedalAwardResponse] = []


class MedalsTotalsResponse(_FromAttributes):
    total_gold: int
    total_silver: int
    total_bronze: int
    total_medals: int
    unique_competitors: int
    unique_teams: int


class MedalsBreakdownResponse(_FromAttributes):
    individual: list[MedalHolderResponse]
    teams: list[MedalHolderResponse]
    totals: MedalsTotalsResponse


class CompetitionSummaryResponse(_FromAttributes):
    competition_id: int
    competition_name: str
    date_start: Optional[dt.date] = None
    date_end: Optional[dt.date] = None
    location: Optional[str] = None
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


class DashboardResponse(_FromAttributes):
    """Batch bundle for the analytics page."""

    club: ClubAnalyticsResponse
    win_rate: WinRateAnalysisResponse
    competitors: CompetitorsOverviewResponse
    competitions: list[CompetitionSummaryResponse]
    disciplines: list[str]
    degraded: list[str] = []
