"""
Analytics Routes

Endpoints for the club analytics dashboard.

Endpoints:
- GET /analytics/club                         - Club-wide statistics
- GET /analytics/dashboard                    - Batch bundle for the analytics page
- GET /analytics/competitors                  - Competitors overview
- GET /analytics/competitors/{member_id}      - One competitor's detail view
- GET /analytics/trends/yearly                - Per-year trends
- GET /analytics/coaches?coach_id=            - Win rate by coach
- GET /analytics/members?member_id=           - Win rate by member
- GET /analytics/win-rate?discipline=         - Bout-level win-rate analysis
- GET /analytics/medals                       - Medals breakdown
- GET /analytics/competitions                 - Per-competition summary

Batch endpoints never fail on a missing dataset; the competitor detail
endpoint returns 503 if any read fails.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from clubstats.config import settings
from clubstats.db.session import AsyncSessionLocal
from clubstats.features.analytics import (
    AnalyticsService,
    AnalyticsUnavailableError,
    MemberNotFoundError,
    SqlClubDataSource,
)
from clubstats.features.analytics.schemas import (
    ClubAnalyticsResponse,
    CoachWinRateResponse,
    CompetitionSummaryResponse,
    CompetitorAnalyticsResponse,
    CompetitorsOverviewResponse,
    DashboardResponse,
    MedalsBreakdownResponse,
    MemberWinRateResponse,
    WinRateAnalysisResponse,
    YearTrendResponse,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/analytics", tags=["Analytics"])


def get_analytics_service() -> AnalyticsService:
    """Dependency for the analytics service."""
    return AnalyticsService(
        SqlClubDataSource(AsyncSessionLocal),
        improvement_window=settings.most_improved_window,
        competitor_limit=settings.competitor_list_limit,
    )


@router.get("/club", response_model=ClubAnalyticsResponse)
async def get_club_analytics(service: AnalyticsService = Depends(get_analytics_service)):
    """Club-wide medal, bout and highlight statistics."""
    analytics = await service.club_analytics()
    return ClubAnalyticsResponse.model_validate(analytics)


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(service: AnalyticsService = Depends(get_analytics_service)):
    """
    Everything the analytics page needs in one call.

    Datasets that could not be loaded are listed in `degraded`.
    """
    bundle = await service.dashboard()
    return DashboardResponse.model_validate(bundle)


@router.get("/competitors", response_model=CompetitorsOverviewResponse)
async def get_competitors(service: AnalyticsService = Depends(get_analytics_service)):
    """All competitors ranked by medals, then win rate."""
    overview = await service.competitors()
    return CompetitorsOverviewResponse.model_validate(overview)


@router.get("/competitors/{member_id}", response_model=CompetitorAnalyticsResponse)
async def get_competitor(
    member_id: int,
    service: AnalyticsService = Depends(get_analytics_service),
):
    """
    Detail view for one competitor.

    Fails as a whole (503) if any of the member's data cannot be read.
    """
    try:
        analytics = await service.competitor_detail(member_id)
    except MemberNotFoundError:
        raise HTTPException(status_code=404, detail=f"Member not found: {member_id}")
    except AnalyticsUnavailableError as e:
        raise HTTPException(status_code=503, detail=f"Analytics unavailable: {e}")

    return CompetitorAnalyticsResponse.model_validate(analytics)


@router.get("/trends/yearly", response_model=list[YearTrendResponse])
async def get_yearly_trends(service: AnalyticsService = Depends(get_analytics_service)):
    """Entries, bouts, win rate and medals per competition year."""
    trends = await service.yearly_trends()
    return [YearTrendResponse.model_validate(t) for t in trends]


@router.get("/coaches", response_model=list[CoachWinRateResponse])
async def get_coach_win_rates(
    coach_id: Optional[int] = Query(default=None),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Win rate of bouts fought under each coach."""
    rows = await service.win_rate_by_coach(coach_id)
    return [CoachWinRateResponse.model_validate(r) for r in rows]


@router.get("/members", response_model=list[MemberWinRateResponse])
async def get_member_win_rates(
    member_id: Optional[int] = Query(default=None),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Win rate of each member's bouts."""
    rows = await service.win_rate_by_member(member_id)
    return [MemberWinRateResponse.model_validate(r) for r in rows]


@router.get("/win-rate", response_model=WinRateAnalysisResponse)
async def get_win_rate_analysis(
    discipline: Optional[str] = Query(default=None, description="Discipline name filter"),
    service: AnalyticsService = Depends(get_analytics_service),
):
    """Bout-level win/loss rows with summary, optionally for one discipline."""
    analysis = await service.win_rate_analysis(discipline)
    return WinRateAnalysisResponse.model_validate(analysis)


@router.get("/medals", response_model=MedalsBreakdownResponse)
async def get_medals(service: AnalyticsService = Depends(get_analytics_service)):
    """Individual and team medal hauls."""
    breakdown = await service.medals()
    return MedalsBreakdownResponse.model_validate(breakdown)


@router.get("/competitions", response_model=list[CompetitionSummaryResponse])
async def get_competitions(service: AnalyticsService = Depends(get_analytics_service)):
    """Per-competition results, most recent first."""
    summaries = await service.competitions()
    return [CompetitionSummaryResponse.model_validate(s) for s in summaries]
