"""
Competition analytics module.

Usage:
    from clubstats.features.analytics import AnalyticsService, SqlClubDataSource

Pure aggregations over a ClubSnapshot:
- compute_club_analytics: club dashboard figures
- compute_competitor_analytics: one member's detail view
- breakdowns: yearly trends, win rates by coach/member, medals, competitions

Service:
- AnalyticsService: loads snapshots (batch: degrade per dataset,
  single entity: fail fast) and runs the aggregations
"""

from .classifier import (
    MedalScore,
    MedalTally,
    classify_result,
    is_loss,
    is_streak_win,
    is_strict_win,
    is_win,
    parse_medal,
    score_medal,
)
from .club import ClubAnalytics, compute_club_analytics
from .competitor import CompetitorAnalytics, compute_competitor_analytics
from .data_source import ClubDataSource, SqlClubDataSource
from .exceptions import (
    AnalyticsError,
    AnalyticsUnavailableError,
    DataSourceError,
    MemberNotFoundError,
)
from .levels import classify_competition, competition_level_breakdown
from .records import ClubSnapshot
from .service import AnalyticsService, DashboardBundle

__all__ = [
    # Classification
    "MedalScore",
    "MedalTally",
    "classify_result",
    "is_loss",
    "is_streak_win",
    "is_strict_win",
    "is_win",
    "parse_medal",
    "score_medal",
    "classify_competition",
    "competition_level_breakdown",
    # Aggregation
    "ClubSnapshot",
    "ClubAnalytics",
    "compute_club_analytics",
    "CompetitorAnalytics",
    "compute_competitor_analytics",
    # Service
    "ClubDataSource",
    "SqlClubDataSource",
    "AnalyticsService",
    "DashboardBundle",
    # Errors
    "AnalyticsError",
    "AnalyticsUnavailableError",
    "DataSourceError",
    "MemberNotFoundError",
]
