"""
AnalyticsService: loads club data and runs the aggregations.

Two error policies, as separate entry points:

- Dashboard (batch) methods load every dataset independently. A dataset
  that fails to load is logged and replaced by an empty list, so the
  dashboard still renders with zeros / "N/A" for what is missing.
- competitor_detail() is a single-entity view. Any failed read aborts the
  whole call with AnalyticsUnavailableError; no partial data is returned.
"""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass, field
from datetime import date

from .breakdowns import (
    CoachWinRate,
    CompetitionSummary,
    CompetitorsOverview,
    MedalsBreakdown,
    MemberWinRate,
    WinRateAnalysis,
    YearTrend,
    competition_summary,
    competitors_overview,
    filter_by_discipline,
    medals_breakdown,
    win_rate_analysis,
    win_rate_by_coach,
    win_rate_by_member,
    yearly_trends,
)
from .club import ClubAnalytics, compute_club_analytics
from .competitor import CompetitorAnalytics, compute_competitor_analytics
from .data_source import DATASETS, ClubDataSource
from .exceptions import AnalyticsUnavailableError, DataSourceError, MemberNotFoundError
from .records import ClubSnapshot

logger = logging.getLogger(__name__)


async def _gather_or_cancel(*aws) -> list:
    """Run reads concurrently. The first failure cancels the others and is raised."""
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        await asyncio.wait(tasks, return_when=asyncio.FIRST_EXCEPTION)
    finally:
        for task in tasks:
            task.cancel()
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
    for outcome in outcomes:
        if isinstance(outcome, BaseException) and not isinstance(outcome, asyncio.CancelledError):
            raise outcome
    return outcomes


@dataclass
class DashboardBundle:
    """Everything the analytics page shows, from one snapshot."""

    club: ClubAnalytics
    win_rate: WinRateAnalysis
    competitors: CompetitorsOverview
    competitions: list[CompetitionSummary]
    disciplines: list[str]
    # Datasets that failed to load and were treated as empty
    degraded: list[str] = field(default_factory=list)


class AnalyticsService:
    """Orchestrates data loading and analytics computation."""

    def __init__(
        self,
        source: ClubDataSource,
        improvement_window: int = 3,
        competitor_limit: int | None = None,
    ):
        self.source = source
        self.improvement_window = improvement_window
        self.competitor_limit = competitor_limit

    # =========================================================================
    # Batch path: degrade per dataset
    # =========================================================================

    async def load_snapshot(self) -> tuple[ClubSnapshot, list[str]]:
        """Load every dataset concurrently, substituting [] for failures.

        Returns:
            (snapshot, names of datasets that failed)
        """
        started = time.perf_counter()
        names = list(DATASETS)
        loaded = await asyncio.gather(
            *(self.source.load_all(name) for name in names),
            return_exceptions=True,
        )

        data: dict[str, list] = {}
        degraded: list[str] = []
        for name, result in zip(names, loaded):
            if isinstance(result, DataSourceError):
                logger.warning(f"Dataset '{name}' unavailable, using empty set: {result.reason}")
                data[name] = []
                degraded.append(name)
            elif isinstance(result, BaseException):
                raise result
            else:
                data[name] = result

        elapsed_ms = (time.perf_counter() - started) * 1000
        logger.info(f"Club snapshot loaded in {elapsed_ms:.0f}ms (degraded: {degraded or 'none'})")
        return ClubSnapshot(**data), degraded

    async def club_analytics(self, today: date | None = None) -> ClubAnalytics:
        snapshot, _ = await self.load_snapshot()
        return compute_club_analytics(
            snapshot, today=today, improvement_window=self.improvement_window
        )

    async def dashboard(self, today: date | None = None) -> DashboardBundle:
        """All analytics page sections computed from a single snapshot."""
        snapshot, degraded = await self.load_snapshot()
        return DashboardBundle(
            club=compute_club_analytics(
                snapshot, today=today, improvement_window=self.improvement_window
            ),
            win_rate=win_rate_analysis(snapshot),
            competitors=competitors_overview(snapshot, limit=self.competitor_limit),
            competitions=competition_summary(snapshot),
            disciplines=sorted({d.name for d in snapshot.disciplines if d.name}),
            degraded=degraded,
        )

    async def yearly_trends(self) -> list[YearTrend]:
        snapshot, _ = await self.load_snapshot()
        return yearly_trends(snapshot)

    async def win_rate_by_coach(self, coach_id: int | None = None) -> list[CoachWinRate]:
        snapshot, _ = await self.load_snapshot()
        return win_rate_by_coach(snapshot, coach_id)

    async def win_rate_by_member(self, member_id: int | None = None) -> list[MemberWinRate]:
        snapshot, _ = await self.load_snapshot()
        return win_rate_by_member(snapshot, member_id)

    async def win_rate_analysis(self, discipline: str | None = None) -> WinRateAnalysis:
        snapshot, _ = await self.load_snapshot()
        return filter_by_discipline(win_rate_analysis(snapshot), discipline)

    async def competitors(self) -> CompetitorsOverview:
        snapshot, _ = await self.load_snapshot()
        return competitors_overview(snapshot, limit=self.competitor_limit)

    async def medals(self) -> MedalsBreakdown:
        snapshot, _ = await self.load_snapshot()
        return medals_breakdown(snapshot)

    async def competitions(self) -> list[CompetitionSummary]:
        snapshot, _ = await self.load_snapshot()
        return competition_summary(snapshot)

    # =========================================================================
    # Single-entity path: fail fast
    # =========================================================================

    async def competitor_detail(self, member_id: int) -> CompetitorAnalytics:
        """Analytics for one member.

        Raises:
            MemberNotFoundError: member_id does not exist
            AnalyticsUnavailableError: any read failed
        """
        try:
            member = await self.source.get_member(member_id)
            if member is None:
                raise MemberNotFoundError(member_id)

            entries = await self.source.load_where_in("entries", "member_id", [member_id])
            entry_ids = [e.id for e in entries]

            bouts, results, competitions, coaches, disciplines = await _gather_or_cancel(
                self.source.load_where_in("bouts", "entry_id", entry_ids),
                self.source.load_where_in("results", "entry_id", entry_ids),
                self.source.load_where_in("competitions", "id", [e.competition_id for e in entries]),
                self.source.load_where_in("coaches", "id", [e.coach_id for e in entries]),
                self.source.load_where_in("disciplines", "id", [e.discipline_id for e in entries]),
            )
        except DataSourceError as e:
            logger.error(f"Competitor {member_id} analytics aborted: {e}")
            raise AnalyticsUnavailableError(str(e)) from e

        snapshot = ClubSnapshot(
            competitions=competitions,
            entries=entries,
            bouts=bouts,
            results=results,
            members=[member],
            coaches=coaches,
            disciplines=disciplines,
        )
        return compute_competitor_analytics(snapshot, member)
