"""
Tests for the analytics HTTP routes.

The analytics service dependency is overridden with one backed by an
in-memory data source; no database is touched.
"""

import pytest
from datetime import date, datetime
from fastapi.testclient import TestClient

from clubstats.main import app
from clubstats.api.v1.routes.analytics import get_analytics_service
from clubstats.features.analytics import AnalyticsService, DataSourceError
from clubstats.features.analytics.records import (
    BoutRecord,
    CoachRecord,
    CompetitionRecord,
    DisciplineRecord,
    EntryRecord,
    MemberRecord,
    OrganisationRecord,
    ResultRecord,
    TeamRecord,
)


# =============================================================================
# Test Data
# =============================================================================

CLUB_DATA = {
    "competitions": [
        CompetitionRecord(id=1, name="Spring Open", date_start=date(2023, 4, 1),
                          organisation_id=1, location="Leeds"),
        CompetitionRecord(id=2, name="World Cup", date_start=date(2024, 10, 1),
                          location="Tokyo International Forum"),
    ],
    "entries": [
        EntryRecord(id=11, competition_id=1, member_id=1, coach_id=5, discipline_id=7),
        EntryRecord(id=12, competition_id=2, member_id=1, coach_id=5, discipline_id=8),
    ],
    "bouts": [
        BoutRecord(id=101, entry_id=11, competition_id=1, result="Win", opponent_name="Sam",
                   score_for=3, score_against=1, created_at=datetime(2023, 4, 1, 10)),
        BoutRecord(id=102, entry_id=12, competition_id=2, result="Loss", created_at=datetime(2024, 10, 1, 10)),
        BoutRecord(id=103, team_id=21, competition_id=2, result="Win", created_at=datetime(2024, 10, 1, 11)),
    ],
    "results": [ResultRecord(id=1, entry_id=11, medal="Gold")],
    "teams": [TeamRecord(id=21, team_name="Alpha", competition_id=2, medal="Bronze")],
    "members": [MemberRecord(id=1, first_name="Aiko", last_name="Tanaka")],
    "organisations": [OrganisationRecord(id=1, name="Yorkshire Karate", level="club")],
    "coaches": [CoachRecord(id=5, first_name="Kenji", last_name="Mori")],
    "disciplines": [
        DisciplineRecord(id=7, name="Kata"),
        DisciplineRecord(id=8, name="Kumite"),
    ],
}


class FakeClubDataSource:
    """In-memory data source; datasets listed in `failing` raise DataSourceError."""

    def __init__(self, failing=()):
        self.failing = set(failing)

    def _check(self, dataset):
        if dataset in self.failing:
            raise DataSourceError(dataset, "timeout")

    async def load_all(self, dataset):
        self._check(dataset)
        return list(CLUB_DATA[dataset])

    async def load_where_in(self, dataset, field, values):
        self._check(dataset)
        values = set(values)
        return [r for r in CLUB_DATA[dataset] if getattr(r, field) in values]

    async def get_member(self, member_id):
        self._check("members")
        return next((m for m in CLUB_DATA["members"] if m.id == member_id), None)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def client():
    """TestClient with a healthy in-memory data source."""
    app.dependency_overrides[get_analytics_service] = lambda: AnalyticsService(FakeClubDataSource())
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def failing_client():
    """TestClient whose bouts and members reads fail."""
    app.dependency_overrides[get_analytics_service] = lambda: AnalyticsService(
        FakeClubDataSource(failing=["bouts", "members"])
    )
    yield TestClient(app)
    app.dependency_overrides.clear()


# =============================================================================
# Tests
# =============================================================================

class TestHealth:
    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestClubRoute:
    """Tests for GET /api/v1/analytics/club."""

    def test_club(self, client):
        response = client.get("/api/v1/analytics/club")

        assert response.status_code == 200
        data = response.json()
        assert data["total_bouts"] == 3
        assert data["total_wins"] == 2
        assert data["total_losses"] == 1
        assert data["win_rate"] == 66.7
        assert data["gold_medals"] == 1
        assert data["medal_efficiency"] == 50.0
        assert data["top_performer"]["name"] == "Aiko Tanaka"
        assert data["most_improved"]["name"] == "N/A"
        assert data["best_team_pairing"] == {
            "team_name": "Alpha", "win_rate": 100.0, "bouts": 1, "members": None,
        }
        assert data["competition_levels"] == {"club": 1, "national": 0, "international": 1}

    def test_club_degrades(self, failing_client):
        response = failing_client.get("/api/v1/analytics/club")

        assert response.status_code == 200
        data = response.json()
        assert data["total_bouts"] == 0
        assert data["win_rate"] == 0.0
        # Members failed to load: top performer cannot be named
        assert data["top_performer"] is None


class TestDashboardRoute:
    """Tests for GET /api/v1/analytics/dashboard."""

    def test_dashboard(self, client):
        response = client.get("/api/v1/analytics/dashboard")

        assert response.status_code == 200
        data = response.json()
        assert data["degraded"] == []
        assert data["disciplines"] == ["Kata", "Kumite"]
        assert data["win_rate"]["summary"]["total_bouts"] == 3
        assert data["competitions"][0]["competition_name"] == "World Cup"
        assert data["competitions"][0]["date_start"] == "2024-10-01"

    def test_dashboard_lists_degraded(self, failing_client):
        data = failing_client.get("/api/v1/analytics/dashboard").json()

        assert data["degraded"] == ["bouts", "members"]
        assert data["club"]["total_bouts"] == 0


class TestCompetitorRoutes:
    """Tests for the competitor endpoints."""

    def test_detail(self, client):
        response = client.get("/api/v1/analytics/competitors/1")

        assert response.status_code == 200
        data = response.json()
        assert data["member_name"] == "Aiko Tanaka"
        assert data["total_bouts"] == 2
        assert data["current_streak"] == {"type": "loss", "count": 1}
        assert data["coach_performance"][0]["coach_name"] == "Kenji Mori"
        assert data["bout_history"][0]["competition"] == "World Cup"
        assert data["bout_history"][1]["score"] == "3-1"

    def test_unknown_member_404(self, client):
        response = client.get("/api/v1/analytics/competitors/99")

        assert response.status_code == 404

    def test_failed_read_503(self, failing_client):
        response = failing_client.get("/api/v1/analytics/competitors/1")

        assert response.status_code == 503

    def test_overview(self, client):
        data = client.get("/api/v1/analytics/competitors").json()

        assert data["totals"]["total_competitors"] == 1
        assert data["competitors"][0]["first_competition"] == "2023-04-01"


class TestBreakdownRoutes:
    """Tests for the breakdown endpoints."""

    def test_yearly_trends(self, client):
        data = client.get("/api/v1/analytics/trends/yearly").json()

        assert [t["year"] for t in data] == [2023, 2024]
        assert data[0]["win_rate"] == 100.0

    def test_coaches(self, client):
        data = client.get("/api/v1/analytics/coaches", params={"coach_id": 5}).json()

        assert len(data) == 1
        assert data[0]["win_rate"] == 50.0

    def test_members(self, client):
        data = client.get("/api/v1/analytics/members").json()

        assert data[0]["member_name"] == "Aiko Tanaka"

    def test_win_rate_discipline_filter(self, client):
        data = client.get("/api/v1/analytics/win-rate", params={"discipline": "Kata"}).json()

        assert len(data["individual_bouts"]) == 1
        assert data["individual_bouts"][0]["discipline"] == "Kata"
        assert len(data["team_bouts"]) == 1

    def test_medals(self, client):
        data = client.get("/api/v1/analytics/medals").json()

        assert data["totals"]["total_medals"] == 2
        assert data["teams"][0]["name"] == "Alpha"
        assert data["individual"][0]["total_medals"] == 1

    def test_competitions(self, client):
        data = client.get("/api/v1/analytics/competitions").json()

        assert [c["competition_id"] for c in data] == [2, 1]
        assert data[0]["total_bouts"] == 2
