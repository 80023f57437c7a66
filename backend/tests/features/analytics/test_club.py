"""
Tests for club-wide analytics.

Covers totals (vocabulary wins, complement losses), medal efficiency,
year-on-year trend and the three highlights: top performer, most improved
and best team.
"""

import pytest
from datetime import date, datetime

from clubstats.features.analytics.club import (
    compute_club_analytics,
    find_best_team,
    find_most_improved,
    find_top_performer,
    unique_locations,
    year_on_year_trend,
)
from clubstats.features.analytics.records import (
    BoutRecord,
    ClubSnapshot,
    CompetitionRecord,
    EntryRecord,
    MemberRecord,
    ResultRecord,
    TeamRecord,
)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def two_competition_snapshot():
    """One member, two competitions, 3 wins out of 4 bouts, one gold."""
    return ClubSnapshot(
        competitions=[
            CompetitionRecord(id=1, name="A", date_start=date(2023, 1, 1), location="Leeds"),
            CompetitionRecord(id=2, name="B", date_start=date(2024, 1, 1), location="York"),
        ],
        entries=[
            EntryRecord(id=11, competition_id=1, member_id=1),
            EntryRecord(id=12, competition_id=2, member_id=1),
        ],
        bouts=[
            BoutRecord(id=101, entry_id=11, result="Win"),
            BoutRecord(id=102, entry_id=11, result="Loss"),
            BoutRecord(id=103, entry_id=12, result="Win"),
            BoutRecord(id=104, entry_id=12, result="Win"),
        ],
        results=[ResultRecord(id=1, entry_id=12, medal="Gold")],
        members=[MemberRecord(id=1, first_name="Aiko", last_name="Tanaka")],
    )


def _dated_competitions(count: int) -> list[CompetitionRecord]:
    return [
        CompetitionRecord(id=i, name=f"Comp {i}", date_start=date(2024, i, 1))
        for i in range(1, count + 1)
    ]


# =============================================================================
# Test Totals
# =============================================================================

class TestClubTotals:
    """Tests for compute_club_analytics totals."""

    def test_two_competition_scenario(self, two_competition_snapshot):
        analytics = compute_club_analytics(two_competition_snapshot, today=date(2024, 6, 1))

        assert analytics.total_bouts == 4
        assert analytics.total_wins == 3
        assert analytics.total_losses == 1
        assert analytics.win_rate == 75.0
        assert analytics.total_medals == 1
        assert analytics.gold_medals == 1
        assert analytics.silver_medals == 0
        assert analytics.bronze_medals == 0
        assert analytics.medal_efficiency == 50.0
        assert analytics.competitions_attended == 2
        assert analytics.total_competitors == 1
        assert analytics.unique_locations == ["Leeds", "York"]

    def test_draw_counts_as_loss_in_complement(self, two_competition_snapshot):
        """DRAW is unclassified but still lands in total_losses."""
        snapshot = ClubSnapshot(
            competitions=two_competition_snapshot.competitions,
            entries=two_competition_snapshot.entries,
            bouts=two_competition_snapshot.bouts + [BoutRecord(id=105, entry_id=12, result="DRAW")],
            results=two_competition_snapshot.results,
            members=two_competition_snapshot.members,
        )
        analytics = compute_club_analytics(snapshot)

        assert analytics.total_bouts == 5
        assert analytics.total_wins == 3
        assert analytics.total_losses == 2
        assert analytics.total_wins + analytics.total_losses == analytics.total_bouts

    def test_empty_snapshot(self):
        """Everything zero or sentinel when no data was loaded."""
        analytics = compute_club_analytics(ClubSnapshot())

        assert analytics.total_bouts == 0
        assert analytics.win_rate == 0.0
        assert analytics.medal_efficiency == 0.0
        assert analytics.year_on_year_trend == 0.0
        assert analytics.top_performer is None
        assert analytics.most_improved.name == "N/A"
        assert analytics.best_team_pairing.team_name == "N/A"
        assert analytics.unique_locations == []

    def test_win_rate_zero_without_bouts(self, two_competition_snapshot):
        snapshot = ClubSnapshot(
            entries=two_competition_snapshot.entries,
            results=two_competition_snapshot.results,
        )
        analytics = compute_club_analytics(snapshot)

        assert analytics.total_bouts == 0
        assert analytics.win_rate == 0.0
        assert analytics.medal_efficiency == 50.0

    def test_vocabulary_wins(self):
        """Club win rate uses the full synonym vocabulary."""
        snapshot = ClubSnapshot(bouts=[
            BoutRecord(id=1, entry_id=1, result="W"),
            BoutRecord(id=2, entry_id=1, result=" victory "),
            BoutRecord(id=3, entry_id=1, result="lost"),
        ])
        analytics = compute_club_analytics(snapshot)

        assert analytics.total_wins == 2
        assert analytics.win_rate == 66.7

    def test_unattributed_bouts_count_in_totals_only(self):
        """Bouts with both or neither of entry/team still count club-wide."""
        snapshot = ClubSnapshot(
            entries=[EntryRecord(id=1, competition_id=1, member_id=1)],
            teams=[TeamRecord(id=5, team_name="Alpha", competition_id=1)],
            members=[MemberRecord(id=1, first_name="Aiko", last_name="Tanaka")],
            bouts=[
                BoutRecord(id=1, entry_id=1, team_id=5, result="Win"),
                BoutRecord(id=2, result="Win"),
            ],
        )
        analytics = compute_club_analytics(snapshot)

        assert analytics.total_bouts == 2
        assert analytics.total_wins == 2
        assert analytics.best_team_pairing.team_name == "N/A"
        assert analytics.top_performer.win_rate == 0.0


# =============================================================================
# Test Year-on-Year Trend
# =============================================================================

class TestYearOnYearTrend:
    """Tests for year_on_year_trend function."""

    def test_relative_change(self):
        bouts = [
            BoutRecord(id=1, result="Win", created_at=datetime(2024, 2, 1)),
            BoutRecord(id=2, result="win", created_at=datetime(2024, 3, 1)),
            BoutRecord(id=3, result="Loss", created_at=datetime(2024, 4, 1)),
            BoutRecord(id=4, result="Loss", created_at=datetime(2024, 5, 1)),
            BoutRecord(id=5, result="Win", created_at=datetime(2023, 2, 1)),
            BoutRecord(id=6, result="Loss", created_at=datetime(2023, 3, 1)),
            BoutRecord(id=7, result="Loss", created_at=datetime(2023, 4, 1)),
            BoutRecord(id=8, result="Loss", created_at=datetime(2023, 5, 1)),
        ]
        # 50% this year vs 25% last year
        assert year_on_year_trend(bouts, today=date(2024, 6, 1)) == 100.0

    def test_strict_match_only(self):
        """"W" and "Victory" are not wins for the trend."""
        bouts = [
            BoutRecord(id=1, result="Victory", created_at=datetime(2024, 2, 1)),
            BoutRecord(id=2, result="Win", created_at=datetime(2023, 2, 1)),
            BoutRecord(id=3, result="W", created_at=datetime(2023, 3, 1)),
        ]
        # 0% this year vs 50% last year
        assert year_on_year_trend(bouts, today=date(2024, 6, 1)) == -100.0

    def test_no_previous_year(self):
        bouts = [BoutRecord(id=1, result="Win", created_at=datetime(2024, 2, 1))]
        assert year_on_year_trend(bouts, today=date(2024, 6, 1)) == 0.0

    def test_undated_bouts_ignored(self):
        bouts = [
            BoutRecord(id=1, result="Win", created_at=None),
            BoutRecord(id=2, result="Win", created_at=datetime(2023, 1, 1)),
        ]
        assert year_on_year_trend(bouts, today=date(2024, 6, 1)) == -100.0


# =============================================================================
# Test Top Performer
# =============================================================================

class TestTopPerformer:
    """Tests for find_top_performer function."""

    @staticmethod
    def _snapshot(reverse: bool) -> ClubSnapshot:
        entries = [
            EntryRecord(id=1, competition_id=1, member_id=1),
            EntryRecord(id=2, competition_id=2, member_id=1),
            EntryRecord(id=3, competition_id=1, member_id=2),
        ]
        results = [
            ResultRecord(id=1, entry_id=1, medal="Gold"),
            ResultRecord(id=2, entry_id=2, medal="Silver"),
            ResultRecord(id=3, entry_id=3, medal="Gold"),
        ]
        members = [
            MemberRecord(id=1, first_name="Aiko", last_name="Tanaka"),
            MemberRecord(id=2, first_name="Ben", last_name="Carter"),
        ]
        if reverse:
            entries, results, members = entries[::-1], results[::-1], members[::-1]
        return ClubSnapshot(entries=entries, results=results, members=members)

    @pytest.mark.parametrize("reverse", [False, True])
    def test_most_points_wins_regardless_of_order(self, reverse):
        top = find_top_performer(self._snapshot(reverse))

        assert top.member_id == 1
        assert top.name == "Aiko Tanaka"
        assert top.medal_points == 5

    @pytest.mark.parametrize("reverse", [False, True])
    def test_tie_broken_by_win_rate(self, reverse):
        entries = [
            EntryRecord(id=1, competition_id=1, member_id=1),
            EntryRecord(id=2, competition_id=1, member_id=2),
        ]
        bouts = [
            BoutRecord(id=1, entry_id=1, result="Win"),
            BoutRecord(id=2, entry_id=1, result="Loss"),
            BoutRecord(id=3, entry_id=2, result="Win"),
            BoutRecord(id=4, entry_id=2, result="win"),
        ]
        results = [
            ResultRecord(id=1, entry_id=1, medal="Gold"),
            ResultRecord(id=2, entry_id=2, medal="gold"),
        ]
        if reverse:
            entries, bouts, results = entries[::-1], bouts[::-1], results[::-1]
        snapshot = ClubSnapshot(
            entries=entries,
            bouts=bouts,
            results=results,
            members=[
                MemberRecord(id=1, first_name="Aiko", last_name="Tanaka"),
                MemberRecord(id=2, first_name="Ben", last_name="Carter"),
            ],
        )
        top = find_top_performer(snapshot)

        assert top.member_id == 2
        assert top.medal_points == 3
        assert top.win_rate == 100.0

    def test_unknown_member_omitted(self):
        snapshot = ClubSnapshot(
            entries=[EntryRecord(id=1, competition_id=1, member_id=99)],
            results=[ResultRecord(id=1, entry_id=1, medal="Gold")],
        )
        assert find_top_performer(snapshot) is None

    def test_no_entries(self):
        assert find_top_performer(ClubSnapshot()) is None


# =============================================================================
# Test Most Improved
# =============================================================================

class TestMostImproved:
    """Tests for find_most_improved function."""

    @staticmethod
    def _bouts_for(entry_id: int, wins: int, losses: int, start_id: int) -> list[BoutRecord]:
        results = ["Win"] * wins + ["Loss"] * losses
        return [
            BoutRecord(id=start_id + i, entry_id=entry_id, result=result)
            for i, result in enumerate(results)
        ]

    def _improving_snapshot(self, competitions: list[CompetitionRecord]) -> ClubSnapshot:
        entries = [
            # Member 1: 50% in competitions 1-3, 100% in 4-6
            EntryRecord(id=1, competition_id=1, member_id=1),
            EntryRecord(id=2, competition_id=5, member_id=1),
            # Member 2: 100% in 1-3, 50% in 4-6
            EntryRecord(id=3, competition_id=2, member_id=2),
            EntryRecord(id=4, competition_id=6, member_id=2),
            # Member 3: only in the last window
            EntryRecord(id=5, competition_id=4, member_id=3),
        ]
        bouts = (
            self._bouts_for(1, 1, 1, 100)
            + self._bouts_for(2, 2, 0, 200)
            + self._bouts_for(3, 2, 0, 300)
            + self._bouts_for(4, 1, 1, 400)
            + self._bouts_for(5, 3, 0, 500)
        )
        return ClubSnapshot(
            competitions=competitions,
            entries=entries,
            bouts=bouts,
            members=[
                MemberRecord(id=1, first_name="Aiko", last_name="Tanaka"),
                MemberRecord(id=2, first_name="Ben", last_name="Carter"),
                MemberRecord(id=3, first_name="Chloe", last_name="Diaz"),
            ],
        )

    def test_improvement(self):
        result = find_most_improved(self._improving_snapshot(_dated_competitions(6)))

        assert result.name == "Aiko Tanaka"
        assert result.member_id == 1
        assert result.improvement == 50.0

    def test_needs_six_dated_competitions(self):
        competitions = _dated_competitions(5) + [CompetitionRecord(id=6, name="Undated")]
        result = find_most_improved(self._improving_snapshot(competitions))

        assert result.name == "N/A"
        assert result.member_id is None
        assert result.improvement == 0.0

    def test_competition_order_irrelevant(self):
        competitions = _dated_competitions(6)[::-1]
        result = find_most_improved(self._improving_snapshot(competitions))

        assert result.member_id == 1

    def test_nobody_in_both_windows(self):
        snapshot = ClubSnapshot(
            competitions=_dated_competitions(6),
            entries=[EntryRecord(id=1, competition_id=6, member_id=1)],
            bouts=[BoutRecord(id=1, entry_id=1, result="Win")],
        )
        assert find_most_improved(snapshot).name == "N/A"

    def test_unresolved_name(self):
        snapshot = self._improving_snapshot(_dated_competitions(6))
        snapshot = ClubSnapshot(
            competitions=snapshot.competitions,
            entries=snapshot.entries,
            bouts=snapshot.bouts,
        )
        result = find_most_improved(snapshot)

        assert result.name == "Unknown"
        assert result.member_id == 1

    def test_custom_window(self):
        competitions = _dated_competitions(4)
        snapshot = ClubSnapshot(
            competitions=competitions,
            entries=[
                EntryRecord(id=1, competition_id=1, member_id=1),
                EntryRecord(id=2, competition_id=4, member_id=1),
            ],
            bouts=[
                BoutRecord(id=1, entry_id=1, result="Loss"),
                BoutRecord(id=2, entry_id=2, result="Win"),
            ],
            members=[MemberRecord(id=1, first_name="Aiko", last_name="Tanaka")],
        )
        result = find_most_improved(snapshot, window=2)

        assert result.improvement == 100.0


# =============================================================================
# Test Best Team
# =============================================================================

class TestBestTeam:
    """Tests for find_best_team function."""

    def test_highest_win_rate(self):
        snapshot = ClubSnapshot(
            teams=[
                TeamRecord(id=1, team_name="Alpha", competition_id=1),
                TeamRecord(id=2, team_name="Bravo", competition_id=1),
            ],
            bouts=[
                BoutRecord(id=1, team_id=1, result="Win"),
                BoutRecord(id=2, team_id=1, result="Loss"),
                BoutRecord(id=3, team_id=2, result="Win"),
                BoutRecord(id=4, team_id=2, result="win"),
                BoutRecord(id=5, team_id=2, result="Loss"),
            ],
        )
        best = find_best_team(snapshot)

        assert best.team_name == "Bravo"
        assert best.win_rate == 66.7
        assert best.bouts == 3
        assert best.members is None

    def test_teams_grouped_by_name(self):
        """Same team name across competitions is one team."""
        snapshot = ClubSnapshot(
            teams=[
                TeamRecord(id=1, team_name="Alpha", competition_id=1),
                TeamRecord(id=2, team_name="Alpha", competition_id=2),
            ],
            bouts=[
                BoutRecord(id=1, team_id=1, result="Win"),
                BoutRecord(id=2, team_id=2, result="Loss"),
            ],
        )
        best = find_best_team(snapshot)

        assert best.team_name == "Alpha"
        assert best.bouts == 2
        assert best.win_rate == 50.0

    def test_first_team_wins_tie(self):
        snapshot = ClubSnapshot(
            teams=[
                TeamRecord(id=1, team_name="Alpha"),
                TeamRecord(id=2, team_name="Bravo"),
            ],
            bouts=[
                BoutRecord(id=1, team_id=2, result="Win"),
                BoutRecord(id=2, team_id=1, result="Win"),
            ],
        )
        assert find_best_team(snapshot).team_name == "Bravo"

    def test_no_team_bouts(self):
        best = find_best_team(ClubSnapshot())

        assert best.team_name == "N/A"
        assert best.win_rate == 0.0
        assert best.bouts == 0


class TestUniqueLocations:
    """Tests for unique_locations function."""

    def test_first_seen_order_without_blanks(self):
        snapshot = ClubSnapshot(competitions=[
            CompetitionRecord(id=1, location="York"),
            CompetitionRecord(id=2, location=None),
            CompetitionRecord(id=3, location="Leeds"),
            CompetitionRecord(id=4, location="York"),
        ])
        assert unique_locations(snapshot) == ["York", "Leeds"]
