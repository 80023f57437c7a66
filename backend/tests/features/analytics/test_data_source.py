"""
Tests for SqlClubDataSource.

Runs against a real SQLite file through aiosqlite, with the club tables
created from the ORM metadata.
"""

import asyncio
import pytest
from datetime import date, datetime

from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine

from clubstats.features.analytics.data_source import DATASETS, SqlClubDataSource
from clubstats.features.analytics.exceptions import DataSourceError
from clubstats.features.analytics.records import (
    BoutRecord,
    CompetitionRecord,
    MemberRecord,
)
from clubstats.features.club import (
    Coach,
    Competition,
    CompetitionBout,
    CompetitionEntry,
    CompetitionResult,
    CompetitionTeam,
    Discipline,
    Member,
    Organisation,
)
from clubstats.models.base import Base


# =============================================================================
# Fixtures
# =============================================================================

def club_rows():
    return [
        Organisation(id=1, name="National Federation", level="National"),
        Competition(id=1, name="Spring Open", date_start=date(2024, 3, 1),
                    location="Osaka", organisation_id=1),
        Competition(id=2, name="Autumn Cup", date_start=date(2024, 10, 1)),
        Member(id=1, first_name="Aiko", last_name="Tanaka"),
        Member(id=2, first_name="Ben", last_name="Carter"),
        Coach(id=5, first_name="Kenji", last_name="Mori"),
        Discipline(id=7, name="Kata", team_event=False),
        CompetitionEntry(id=11, competition_id=1, member_id=1, coach_id=5,
                         discipline_id=7, category="U18"),
        CompetitionEntry(id=12, competition_id=2, member_id=2),
        CompetitionTeam(id=3, team_name="Blue", competition_id=2, medal="Bronze"),
        CompetitionBout(id=101, entry_id=11, competition_id=1, result="Win",
                        score_for=4, score_against=2, round="QF",
                        opponent_name="Lee", opponent_club="Dojo B",
                        created_at=datetime(2024, 3, 1, 10)),
        CompetitionBout(id=102, team_id=3, competition_id=2, result="Loss",
                        created_at=datetime(2024, 10, 1, 10)),
        CompetitionResult(id=1, entry_id=11, medal="Gold", round_reached="Final"),
    ]


async def make_engine(path, seed=True):
    engine = create_async_engine(f"sqlite+aiosqlite:///{path}")
    if seed:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        session_factory = async_sessionmaker(engine, expire_on_commit=False)
        async with session_factory() as db:
            db.add_all(club_rows())
            await db.commit()
    return engine


def with_source(tmp_path, check, seed=True):
    """Run check(source) against a fresh database file."""

    async def main():
        engine = await make_engine(tmp_path / "club.db", seed=seed)
        try:
            source = SqlClubDataSource(async_sessionmaker(engine, expire_on_commit=False))
            return await check(source)
        finally:
            await engine.dispose()

    return asyncio.run(main())


# =============================================================================
# Test Loading
# =============================================================================

class TestLoadAll:
    """Tests for SqlClubDataSource.load_all."""

    @pytest.mark.parametrize("dataset", list(DATASETS))
    def test_every_dataset_loads_as_records(self, tmp_path, dataset):
        async def check(source):
            return await source.load_all(dataset)

        rows = with_source(tmp_path, check)
        record_cls = DATASETS[dataset][1]

        assert rows
        assert all(isinstance(row, record_cls) for row in rows)

    def test_renamed_columns_mapped(self, tmp_path):
        """Source column names ("Name", "<table>_id") land on record fields."""

        async def check(source):
            return await source.load_all("competitions"), await source.load_all("bouts")

        competitions, bouts = with_source(tmp_path, check)

        assert competitions[0] == CompetitionRecord(
            id=1, name="Spring Open", date_start=date(2024, 3, 1),
            organisation_id=1, location="Osaka",
        )
        by_id = {b.id: b for b in bouts}
        assert by_id[101] == BoutRecord(
            id=101, entry_id=11, competition_id=1, result="Win",
            score_for=4, score_against=2, round="QF",
            opponent_name="Lee", opponent_club="Dojo B",
            created_at=datetime(2024, 3, 1, 10),
        )
        assert by_id[102].team_id == 3
        assert by_id[102].entry_id is None


class TestLoadWhereIn:
    """Tests for SqlClubDataSource.load_where_in."""

    def test_filters_on_field(self, tmp_path):
        async def check(source):
            return await source.load_where_in("entries", "member_id", [1])

        entries = with_source(tmp_path, check)

        assert [e.id for e in entries] == [11]
        assert entries[0].category == "U18"

    def test_duplicates_and_none_dropped(self, tmp_path):
        async def check(source):
            return await source.load_where_in("competitions", "id", [1, None, 1])

        competitions = with_source(tmp_path, check)

        assert [c.id for c in competitions] == [1]

    def test_only_none_returns_empty(self, tmp_path):
        async def check(source):
            return await source.load_where_in("coaches", "id", [None])

        assert with_source(tmp_path, check) == []


class TestGetMember:
    """Tests for SqlClubDataSource.get_member."""

    def test_found(self, tmp_path):
        async def check(source):
            return await source.get_member(2)

        assert with_source(tmp_path, check) == MemberRecord(
            id=2, first_name="Ben", last_name="Carter"
        )

    def test_unknown(self, tmp_path):
        async def check(source):
            return await source.get_member(99)

        assert with_source(tmp_path, check) is None


# =============================================================================
# Test Failures
# =============================================================================

class TestReadFailures:
    """Database errors surface as DataSourceError naming the dataset."""

    def test_missing_table(self, tmp_path):
        async def check(source):
            return await source.load_all("bouts")

        with pytest.raises(DataSourceError) as exc_info:
            with_source(tmp_path, check, seed=False)

        assert exc_info.value.dataset == "bouts"

    def test_member_lookup_failure(self, tmp_path):
        async def check(source):
            return await source.get_member(1)

        with pytest.raises(DataSourceError) as exc_info:
            with_source(tmp_path, check, seed=False)

        assert exc_info.value.dataset == "members"
