"""Competition level classification (club / national / international)."""

from __future__ import annotations

from dataclasses import dataclass

from clubstats.shared.constants import (
    CompetitionLevel,
    LEVEL_ALIASES,
    INTERNATIONAL_KEYWORDS,
    NATIONAL_KEYWORDS,
)

from .records import ClubSnapshot, CompetitionRecord, OrganisationRecord


@dataclass
class CompetitionLevels:
    club: int = 0
    national: int = 0
    international: int = 0

    def add(self, level: CompetitionLevel) -> None:
        setattr(self, level.value, getattr(self, level.value) + 1)


def level_from_keywords(text: str | None) -> CompetitionLevel:
    """Substring keyword match, international checked before national."""
    lowered = (text or "").lower()
    if any(keyword in lowered for keyword in INTERNATIONAL_KEYWORDS):
        return CompetitionLevel.INTERNATIONAL
    if any(keyword in lowered for keyword in NATIONAL_KEYWORDS):
        return CompetitionLevel.NATIONAL
    return CompetitionLevel.CLUB


def classify_competition(
    competition: CompetitionRecord,
    organisation: OrganisationRecord | None,
) -> CompetitionLevel:
    """Bucket a competition by the best signal available.

    1. Organisation.level (exact alias, unknown values fall to CLUB)
    2. Organisation.name keywords
    3. Competition.location keywords
    """
    if organisation is not None and organisation.level:
        return LEVEL_ALIASES.get(organisation.level.strip().lower(), CompetitionLevel.CLUB)
    if organisation is not None and organisation.name:
        return level_from_keywords(organisation.name)
    return level_from_keywords(competition.location)


def competition_level_breakdown(snapshot: ClubSnapshot) -> CompetitionLevels:
    """Count every competition into exactly one level bucket."""
    levels = CompetitionLevels()
    for competition in snapshot.competitions:
        organisation = snapshot.organisation_by_id.get(competition.organisation_id)
        levels.add(classify_competition(competition, organisation))
    return levels
