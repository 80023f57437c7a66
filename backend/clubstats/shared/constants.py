"""
Unified constants for bout outcomes, medals and competition levels.

Single source of truth for the vocabularies used when interpreting the
free-text columns of the club database.
"""

from enum import Enum


class BoutOutcome(str, Enum):
    """Classified outcome of a free-text bout result."""
    WIN = "win"
    LOSS = "loss"
    UNCLASSIFIED = "unclassified"


class Medal(str, Enum):
    """Medal awarded on a result row."""
    GOLD = "gold"
    SILVER = "silver"
    BRONZE = "bronze"
    NONE = "none"


class CompetitionLevel(str, Enum):
    """Competition level bucket."""
    CLUB = "club"
    NATIONAL = "national"
    INTERNATIONAL = "international"


# Normalized (trimmed, lowercased) result strings
WIN_VOCABULARY: frozenset[str] = frozenset({
    "win", "w", "victory", "victorious", "won", "1", "true", "yes",
    "success", "successful", "pass", "passed",
})

LOSS_VOCABULARY: frozenset[str] = frozenset({
    "loss", "l", "defeat", "defeated", "lost", "0", "false", "no",
    "fail", "failed", "unsuccessful",
})

# Exact (case-sensitive) matches used by trend, improvement and team stats
STRICT_WIN_VALUES: frozenset[str] = frozenset({"Win", "win"})

# Exact matches used by streak and performance history
STREAK_WIN_VALUES: frozenset[str] = frozenset({"Win", "win", "Victory", "victory"})


MEDAL_POINTS: dict[Medal, int] = {
    Medal.GOLD: 3,
    Medal.SILVER: 2,
    Medal.BRONZE: 1,
    Medal.NONE: 0,
}


# Organisation.level (lowercased) -> bucket; anything else is CLUB
LEVEL_ALIASES: dict[str, CompetitionLevel] = {
    "club": CompetitionLevel.CLUB,
    "local": CompetitionLevel.CLUB,
    "national": CompetitionLevel.NATIONAL,
    "country": CompetitionLevel.NATIONAL,
    "international": CompetitionLevel.INTERNATIONAL,
    "world": CompetitionLevel.INTERNATIONAL,
    "global": CompetitionLevel.INTERNATIONAL,
}

# Substring keywords for names/locations, checked in this order
INTERNATIONAL_KEYWORDS: tuple[str, ...] = ("international", "world", "global")
NATIONAL_KEYWORDS: tuple[str, ...] = ("national", "championship", "federation")


# Sentinels / placeholders
NOT_AVAILABLE = "N/A"
UNKNOWN = "Unknown"
UNKNOWN_MEMBER = "Unknown Member"
UNKNOWN_COACH = "Unknown Coach"
UNKNOWN_COMPETITION = "Unknown Competition"
UNKNOWN_DISCIPLINE = "Unknown Discipline"
UNKNOWN_TEAM = "Unknown Team"
