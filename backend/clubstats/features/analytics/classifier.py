"""
Interpretation of free-text result and medal columns.

Bout results and medals are stored as unconstrained text. Every call site
goes through the functions here instead of comparing strings ad hoc.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from clubstats.shared.constants import (
    BoutOutcome,
    Medal,
    MEDAL_POINTS,
    WIN_VOCABULARY,
    LOSS_VOCABULARY,
    STRICT_WIN_VALUES,
    STREAK_WIN_VALUES,
)


def _normalize(value: Any) -> str | None:
    if value is None:
        return None
    return str(value).strip().lower()


def classify_result(value: Any) -> BoutOutcome:
    """Classify a bout result against the win/loss synonym vocabularies.

    Case and surrounding whitespace are ignored. Anything outside both
    vocabularies (draws, blanks, "n/a") is UNCLASSIFIED.

    "  Won " → WIN, "L" → LOSS, "draw" → UNCLASSIFIED
    """
    normalized = _normalize(value)
    if normalized in WIN_VOCABULARY:
        return BoutOutcome.WIN
    if normalized in LOSS_VOCABULARY:
        return BoutOutcome.LOSS
    return BoutOutcome.UNCLASSIFIED


def is_win(value: Any) -> bool:
    return classify_result(value) is BoutOutcome.WIN


def is_loss(value: Any) -> bool:
    return classify_result(value) is BoutOutcome.LOSS


def is_strict_win(value: Any) -> bool:
    """Exact "Win"/"win" match (year trend, improvement, team stats)."""
    return value in STRICT_WIN_VALUES


def is_streak_win(value: Any) -> bool:
    """Exact "Win"/"win"/"Victory"/"victory" match (streaks, history)."""
    return value in STREAK_WIN_VALUES


# =============================================================================
# Medals
# =============================================================================

@dataclass(frozen=True)
class MedalScore:
    """Medal parsed from a result row and its ranking points."""

    medal: Medal
    points: int


def parse_medal(value: Any) -> Medal:
    """Case-insensitive medal parse; unknown or empty values are NONE."""
    normalized = _normalize(value)
    try:
        medal = Medal(normalized)
    except ValueError:
        return Medal.NONE
    return medal


def score_medal(value: Any) -> MedalScore:
    """Gold=3, Silver=2, Bronze=1, anything else 0."""
    medal = parse_medal(value)
    return MedalScore(medal=medal, points=MEDAL_POINTS[medal])


@dataclass
class MedalTally:
    """Running gold/silver/bronze counts."""

    gold: int = 0
    silver: int = 0
    bronze: int = 0

    def add(self, value: Any) -> MedalScore:
        """Count one medal value; returns its score."""
        score = score_medal(value)
        if score.medal is Medal.GOLD:
            self.gold += 1
        elif score.medal is Medal.SILVER:
            self.silver += 1
        elif score.medal is Medal.BRONZE:
            self.bronze += 1
        return score

    @property
    def total(self) -> int:
        return self.gold + self.silver + self.bronze

    @property
    def points(self) -> int:
        return (
            self.gold * MEDAL_POINTS[Medal.GOLD]
            + self.silver * MEDAL_POINTS[Medal.SILVER]
            + self.bronze * MEDAL_POINTS[Medal.BRONZE]
        )

    @classmethod
    def of(cls, values: Iterable[Any]) -> "MedalTally":
        tally = cls()
        for value in values:
            tally.add(value)
        return tally
