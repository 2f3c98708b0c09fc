# =============================================================================
# core/scoring.py - Score Aggregation & Banding
# =============================================================================
# Pure functions over assessment scores (0-100):
# - overall_score: per-assessment mean of the three category scores
# - performance_score / score_trend: dashboard aggregates over recent runs
# - average_score: plain rounded mean (insights card)
# - score_band: the one place a score is mapped to good / warning / critical
#
# Nothing here touches the database, so every function is safe to unit test.
# =============================================================================

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Sequence

# Dashboard looks at this many recent assessments, split into two halves
TREND_WINDOW = 10
TREND_HALF = 5
MIN_ASSESSMENTS_FOR_SCORE = 2

GOOD_THRESHOLD = 85
WARNING_THRESHOLD = 70

UNAVAILABLE = "N/A"


class ScoreBand(str, Enum):
    """
    Severity band of a score.

    - good: >= 85 (green)
    - warning: >= 70, "needs improvement" (yellow)
    - critical: < 70 (red)
    """
    GOOD = "good"
    WARNING = "warning"
    CRITICAL = "critical"

    @property
    def color(self) -> str:
        return _BAND_COLORS[self]

    @property
    def label(self) -> str:
        return _BAND_LABELS[self]


_BAND_COLORS = {
    ScoreBand.GOOD: "green",
    ScoreBand.WARNING: "yellow",
    ScoreBand.CRITICAL: "red",
}

_BAND_LABELS = {
    ScoreBand.GOOD: "Good",
    ScoreBand.WARNING: "Needs improvement",
    ScoreBand.CRITICAL: "Critical",
}


class TrendDirection(str, Enum):
    UP = "up"
    DOWN = "down"
    STABLE = "stable"


@dataclass(frozen=True)
class ScoreTrend:
    """
    Recent-vs-older comparison over the last TREND_WINDOW assessments.

    `value` is what the dashboard displays; it is always the recent-half
    average. `older_average` is None when there is no older half.
    """
    value: int
    recent_average: float
    older_average: float | None
    direction: TrendDirection

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "recent_average": round(self.recent_average, 2),
            "older_average": round(self.older_average, 2) if self.older_average is not None else None,
            "direction": self.direction.value,
        }


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def overall_score(posture: int, technique: int, performance: int) -> int:
    """Unweighted mean of the three category scores, rounded down."""
    return (posture + technique + performance) // 3


def score_band(score: float | None) -> ScoreBand:
    """Map a score to its band. A missing score counts as 0."""
    score = score or 0
    if score >= GOOD_THRESHOLD:
        return ScoreBand.GOOD
    if score >= WARNING_THRESHOLD:
        return ScoreBand.WARNING
    return ScoreBand.CRITICAL


def _clean(scores: Iterable[float | None]) -> list[float]:
    return [s or 0 for s in scores]


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values)


def average_score(scores: Iterable[float | None]) -> int | None:
    """Rounded mean of the given scores, or None when there are none."""
    values = _clean(scores)
    if not values:
        return None
    return round_half_up(_mean(values))


def score_trend(scores: Sequence[float | None]) -> ScoreTrend | None:
    """
    Compare the newest half of the window against the older half.

    Args:
        scores: Assessment scores ordered newest first. Only the first
            TREND_WINDOW entries are used.

    Returns:
        ScoreTrend, or None when fewer than MIN_ASSESSMENTS_FOR_SCORE exist.
    """
    values = _clean(scores[:TREND_WINDOW])
    if len(values) < MIN_ASSESSMENTS_FOR_SCORE:
        return None

    recent = values[:TREND_HALF]
    older = values[TREND_HALF:]

    recent_avg = _mean(recent)
    older_avg = _mean(older) if older else None

    direction = TrendDirection.STABLE
    if older_avg is not None:
        recent_rounded, older_rounded = round_half_up(recent_avg), round_half_up(older_avg)
        if recent_rounded > older_rounded:
            direction = TrendDirection.UP
        elif recent_rounded < older_rounded:
            direction = TrendDirection.DOWN

    return ScoreTrend(
        value=round_half_up(recent_avg),
        recent_average=recent_avg,
        older_average=older_avg,
        direction=direction,
    )


def performance_score(scores: Sequence[float | None]) -> int | None:
    """Dashboard performance score: the trend's display value, or None."""
    trend = score_trend(scores)
    return trend.value if trend else None


def format_score(value: int | None) -> str:
    """Render a score as "NN%" or "N/A"."""
    return UNAVAILABLE if value is None else f"{value}%"
