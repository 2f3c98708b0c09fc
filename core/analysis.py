# =============================================================================
# core/analysis.py - Mock Video Analysis
# =============================================================================
# Stand-in for a real pose/technique model. It never reads the video: after an
# artificial delay it returns bounded random category scores and canned
# recommendation text.
#
# Output shape (persisted as assessments.results / score / recommendations):
#   {
#     "results": {
#       "posture":     {"score", "keyPoints", "recommendations"},
#       "technique":   {"score", "keyPoints", "recommendations"},
#       "performance": {"score", "metrics", "insights"},
#     },
#     "score": floor(mean of the three category scores),
#     "recommendations": [...],
#   }
# =============================================================================

from __future__ import annotations

import asyncio
import logging
import random
from typing import Any

from app.config import settings
from core.scoring import ScoreBand, overall_score, score_band

logger = logging.getLogger(__name__)


# (name, low, high) - inclusive bounds
POSTURE_RANGE = (75, 94)
POSTURE_KEY_POINTS = [
    ("Head Position", 80, 99),
    ("Shoulder Alignment", 70, 99),
    ("Hip Position", 65, 89),
    ("Knee Tracking", 80, 99),
    ("Foot Placement", 75, 99),
]
POSTURE_RECOMMENDATIONS = [
    "Focus on keeping your hips level throughout the movement",
    "Engage your core more to maintain better posture",
    "Consider hip mobility exercises to improve alignment",
]

TECHNIQUE_RANGE = (70, 94)
TECHNIQUE_KEY_POINTS = [
    ("Movement Timing", 80, 99),
    ("Range of Motion", 65, 94),
    ("Balance", 75, 99),
    ("Coordination", 70, 99),
]
TECHNIQUE_RECOMMENDATIONS = [
    "Work on increasing your range of motion through dynamic stretching",
    "Practice balance exercises to improve stability",
    "Focus on slower, controlled movements to improve coordination",
]

PERFORMANCE_RANGE = (75, 94)
PERFORMANCE_INSIGHTS = [
    "Your speed has improved compared to previous sessions",
    "Power output remains consistent, showing good strength maintenance",
    "Efficiency gains suggest better technique development",
    "Focus on consistency to maximize performance potential",
]

OVERALL_RECOMMENDATIONS = [
    "Focus on hip alignment and core engagement",
    "Increase range of motion through targeted stretching",
    "Practice balance and coordination exercises",
    "Maintain consistent training schedule for better results",
]


def _key_point_status(score: int) -> str:
    return "good" if score_band(score) is ScoreBand.GOOD else "needs_improvement"


def _key_points(rng: random.Random, points_def: list[tuple[str, int, int]]) -> list[dict[str, Any]]:
    points = []
    for name, low, high in points_def:
        score = rng.randint(low, high)
        points.append({"name": name, "score": score, "status": _key_point_status(score)})
    return points


def _performance_metrics(rng: random.Random) -> list[dict[str, Any]]:
    return [
        {"name": "Speed", "value": f"{rng.uniform(3.0, 5.0):.1f} m/s", "trend": "up"},
        {"name": "Power", "value": f"{rng.randint(750, 949)} W", "trend": "stable"},
        {"name": "Efficiency", "value": f"{rng.randint(70, 89)}%", "trend": "up"},
        {"name": "Consistency", "value": f"{rng.randint(75, 94)}%", "trend": "down"},
    ]


def generate_analysis(rng: random.Random | None = None) -> dict[str, Any]:
    """
    Build one mock analysis result without any delay.

    Args:
        rng: Optional random source (seed it for reproducible output)
    """
    rng = rng or random.Random()

    results = {
        "posture": {
            "score": rng.randint(*POSTURE_RANGE),
            "keyPoints": _key_points(rng, POSTURE_KEY_POINTS),
            "recommendations": list(POSTURE_RECOMMENDATIONS),
        },
        "technique": {
            "score": rng.randint(*TECHNIQUE_RANGE),
            "keyPoints": _key_points(rng, TECHNIQUE_KEY_POINTS),
            "recommendations": list(TECHNIQUE_RECOMMENDATIONS),
        },
        "performance": {
            "score": rng.randint(*PERFORMANCE_RANGE),
            "metrics": _performance_metrics(rng),
            "insights": list(PERFORMANCE_INSIGHTS),
        },
    }

    score = overall_score(
        results["posture"]["score"],
        results["technique"]["score"],
        results["performance"]["score"],
    )

    return {
        "results": results,
        "score": score,
        "recommendations": list(OVERALL_RECOMMENDATIONS),
    }


async def perform_analysis(
    video_url: str,
    analysis_type: str,
    delay: float | None = None,
    rng: random.Random | None = None,
) -> dict[str, Any]:
    """
    Run the mock analysis for one video.

    Args:
        video_url: Public URL of the video (not read)
        analysis_type: Label stored with the assessment
        delay: Seconds to wait; defaults to settings.ANALYSIS_DELAY_SECONDS
        rng: Optional random source

    Returns:
        Dict with results, score and recommendations
    """
    delay = settings.ANALYSIS_DELAY_SECONDS if delay is None else delay
    logger.info(f"Running {analysis_type} analysis for {video_url}")

    if delay > 0:
        await asyncio.sleep(delay)

    return generate_analysis(rng)
