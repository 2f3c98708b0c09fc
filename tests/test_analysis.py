# =============================================================================
# tests/test_analysis.py - Mock Analysis Tests
# =============================================================================
# The analyzer is random, so these tests check bounds and shape over many
# seeded runs rather than exact values.
# =============================================================================

import asyncio
import random

import pytest

from core.analysis import (
    OVERALL_RECOMMENDATIONS,
    PERFORMANCE_RANGE,
    POSTURE_KEY_POINTS,
    POSTURE_RANGE,
    TECHNIQUE_KEY_POINTS,
    TECHNIQUE_RANGE,
    generate_analysis,
    perform_analysis,
)
from core.scoring import overall_score


class TestGenerateAnalysis:
    """Test the shape and bounds of one mock result."""

    @pytest.fixture
    def results(self):
        rng = random.Random(1234)
        return [generate_analysis(rng) for _ in range(200)]

    def test_category_scores_within_bounds(self, results):
        for result in results:
            r = result["results"]
            assert POSTURE_RANGE[0] <= r["posture"]["score"] <= POSTURE_RANGE[1]
            assert TECHNIQUE_RANGE[0] <= r["technique"]["score"] <= TECHNIQUE_RANGE[1]
            assert PERFORMANCE_RANGE[0] <= r["performance"]["score"] <= PERFORMANCE_RANGE[1]

    def test_overall_is_floor_of_category_mean(self, results):
        for result in results:
            r = result["results"]
            expected = overall_score(
                r["posture"]["score"],
                r["technique"]["score"],
                r["performance"]["score"],
            )
            assert result["score"] == expected
            assert 0 <= result["score"] <= 100

    def test_key_points(self, results):
        for result in results:
            posture_points = result["results"]["posture"]["keyPoints"]
            technique_points = result["results"]["technique"]["keyPoints"]

            assert [p["name"] for p in posture_points] == [name for name, _, _ in POSTURE_KEY_POINTS]
            assert [p["name"] for p in technique_points] == [name for name, _, _ in TECHNIQUE_KEY_POINTS]

            for point in posture_points + technique_points:
                expected = "good" if point["score"] >= 85 else "needs_improvement"
                assert point["status"] == expected

    def test_performance_metrics(self, results):
        metrics = results[0]["results"]["performance"]["metrics"]

        assert [m["name"] for m in metrics] == ["Speed", "Power", "Efficiency", "Consistency"]
        assert metrics[0]["value"].endswith(" m/s")
        assert metrics[1]["value"].endswith(" W")

    def test_recommendations(self, results):
        assert results[0]["recommendations"] == OVERALL_RECOMMENDATIONS
        assert results[0]["results"]["posture"]["recommendations"]

    def test_seeded_runs_are_reproducible(self):
        assert generate_analysis(random.Random(7)) == generate_analysis(random.Random(7))


class TestPerformAnalysis:
    """Test the async entry point."""

    def test_returns_analysis(self):
        result = asyncio.run(perform_analysis(
            "https://example.com/video.mp4",
            "comprehensive",
            delay=0,
            rng=random.Random(3),
        ))

        assert set(result) == {"results", "score", "recommendations"}
        assert result == generate_analysis(random.Random(3))
