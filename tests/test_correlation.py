"""
Tests for the correlation analyzer (correlation.py).
Pearson edge cases, impact bucket boundaries, display names, ranking and stable ties.
"""
import pytest
from factories import make_student

from student_insights.correlation import (
    CORRELATION_FEATURES,
    correlate,
    display_name,
    impact_for,
    pearson,
)
from student_insights.models import ImpactLevel, round_half_up


class TestPearson:
    def test_identical_sequences(self):
        assert pearson([1, 2, 3, 4], [1, 2, 3, 4]) == pytest.approx(1.0)

    def test_reversed_sequences(self):
        assert pearson([1, 2, 3, 4], [4, 3, 2, 1]) == pytest.approx(-1.0)

    def test_self_correlation_rounds_to_exactly_one(self, population):
        scores = [s.assessment_score for s in population]
        assert round_half_up(pearson(scores, scores), 2) == 1.0

    def test_constant_feature_is_zero(self):
        assert pearson([50, 50, 50, 50], [10, 40, 70, 90]) == 0.0

    def test_constant_target_is_zero(self):
        assert pearson([10, 40, 70, 90], [5, 5, 5, 5]) == 0.0

    def test_empty_is_zero(self):
        assert pearson([], []) == 0.0

    def test_single_point_is_zero(self):
        assert pearson([3], [7]) == 0.0

    def test_known_value(self):
        # x = 1..5, y = 2,4,5,4,5 → r = 0.7746
        assert pearson([1, 2, 3, 4, 5], [2, 4, 5, 4, 5]) == pytest.approx(0.7746, abs=1e-4)

    def test_length_mismatch_raises(self):
        with pytest.raises(ValueError):
            pearson([1, 2, 3], [1, 2])

    def test_result_within_unit_interval(self, population):
        for feature in CORRELATION_FEATURES:
            r = pearson([getattr(s, feature) for s in population],
                        [s.assessment_score for s in population])
            assert -1.0 <= r <= 1.0


class TestImpactBuckets:
    @pytest.mark.parametrize("r,expected", [
        (0.61, ImpactLevel.HIGH),
        (0.60, ImpactLevel.MEDIUM),
        (0.31, ImpactLevel.MEDIUM),
        (0.30, ImpactLevel.LOW),
        (0.0,  ImpactLevel.LOW),
        (1.0,  ImpactLevel.HIGH),
        (-0.61, ImpactLevel.HIGH),
        (-0.45, ImpactLevel.MEDIUM),
        (-0.30, ImpactLevel.LOW),
    ])
    def test_thresholds(self, r, expected):
        assert impact_for(r) == expected


class TestDisplayName:
    @pytest.mark.parametrize("feature,expected", [
        ("comprehension",   "COMPREHENSION"),
        ("engagement_time", "ENGAGEMENT TIME"),
    ])
    def test_names(self, feature, expected):
        assert display_name(feature) == expected


def _population(rows):
    """rows: (comprehension, attention, focus, retention, engagement, score)."""
    return [
        make_student(comprehension=c, attention=a, focus=f, retention=r,
                     engagement_time=e, assessment_score=score)
        for c, a, f, r, e, score in rows
    ]


class TestCorrelate:
    def test_one_result_per_feature(self, classified):
        result = correlate(classified)
        assert len(result) == 5
        assert {c.skill for c in result} == {
            "COMPREHENSION", "ATTENTION", "FOCUS", "RETENTION", "ENGAGEMENT TIME",
        }

    def test_sorted_by_descending_magnitude(self, classified):
        magnitudes = [abs(c.correlation) for c in correlate(classified)]
        assert magnitudes == sorted(magnitudes, reverse=True)

    def test_two_decimal_rounding(self, classified):
        for c in correlate(classified):
            assert c.correlation == round(c.correlation, 2)
            assert c.impact == impact_for(c.correlation)

    def test_cognitive_skills_have_high_impact(self, classified):
        by_skill = {c.skill: c for c in correlate(classified)}
        for skill in ("COMPREHENSION", "ATTENTION", "FOCUS", "RETENTION"):
            assert by_skill[skill].impact == ImpactLevel.HIGH

    def test_empty_population(self):
        assert correlate([]) == []

    def test_all_constant_features_keep_input_order(self):
        students = _population([
            (50, 50, 50, 50, 60, 20),
            (50, 50, 50, 50, 60, 55),
            (50, 50, 50, 50, 60, 90),
        ])
        result = correlate(students)
        assert [c.skill for c in result] == [display_name(f) for f in CORRELATION_FEATURES]
        assert all(c.correlation == 0 and c.impact == ImpactLevel.LOW for c in result)

    def test_perfect_and_inverse_features_lead_in_input_order(self):
        students = _population([
            (20, 80, 50, 50, 60, 20),
            (55, 45, 50, 50, 60, 55),
            (90, 10, 50, 50, 60, 90),
        ])
        result = correlate(students)
        assert [(c.skill, c.correlation) for c in result[:2]] == [
            ("COMPREHENSION", 1.0),
            ("ATTENTION", -1.0),
        ]
        assert result[0].impact == result[1].impact == ImpactLevel.HIGH

    def test_negative_correlation_ranked_by_magnitude(self):
        students = _population([
            (20, 90, 50, 50, 60, 20),
            (40, 60, 50, 50, 70, 50),
            (60, 50, 50, 50, 60, 55),
            (70, 10, 50, 50, 70, 90),
        ])
        result = correlate(students)
        assert result[0].skill in ("COMPREHENSION", "ATTENTION")
        assert abs(result[-1].correlation) <= abs(result[0].correlation)
