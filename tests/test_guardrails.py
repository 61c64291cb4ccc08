"""
Tests for the stage guardrails (guardrails.py).
Clean pipeline output must pass; hand-broken output must be flagged with the right code.
"""
from factories import make_student

from student_insights.correlation import correlate
from student_insights.guardrails import (
    GuardrailLevel,
    GuardrailResult,
    GuardrailsPipeline,
    GuardrailViolation,
)
from student_insights.models import ImpactLevel, LearningPersona, SkillCorrelation
from student_insights.personas import aggregate_personas


def _codes(result):
    return [v.code for v in result.violations]


def _persona(name, count):
    return LearningPersona(
        name=name, description="", characteristics=[], count=count, avg_score=50, color="#000000",
    )


class TestCleanRunPasses:
    def test_all_stages_pass(self, population, predicted, classified):
        gp = GuardrailsPipeline()
        results = [
            gp.check_population(population),
            gp.check_predictions(predicted),
            gp.check_classification(classified),
            gp.check_correlations(correlate(classified)),
            gp.check_personas(aggregate_personas(classified), len(classified)),
        ]
        for r in results:
            assert r.passed, r.summary()
            assert not r.violations


class TestPopulationGuards:
    def test_duplicate_ids_block(self):
        students = [make_student(student_id="STU001"), make_student(student_id="STU001")]
        result = GuardrailsPipeline().check_population(students)
        assert "G-01" in _codes(result)
        assert result.blocked

    def test_out_of_range_blocks(self):
        # model_copy skips validation, as a buggy stage could
        s = make_student().model_copy(update={"engagement_time": 500})
        result = GuardrailsPipeline().check_population([s])
        assert _codes(result) == ["G-02"]
        assert result.violations[0].field.endswith("engagement_time")

    def test_subject_out_of_range_blocks(self):
        s = make_student()
        s = s.model_copy(update={"subject_scores": {**s.subject_scores, "Art": 101}})
        assert "G-02" in _codes(GuardrailsPipeline().check_population([s]))

    def test_missing_subject_warns(self):
        s = make_student().model_copy(update={"subject_scores": {"Mathematics": 50}})
        result = GuardrailsPipeline().check_population([s])
        assert _codes(result) == ["G-03"]
        assert result.passed
        assert result.warnings


class TestPredictionAndClassificationGuards:
    def test_missing_prediction_blocks(self):
        result = GuardrailsPipeline().check_predictions([make_student()])
        assert _codes(result) == ["G-04"]

    def test_unlabelled_blocks(self, predicted):
        result = GuardrailsPipeline().check_classification(predicted[:3])
        assert _codes(result) == ["G-05"] * 3

    def test_unknown_label_blocks(self):
        s = make_student(learning_persona="Night Owl")
        assert GuardrailsPipeline().check_classification([s]).blocked


class TestCorrelationGuards:
    def test_unsorted_blocks(self):
        correlations = [
            SkillCorrelation(skill="FOCUS", correlation=0.2, impact=ImpactLevel.LOW),
            SkillCorrelation(skill="ATTENTION", correlation=-0.8, impact=ImpactLevel.HIGH),
        ]
        assert _codes(GuardrailsPipeline().check_correlations(correlations)) == ["G-06"]

    def test_negative_magnitude_sorted_passes(self):
        correlations = [
            SkillCorrelation(skill="ATTENTION", correlation=-0.8, impact=ImpactLevel.HIGH),
            SkillCorrelation(skill="FOCUS", correlation=0.2, impact=ImpactLevel.LOW),
        ]
        assert GuardrailsPipeline().check_correlations(correlations).passed


class TestPersonaGuards:
    def test_count_mismatch_blocks(self):
        result = GuardrailsPipeline().check_personas([_persona("High Achiever", 3)], 4)
        assert _codes(result) == ["G-08"]

    def test_zero_count_warns(self):
        personas = [_persona("High Achiever", 4), _persona("Quick Learner", 0)]
        result = GuardrailsPipeline().check_personas(personas, 4)
        assert _codes(result) == ["G-09"]
        assert result.passed

    def test_unsorted_blocks(self):
        personas = [_persona("High Achiever", 1), _persona("Quick Learner", 3)]
        assert "G-10" in _codes(GuardrailsPipeline().check_personas(personas, 4))


class TestMerge:
    def test_merge_combines_and_blocks(self):
        ok = GuardrailResult(passed=True)
        bad = GuardrailResult(passed=False, violations=[
            GuardrailViolation(code="G-01", level=GuardrailLevel.BLOCK, message="dup"),
        ])
        merged = GuardrailsPipeline().merge(ok, bad)
        assert not merged.passed
        assert merged.blocked
        assert "G-01" in merged.summary()

    def test_summary_when_clean(self):
        assert GuardrailResult(passed=True).summary() == "All guardrails passed."
