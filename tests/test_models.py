"""
Tests for data models: Student validation, aggregate models,
numeric helpers and the fixed enumerations.
"""
import pytest
from pydantic import ValidationError
from factories import make_student

from student_insights.models import (
    CLASSES,
    FEMALE_FIRST_NAMES,
    MALE_FIRST_NAMES,
    SUBJECTS,
    ImpactLevel,
    LearningPersona,
    SkillCorrelation,
    Student,
    clamp,
    round_half_up,
    round_int,
)


class TestStudent:
    def test_avg_skill(self):
        s = make_student(comprehension=80, attention=70, focus=60, retention=91)
        assert s.avg_skill == pytest.approx(75.25)

    @pytest.mark.parametrize("field,value", [
        ("comprehension", 101),
        ("attention", -1),
        ("assessment_score", 150),
        ("engagement_time", 9),
        ("engagement_time", 181),
        ("attendance_rate", 84.9),
    ])
    def test_out_of_range_rejected(self, field, value):
        with pytest.raises(ValidationError):
            make_student(**{field: value})

    def test_bad_id_rejected(self):
        with pytest.raises(ValidationError):
            make_student(student_id="S-1")

    def test_populate_by_alias(self):
        data = make_student(class_name="12C").model_dump(by_alias=True)
        assert Student.model_validate(data).class_name == "12C"

    def test_optional_fields_default_none(self):
        s = make_student()
        assert s.predicted_score is None
        assert s.learning_persona is None


class TestAggregateModels:
    def test_correlation_bounds(self):
        with pytest.raises(ValidationError):
            SkillCorrelation(skill="FOCUS", correlation=1.2, impact=ImpactLevel.HIGH)

    def test_persona_accepts_alias_or_name(self):
        a = LearningPersona(name="X", description="", characteristics=[], count=1,
                            avgScore=70, color="#fff")
        b = LearningPersona(name="X", description="", characteristics=[], count=1,
                            avg_score=70, color="#fff")
        assert a == b

    def test_negative_count_rejected(self):
        with pytest.raises(ValidationError):
            LearningPersona(name="X", description="", characteristics=[], count=-1,
                            avg_score=70, color="#fff")


class TestNumericHelpers:
    @pytest.mark.parametrize("value,expected", [
        (2.5, 3), (3.5, 4), (2.4999, 2), (-2.5, -2), (0.5, 1),
    ])
    def test_round_int_half_up(self, value, expected):
        assert round_int(value) == expected

    def test_round_half_up_decimals(self):
        assert round_half_up(0.615, 1) == 0.6
        assert round_half_up(87.25, 1) == 87.3

    def test_clamp(self):
        assert clamp(0, 100, -3) == 0
        assert clamp(0, 100, 104.2) == 100
        assert clamp(10, 180, 55) == 55


class TestEnumerations:
    def test_five_subjects(self):
        assert SUBJECTS == ("Mathematics", "Science", "English", "History", "Art")

    def test_classes_are_grade_plus_section(self):
        for c in CLASSES:
            assert c[:2] in ("10", "11", "12")
            assert c[-1] in "ABC"

    def test_name_pools_disjoint(self):
        assert not set(MALE_FIRST_NAMES) & set(FEMALE_FIRST_NAMES)
