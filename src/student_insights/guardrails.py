"""
guardrails.py – Invariant checks between pipeline stages
=========================================================
Each guard inspects the output of one stage and returns a
GuardrailResult; nothing here raises. BLOCK means an invariant the
presentation layer relies on is broken; WARN is advisory.

Population guards (after generate_population):
  G-01  student_id values are unique
  G-02  cognitive attributes, scores, engagement and attendance within range
  G-03  every student carries exactly the five fixed subjects

Prediction guards (after predict):
  G-04  predicted_score present and in [0, 100]

Classification guards (after classify):
  G-05  every learning_persona is one of the six registered labels

Correlation guards (after correlate):
  G-06  results sorted by descending |correlation|
  G-07  every correlation within [-1, 1]

Persona guards (after aggregate_personas):
  G-08  persona counts sum to the population size
  G-09  no zero-count personas
  G-10  personas sorted by descending count
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from student_insights.models import (
    COGNITIVE_SKILLS,
    PERSONA_LABELS,
    SUBJECTS,
    LearningPersona,
    SkillCorrelation,
    Student,
)


# ─── Enums & data models ─────────────────────────────────────────────────────

class GuardrailLevel(str, Enum):
    BLOCK = "BLOCK"
    WARN  = "WARN"
    INFO  = "INFO"


@dataclass
class GuardrailViolation:
    code:    str
    level:   GuardrailLevel
    message: str
    field:   str = ""   # which field triggered the violation


@dataclass
class GuardrailResult:
    passed:     bool
    violations: list[GuardrailViolation] = field(default_factory=list)

    @property
    def blocked(self) -> bool:
        return any(v.level == GuardrailLevel.BLOCK for v in self.violations)

    @property
    def warnings(self) -> list[GuardrailViolation]:
        return [v for v in self.violations if v.level == GuardrailLevel.WARN]

    def summary(self) -> str:
        if not self.violations:
            return "All guardrails passed."
        return "\n".join(f"{v.level.value} [{v.code}] {v.message}" for v in self.violations)


def _result(violations: list[GuardrailViolation]) -> GuardrailResult:
    return GuardrailResult(
        passed=not any(v.level == GuardrailLevel.BLOCK for v in violations),
        violations=violations,
    )


# Field → inclusive (lo, hi)
_RANGES: dict[str, tuple[float, float]] = {
    **{skill: (0, 100) for skill in COGNITIVE_SKILLS},
    "assessment_score": (0, 100),
    "engagement_time":  (10, 180),
    "attendance_rate":  (85.0, 100.0),
}


# ─── Stage guards ────────────────────────────────────────────────────────────

class PopulationGuardrails:
    """G-01 – G-03: Validates the generated population."""

    def check(self, students: Sequence[Student]) -> GuardrailResult:
        violations: list[GuardrailViolation] = []

        # G-01 Unique IDs
        duplicates = [sid for sid, n in Counter(s.student_id for s in students).items() if n > 1]
        if duplicates:
            violations.append(GuardrailViolation(
                code="G-01", level=GuardrailLevel.BLOCK, field="student_id",
                message=f"Duplicate student IDs: {duplicates}.",
            ))

        for s in students:
            # G-02 Attribute ranges
            for name, (lo, hi) in _RANGES.items():
                value = getattr(s, name)
                if not (lo <= value <= hi):
                    violations.append(GuardrailViolation(
                        code="G-02", level=GuardrailLevel.BLOCK,
                        field=f"{s.student_id}.{name}",
                        message=f"{name}={value} out of [{lo}, {hi}] range.",
                    ))

            # G-03 Subject set
            if set(s.subject_scores) != set(SUBJECTS):
                violations.append(GuardrailViolation(
                    code="G-03", level=GuardrailLevel.WARN,
                    field=f"{s.student_id}.subject_scores",
                    message=f"Subjects {sorted(s.subject_scores)} differ from {list(SUBJECTS)}.",
                ))
            for subject, score in s.subject_scores.items():
                if not (0 <= score <= 100):
                    violations.append(GuardrailViolation(
                        code="G-02", level=GuardrailLevel.BLOCK,
                        field=f"{s.student_id}.subject_scores[{subject}]",
                        message=f"{subject} score {score} out of [0, 100] range.",
                    ))

        return _result(violations)


class PredictionGuardrails:
    """G-04: Validates predicted scores."""

    def check(self, students: Sequence[Student]) -> GuardrailResult:
        violations: list[GuardrailViolation] = []
        for s in students:
            if s.predicted_score is None or not (0 <= s.predicted_score <= 100):
                violations.append(GuardrailViolation(
                    code="G-04", level=GuardrailLevel.BLOCK,
                    field=f"{s.student_id}.predicted_score",
                    message=f"Predicted score {s.predicted_score} missing or out of [0, 100].",
                ))
        return _result(violations)


class ClassificationGuardrails:
    """G-05: Validates persona labels."""

    def check(self, students: Sequence[Student]) -> GuardrailResult:
        violations: list[GuardrailViolation] = []
        for s in students:
            if s.learning_persona not in PERSONA_LABELS:
                violations.append(GuardrailViolation(
                    code="G-05", level=GuardrailLevel.BLOCK,
                    field=f"{s.student_id}.learning_persona",
                    message=f"Persona {s.learning_persona!r} is not a registered label.",
                ))
        return _result(violations)


class CorrelationGuardrails:
    """G-06 – G-07: Validates the ranked correlation list."""

    def check(self, correlations: Sequence[SkillCorrelation]) -> GuardrailResult:
        violations: list[GuardrailViolation] = []

        magnitudes = [abs(c.correlation) for c in correlations]
        if any(a < b for a, b in zip(magnitudes, magnitudes[1:])):
            violations.append(GuardrailViolation(
                code="G-06", level=GuardrailLevel.BLOCK,
                message="Correlations are not sorted by descending magnitude.",
            ))

        for c in correlations:
            if not (-1.0 <= c.correlation <= 1.0):
                violations.append(GuardrailViolation(
                    code="G-07", level=GuardrailLevel.BLOCK, field=c.skill,
                    message=f"Correlation {c.correlation} out of [-1, 1] range.",
                ))

        return _result(violations)


class PersonaGuardrails:
    """G-08 – G-10: Validates persona aggregates against the population."""

    def check(self, personas: Sequence[LearningPersona], population_size: int) -> GuardrailResult:
        violations: list[GuardrailViolation] = []

        total = sum(p.count for p in personas)
        if total != population_size:
            violations.append(GuardrailViolation(
                code="G-08", level=GuardrailLevel.BLOCK,
                message=f"Persona counts sum to {total}; population has {population_size} students.",
            ))

        empty = [p.name for p in personas if p.count == 0]
        if empty:
            violations.append(GuardrailViolation(
                code="G-09", level=GuardrailLevel.WARN,
                message=f"Zero-count personas should be omitted: {empty}.",
            ))

        counts = [p.count for p in personas]
        if any(a < b for a, b in zip(counts, counts[1:])):
            violations.append(GuardrailViolation(
                code="G-10", level=GuardrailLevel.BLOCK,
                message="Personas are not sorted by descending count.",
            ))

        return _result(violations)


# ─── Convenience façade ───────────────────────────────────────────────────────

class GuardrailsPipeline:
    """
    Single entry-point that runs the guard for a given pipeline stage.

    Usage::

        gp = GuardrailsPipeline()
        result = gp.check_population(students)
        result = gp.check_personas(personas, len(students))
    """

    def __init__(self):
        self.population_guard     = PopulationGuardrails()
        self.prediction_guard     = PredictionGuardrails()
        self.classification_guard = ClassificationGuardrails()
        self.correlation_guard    = CorrelationGuardrails()
        self.persona_guard        = PersonaGuardrails()

    def check_population(self, students) -> GuardrailResult:
        return self.population_guard.check(students)

    def check_predictions(self, students) -> GuardrailResult:
        return self.prediction_guard.check(students)

    def check_classification(self, students) -> GuardrailResult:
        return self.classification_guard.check(students)

    def check_correlations(self, correlations) -> GuardrailResult:
        return self.correlation_guard.check(correlations)

    def check_personas(self, personas, population_size: int) -> GuardrailResult:
        return self.persona_guard.check(personas, population_size)

    def merge(self, *results: GuardrailResult) -> GuardrailResult:
        """Merge multiple GuardrailResult objects into one."""
        all_v = []
        for r in results:
            all_v.extend(r.violations)
        return _result(all_v)
