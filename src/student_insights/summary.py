"""
summary.py – Population-level summaries for the dashboard panels
=================================================================
Pure functions over a classified population. Each one mirrors a
dashboard panel's numbers so the presentation layer only renders:

  overview_stats(students)            headline cards (averages, high performers, support)
  grade_distribution(students)        A–F letter grade counts
  class_breakdown(students)           count / average score per class (10A, 10B, …)
  section_breakdown(students)         per-section count, gender split, attendance
  gender_by_grade(students)           student count per grade (10, 11, 12) and gender
  subject_averages(students)          mean score per subject
  skill_averages(students)            mean per cognitive attribute
  build_insights(students, correlations, personas)
                                      four narrative insight cards

Every function tolerates an empty population (zeroed values or []).
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import Enum
from typing import Sequence

from student_insights.models import (
    COGNITIVE_SKILLS,
    SUBJECTS,
    Gender,
    LearningPersona,
    SkillCorrelation,
    Student,
    round_half_up,
    round_int,
)

HIGH_PERFORMER_SCORE = 80
NEEDS_SUPPORT_SCORE  = 60

# (minimum score, letter) from highest to lowest
_GRADE_BANDS: tuple[tuple[int, str], ...] = (
    (90, "A"),
    (80, "B"),
    (70, "C"),
    (60, "D"),
    (0,  "F"),
)


# ─── Output models ────────────────────────────────────────────────────────────

@dataclass
class OverviewStats:
    total_students:        int
    class_count:           int
    avg_assessment_score:  int
    avg_engagement_time:   int
    avg_skill_score:       int
    high_performers:       int
    high_performer_pct:    int
    needs_support:         int
    needs_support_pct:     int
    min_engagement_time:   int
    max_engagement_time:   int


@dataclass
class GradeBucket:
    grade:      str
    count:      int
    percentage: int


@dataclass
class ClassStats:
    class_name: str
    count:      int
    avg_score:  int


@dataclass
class SectionStats:
    section:        str
    count:          int
    avg_score:      int
    male_count:     int
    female_count:   int
    avg_attendance: float


@dataclass
class GradeGenderStats:
    grade:  str
    gender: Gender
    count:  int


class InsightKind(str, Enum):
    SUCCESS = "success"
    INFO    = "info"
    WARNING = "warning"
    INSIGHT = "insight"


@dataclass
class Insight:
    kind:        InsightKind
    title:       str
    description: str
    action:      str


@dataclass
class PopulationSummary:
    """Everything summary.py computes for one run, bundled for PipelineResult."""
    overview:    OverviewStats
    grades:      list[GradeBucket]
    classes:     list[ClassStats]
    sections:    list[SectionStats]
    genders:     list[GradeGenderStats]
    subjects:    dict[str, int]
    skills:      dict[str, int]
    insights:    list[Insight]


# ─── Helpers ─────────────────────────────────────────────────────────────────

def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _pct(part: int, whole: int) -> int:
    return round_int(part / whole * 100) if whole else 0


# ─── Panels ──────────────────────────────────────────────────────────────────

def overview_stats(students: Sequence[Student]) -> OverviewStats:
    total = len(students)
    scores = [s.assessment_score for s in students]
    engagement = [s.engagement_time for s in students]
    high = sum(1 for score in scores if score >= HIGH_PERFORMER_SCORE)
    support = sum(1 for score in scores if score < NEEDS_SUPPORT_SCORE)

    return OverviewStats(
        total_students       = total,
        class_count          = len({s.class_name for s in students}),
        avg_assessment_score = round_int(_mean(scores)),
        avg_engagement_time  = round_int(_mean(engagement)),
        avg_skill_score      = round_int(_mean([s.avg_skill for s in students])),
        high_performers      = high,
        high_performer_pct   = _pct(high, total),
        needs_support        = support,
        needs_support_pct    = _pct(support, total),
        min_engagement_time  = min(engagement, default=0),
        max_engagement_time  = max(engagement, default=0),
    )


def letter_grade(score: int) -> str:
    for minimum, letter in _GRADE_BANDS:
        if score >= minimum:
            return letter
    return "F"


def grade_distribution(students: Sequence[Student]) -> list[GradeBucket]:
    """Letter-grade counts in A→F order; grades nobody earned are left out."""
    counts: dict[str, int] = {letter: 0 for _, letter in _GRADE_BANDS}
    for s in students:
        counts[letter_grade(s.assessment_score)] += 1
    return [
        GradeBucket(grade=letter, count=count, percentage=_pct(count, len(students)))
        for letter, count in counts.items()
        if count
    ]


def class_breakdown(students: Sequence[Student]) -> list[ClassStats]:
    groups: dict[str, list[int]] = {}
    for s in students:
        groups.setdefault(s.class_name, []).append(s.assessment_score)
    return [
        ClassStats(class_name=name, count=len(scores), avg_score=round_int(_mean(scores)))
        for name, scores in sorted(groups.items())
    ]


def section_breakdown(students: Sequence[Student]) -> list[SectionStats]:
    groups: dict[str, list[Student]] = {}
    for s in students:
        groups.setdefault(s.section, []).append(s)

    stats: list[SectionStats] = []
    for section, members in sorted(groups.items()):
        male = sum(1 for m in members if m.gender is Gender.MALE)
        stats.append(SectionStats(
            section        = section,
            count          = len(members),
            avg_score      = round_int(_mean([m.assessment_score for m in members])),
            male_count     = male,
            female_count   = len(members) - male,
            avg_attendance = round_half_up(_mean([m.attendance_rate for m in members]), 1),
        ))
    return stats


def gender_by_grade(students: Sequence[Student]) -> list[GradeGenderStats]:
    """Counts per (grade, gender); grade is the class without its section letter."""
    counts = Counter((s.class_name[:-1], s.gender) for s in students)
    gender_order = list(Gender)
    return [
        GradeGenderStats(grade=grade, gender=gender, count=count)
        for (grade, gender), count in sorted(
            counts.items(), key=lambda item: (item[0][0], gender_order.index(item[0][1]))
        )
    ]


def subject_averages(students: Sequence[Student]) -> dict[str, int]:
    return {
        subject: round_int(_mean([s.subject_scores.get(subject, 0) for s in students]))
        for subject in SUBJECTS
    }


def skill_averages(students: Sequence[Student]) -> dict[str, int]:
    return {
        skill: round_int(_mean([getattr(s, skill) for s in students]))
        for skill in COGNITIVE_SKILLS
    }


def build_insights(
    students: Sequence[Student],
    correlations: Sequence[SkillCorrelation],
    personas: Sequence[LearningPersona],
) -> list[Insight]:
    """
    Narrative insight cards. Needs a non-empty population and both
    ranked collections (strongest correlation and largest persona first).
    """
    if not students or not correlations or not personas:
        return []

    overview = overview_stats(students)
    top_skill = correlations[0]
    top_persona = personas[0]

    return [
        Insight(
            kind        = InsightKind.SUCCESS,
            title       = "Strong Performance Correlation",
            description = (
                f"{top_skill.skill} shows the highest correlation ({top_skill.correlation}) "
                f"with assessment scores. Students with strong {top_skill.skill.lower()} "
                "consistently perform better."
            ),
            action      = f"Focus on {top_skill.skill.lower()} development programs",
        ),
        Insight(
            kind        = InsightKind.INFO,
            title       = "Learning Persona Distribution",
            description = (
                f"{top_persona.name} represents the largest group ({top_persona.count} students, "
                f"{_pct(top_persona.count, overview.total_students)}%) with an average score "
                f"of {top_persona.avg_score}%."
            ),
            action      = "Tailor teaching strategies for dominant personas",
        ),
        Insight(
            kind        = InsightKind.WARNING,
            title       = "Students Needing Support",
            description = (
                f"{overview.needs_support} students ({overview.needs_support_pct}%) are scoring "
                f"below {NEEDS_SUPPORT_SCORE}%. These students may benefit from additional "
                "support and intervention."
            ),
            action      = "Implement targeted support programs",
        ),
        Insight(
            kind        = InsightKind.INSIGHT,
            title       = "Engagement Time Variance",
            description = (
                f"Engagement time varies from {overview.min_engagement_time} to "
                f"{overview.max_engagement_time} minutes."
            ),
            action      = "Develop strategies to increase engagement time",
        ),
    ]


def summarise(
    students: Sequence[Student],
    correlations: Sequence[SkillCorrelation],
    personas: Sequence[LearningPersona],
) -> PopulationSummary:
    return PopulationSummary(
        overview = overview_stats(students),
        grades   = grade_distribution(students),
        classes  = class_breakdown(students),
        sections = section_breakdown(students),
        genders  = gender_by_grade(students),
        subjects = subject_averages(students),
        skills   = skill_averages(students),
        insights = build_insights(students, correlations, personas),
    )
