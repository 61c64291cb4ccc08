"""
population.py – Synthetic student population generator.

Every student draws one latent ``base_ability`` in [0.3, 1.0]. The four
cognitive attributes, engagement time, assessment score and subject
scores are all derived from it plus independent uniform noise, so the
attributes are correlated with each other without being identical.
"""

from __future__ import annotations

import logging
import random
from typing import Optional

from student_insights.models import (
    CLASSES,
    COGNITIVE_SKILLS,
    FEMALE_FIRST_NAMES,
    LAST_NAMES,
    MALE_FIRST_NAMES,
    POPULATION_SIZE,
    SUBJECTS,
    Gender,
    Student,
    clamp,
    round_half_up,
    round_int,
)

logger = logging.getLogger(__name__)

# ── Generation constants ──────────────────────────────────────────────────────

BASE_ABILITY_RANGE   = (0.3, 1.0)
SKILL_NOISE          = 0.15    # ± on the 0–1 ability scale
ENGAGEMENT_OFFSET    = 30      # minutes
ENGAGEMENT_NOISE     = 30      # ± minutes
ENGAGEMENT_BOUNDS    = (10, 180)
ASSESSMENT_NOISE     = 10      # ± points
SUBJECT_NOISE        = 15      # ± points
ATTENDANCE_FLOOR     = 85.0
ATTENDANCE_SPREAD    = 15.0


def _student_id(index: int) -> str:
    return f"STU{index + 1:03d}"


def _noisy_skill(rng: random.Random, base_ability: float) -> float:
    return clamp(0, 100, (base_ability + rng.uniform(-SKILL_NOISE, SKILL_NOISE)) * 100)


def make_student(index: int, rng: random.Random) -> Student:
    """Synthesise the student at position *index* of the population."""
    base_ability = rng.uniform(*BASE_ABILITY_RANGE)

    skills = {skill: _noisy_skill(rng, base_ability) for skill in COGNITIVE_SKILLS}
    engagement_time = clamp(
        *ENGAGEMENT_BOUNDS,
        ENGAGEMENT_OFFSET + base_ability * 100 + rng.uniform(-ENGAGEMENT_NOISE, ENGAGEMENT_NOISE),
    )

    skill_average = sum(skills.values()) / len(skills)
    assessment_score = clamp(0, 100, skill_average + rng.uniform(-ASSESSMENT_NOISE, ASSESSMENT_NOISE))
    subject_scores = {
        subject: round_int(clamp(0, 100, skill_average + rng.uniform(-SUBJECT_NOISE, SUBJECT_NOISE)))
        for subject in SUBJECTS
    }
    attendance_rate = round_half_up(ATTENDANCE_FLOOR + rng.uniform(0, ATTENDANCE_SPREAD), 1)

    gender = rng.choice((Gender.MALE, Gender.FEMALE))
    first_pool = MALE_FIRST_NAMES if gender is Gender.MALE else FEMALE_FIRST_NAMES
    name = f"{rng.choice(first_pool)} {rng.choice(LAST_NAMES)}"
    class_name = rng.choice(CLASSES)

    return Student(
        student_id       = _student_id(index),
        name             = name,
        class_name       = class_name,
        section          = class_name[-1],
        gender           = gender,
        comprehension    = round_int(skills["comprehension"]),
        attention        = round_int(skills["attention"]),
        focus            = round_int(skills["focus"]),
        retention        = round_int(skills["retention"]),
        assessment_score = round_int(assessment_score),
        engagement_time  = round_int(engagement_time),
        subject_scores   = subject_scores,
        attendance_rate  = attendance_rate,
    )


def generate_population(
    n: int = POPULATION_SIZE,
    rng: Optional[random.Random] = None,
) -> list[Student]:
    """
    Produce *n* freshly generated students.

    IDs follow generation order (``STU001``, ``STU002``, …) so they are
    unique whatever the random draws. Pass a seeded ``random.Random`` for
    reproducible output; without one a new unseeded source is used.
    """
    rng = rng or random.Random()
    students = [make_student(i, rng) for i in range(n)]
    logger.debug("Generated population of %d students", len(students))
    return students
