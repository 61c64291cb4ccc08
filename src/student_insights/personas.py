"""
personas.py – Learning persona aggregation.

Groups classified students by persona label and attaches the static
description / characteristics / colour from PERSONA_METADATA.
"""

from __future__ import annotations

import logging
from typing import Sequence

from student_insights.models import (
    LearningPersona,
    Student,
    get_persona_profile,
    round_int,
)

logger = logging.getLogger(__name__)


class PersonaConfigError(RuntimeError):
    """A student reached aggregation without a registered persona label."""


def aggregate_personas(students: Sequence[Student]) -> list[LearningPersona]:
    """
    One LearningPersona per label present in *students*, sorted by descending count.

    Groups are formed in first-encountered order and the sort is stable,
    so equal counts keep that order. Personas with no students are omitted.

    Raises
    ------
    PersonaConfigError
        If any student is unclassified or carries a label with no metadata.
        Either means ``classify`` was skipped or the rule table and the
        metadata registry have drifted apart.
    """
    groups: dict[str, list[Student]] = {}
    for student in students:
        label = student.learning_persona
        if label is None:
            raise PersonaConfigError(
                f"Student {student.student_id} has no learning_persona; run classify() first."
            )
        if get_persona_profile(label) is None:
            raise PersonaConfigError(
                f"Student {student.student_id} has unregistered persona {label!r}."
            )
        groups.setdefault(label, []).append(student)

    personas: list[LearningPersona] = []
    for label, members in groups.items():
        profile = get_persona_profile(label)
        avg_score = round_int(sum(m.assessment_score for m in members) / len(members))
        personas.append(LearningPersona(
            name            = label,
            description     = profile.description,
            characteristics = list(profile.characteristics),
            count           = len(members),
            avg_score       = avg_score,
            color           = profile.color,
        ))
        logger.debug("Persona %s: %d students, avg score %d", label, len(members), avg_score)

    return sorted(personas, key=lambda p: p.count, reverse=True)
