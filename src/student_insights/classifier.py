"""
classifier.py – Rule-based learning persona classifier.

Rules are evaluated top to bottom and the first match wins. The table is
ordered, not disjoint: rules 1 and 4 both require avg_skill >= 80 but
split on engagement (> 90 vs < 60), so a high-skill student with
60–90 minutes of engagement falls through to the later rules.

  #  Persona             Condition
  1  High Achiever       avg >= 80 and engagement > 90
  2  Focused Learner     avg >= 70 and focus >= 80
  3  Engaged Student     engagement >= 100 and avg >= 60
  4  Quick Learner       avg >= 80 and engagement < 60
  5  Struggling Student  attention < 50 and focus < 50
  6  Average Performer   (always)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterable

from student_insights.models import PersonaLabel, Student

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PersonaRule:
    label:     PersonaLabel
    predicate: Callable[[Student], bool]
    summary:   str

    def matches(self, student: Student) -> bool:
        return self.predicate(student)


PERSONA_RULES: tuple[PersonaRule, ...] = (
    PersonaRule(
        PersonaLabel.HIGH_ACHIEVER,
        lambda s: s.avg_skill >= 80 and s.engagement_time > 90,
        "avg_skill >= 80 and engagement_time > 90",
    ),
    PersonaRule(
        PersonaLabel.FOCUSED_LEARNER,
        lambda s: s.avg_skill >= 70 and s.focus >= 80,
        "avg_skill >= 70 and focus >= 80",
    ),
    PersonaRule(
        PersonaLabel.ENGAGED_STUDENT,
        lambda s: s.engagement_time >= 100 and s.avg_skill >= 60,
        "engagement_time >= 100 and avg_skill >= 60",
    ),
    PersonaRule(
        PersonaLabel.QUICK_LEARNER,
        lambda s: s.avg_skill >= 80 and s.engagement_time < 60,
        "avg_skill >= 80 and engagement_time < 60",
    ),
    PersonaRule(
        PersonaLabel.STRUGGLING_STUDENT,
        lambda s: s.attention < 50 and s.focus < 50,
        "attention < 50 and focus < 50",
    ),
    PersonaRule(
        PersonaLabel.AVERAGE_PERFORMER,
        lambda s: True,
        "catch-all",
    ),
)


def classify_student(student: Student) -> PersonaLabel:
    """Return the persona of the first rule *student* satisfies."""
    for rule in PERSONA_RULES:
        if rule.matches(student):
            return rule.label
    # PERSONA_RULES ends with a catch-all
    raise AssertionError("persona rule table has no catch-all")


def classify(students: Iterable[Student]) -> list[Student]:
    """Return copies of *students* with ``learning_persona`` set; prior labels are ignored."""
    classified = [
        s.model_copy(update={"learning_persona": classify_student(s).value}, deep=True)
        for s in students
    ]
    logger.debug("Classified %d students", len(classified))
    return classified
