"""
Data models for the Student Insights analytics engine.

Per-student records, the two aggregate result types handed to the
presentation layer, the fixed enumerations the generator draws from,
and the static persona metadata registry.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


# ─── Enumerations ────────────────────────────────────────────────────────────

class Gender(str, Enum):
    MALE   = "Male"
    FEMALE = "Female"


class ImpactLevel(str, Enum):
    """Correlation magnitude bucket."""
    HIGH   = "High"    # |r| > 0.6
    MEDIUM = "Medium"  # 0.3 < |r| <= 0.6
    LOW    = "Low"     # |r| <= 0.3


class PersonaLabel(str, Enum):
    """The six learner archetypes the classifier can emit."""
    HIGH_ACHIEVER      = "High Achiever"
    FOCUSED_LEARNER    = "Focused Learner"
    ENGAGED_STUDENT    = "Engaged Student"
    QUICK_LEARNER      = "Quick Learner"
    STRUGGLING_STUDENT = "Struggling Student"
    AVERAGE_PERFORMER  = "Average Performer"


PERSONA_LABELS: frozenset[str] = frozenset(p.value for p in PersonaLabel)


# ─── Fixed enumerations used by the generator ────────────────────────────────

POPULATION_SIZE = 150

MALE_FIRST_NAMES: tuple[str, ...] = (
    "Liam", "Noah", "Oliver", "Elijah", "William", "James", "Benjamin",
    "Lucas", "Henry", "Alexander", "Mason", "Michael", "Ethan", "Daniel", "Jacob",
)

FEMALE_FIRST_NAMES: tuple[str, ...] = (
    "Emma", "Olivia", "Ava", "Sofia", "Charlotte", "Amelia", "Isabella",
    "Mia", "Harper", "Evelyn", "Abigail", "Emily", "Elizabeth", "Mila", "Ella",
)

LAST_NAMES: tuple[str, ...] = (
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia", "Miller",
    "Davis", "Rodriguez", "Martinez", "Hernandez", "Lopez", "Gonzalez",
    "Wilson", "Anderson", "Thomas", "Taylor", "Moore", "Jackson", "Martin",
    "Lee", "Perez", "Thompson", "White", "Harris", "Sanchez", "Clark",
    "Ramirez", "Lewis", "Robinson",
)

CLASSES: tuple[str, ...] = (
    "10A", "10B", "10C",
    "11A", "11B", "11C",
    "12A", "12B", "12C",
)

SUBJECTS: tuple[str, ...] = ("Mathematics", "Science", "English", "History", "Art")

COGNITIVE_SKILLS: tuple[str, ...] = ("comprehension", "attention", "focus", "retention")


# ─── Numeric helpers ─────────────────────────────────────────────────────────

def clamp(lo: float, hi: float, value: float) -> float:
    return max(lo, min(hi, value))


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round .5 upwards (2.5 → 3, -2.5 → -2); round() would give banker's rounding."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def round_int(value: float) -> int:
    return int(round_half_up(value))


# ─── Per-student record ──────────────────────────────────────────────────────

class Student(BaseModel):
    """
    One synthetic student.

    Created by the population generator; ``predicted_score`` and
    ``learning_persona`` are filled in by later pipeline stages.
    """
    model_config = ConfigDict(populate_by_name=True)

    student_id:       str = Field(pattern=r"^STU\d{3,}$")
    name:             str
    class_name:       str = Field(alias="class", description="Grade + section, e.g. 10A")
    section:          str
    gender:           Gender

    comprehension:    int = Field(ge=0, le=100)
    attention:        int = Field(ge=0, le=100)
    focus:            int = Field(ge=0, le=100)
    retention:        int = Field(ge=0, le=100)

    assessment_score: int = Field(ge=0, le=100)
    engagement_time:  int = Field(ge=10, le=180, description="Minutes")

    subject_scores:   dict[str, int] = Field(default_factory=dict)
    attendance_rate:  float = Field(ge=85.0, le=100.0)

    predicted_score:  Optional[int] = Field(default=None, ge=0, le=100)
    learning_persona: Optional[str] = None

    @property
    def avg_skill(self) -> float:
        return (self.comprehension + self.attention + self.focus + self.retention) / 4


# ─── Aggregate result models ─────────────────────────────────────────────────

class SkillCorrelation(BaseModel):
    """Pearson correlation of one feature against ``assessment_score``."""
    skill:       str
    correlation: float = Field(ge=-1.0, le=1.0)
    impact:      ImpactLevel


class LearningPersona(BaseModel):
    """Per-persona statistics with the static display metadata attached."""
    model_config = ConfigDict(populate_by_name=True)

    name:            str
    description:     str
    characteristics: list[str]
    count:           int = Field(ge=0)
    avg_score:       int = Field(alias="avgScore", ge=0, le=100)
    color:           str


# ─── Persona metadata registry ───────────────────────────────────────────────

@dataclass(frozen=True)
class PersonaProfile:
    description:     str
    characteristics: tuple[str, ...]
    color:           str


PERSONA_METADATA: Mapping[str, PersonaProfile] = MappingProxyType({
    PersonaLabel.HIGH_ACHIEVER.value: PersonaProfile(
        description="Excellent across all cognitive skills with high engagement",
        characteristics=("High comprehension", "Strong focus", "Excellent retention", "High engagement"),
        color="#10b981",
    ),
    PersonaLabel.FOCUSED_LEARNER.value: PersonaProfile(
        description="Strong focus and attention with good overall performance",
        characteristics=("Excellent focus", "Good attention span", "Consistent performance"),
        color="#3b82f6",
    ),
    PersonaLabel.ENGAGED_STUDENT.value: PersonaProfile(
        description="High engagement with moderate to good cognitive skills",
        characteristics=("High engagement time", "Motivated learner", "Active participation"),
        color="#8b5cf6",
    ),
    PersonaLabel.QUICK_LEARNER.value: PersonaProfile(
        description="High cognitive skills but lower engagement time",
        characteristics=("Fast processing", "Efficient learning", "Quick understanding"),
        color="#06b6d4",
    ),
    PersonaLabel.STRUGGLING_STUDENT.value: PersonaProfile(
        description="Needs additional support in attention and focus areas",
        characteristics=("Low attention", "Focus challenges", "Needs support"),
        color="#ef4444",
    ),
    PersonaLabel.AVERAGE_PERFORMER.value: PersonaProfile(
        description="Moderate performance across all areas with potential for growth",
        characteristics=("Balanced skills", "Room for improvement", "Steady progress"),
        color="#f59e0b",
    ),
})


def get_persona_profile(label: str) -> Optional[PersonaProfile]:
    """Return the static metadata for *label*, or None if it is not registered."""
    return PERSONA_METADATA.get(label)
