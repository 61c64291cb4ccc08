"""
correlation.py – Feature vs assessment-score correlation analysis.

For each numeric feature the Pearson coefficient against
``assessment_score`` is computed over the whole population, rounded to
two decimals, bucketed into High / Medium / Low impact and ranked by
magnitude.
"""

from __future__ import annotations

import logging
import math
from typing import Sequence

from student_insights.models import (
    ImpactLevel,
    SkillCorrelation,
    Student,
    clamp,
    round_half_up,
)

logger = logging.getLogger(__name__)

CORRELATION_FEATURES: tuple[str, ...] = (
    "comprehension",
    "attention",
    "focus",
    "retention",
    "engagement_time",
)
TARGET_FEATURE = "assessment_score"

HIGH_IMPACT_THRESHOLD   = 0.6
MEDIUM_IMPACT_THRESHOLD = 0.3


def pearson(x: Sequence[float], y: Sequence[float]) -> float:
    """
    Pearson correlation coefficient of two equal-length sequences.

    Uses the raw-sum form::

        r = (nΣxy − ΣxΣy) / sqrt((nΣx² − (Σx)²)(nΣy² − (Σy)²))

    Returns 0.0 when either sequence has zero variance (or is empty).
    """
    if len(x) != len(y):
        raise ValueError(f"pearson() needs equal-length inputs, got {len(x)} and {len(y)}")

    n = len(x)
    sum_x  = sum(x)
    sum_y  = sum(y)
    sum_xy = sum(xi * yi for xi, yi in zip(x, y))
    sum_xx = sum(xi * xi for xi in x)
    sum_yy = sum(yi * yi for yi in y)

    numerator = n * sum_xy - sum_x * sum_y
    variance_term = (n * sum_xx - sum_x * sum_x) * (n * sum_yy - sum_y * sum_y)
    if variance_term <= 0:
        return 0.0
    return clamp(-1.0, 1.0, numerator / math.sqrt(variance_term))


def impact_for(correlation: float) -> ImpactLevel:
    magnitude = abs(correlation)
    if magnitude > HIGH_IMPACT_THRESHOLD:
        return ImpactLevel.HIGH
    if magnitude > MEDIUM_IMPACT_THRESHOLD:
        return ImpactLevel.MEDIUM
    return ImpactLevel.LOW


def display_name(feature: str) -> str:
    return feature.replace("_", " ").upper()


def correlate(students: Sequence[Student]) -> list[SkillCorrelation]:
    """
    One SkillCorrelation per feature, sorted by descending |r|.

    The sort is stable, so equal magnitudes keep CORRELATION_FEATURES order.
    An empty population yields an empty list.
    """
    if not students:
        return []

    target = [getattr(s, TARGET_FEATURE) for s in students]
    results: list[SkillCorrelation] = []
    for feature in CORRELATION_FEATURES:
        values = [getattr(s, feature) for s in students]
        r = round_half_up(pearson(values, target), 2)
        results.append(SkillCorrelation(
            skill       = display_name(feature),
            correlation = r,
            impact      = impact_for(r),
        ))
        logger.debug("Correlation %s vs %s: %.2f", feature, TARGET_FEATURE, r)

    return sorted(results, key=lambda c: abs(c.correlation), reverse=True)
