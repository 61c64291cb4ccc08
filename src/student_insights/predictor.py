"""
predictor.py – Fixed-weight score predictor.

Not a trained model: the prediction is a hand-set linear combination of
the cognitive attributes and engagement time plus ±5 points of noise.
"""

from __future__ import annotations

import logging
import random
from typing import Iterable, Optional

from student_insights.models import Student, clamp, round_int

logger = logging.getLogger(__name__)

# Design constants; changing them changes every downstream prediction.
PREDICTION_WEIGHTS: dict[str, float] = {
    "comprehension":   0.25,
    "attention":       0.20,
    "focus":           0.20,
    "retention":       0.25,
    "engagement_time": 0.10,
}
PREDICTION_NOISE = 5.0


def predict_score(student: Student, rng: random.Random) -> int:
    """Return the predicted score for one student, clamped to [0, 100]."""
    linear = sum(getattr(student, feature) * w for feature, w in PREDICTION_WEIGHTS.items())
    noisy = linear + rng.uniform(-PREDICTION_NOISE, PREDICTION_NOISE)
    return round_int(clamp(0, 100, noisy))


def predict(
    students: Iterable[Student],
    rng: Optional[random.Random] = None,
) -> list[Student]:
    """Return copies of *students* with ``predicted_score`` populated."""
    rng = rng or random.Random()
    predicted = [
        s.model_copy(update={"predicted_score": predict_score(s, rng)}, deep=True)
        for s in students
    ]
    logger.debug("Predicted scores for %d students", len(predicted))
    return predicted
