"""
Shared pytest fixtures for the Student Insights test suite.
Every fixture uses a seeded random.Random so numeric outputs are reproducible.
Factory helpers live in tests/factories.py so they can be imported
directly by test modules as well as being used here.
"""
import sys
import os
import random

_tests_dir = os.path.dirname(__file__)
_src_dir   = os.path.join(_tests_dir, "..", "src")
for _p in (_tests_dir, _src_dir):
    if _p not in sys.path:
        sys.path.insert(0, _p)

# Never pick up a developer's .env seed during tests
os.environ.pop("STUDENT_INSIGHTS_SEED", None)


import pytest

from student_insights.classifier import classify
from student_insights.population import generate_population
from student_insights.predictor import predict


SEED = 20240917


# ─── pytest fixtures ──────────────────────────────────────────────────────────

@pytest.fixture
def rng():
    return random.Random(SEED)


@pytest.fixture
def population(rng):
    return generate_population(rng=rng)


@pytest.fixture
def predicted(population, rng):
    return predict(population, rng)


@pytest.fixture
def classified(predicted):
    return classify(predicted)
