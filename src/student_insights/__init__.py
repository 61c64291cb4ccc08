"""
student_insights — Student population analytics engine
=======================================================
Synthesises a student population, predicts scores, assigns learning
personas, ranks skill/score correlations and aggregates persona
statistics for a dashboard to render.

Module map
----------
  models.py        Pydantic models, enums, fixed enumerations and the
                   persona metadata registry.
  config.py        Settings loaded from .env (seed, log level, strict mode).
  population.py    Population generator (latent-ability model).
  predictor.py     Fixed-weight score predictor.
  classifier.py    Ordered rule table → learning persona.
  correlation.py   Pearson correlation, impact buckets, ranking.
  personas.py      Persona aggregation + PersonaConfigError.
  summary.py       Overview, grade, class, section, gender and insight panels.
  guardrails.py    G-01..G-10 invariant checks between stages.
  pipeline.py      run_pipeline() orchestration with a RunTrace.

Pipeline order
--------------
  generate_population → predict → classify → ┬─ correlate
                                             └─ aggregate_personas
  → summarise
"""
__version__ = "0.1.0"

from student_insights.classifier import classify, classify_student
from student_insights.correlation import correlate, pearson
from student_insights.models import (
    LearningPersona,
    PersonaLabel,
    SkillCorrelation,
    Student,
)
from student_insights.personas import PersonaConfigError, aggregate_personas
from student_insights.pipeline import PipelineInvariantError, PipelineResult, run_pipeline
from student_insights.population import generate_population
from student_insights.predictor import predict

__all__ = [
    "LearningPersona",
    "PersonaConfigError",
    "PersonaLabel",
    "PipelineInvariantError",
    "PipelineResult",
    "SkillCorrelation",
    "Student",
    "aggregate_personas",
    "classify",
    "classify_student",
    "correlate",
    "generate_population",
    "pearson",
    "predict",
    "run_pipeline",
]
