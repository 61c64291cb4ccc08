"""
pipeline.py — One end-to-end analytics run
===========================================
Runs the engine stages in order, checks each stage's output with the
guardrails, and records a StageStep per stage in a RunTrace:

  generate_population → predict → classify → correlate → aggregate_personas
  → summarise

Data model
----------
  StageStep       One stage's contribution: timing, status, decisions, warnings.
  RunTrace        Full trace for a single run; ordered list of StageSteps plus
                  the merged guardrail result of every stage.
  PipelineResult  The three collections handed to the presentation layer
                  (students, correlations, personas) plus summary and trace.

Each call builds its own random source from Settings (or uses the one
passed in) and its own collections; nothing is shared between runs.
"""

from __future__ import annotations

import datetime
import logging
import random
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from student_insights.classifier import classify
from student_insights.config import Settings, get_settings
from student_insights.correlation import correlate
from student_insights.guardrails import GuardrailResult, GuardrailsPipeline
from student_insights.models import (
    POPULATION_SIZE,
    LearningPersona,
    SkillCorrelation,
    Student,
)
from student_insights.personas import aggregate_personas
from student_insights.population import generate_population
from student_insights.predictor import predict
from student_insights.summary import PopulationSummary, summarise

logger = logging.getLogger(__name__)


class PipelineInvariantError(RuntimeError):
    """A stage produced output that failed a BLOCK-level guardrail."""

    def __init__(self, stage: str, result: GuardrailResult):
        self.stage = stage
        self.result = result
        super().__init__(f"Stage '{stage}' failed guardrails:\n{result.summary()}")


@dataclass
class StageStep:
    """One stage's contribution inside a pipeline run."""
    stage_id:       str
    stage_name:     str
    start_ms:       float            # ms relative to run start
    duration_ms:    float
    status:         str              # "success" | "warned" | "blocked"
    input_summary:  str
    output_summary: str
    decisions:      list[str] = field(default_factory=list)
    warnings:       list[str] = field(default_factory=list)


@dataclass
class RunTrace:
    """Full trace for a single pipeline run."""
    run_id:     str
    timestamp:  str
    seed:       Optional[int]
    total_ms:   float = 0.0
    steps:      list[StageStep] = field(default_factory=list)
    guardrails: GuardrailResult = field(default_factory=lambda: GuardrailResult(passed=True))

    def append(self, step: StageStep) -> None:
        self.steps.append(step)

    def step(self, stage_id: str) -> Optional[StageStep]:
        return next((s for s in self.steps if s.stage_id == stage_id), None)


@dataclass
class PipelineResult:
    students:     list[Student]
    correlations: list[SkillCorrelation]
    personas:     list[LearningPersona]
    summary:      PopulationSummary
    trace:        RunTrace


def _status(result: GuardrailResult) -> str:
    if result.blocked:
        return "blocked"
    return "warned" if result.warnings else "success"


def run_pipeline(
    settings: Optional[Settings] = None,
    rng: Optional[random.Random] = None,
    population_size: int = POPULATION_SIZE,
) -> PipelineResult:
    """
    Generate, predict, classify, correlate and aggregate one population.

    *rng* overrides the settings seed. With ``settings.strict`` (the
    default) a BLOCK guardrail raises PipelineInvariantError; otherwise
    it is only logged.
    """
    settings = settings or get_settings()
    rng = rng or settings.make_rng()
    guards = GuardrailsPipeline()

    trace = RunTrace(
        run_id    = uuid.uuid4().hex[:8].upper(),
        timestamp = datetime.datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
        seed      = settings.seed,
    )
    run_start = time.perf_counter()
    stage_results: list[GuardrailResult] = []

    def stage(
        stage_id: str,
        stage_name: str,
        input_summary: str,
        fn: Callable[[], Any],
        check: Callable[[Any], GuardrailResult],
        describe: Callable[[Any], tuple[str, list[str]]],
    ) -> Any:
        start = time.perf_counter()
        output = fn()
        duration_ms = (time.perf_counter() - start) * 1000
        result = check(output)
        stage_results.append(result)
        output_summary, decisions = describe(output)

        trace.append(StageStep(
            stage_id       = stage_id,
            stage_name     = stage_name,
            start_ms       = round((start - run_start) * 1000, 3),
            duration_ms    = round(duration_ms, 3),
            status         = _status(result),
            input_summary  = input_summary,
            output_summary = output_summary,
            decisions      = decisions,
            warnings       = [f"[{v.code}] {v.message}" for v in result.violations],
        ))
        logger.debug("Stage %s finished in %.3f ms: %s", stage_id, duration_ms, output_summary)

        for v in result.warnings:
            logger.warning("Stage %s guardrail %s: %s", stage_id, v.code, v.message)
        if result.blocked:
            logger.error("Stage %s blocked by guardrails:\n%s", stage_id, result.summary())
            if settings.strict:
                raise PipelineInvariantError(stage_id, result)
        return output

    students = stage(
        "generate", "Population Generator",
        f"{population_size} students requested",
        lambda: generate_population(population_size, rng),
        guards.check_population,
        lambda out: (f"{len(out)} students generated", []),
    )
    students = stage(
        "predict", "Score Predictor",
        f"{len(students)} students",
        lambda: predict(students, rng),
        guards.check_predictions,
        lambda out: (f"{len(out)} predicted scores", []),
    )
    students = stage(
        "classify", "Persona Classifier",
        f"{len(students)} students",
        lambda: classify(students),
        guards.check_classification,
        lambda out: (
            f"{len({s.learning_persona for s in out})} distinct personas assigned",
            [],
        ),
    )
    correlations = stage(
        "correlate", "Correlation Analyzer",
        f"{len(students)} students × 5 features",
        lambda: correlate(students),
        guards.check_correlations,
        lambda out: (
            f"{len(out)} correlations ranked",
            [f"{c.skill}: {c.correlation:+.2f} ({c.impact.value})" for c in out],
        ),
    )
    personas = stage(
        "aggregate", "Persona Aggregator",
        f"{len(students)} classified students",
        lambda: aggregate_personas(students),
        lambda out: guards.check_personas(out, len(students)),
        lambda out: (
            f"{len(out)} personas aggregated",
            [f"{p.name}: {p.count} students, avg {p.avg_score}" for p in out],
        ),
    )

    summary = summarise(students, correlations, personas)
    trace.guardrails = guards.merge(*stage_results)
    trace.total_ms = round((time.perf_counter() - run_start) * 1000, 3)

    logger.info(
        "Pipeline run %s: %d students, %d personas, top correlation %s in %.1f ms",
        trace.run_id,
        len(students),
        len(personas),
        correlations[0].skill if correlations else "n/a",
        trace.total_ms,
    )
    return PipelineResult(
        students     = students,
        correlations = correlations,
        personas     = personas,
        summary      = summary,
        trace        = trace,
    )
