"""
demo_dashboard.py – Console rendering of one analytics run

Run:
    python demo_dashboard.py

Optional:
    STUDENT_INSIGHTS_SEED=42 python demo_dashboard.py   (reproducible output)
"""

from __future__ import annotations

import sys
from pathlib import Path

# ── make src/ importable without installing the package ──────────────────────
sys.path.insert(0, str(Path(__file__).parent / "src"))

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from student_insights.config import Settings, configure_logging, get_settings
from student_insights.models import Gender, ImpactLevel
from student_insights.pipeline import PipelineInvariantError, PipelineResult, run_pipeline

console = Console()

IMPACT_STYLE = {
    ImpactLevel.HIGH:   "bold green",
    ImpactLevel.MEDIUM: "bold yellow",
    ImpactLevel.LOW:    "dim white",
}

GENDER_STYLE = {
    Gender.MALE:   "#3b82f6",
    Gender.FEMALE: "#ec4899",
}


# ─── Display helpers ─────────────────────────────────────────────────────────

def _bar(value: float, width: int = 16) -> str:
    filled = round(abs(value) * width)
    return "█" * filled + "░" * (width - filled)


def show_settings(settings: Settings) -> None:
    status = Table(box=box.SIMPLE, show_header=False, padding=(0, 1))
    status.add_column("Setting", style="bold cyan", no_wrap=True)
    status.add_column("Value",   style="white")
    for key, value in settings.status_summary().items():
        status.add_row(key, value)
    console.print(Panel(status, title="[bold]Configuration[/bold]", border_style="dim"))


def show_result(result: PipelineResult) -> None:
    overview = result.summary.overview

    console.print()
    console.rule("[bold magenta]Student Insights[/bold magenta]")
    console.print()

    # ── Overview card ────────────────────────────────────────────────────────
    summary = Table(box=box.ROUNDED, show_header=False, padding=(0, 1))
    summary.add_column("Key",   style="bold cyan", no_wrap=True)
    summary.add_column("Value", style="white")
    summary.add_row("Total students",     f"{overview.total_students} in {overview.class_count} classes")
    summary.add_row("Average score",      f"{overview.avg_assessment_score}% "
                                          f"[dim]({overview.high_performer_pct}% scoring 80+)[/dim]")
    summary.add_row("Average skills",     f"{overview.avg_skill_score}%")
    summary.add_row("Average engagement", f"{overview.avg_engagement_time} min")
    console.print(Panel(summary, title="[bold]Overview[/bold]", border_style="magenta"))

    # ── Correlations ─────────────────────────────────────────────────────────
    corr = Table(box=box.SIMPLE_HEAD, header_style="bold white on dark_violet", padding=(0, 1))
    corr.add_column("Skill",       min_width=16)
    corr.add_column("r",           justify="right")
    corr.add_column("",            min_width=16)
    corr.add_column("Impact",      justify="center")
    for c in result.correlations:
        style = IMPACT_STYLE[c.impact]
        corr.add_row(c.skill, f"{c.correlation:+.2f}", _bar(c.correlation),
                     f"[{style}]{c.impact.value}[/{style}]")
    console.print(Panel(corr, title="[bold]Skill Correlations[/bold]", border_style="blue"))

    # ── Personas ─────────────────────────────────────────────────────────────
    personas = Table(box=box.SIMPLE_HEAD, header_style="bold white on dark_violet", padding=(0, 1))
    personas.add_column("Persona",   min_width=18)
    personas.add_column("Students",  justify="right")
    personas.add_column("Avg score", justify="right")
    personas.add_column("Traits",    style="dim white")
    for p in result.personas:
        personas.add_row(f"[{p.color}]●[/{p.color}] {p.name}", str(p.count),
                         f"{p.avg_score}%", ", ".join(p.characteristics))
    console.print(Panel(personas, title="[bold]Learning Personas[/bold]", border_style="green"))

    # ── Grade × gender ───────────────────────────────────────────────────────
    genders = Table(box=box.SIMPLE_HEAD, header_style="bold white on dark_violet", padding=(0, 1))
    genders.add_column("Grade",    justify="center")
    genders.add_column("Gender")
    genders.add_column("Students", justify="right")
    for row in result.summary.genders:
        colour = GENDER_STYLE[row.gender]
        genders.add_row(row.grade, f"[{colour}]{row.gender.value}[/{colour}]", str(row.count))
    console.print(Panel(genders, title="[bold]Students by Grade and Gender[/bold]", border_style="cyan"))

    # ── Insights ─────────────────────────────────────────────────────────────
    for insight in result.summary.insights:
        console.print(Panel(
            f"{insight.description}\n\n[italic]→ {insight.action}[/italic]",
            title=f"[bold]{insight.title}[/bold]",
            border_style="yellow",
        ))

    guard_style = "yellow" if result.trace.guardrails.violations else "green"
    console.print(f"[{guard_style}]{result.trace.guardrails.summary()}[/{guard_style}]")

    console.print()
    console.rule(f"[dim]run {result.trace.run_id} • {result.trace.total_ms:.1f} ms[/dim]")
    console.print()


# ─── Main ────────────────────────────────────────────────────────────────────

def main() -> None:
    settings = get_settings()
    configure_logging(settings)
    show_settings(settings)

    try:
        show_result(run_pipeline(settings))

    except PipelineInvariantError as e:
        console.print(f"\n[bold red]Invariant violated in stage {e.stage}:[/bold red]")
        console.print(e.result.summary())
        sys.exit(1)

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
