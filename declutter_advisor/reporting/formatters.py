"""
ASCII terminal formatters for CLI commands.

All formatters accept in-memory engine results and return plain multi-line
strings suitable for ``typer.echo()``. No third-party dependencies.

Score table layout (``format_report_details``)::

    Action            Score
    -----------------------
    Keep It             9.0  <- winner
    Put in Storage      3.0
    ...
"""

from __future__ import annotations

from typing import Mapping, Optional

from declutter_advisor.engine.batch import ItemEvaluation, summarize_evaluations
from declutter_advisor.engine.classifier import ClassificationReport
from declutter_advisor.models.item import ItemAnswers
from declutter_advisor.models.settings import StrategyConfig
from declutter_advisor.taxonomy.disposition_taxonomy import (
    ACTION_LABELS,
    ALL_ACTIONS,
    ALL_FACTORS,
    FACTOR_LABELS,
    OPTION_LABELS,
)


def format_recommendation(report: ClassificationReport, reasoning: str) -> str:
    """Two-line summary: action label and reasoning."""
    label = ACTION_LABELS[report.recommendation]
    return "\n".join([
        f"Recommendation: {label} ({report.recommendation.value})",
        f"Reasoning:      {reasoning}",
    ])


def format_report_details(report: ClassificationReport, answers: ItemAnswers) -> str:
    """Score table, per-factor breakdown, and profile adjustments."""
    lines: list[str] = []

    lines.append(f"{'Action':<16}{'Score':>7}")
    lines.append("-" * 23)
    for action in ALL_ACTIONS:
        marker = "  <- winner" if action == report.recommendation else ""
        lines.append(f"{ACTION_LABELS[action]:<16}{report.scores[action]:>7.1f}{marker}")

    lines.append("")
    lines.append("Factor breakdown:")
    for factor in ALL_FACTORS:
        option = answers.option_for(factor)
        contribution = report.breakdown.factors.get(factor) or {}
        if option is None:
            answer_label = "(unanswered)"
        else:
            answer_label = OPTION_LABELS[factor].get(option, option)
        lines.append(
            f"  {FACTOR_LABELS[factor]:<20} {answer_label:<14} {_format_deltas(contribution)}"
        )

    if report.breakdown.profile:
        lines.append("")
        lines.append("Profile adjustments:")
        for rule, deltas in report.breakdown.profile.items():
            lines.append(f"  {rule:<20} {_format_deltas(deltas)}")

    lines.append("")
    tied = ", ".join(a.value for a in report.tied_recommendations or []) or "none"
    lines.append(f"Max score:     {report.max_score:.1f}")
    lines.append(f"Tied:          {tied}")
    lines.append(
        f"Margin:        {report.score_margin:.1f}"
        f" ({'decisive' if report.is_decisive else 'close call'})"
    )
    lines.append(f"Strategy:      {report.strategy_used}")
    return "\n".join(lines)


def format_strategy_table(
    strategies: Mapping[str, StrategyConfig],
    active:     str,
) -> str:
    """One row per strategy with its per-factor multipliers."""
    header = f"  {'Key':<14}{'Name':<14}" + "".join(f"{f.value[:8]:>9}" for f in ALL_FACTORS)
    lines = [header, "  " + "-" * (len(header) - 2)]
    for key, cfg in strategies.items():
        multipliers = cfg.multipliers or {}
        cells = "".join(f"{_multiplier(multipliers, f.value):>9.1f}" for f in ALL_FACTORS)
        marker = " *" if key == active else ""
        lines.append(f"  {key:<14}{(cfg.name or key):<14}{cells}{marker}")
    lines.append("")
    lines.append(f"  * active strategy: {active}")
    return "\n".join(lines)


def format_batch_summary(evaluations: list[ItemEvaluation]) -> str:
    """Recommendation counts per action for a batch run."""
    counts = summarize_evaluations(evaluations)
    lines = [f"  Evaluated {len(evaluations)} item(s):"]
    for action in ALL_ACTIONS:
        lines.append(f"    {ACTION_LABELS[action]:<16}{counts[action]:>5}")
    return "\n".join(lines)


def _multiplier(multipliers: Mapping[str, Optional[float]], factor: str) -> float:
    value = multipliers.get(factor)
    return 1 if value is None else value


def _format_deltas(deltas: Mapping[str, float]) -> str:
    if not deltas:
        return "-"
    return ", ".join(f"{action} {score:+g}" for action, score in deltas.items())
